"""
@PURPOSE: 表单步骤校验，离开步骤前扫描全部必填字段并一次性报告
@OUTLINE:
  - def missing_basic_fields(): 基础信息步骤缺失字段
  - def missing_variant_fields(): 变体步骤缺失字段（只检查主变体）
  - def validate_step(): 校验指定步骤, 失败抛出 FormValidationError
@GOTCHAS:
  - 完整扫描后再报告, 不在第一个缺失字段处短路
  - 价格 "0.00" 视为未填写; 库存只在 Limited 时必填, "0" 视为未填写
@DEPENDENCIES:
  - 内部: ..models.form, ..errors
@RELATED: session.py
"""

from __future__ import annotations

from loguru import logger

from ..errors import FormValidationError
from ..models.form import FormModel, FormStep
from ..models.variant import StockPolicy, Variant

PRICE_PLACEHOLDER = "0.00"
STOCK_PLACEHOLDER = "0"


def missing_basic_fields(form: FormModel) -> list[str]:
    """基础信息步骤缺失的字段名（按表单顺序）."""
    missing: list[str] = []
    if not form.name.strip():
        missing.append("Product Name")
    if not form.slug:
        missing.append("Slug")
    if not form.category_id:
        missing.append("Category")
    if not form.description.strip():
        missing.append("Description")
    if form.main_image is None:
        missing.append("Main Image")
    return missing


def missing_variant_fields(variant: Variant) -> list[str]:
    """变体步骤缺失的字段名（按表单顺序）."""
    missing: list[str] = []
    if not variant.measurement.strip():
        missing.append("Measurement")
    if not variant.price or variant.price == PRICE_PLACEHOLDER:
        missing.append("Price")
    if not variant.unit:
        missing.append("Unit")
    if not variant.status:
        missing.append("Status")
    if not variant.size:
        missing.append("Size")
    if variant.stock_policy is StockPolicy.LIMITED and (
        not variant.stock or variant.stock == STOCK_PLACEHOLDER
    ):
        missing.append("Stock")
    return missing


def validate_step(step: FormStep, form: FormModel) -> None:
    """校验一个步骤.

    规格参数与商品设置步骤没有必填项。

    Raises:
        FormValidationError: 存在缺失字段
    """
    if step is FormStep.BASIC_INFO:
        missing = missing_basic_fields(form)
    elif step is FormStep.VARIANTS:
        missing = missing_variant_fields(form.primary_variant)
    else:
        missing = []

    if missing:
        logger.warning(f"步骤校验失败 [{step.name}]: {', '.join(missing)}")
        raise FormValidationError(step.name, missing)
