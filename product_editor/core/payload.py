"""
@PURPOSE: 将编辑表单组装为商品更新接口的 multipart 表单字段与文件
@OUTLINE:
  - def build_update_payload(): FormModel -> (字段, 文件)
  - def bool_flag(): bool -> "1"/"0"
@GOTCHAS:
  - 字段顺序与后台既有请求保持一致: 基础字段 -> 变体数组 -> 其余商品字段 -> 文件
  - 有意置空的可选字段使用 "null" 字符串（till_status、sku、pincode_ids_exc）
  - is_unlimited_stock 只要任一变体（含主变体）为 Unlimited 即为 "1"
  - product_attributes 提交全部已填写的规格值, 不按当前类目过滤
@DEPENDENCIES:
  - 内部: ..models, ..errors
@RELATED: save_coordinator.py, ../api/client.py
"""

from __future__ import annotations

import json

from ..api.client import FileField
from ..errors import PayloadError
from ..models.form import FormModel
from ..models.image import NewImage
from ..models.variant import StockPolicy, Variant

PayloadData = dict[str, list[str]]

DEFAULT_MAX_ALLOWED_QUANTITY = "10"
NULL_SENTINEL = "null"


def bool_flag(value: bool) -> str:
    return "1" if value else "0"


def _variant_columns(variant: Variant) -> list[tuple[str, str]]:
    return [
        ("variant_id[]", variant.remote_id),
        ("packet_measurement[]", variant.measurement),
        ("packet_title[]", variant.title),
        ("packet_price[]", variant.price),
        ("packet_discounted_price[]", variant.discounted_price),
        ("packet_stock[]", variant.stock),
        ("packet_stock_unit_id[]", variant.unit),
        ("packet_status[]", bool_flag(variant.status == "active")),
        ("color_id[]", variant.color),
        ("size_id[]", variant.size),
        ("material_id[]", variant.material),
        ("mattress_size[]", variant.mattress_size),
        ("pack[]", variant.pack),
        ("pd_type[]", variant.variant_type),
        ("pattern_id[]", variant.pattern),
        ("packet_no_of_pics[]", variant.no_of_pics),
        ("packet_weight_in_grams[]", variant.weight_in_grams),
        ("packet_capacity[]", variant.capacity),
        ("packet_dimensions[]", variant.dimensions),
        ("packet_height[]", variant.height),
        ("packet_flavour[]", variant.flavour),
    ]


def build_update_payload(
    form: FormModel,
    product_id: str,
    seller_id: str,
) -> tuple[PayloadData, list[FileField]]:
    """组装商品更新请求.

    Args:
        form: 编辑表单（只读）
        product_id: 商品 ID
        seller_id: 卖家 ID

    Returns:
        (表单字段, 文件字段), 表单字段的每个值都是字符串列表

    Raises:
        PayloadError: 缺少 id/name/seller_id/category_id
    """
    missing = [
        name
        for name, value in (
            ("id", product_id),
            ("name", form.name),
            ("seller_id", seller_id),
            ("category_id", form.category_id),
        )
        if not value
    ]
    if missing:
        raise PayloadError(missing)

    variants = [form.primary_variant, *form.additional_variants]
    settings = form.settings
    data: PayloadData = {}

    def put(key: str, value: str) -> None:
        data.setdefault(key, []).append(value)

    put("id", product_id)
    if form.deleted_image_ids:
        for image_id in form.deleted_image_ids:
            put("deleteImageIds", image_id)
    else:
        put("deleteImageIds", "[]")

    put("name", form.name)
    put("slug", form.slug)
    put("seller_id", seller_id)
    put("tag_ids", ",".join(form.tag_ids))
    put("tax_id", form.tax_id)
    put("brand_id", form.brand_id)
    put("description", form.description)
    put("type", "packet")
    put(
        "is_unlimited_stock",
        bool_flag(any(v.stock_policy is StockPolicy.UNLIMITED for v in variants)),
    )
    put("fssai_lic_no", settings.fssai_lic_no)
    put("warranty_id", form.warranty_id)
    put("accessories_warranty_id", form.accessories_warranty_id)

    files: list[FileField] = []
    for index, variant in enumerate(variants):
        for key, value in _variant_columns(variant):
            put(key, value)
        for image in variant.images:
            if isinstance(image, NewImage):
                files.append((f"packet_variant_images_{index}[]", image.file.as_upload()))

    put("loose_stock", "0")
    put("loose_stock_unit_id", "")
    put("status", "1")
    put("category_id", form.category_id)
    put("product_type", "0")
    put("manufacturer", settings.manufacturer)
    put("made_in", settings.made_in)
    put("shipping_type", "undefined")
    put("pincode_ids_exc", NULL_SENTINEL)
    put("return_status", bool_flag(settings.is_returnable))
    put("return_days", (settings.max_return_days or "0") if settings.is_returnable else "0")
    put("cancelable_status", bool_flag(settings.is_cancellable))
    put("till_status", (settings.till_status or "1") if settings.is_cancellable else NULL_SENTINEL)
    put("cod_allowed_status", bool_flag(settings.is_cod_allowed))
    put(
        "max_allowed_quantity",
        str(settings.total_allowed_quantity)
        if settings.total_allowed_quantity
        else DEFAULT_MAX_ALLOWED_QUANTITY,
    )
    put("delivery_option", settings.delivery_option or "pay_by_yourself")
    put(
        "delivery_charges",
        (settings.delivery_charges or "0")
        if settings.delivery_option == "add_delivery_charge"
        else "0",
    )
    put("is_approved", "0")
    put("tax_included_in_price", "0")
    put("sku", settings.sku or NULL_SENTINEL)
    put("hsn_code", settings.hsn_code)
    put("self_life", settings.self_life)
    put("no_of_pics", "0")
    put("weight_in_grams", "0")

    if form.spec_values:
        put("product_attributes", json.dumps(form.spec_values, ensure_ascii=False))

    if isinstance(form.main_image, NewImage):
        files.insert(0, ("image", form.main_image.file.as_upload()))
    for image in form.gallery_new:
        files.append(("other_images[]", image.file.as_upload()))

    return data, files
