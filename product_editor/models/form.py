"""
@PURPOSE: 定义编辑表单的聚合模型（基础信息、商品设置、规格值、变体、图片）
@OUTLINE:
  - class Credentials: 卖家凭证
  - class FormStep: 表单步骤
  - class ProductSettings: 商品设置块
  - class FormModel: 表单聚合模型
@GOTCHAS:
  - 布尔值在内部始终为 bool, "Yes"/"No" 与 "1"/"0" 只出现在展示层与请求组装层
  - spec_values 中可能保留切换类目前的旧键, 保存时照常提交
@DEPENDENCIES:
  - 外部: pydantic
@RELATED: core/session.py, core/product_mapper.py, core/payload.py
"""

from __future__ import annotations

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field

from .image import ExistingImage, ImageRef, NewImage
from .variant import Variant


class Credentials(BaseModel):
    """卖家凭证.

    Attributes:
        token: Bearer token
        seller_id: 卖家 ID
    """

    token: str = Field(..., min_length=1, description="Bearer token")
    seller_id: str = Field(default="", description="卖家ID")


class FormStep(IntEnum):
    """表单步骤（按页面顺序）."""

    BASIC_INFO = 1
    VARIANTS = 2
    SPECIFICATIONS = 3
    SETTINGS = 4

    @property
    def title(self) -> str:
        return _STEP_TITLES[self]


_STEP_TITLES = {
    FormStep.BASIC_INFO: "基础信息",
    FormStep.VARIANTS: "商品变体",
    FormStep.SPECIFICATIONS: "规格参数",
    FormStep.SETTINGS: "商品设置",
}


class ProductSettings(BaseModel):
    """商品设置块."""

    model_config = ConfigDict(validate_assignment=True)

    product_type: str = "packet"
    made_in: str = ""
    is_returnable: bool = False
    is_cancellable: bool = False
    max_return_days: str = ""
    till_status: str = ""
    manufacturer: str = ""
    sku: str = ""
    hsn_code: str = ""
    fssai_lic_no: str = ""
    self_life: str = ""
    is_cod_allowed: bool = False
    total_allowed_quantity: int = Field(default=0, ge=0)
    delivery_option: str = "pay_by_yourself"
    delivery_charges: str = "0"


class FormModel(BaseModel):
    """编辑表单聚合模型.

    表单打开时为空, 商品加载成功后由 ProductLoader 填充一次,
    之后只通过 session/变体集合/图片管理器的操作函数修改,
    保存时只读。

    Attributes:
        tag_ids: 已选标签 ID（保持选择顺序, 不重复）
        spec_values: 属性ID -> 规格值
        primary_variant: 主变体（不可删除）
        additional_variants: 附加变体
        main_image: 主图
        gallery_existing: 已存在的图集图片
        gallery_new: 新暂存的图集图片
        deleted_image_ids: 待删除的服务端图片ID
    """

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    slug: str = ""
    category_id: str = ""
    tax_id: str = ""
    brand_id: str = ""
    warranty_id: str = ""
    accessories_warranty_id: str = ""
    description: str = ""
    tag_ids: list[str] = Field(default_factory=list)

    settings: ProductSettings = Field(default_factory=ProductSettings)
    spec_values: dict[str, str] = Field(default_factory=dict)

    primary_variant: Variant = Field(default_factory=Variant)
    additional_variants: list[Variant] = Field(default_factory=list)

    main_image: ImageRef | None = None
    gallery_existing: list[ExistingImage] = Field(default_factory=list)
    gallery_new: list[NewImage] = Field(default_factory=list)
    deleted_image_ids: list[str] = Field(default_factory=list)

    @classmethod
    def basic_fields(cls) -> frozenset[str]:
        """可通过 set_field 修改的基础字段."""
        return frozenset(
            {
                "name",
                "slug",
                "category_id",
                "tax_id",
                "brand_id",
                "warranty_id",
                "accessories_warranty_id",
                "description",
                "tag_ids",
            }
        )
