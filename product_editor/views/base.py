"""
@PURPOSE: 编辑页展示层基类及共用的格式化辅助函数
@OUTLINE:
  - def yes_no(): bool -> "Yes"/"No"
  - class EditProductView: 展示层基类（只读 session, 不含业务逻辑）
@GOTCHAS:
  - "Yes"/"No" 只在展示层出现, 核心模型里都是 bool
  - 下拉字段显示参考数据中的名称, 找不到时显示原始 ID
@DEPENDENCIES:
  - 外部: rich
  - 内部: ..core.session
@RELATED: desktop.py, mobile.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.console import RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config.settings import settings
from ..core.session import EditProductSession
from ..models.image import ExistingImage, ImageRef
from ..models.reference import ReferenceKind
from ..models.variant import Variant

# 变体字段 -> (显示名, 参考数据种类)
VARIANT_FIELD_LABELS: dict[str, tuple[str, ReferenceKind | None]] = {
    "title": ("Title", None),
    "measurement": ("Measurement", None),
    "variant_type": ("Variant Type", None),
    "material": ("Material", ReferenceKind.MATERIALS),
    "weight_in_grams": ("Weight (g)", None),
    "height": ("Height", None),
    "price": ("Price", None),
    "discounted_price": ("Discounted Price", None),
    "stock": ("Stock", None),
    "unit": ("Unit", ReferenceKind.UNITS),
    "status": ("Status", None),
    "color": ("Color", ReferenceKind.COLORS),
    "size": ("Size", ReferenceKind.SIZES),
    "pattern": ("Pattern", ReferenceKind.PATTERNS),
    "pack": ("Pack", None),
    "capacity": ("Capacity", None),
    "dimensions": ("Dimensions", None),
    "flavour": ("Flavour", None),
    "mattress_size": ("Mattress Size", None),
    "no_of_pics": ("No. of Pics", None),
}


def yes_no(value: bool) -> str:
    return "Yes" if value else "No"


def image_label(image: ImageRef) -> str:
    if isinstance(image, ExistingImage):
        return image.url
    return f"{image.file.filename} (new)"


class EditProductView(ABC):
    """编辑页展示层基类.

    子类只负责布局, 所有数据都从 session 读取。
    """

    layout_name = "base"

    def __init__(self, session: EditProductSession) -> None:
        self.session = session

    @property
    def form(self):
        return self.session.form

    def _label(self, kind: ReferenceKind, item_id: str) -> str:
        if not item_id:
            return "-"
        return self.session.store.label_of(kind, item_id)

    def render_not_found(self) -> RenderableType:
        return Panel(
            Text(
                f"商品 [{self.session.product_id}] 不存在或加载失败\n"
                f"返回商品列表: {settings.form.redirect_path}"
            ),
            title="Product Not Found",
            style="red",
        )

    def render(self) -> RenderableType:
        if self.session.not_found:
            return self.render_not_found()
        return self.render_form()

    @abstractmethod
    def render_form(self) -> RenderableType:
        """渲染编辑表单."""

    # ========== 各步骤的行数据 ==========

    def basic_rows(self) -> list[tuple[str, str]]:
        form = self.form
        tags = ", ".join(self._label(ReferenceKind.TAGS, tag_id) for tag_id in form.tag_ids)
        main = image_label(form.main_image) if form.main_image is not None else "-"
        return [
            ("Product Name", form.name or "-"),
            ("Slug", form.slug or "-"),
            ("Category", self._label(ReferenceKind.CATEGORIES, form.category_id)),
            ("Tax", self._label(ReferenceKind.TAXES, form.tax_id)),
            ("Brand", self._label(ReferenceKind.BRANDS, form.brand_id)),
            ("Tags", tags or "-"),
            ("Warranty", self._label(ReferenceKind.WARRANTIES, form.warranty_id)),
            (
                "Accessories Warranty",
                self._label(ReferenceKind.WARRANTIES, form.accessories_warranty_id),
            ),
            ("Description", form.description or "-"),
            ("Main Image", main),
            ("Other Images", str(len(self.session.images.gallery))),
        ]

    def variant_value(self, variant: Variant, field: str) -> str:
        _, kind = VARIANT_FIELD_LABELS[field]
        value = getattr(variant, field)
        if kind is not None:
            return self._label(kind, value)
        return value or "-"

    def variant_header(self, index: int, variant: Variant) -> str:
        name = "Primary" if index == 0 else f"Variant {index + 1}"
        return f"{name} (#{variant.remote_id})" if variant.remote_id else f"{name} (new)"

    def spec_rows(self) -> list[tuple[str, str]]:
        values = self.form.spec_values
        return [
            (attr.label or attr.id, values.get(attr.id, "") or "-")
            for attr in self.session.filtered_attributes()
        ]

    def settings_rows(self) -> list[tuple[str, str]]:
        s = self.form.settings
        return [
            ("Product Type", s.product_type),
            ("Made In", self._label(ReferenceKind.COUNTRIES, s.made_in)),
            ("Is Returnable", yes_no(s.is_returnable)),
            ("Max Return Days", s.max_return_days or "-"),
            ("Is Cancellable", yes_no(s.is_cancellable)),
            ("Till Which Status", s.till_status or "-"),
            ("Manufacturer", s.manufacturer or "-"),
            ("SKU", s.sku or "-"),
            ("HSN Code", s.hsn_code or "-"),
            ("FSSAI Lic. No.", s.fssai_lic_no or "-"),
            ("Shelf Life", s.self_life or "-"),
            ("Is COD Allowed", yes_no(s.is_cod_allowed)),
            ("Total Allowed Quantity", str(s.total_allowed_quantity)),
            ("Delivery Option", s.delivery_option),
            ("Delivery Charges", s.delivery_charges),
        ]

    @staticmethod
    def key_value_table(rows: list[tuple[str, str]], title: str | None = None) -> Table:
        table = Table(show_header=False, title=title, title_justify="left")
        table.add_column("字段", style="cyan")
        table.add_column("值", no_wrap=False)
        for label, value in rows:
            table.add_row(label, Text(value))
        return table
