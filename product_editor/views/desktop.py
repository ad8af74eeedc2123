"""
@PURPOSE: 桌面端编辑页布局（步骤标签栏 + 多列变体表格, 全部步骤同屏展示）
@OUTLINE:
  - class DesktopEditProductView: 桌面端视图
@DEPENDENCIES:
  - 外部: rich
@RELATED: base.py, mobile.py
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.form import FormStep
from .base import VARIANT_FIELD_LABELS, EditProductView


class DesktopEditProductView(EditProductView):
    """桌面端视图."""

    layout_name = "desktop"

    def step_tabs(self) -> Text:
        tabs = Text()
        for step in FormStep:
            label = f" {step.value}. {step.title} "
            style = "bold reverse cyan" if step is self.session.step else "dim"
            tabs.append(label, style=style)
            tabs.append(" ")
        return tabs

    def variant_grid(self) -> Table:
        """变体表格: 每行一个字段, 每列一个变体."""
        variants = self.session.variants.all_variants()
        table = Table(
            show_header=True, header_style="bold cyan", title="Variants", title_justify="left"
        )
        table.add_column("字段", style="cyan")
        for index, variant in enumerate(variants):
            table.add_column(self.variant_header(index, variant))

        primary = self.session.variants.primary
        table.add_row("Type", *(Text(primary.kind.value) for _ in variants))
        table.add_row("Stock Limit", *(Text(v.stock_policy.value) for v in variants))
        for field in self.session.variants.visible_fields():
            label, _ = VARIANT_FIELD_LABELS[field]
            table.add_row(label, *(Text(self.variant_value(v, field)) for v in variants))
        table.add_row("Images", *(Text(str(len(v.images))) for v in variants))
        return table

    def render_form(self) -> RenderableType:
        attributes = self.spec_rows()
        specs: RenderableType = (
            self.key_value_table(attributes, title="Specifications")
            if attributes
            else Text("No specifications available for the selected category.", style="dim")
        )
        return Group(
            Panel(self.step_tabs(), title=f"Edit Product #{self.session.product_id}"),
            self.key_value_table(self.basic_rows(), title="Basic Information"),
            self.variant_grid(),
            specs,
            self.key_value_table(self.settings_rows(), title="Product Settings"),
        )
