"""
@PURPOSE: 移动端编辑页布局（单列, 每次只展示当前步骤）
@OUTLINE:
  - class MobileEditProductView: 移动端视图
@DEPENDENCIES:
  - 外部: rich
@RELATED: base.py, desktop.py
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.text import Text

from ..models.form import FormStep
from .base import VARIANT_FIELD_LABELS, EditProductView


class MobileEditProductView(EditProductView):
    """移动端视图, 变体逐个纵向排列."""

    layout_name = "mobile"

    def header(self) -> Text:
        step = self.session.step
        return Text(f"Step {step.value}/{len(FormStep)} · {step.title}", style="bold cyan")

    def variant_cards(self) -> list[RenderableType]:
        cards: list[RenderableType] = []
        primary = self.session.variants.primary
        for index, variant in enumerate(self.session.variants.all_variants()):
            rows = [("Type", primary.kind.value), ("Stock Limit", variant.stock_policy.value)]
            rows += [
                (VARIANT_FIELD_LABELS[field][0], self.variant_value(variant, field))
                for field in self.session.variants.visible_fields()
            ]
            cards.append(self.key_value_table(rows, title=self.variant_header(index, variant)))
        return cards

    def current_section(self) -> list[RenderableType]:
        step = self.session.step
        if step is FormStep.BASIC_INFO:
            return [self.key_value_table(self.basic_rows())]
        if step is FormStep.VARIANTS:
            return self.variant_cards()
        if step is FormStep.SPECIFICATIONS:
            rows = self.spec_rows()
            if not rows:
                return [Text("No specifications available for the selected category.", style="dim")]
            return [self.key_value_table(rows)]
        return [self.key_value_table(self.settings_rows())]

    def render_form(self) -> RenderableType:
        return Group(self.header(), *self.current_section())
