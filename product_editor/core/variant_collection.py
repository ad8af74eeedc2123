"""
@PURPOSE: 变体集合操作（主变体 + 附加变体的增删改复制及变体图片）
@OUTLINE:
  - class VariantCollection: 绑定在 FormModel 上的变体操作
    - def update_primary(): 修改主变体字段
    - def add_empty(): 追加空变体（继承主变体的包装类型与库存策略）
    - def copy(): 复制变体（新 local_id, remote_id 置空）
    - def remove(): 删除附加变体
    - def update_field(): 修改附加变体字段
    - def visible_fields(): 当前应显示的变体字段
    - def add_images() / remove_image(): 变体图片暂存
@GOTCHAS:
  - 主变体永远不能通过 remove 删除
  - add_empty/copy 都不能修改主变体
  - 字段可见性以主变体的包装类型/库存策略为准（商品级设置）
@DEPENDENCIES:
  - 外部: loguru
  - 内部: ..models.variant, ..models.form, .image_set
@RELATED: validation.py, payload.py
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from loguru import logger
from pydantic import ValidationError

from ..errors import VariantError
from ..models.form import FormModel
from ..models.image import NewImage, StagedFile
from ..models.variant import PACKET_ONLY_FIELDS, StockPolicy, Variant, VariantKind, new_local_id
from .image_set import validate_image_files

# 表单中变体字段的显示顺序
VARIANT_FIELD_ORDER: tuple[str, ...] = (
    "title",
    "measurement",
    "variant_type",
    "material",
    "weight_in_grams",
    "height",
    "price",
    "discounted_price",
    "stock",
    "unit",
    "status",
    "color",
    "size",
    "pattern",
    "pack",
    "capacity",
    "dimensions",
    "flavour",
    "mattress_size",
    "no_of_pics",
)


class VariantCollection:
    """变体集合.

    所有操作直接修改绑定的 FormModel。

    Examples:
        >>> variants = VariantCollection(form)
        >>> new = variants.add_empty()
        >>> variants.update_field(new.local_id, "price", "99.00")
        >>> len(variants.all_variants())
        2
    """

    def __init__(self, form: FormModel) -> None:
        self._form = form

    def bind(self, form: FormModel) -> None:
        """商品加载完成后切换到新的表单."""
        self._form = form

    @property
    def primary(self) -> Variant:
        return self._form.primary_variant

    @property
    def additional(self) -> list[Variant]:
        return self._form.additional_variants

    def all_variants(self) -> list[Variant]:
        """主变体在前的全部变体."""
        return [self.primary, *self.additional]

    def get(self, local_id: str) -> Variant:
        for variant in self.all_variants():
            if variant.local_id == local_id:
                return variant
        raise VariantError(f"变体不存在: {local_id}")

    # ========== 字段修改 ==========

    @staticmethod
    def _check_field(field: str) -> None:
        if field not in Variant.editable_fields():
            raise VariantError(f"不允许修改的变体字段: {field}")

    @staticmethod
    def _assign(variant: Variant, field: str, value: Any) -> None:
        try:
            setattr(variant, field, value)
        except ValidationError as e:
            raise VariantError(f"变体字段 {field} 的值不合法: {value!r}") from e

    def update_primary(self, field: str, value: Any) -> None:
        """修改主变体的一个字段, 不影响附加变体."""
        self._check_field(field)
        self._assign(self.primary, field, value)

    def update_field(self, local_id: str, field: str, value: Any) -> None:
        """修改一个附加变体的字段.

        Raises:
            VariantError: 字段不可修改或变体不在附加列表中
        """
        self._check_field(field)
        variant = self._find_additional(local_id)
        self._assign(variant, field, value)

    def _find_additional(self, local_id: str) -> Variant:
        for variant in self.additional:
            if variant.local_id == local_id:
                return variant
        if local_id == self.primary.local_id:
            raise VariantError("主变体请使用 update_primary 修改")
        raise VariantError(f"附加变体不存在: {local_id}")

    # ========== 增删复制 ==========

    def add_empty(self) -> Variant:
        """追加一个空变体, 包装类型与库存策略继承自主变体."""
        variant = Variant(
            kind=self.primary.kind,
            stock_policy=self.primary.stock_policy,
            status="active",
        )
        self._form.additional_variants = [*self.additional, variant]
        logger.debug(f"新增空变体: {variant.local_id} (kind={variant.kind.value})")
        return variant

    def copy(self, source: Variant) -> Variant:
        """复制变体到附加列表末尾.

        除 local_id（重新生成）与 remote_id（置空）外逐字段复制。
        """
        clone = source.model_copy(
            update={"local_id": new_local_id(), "remote_id": ""},
            deep=True,
        )
        self._form.additional_variants = [*self.additional, clone]
        logger.debug(f"复制变体: {source.local_id} -> {clone.local_id}")
        return clone

    def remove(self, local_id: str) -> None:
        """删除附加变体.

        Raises:
            VariantError: 尝试删除主变体或变体不存在
        """
        if local_id == self.primary.local_id:
            raise VariantError("主变体不能删除")
        remaining = [v for v in self.additional if v.local_id != local_id]
        if len(remaining) == len(self.additional):
            raise VariantError(f"附加变体不存在: {local_id}")
        self._form.additional_variants = remaining
        logger.debug(f"删除变体: {local_id}")

    # ========== 字段可见性 ==========

    def visible_fields(self) -> list[str]:
        """当前应显示的变体字段（按表单顺序）.

        Loose 隐藏 variant_type/height/pack/flavour, Unlimited 隐藏 stock,
        所有变体行都以主变体的设置为准。
        """
        hidden: set[str] = set()
        if self.primary.kind is VariantKind.LOOSE:
            hidden |= PACKET_ONLY_FIELDS
        if self.primary.stock_policy is StockPolicy.UNLIMITED:
            hidden.add("stock")
        return [name for name in VARIANT_FIELD_ORDER if name not in hidden]

    # ========== 变体图片 ==========

    def add_images(self, local_id: str, files: Iterable[StagedFile]) -> None:
        """为变体暂存图片, 类型不合法时整批拒绝.

        Raises:
            InvalidFileTypeError: 存在不允许的文件类型
        """
        batch = validate_image_files(files)
        variant = self.get(local_id)
        variant.images = [*variant.images, *(NewImage(file=f) for f in batch)]
        logger.debug(f"变体 {local_id} 新增图片 {len(batch)} 张")

    def remove_image(self, local_id: str, index: int) -> None:
        """移除变体图片（不记录删除）."""
        variant = self.get(local_id)
        if not 0 <= index < len(variant.images):
            raise VariantError(f"变体图片索引越界: {index}")
        variant.images = [img for i, img in enumerate(variant.images) if i != index]
