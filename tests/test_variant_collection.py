"""
@PURPOSE: 测试变体集合操作
@OUTLINE:
  - class TestVariantEdits: 字段修改
  - class TestAddCopyRemove: 新增/复制/删除
  - class TestVisibleFields: 字段可见性
  - class TestVariantImages: 变体图片暂存
@DEPENDENCIES:
  - 外部: pytest
  - 内部: product_editor.core.variant_collection
"""

import pytest

from product_editor.core.variant_collection import VARIANT_FIELD_ORDER, VariantCollection
from product_editor.errors import InvalidFileTypeError, VariantError
from product_editor.models.image import NewImage
from product_editor.models.variant import StockPolicy, VariantKind
from tests.mocks import staged_file


@pytest.fixture
def variants(loaded_form) -> VariantCollection:
    return VariantCollection(loaded_form)


class TestVariantEdits:
    """测试变体字段修改."""

    def test_update_primary(self, variants) -> None:
        """测试修改主变体字段."""
        variants.update_primary("price", "599.00")
        assert variants.primary.price == "599.00"

    def test_update_primary_rejects_identity_fields(self, variants) -> None:
        """测试不允许修改 local_id/remote_id/images."""
        for field in ("local_id", "remote_id", "images", "unknown"):
            with pytest.raises(VariantError):
                variants.update_primary(field, "x")

    def test_update_kind_by_value(self, variants) -> None:
        """测试包装类型可以用字符串值修改."""
        variants.update_primary("kind", "Loose")
        assert variants.primary.kind is VariantKind.LOOSE

    def test_invalid_enum_value(self, variants) -> None:
        """测试非法枚举值抛出 VariantError."""
        with pytest.raises(VariantError):
            variants.update_primary("stock_policy", "Sometimes")

    def test_update_field_on_additional(self, variants) -> None:
        """测试修改附加变体只影响该变体."""
        new = variants.add_empty()
        variants.update_field(new.local_id, "price", "99.00")

        assert new.price == "99.00"
        assert variants.primary.price == "499.00"

    def test_update_field_rejects_primary(self, variants) -> None:
        """测试 update_field 不能修改主变体."""
        with pytest.raises(VariantError):
            variants.update_field(variants.primary.local_id, "price", "1.00")

    def test_update_field_unknown_variant(self, variants) -> None:
        """测试未知变体."""
        with pytest.raises(VariantError):
            variants.update_field("missing", "price", "1.00")


class TestAddCopyRemove:
    """测试新增/复制/删除变体."""

    def test_add_empty_inherits_kind_and_policy(self, variants) -> None:
        """测试空变体继承主变体的包装类型和库存策略."""
        variants.update_primary("kind", VariantKind.LOOSE)
        variants.update_primary("stock_policy", StockPolicy.UNLIMITED)

        new = variants.add_empty()

        assert new.kind is VariantKind.LOOSE
        assert new.stock_policy is StockPolicy.UNLIMITED
        assert new.status == "active"
        assert new.remote_id == ""
        assert new.price == "0.00"
        assert variants.additional == [new]

    def test_add_empty_does_not_touch_primary(self, variants) -> None:
        """测试新增空变体不修改主变体."""
        before = variants.primary.model_dump()

        variants.add_empty()

        assert variants.primary.model_dump() == before

    def test_copy_variant(self, variants) -> None:
        """测试复制变体: 新 local_id, remote_id 置空, 其余字段相同."""
        source = variants.primary
        before = source.model_dump()

        clone = variants.copy(source)

        assert clone.local_id != source.local_id
        assert clone.remote_id == ""
        assert clone.price == source.price
        assert clone.size == source.size
        assert len(clone.images) == len(source.images)
        assert source.model_dump() == before
        assert variants.all_variants() == [source, clone]

    def test_copy_is_independent(self, variants) -> None:
        """测试复制后修改副本不影响原变体."""
        clone = variants.copy(variants.primary)
        variants.add_images(clone.local_id, [staged_file("extra.png")])

        assert len(clone.images) == 2
        assert len(variants.primary.images) == 1

    def test_remove_additional(self, variants) -> None:
        """测试删除附加变体."""
        first = variants.add_empty()
        second = variants.add_empty()

        variants.remove(first.local_id)

        assert variants.additional == [second]

    def test_remove_primary_rejected(self, variants) -> None:
        """测试主变体不能删除."""
        with pytest.raises(VariantError):
            variants.remove(variants.primary.local_id)
        assert variants.primary.remote_id == "501"

    def test_remove_unknown(self, variants) -> None:
        """测试删除不存在的变体."""
        with pytest.raises(VariantError):
            variants.remove("missing")


class TestVisibleFields:
    """测试字段可见性."""

    def test_packet_limited_shows_all(self, variants) -> None:
        """测试 Packet + Limited 显示全部字段."""
        assert variants.visible_fields() == list(VARIANT_FIELD_ORDER)

    def test_loose_hides_packet_fields(self, variants) -> None:
        """测试 Loose 隐藏 variant_type/height/pack/flavour."""
        variants.update_primary("kind", VariantKind.LOOSE)

        visible = variants.visible_fields()

        for field in ("variant_type", "height", "pack", "flavour"):
            assert field not in visible
        assert "stock" in visible

    def test_unlimited_hides_stock(self, variants) -> None:
        """测试 Unlimited 隐藏库存."""
        variants.update_primary("stock_policy", StockPolicy.UNLIMITED)
        assert "stock" not in variants.visible_fields()

    def test_visibility_follows_primary(self, variants) -> None:
        """测试可见性以主变体为准, 附加变体的设置不影响."""
        new = variants.add_empty()
        variants.update_field(new.local_id, "stock_policy", StockPolicy.UNLIMITED)

        assert "stock" in variants.visible_fields()


class TestVariantImages:
    """测试变体图片."""

    def test_add_images(self, variants) -> None:
        """测试追加新图片."""
        variants.add_images(variants.primary.local_id, [staged_file("a.png"), staged_file("b.jpg")])

        images = variants.primary.images
        assert len(images) == 3
        assert all(isinstance(img, NewImage) for img in images[1:])

    def test_add_images_rejects_whole_batch(self, variants) -> None:
        """测试存在非法文件时整批拒绝."""
        with pytest.raises(InvalidFileTypeError):
            variants.add_images(
                variants.primary.local_id,
                [staged_file("a.png"), staged_file("doc.pdf", "application/pdf")],
            )
        assert len(variants.primary.images) == 1

    def test_remove_image(self, variants) -> None:
        """测试移除变体图片."""
        variants.remove_image(variants.primary.local_id, 0)
        assert variants.primary.images == []

        with pytest.raises(VariantError):
            variants.remove_image(variants.primary.local_id, 0)
