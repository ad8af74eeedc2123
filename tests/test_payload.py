"""
@PURPOSE: 测试商品更新请求组装
@OUTLINE:
  - class TestPayloadFields: 基础字段与商品设置
  - class TestPayloadVariants: 变体数组
  - class TestPayloadFiles: 文件字段
  - class TestPayloadErrors: 缺少必填字段
@DEPENDENCIES:
  - 外部: pytest
  - 内部: product_editor.core.payload
"""

import json

import pytest

from product_editor.core.image_set import ImageSetManager
from product_editor.core.payload import bool_flag, build_update_payload
from product_editor.core.variant_collection import VariantCollection
from product_editor.errors import PayloadError
from product_editor.models.form import FormModel
from product_editor.models.variant import StockPolicy
from tests.mocks import staged_file


def build(form: FormModel):
    return build_update_payload(form, "42", "77")


class TestPayloadFields:
    """测试基础字段与商品设置."""

    def test_single_values(self, loaded_form) -> None:
        """测试基础字段为单值."""
        data, _ = build(loaded_form)

        assert data["id"] == ["42"]
        assert data["seller_id"] == ["77"]
        assert data["name"] == ["Cotton Crew T-Shirt"]
        assert data["category_id"] == ["6"]
        assert data["tag_ids"] == ["11,12"]
        assert data["type"] == ["packet"]
        assert data["status"] == ["1"]
        assert data["shipping_type"] == ["undefined"]
        assert data["pincode_ids_exc"] == ["null"]

    def test_field_order(self, loaded_form) -> None:
        """测试字段顺序: 基础字段 -> 变体数组 -> 其余商品字段."""
        keys = list(build(loaded_form)[0])

        assert keys[:3] == ["id", "deleteImageIds", "name"]
        assert keys.index("accessories_warranty_id") < keys.index("variant_id[]")
        assert keys.index("packet_flavour[]") < keys.index("loose_stock")
        assert keys[-1] == "product_attributes"

    def test_delete_image_ids(self, loaded_form) -> None:
        """测试没有删除时发送 "[]", 有删除时逐个发送."""
        data, _ = build(loaded_form)
        assert data["deleteImageIds"] == ["[]"]

        images = ImageSetManager(loaded_form)
        images.remove_gallery_at(0)
        images.remove_main()
        data, _ = build(loaded_form)
        assert data["deleteImageIds"] == ["8101", "8001"]

    def test_settings_flags(self, loaded_form) -> None:
        """测试布尔设置转换为 "1"/"0" 及相关的默认值."""
        data, _ = build(loaded_form)

        assert data["return_status"] == ["1"]
        assert data["return_days"] == ["7"]
        assert data["cancelable_status"] == ["0"]
        assert data["till_status"] == ["null"]
        assert data["cod_allowed_status"] == ["1"]
        assert data["max_allowed_quantity"] == ["5"]
        assert data["sku"] == ["TS-001"]
        assert data["delivery_charges"] == ["0"]

    def test_setting_defaults(self, loaded_form) -> None:
        """测试未退货/可取消/无上限/无 SKU 时的默认值."""
        settings = loaded_form.settings
        settings.is_returnable = False
        settings.is_cancellable = True
        settings.total_allowed_quantity = 0
        settings.sku = ""

        data, _ = build(loaded_form)

        assert data["return_days"] == ["0"]
        assert data["till_status"] == ["1"]
        assert data["max_allowed_quantity"] == ["10"]
        assert data["sku"] == ["null"]

    def test_delivery_charges_only_when_charged(self, loaded_form) -> None:
        """测试只有 add_delivery_charge 时提交运费."""
        loaded_form.settings.delivery_charges = "40"
        assert build(loaded_form)[0]["delivery_charges"] == ["0"]

        loaded_form.settings.delivery_option = "add_delivery_charge"
        assert build(loaded_form)[0]["delivery_charges"] == ["40"]

    def test_product_attributes_include_stale_keys(self, loaded_form) -> None:
        """测试提交全部规格值, 包括切换类目前的旧键."""
        loaded_form.spec_values = {"7": "Cotton", "9": "12 months"}
        loaded_form.category_id = "5"

        data, _ = build(loaded_form)

        assert json.loads(data["product_attributes"][0]) == {"7": "Cotton", "9": "12 months"}

    def test_no_product_attributes_when_empty(self, loaded_form) -> None:
        """测试没有规格值时不发送 product_attributes."""
        loaded_form.spec_values = {}
        assert "product_attributes" not in build(loaded_form)[0]

    def test_bool_flag(self) -> None:
        """测试 bool_flag."""
        assert bool_flag(True) == "1"
        assert bool_flag(False) == "0"


class TestPayloadVariants:
    """测试变体数组."""

    def test_primary_first(self, loaded_form) -> None:
        """测试主变体在前, 新变体 variant_id 为空."""
        variants = VariantCollection(loaded_form)
        new = variants.add_empty()
        variants.update_field(new.local_id, "price", "99.00")

        data, _ = build(loaded_form)

        assert data["variant_id[]"] == ["501", ""]
        assert data["packet_price[]"] == ["499.00", "99.00"]
        assert data["packet_status[]"] == ["1", "1"]
        assert data["size_id[]"] == ["31", ""]

    def test_arrays_have_equal_length(self, loaded_form) -> None:
        """测试所有变体数组长度一致."""
        variants = VariantCollection(loaded_form)
        variants.add_empty()
        variants.copy(variants.primary)

        data, _ = build(loaded_form)

        lengths = {len(values) for key, values in data.items() if key.endswith("[]")}
        assert lengths == {3}

    def test_unlimited_if_any_variant(self, loaded_form) -> None:
        """测试任一变体为 Unlimited 时 is_unlimited_stock 为 "1"."""
        assert build(loaded_form)[0]["is_unlimited_stock"] == ["0"]

        variants = VariantCollection(loaded_form)
        new = variants.add_empty()
        variants.update_field(new.local_id, "stock_policy", StockPolicy.UNLIMITED)

        assert build(loaded_form)[0]["is_unlimited_stock"] == ["1"]

    def test_inactive_status(self, loaded_form) -> None:
        """测试停用状态提交为 "0"."""
        VariantCollection(loaded_form).update_primary("status", "inactive")
        assert build(loaded_form)[0]["packet_status[]"] == ["0"]


class TestPayloadFiles:
    """测试文件字段."""

    def test_no_files_by_default(self, loaded_form) -> None:
        """测试只有已存在图片时不上传文件."""
        assert build(loaded_form)[1] == []

    def test_file_fields(self, loaded_form) -> None:
        """测试主图、图集和变体图片的字段名."""
        images = ImageSetManager(loaded_form)
        variants = VariantCollection(loaded_form)
        new = variants.add_empty()
        variants.add_images(new.local_id, [staged_file("v.png")])
        images.add_gallery_files([staged_file("g.png")])
        images.set_main(staged_file("main.png"))

        _, files = build(loaded_form)

        assert [(name, upload[0]) for name, upload in files] == [
            ("image", "main.png"),
            ("packet_variant_images_1[]", "v.png"),
            ("other_images[]", "g.png"),
        ]
        assert files[0][1] == ("main.png", b"\x89PNG-bytes", "image/png")


class TestPayloadErrors:
    """测试缺少必填字段."""

    def test_missing_required(self) -> None:
        """测试缺少 id/name/seller_id/category_id 时抛出 PayloadError."""
        with pytest.raises(PayloadError) as exc_info:
            build_update_payload(FormModel(), "", "")

        assert exc_info.value.missing_fields == ["id", "name", "seller_id", "category_id"]

    def test_missing_seller(self, loaded_form) -> None:
        """测试只缺卖家 ID."""
        with pytest.raises(PayloadError) as exc_info:
            build_update_payload(loaded_form, "42", "")

        assert exc_info.value.missing_fields == ["seller_id"]
