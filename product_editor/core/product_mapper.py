"""
@PURPOSE: 将商品详情接口返回的数据映射为编辑表单模型
@OUTLINE:
  - def map_product(): 商品 DTO -> FormModel
  - def map_variant(): 变体 DTO -> 变体字段
  - def normalize_images(): 兼容多种历史图片格式
@GOTCHAS:
  - 服务端布尔标记（return_status/cancelable_status/cod_allowed）可能是 0/1、"0"/"1" 或 true/false
  - 所有变体的库存策略取自商品级 is_unlimited_stock, 而不是变体自身字段
  - variants[0] 合并到主变体默认值之上, 而不是整体替换
  - 品牌 ID 仅在数值大于 0 时保留
@DEPENDENCIES:
  - 内部: ..models
@RELATED: product_loader.py
"""

from __future__ import annotations

from typing import Any

from ..models.form import FormModel, ProductSettings
from ..models.image import ExistingImage
from ..models.variant import StockPolicy, Variant, VariantKind


def _text(value: Any, default: str = "") -> str:
    """None 或缺失值返回默认值, 其余转为字符串."""
    if value is None:
        return default
    return str(value)


def _id_text(value: Any) -> str:
    """ID 类字段: 空值/0 视为未设置."""
    if not value:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    """服务端布尔标记转换为 bool."""
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false", "no", "null")
    return bool(value)


def _positive_id(value: Any) -> str:
    try:
        return str(value) if float(value) > 0 else ""
    except (TypeError, ValueError):
        return ""


def normalize_images(raw: Any) -> list[ExistingImage]:
    """将服务端图片字段统一为 ExistingImage 列表.

    支持 ``[{image_url|url, id}]``、``["url", ...]`` 以及单个 URL 字符串。

    Examples:
        >>> [i.url for i in normalize_images([{"image_url": "a.png", "id": 3}, "b.png"])]
        ['a.png', 'b.png']
        >>> normalize_images("c.png")[0].remote_id is None
        True
    """
    if not raw:
        return []
    entries = raw if isinstance(raw, list) else [raw]

    images: list[ExistingImage] = []
    for entry in entries:
        if isinstance(entry, dict):
            url = entry.get("image_url") or entry.get("url") or ""
            remote_id = _id_text(entry.get("id")) or None
        else:
            url = _text(entry)
            remote_id = None
        if url:
            images.append(ExistingImage(url=str(url), remote_id=remote_id))
    return images


def map_variant(raw: dict[str, Any], stock_policy: StockPolicy) -> dict[str, Any]:
    """变体 DTO -> Variant 字段字典（不含 local_id）."""
    kind = (
        VariantKind.LOOSE
        if _text(raw.get("type"), "packet").strip().lower() == "loose"
        else VariantKind.PACKET
    )
    return {
        "remote_id": _id_text(raw.get("id")),
        "kind": kind,
        "stock_policy": stock_policy,
        "title": _text(raw.get("title")),
        "measurement": _text(raw.get("measurement"), "0"),
        "variant_type": _text(raw.get("pd_type")),
        "material": _id_text(raw.get("material_id") or raw.get("material")),
        "weight_in_grams": _text(raw.get("weight_in_grams")),
        "height": _text(raw.get("height")),
        "price": _text(raw.get("price"), "0.00"),
        "discounted_price": _text(raw.get("discounted_price"), "0.00"),
        "stock": _text(raw.get("stock"), "0"),
        "unit": _id_text(raw.get("stock_unit_id")),
        "status": "active" if _flag(raw.get("status")) else "inactive",
        "color": _id_text(raw.get("color_id")),
        "size": _id_text(raw.get("size_id")),
        "pattern": _id_text(raw.get("pattern_id")),
        "pack": _text(raw.get("pack")),
        "capacity": _text(raw.get("capacity")),
        "dimensions": _text(raw.get("dimensions")),
        "flavour": _text(raw.get("flavour")),
        "mattress_size": _text(raw.get("mattress_size")),
        "no_of_pics": _text(raw.get("no_of_pics"), "0"),
        "images": normalize_images(raw.get("images")),
    }


def _map_settings(product: dict[str, Any]) -> ProductSettings:
    try:
        total_allowed = int(product.get("total_allowed_quantity") or 0)
    except (TypeError, ValueError):
        total_allowed = 0

    return ProductSettings(
        product_type=_text(product.get("type")) or "packet",
        made_in=_id_text(product.get("made_in")),
        is_returnable=_flag(product.get("return_status")),
        is_cancellable=_flag(product.get("cancelable_status")),
        max_return_days=_text(product.get("return_days")),
        till_status=_text(product.get("till_status")),
        manufacturer=_text(product.get("manufacturer")),
        sku=_text(product.get("sku")),
        hsn_code=_text(product.get("hsn_code")),
        fssai_lic_no=_text(product.get("fssai_lic_no")),
        self_life=_text(product.get("self_life")),
        is_cod_allowed=_flag(product.get("cod_allowed")),
        total_allowed_quantity=max(total_allowed, 0),
        delivery_option=_text(product.get("delivery_option")) or "pay_by_yourself",
        delivery_charges=_text(product.get("delivery_charges")) or "0",
    )


def _map_spec_values(specifications: Any) -> dict[str, str]:
    if not isinstance(specifications, list):
        return {}
    values: dict[str, str] = {}
    for spec in specifications:
        if isinstance(spec, dict) and spec.get("attribute_id") is not None:
            values[str(spec["attribute_id"])] = _text(spec.get("value"))
    return values


def map_product(product: dict[str, Any], base: FormModel | None = None) -> FormModel:
    """商品 DTO -> FormModel.

    Args:
        product: 商品详情接口的 ``data`` 对象
        base: 表单当前状态, 主变体会在其默认值之上合并

    Returns:
        填充后的表单模型
    """
    base = base or FormModel()

    tag_ids: list[str] = []
    for tag in product.get("tags") or []:
        tag_id = _id_text(tag.get("id") if isinstance(tag, dict) else tag)
        if tag_id and tag_id not in tag_ids:
            tag_ids.append(tag_id)

    stock_policy = (
        StockPolicy.UNLIMITED if _flag(product.get("is_unlimited_stock")) else StockPolicy.LIMITED
    )
    raw_variants = [v for v in product.get("variants") or [] if isinstance(v, dict)]

    primary = base.primary_variant
    additional: list[Variant] = []
    if raw_variants:
        primary = primary.model_copy(update=map_variant(raw_variants[0], stock_policy))
        additional = [Variant(**map_variant(raw, stock_policy)) for raw in raw_variants[1:]]

    main_image = None
    if product.get("image_url"):
        main_image = ExistingImage(
            url=str(product["image_url"]),
            remote_id=_id_text(product.get("image_id")) or None,
        )

    gallery = normalize_images(product.get("images"))
    if not gallery:
        gallery = normalize_images(product.get("other_images"))

    return base.model_copy(
        update={
            "name": _text(product.get("name")),
            "slug": _text(product.get("slug")),
            "category_id": _id_text(product.get("category_id")),
            "tax_id": _id_text(product.get("tax_id")),
            "brand_id": _positive_id(product.get("brand_id")),
            "warranty_id": _id_text(product.get("warranty_id")),
            "accessories_warranty_id": _id_text(product.get("accessories_warranty_id")),
            "description": _text(product.get("description")),
            "tag_ids": tag_ids,
            "settings": _map_settings(product),
            "spec_values": _map_spec_values(product.get("specifications")),
            "primary_variant": primary,
            "additional_variants": additional,
            "main_image": main_image,
            "gallery_existing": gallery,
            "gallery_new": [],
            "deleted_image_ids": [],
        }
    )
