"""
@PURPOSE: 定义商品变体（SKU 配置）数据模型
@OUTLINE:
  - class VariantKind: 包装类型（Packet/Loose）
  - class StockPolicy: 库存策略（Limited/Unlimited）
  - class Variant: 单个变体
  - def new_local_id(): 生成客户端本地 ID
@GOTCHAS:
  - 数值字段以十进制字符串保存, 避免表单与 API 之间的精度损失
  - local_id 只在内存中使用, 永远不会发送到服务端
@DEPENDENCIES:
  - 外部: pydantic
@RELATED: core/variant_collection.py, core/product_mapper.py
"""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from .image import ImageRef


def new_local_id() -> str:
    """生成新的客户端本地 ID."""
    return uuid.uuid4().hex


class VariantKind(str, Enum):
    """包装类型. Packet 才显示 variant_type/height/pack/flavour."""

    PACKET = "Packet"
    LOOSE = "Loose"


class StockPolicy(str, Enum):
    """库存策略. Limited 时库存为必填."""

    LIMITED = "Limited"
    UNLIMITED = "Unlimited"


# 仅 Packet 类型显示的字段
PACKET_ONLY_FIELDS = frozenset({"variant_type", "height", "pack", "flavour"})

# 不允许通过字段修改接口变更的身份字段
IDENTITY_FIELDS = frozenset({"local_id", "remote_id"})


class Variant(BaseModel):
    """单个商品变体.

    Attributes:
        local_id: 客户端本地 ID
        remote_id: 服务端 ID, 空字符串表示保存时新建
        kind: 包装类型
        stock_policy: 库存策略
        images: 变体图片
    """

    model_config = ConfigDict(validate_assignment=True)

    local_id: str = Field(default_factory=new_local_id, description="本地ID")
    remote_id: str = Field(default="", description="服务端ID")
    kind: VariantKind = Field(default=VariantKind.PACKET, description="包装类型")
    stock_policy: StockPolicy = Field(default=StockPolicy.LIMITED, description="库存策略")

    measurement: str = "0"
    variant_type: str = ""
    material: str = ""
    weight_in_grams: str = ""
    height: str = ""
    price: str = "0.00"
    discounted_price: str = "0.00"
    unit: str = ""
    title: str = ""
    color: str = ""
    pattern: str = ""
    capacity: str = ""
    mattress_size: str = ""
    status: str = ""
    pack: str = ""
    size: str = ""
    no_of_pics: str = ""
    dimensions: str = ""
    flavour: str = ""
    stock: str = "0"

    images: list[ImageRef] = Field(default_factory=list, description="变体图片")

    @classmethod
    def editable_fields(cls) -> frozenset[str]:
        """可通过字段修改接口变更的字段名（图片走单独的暂存接口）."""
        return frozenset(cls.model_fields) - IDENTITY_FIELDS - {"images"}

    @property
    def is_persisted(self) -> bool:
        return bool(self.remote_id)
