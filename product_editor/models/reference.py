"""
@PURPOSE: 定义参考数据（类目、税率、品牌、颜色等下拉选项）及动态属性的数据模型
@OUTLINE:
  - class ReferenceKind: 参考数据列表种类
  - class LoadStatus: 单个列表的加载状态
  - class Category: 层级类目选项
  - class ReferenceItem: 通用下拉选项
  - class AttributeKind: 动态属性输入类型
  - class Attribute: 类目相关的动态属性（规格参数）
  - class ReferenceList: 单个参考数据列表及其状态
@DEPENDENCIES:
  - 外部: pydantic
@RELATED: core/reference_store.py, api/category_parser.py
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReferenceKind(str, Enum):
    """参考数据列表种类."""

    CATEGORIES = "categories"
    TAXES = "taxes"
    BRANDS = "brands"
    COLORS = "colors"
    SIZES = "sizes"
    MATERIALS = "materials"
    PATTERNS = "patterns"
    UNITS = "units"
    COUNTRIES = "countries"
    TAGS = "tags"
    WARRANTIES = "warranties"
    ATTRIBUTES = "attributes"


# 商品加载需要等待的列表（动态属性不参与门控）
GATED_KINDS: tuple[ReferenceKind, ...] = tuple(
    kind for kind in ReferenceKind if kind is not ReferenceKind.ATTRIBUTES
)


class LoadStatus(str, Enum):
    """列表加载状态. LOADED/FAILED 为终态."""

    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"

    @property
    def is_settled(self) -> bool:
        return self in (LoadStatus.LOADED, LoadStatus.FAILED)


class Category(BaseModel):
    """层级类目选项.

    Attributes:
        id: 类目 ID
        label: 显示名称（已去除缩进标记）
        depth: 缩进层级（仅用于展示分组）
    """

    id: str = Field(..., min_length=1, description="类目ID")
    label: str = Field(..., description="显示名称")
    depth: int = Field(default=0, ge=0, description="缩进层级")


class ReferenceItem(BaseModel):
    """通用下拉选项（税率、品牌、颜色、尺码、单位等）.

    保留服务端返回的其余字段（如 ``percentage``、``short_code``、``color_code``）。

    Examples:
        >>> ReferenceItem.from_api({"id": 3, "tax_name": "GST", "percentage": 5}).label
        'GST'
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., description="选项ID")
    label: str = Field(default="", description="显示名称")

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> str:
        """服务端 ID 可能是数字."""
        return str(v)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> ReferenceItem:
        """从 API 行数据构建, 依次尝试 name/label/title/tax_name 作为显示名."""
        data = dict(raw)
        if "id" not in data and "value" in data:
            data["id"] = data["value"]
        label = next(
            (str(data[key]) for key in ("name", "label", "title", "tax_name") if data.get(key)),
            "",
        )
        data["label"] = label
        return cls(**data)


class AttributeKind(str, Enum):
    """动态属性输入类型."""

    TEXT = "text"
    SELECT = "select"


class Attribute(BaseModel):
    """动态属性（规格参数）.

    Attributes:
        id: 属性 ID
        label: 显示名称
        kind: 输入类型
        applicable_category_ids: 适用的类目 ID 集合
        options: 下拉选项（仅 SELECT）
    """

    id: str = Field(..., description="属性ID")
    label: str = Field(default="", description="显示名称")
    kind: AttributeKind = Field(default=AttributeKind.TEXT, description="输入类型")
    applicable_category_ids: frozenset[str] = Field(
        default_factory=frozenset, description="适用类目ID"
    )
    options: list[str] = Field(default_factory=list, description="下拉选项")

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Attribute:
        """从 API 行数据构建.

        ``category_ids`` 为逗号分隔字符串, 空项丢弃;
        ``options`` 为 JSON 数组字符串, 解析失败视为空列表。

        Examples:
            >>> attr = Attribute.from_api({"id": 7, "name": "Fabric", "category_ids": "3, 5,,"})
            >>> sorted(attr.applicable_category_ids)
            ['3', '5']
        """
        kind = (
            AttributeKind.SELECT
            if str(raw.get("type", "")).strip().lower() == "select"
            else AttributeKind.TEXT
        )
        category_ids = frozenset(
            part.strip() for part in str(raw.get("category_ids") or "").split(",") if part.strip()
        )
        return cls(
            id=str(raw.get("id", "")),
            label=str(raw.get("label") or raw.get("name") or ""),
            kind=kind,
            applicable_category_ids=category_ids,
            options=_parse_options(raw.get("options")) if kind is AttributeKind.SELECT else [],
        )


def _parse_options(value: Any) -> list[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if not value:
        return []
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return []
    return [str(item) for item in parsed] if isinstance(parsed, list) else []


T = TypeVar("T")


class ReferenceList(BaseModel, Generic[T]):
    """单个参考数据列表.

    Attributes:
        items: 选项（保持服务端顺序）
        status: 加载状态
        error: 最近一次加载失败的错误信息
    """

    items: list[T] = Field(default_factory=list, description="选项列表")
    status: LoadStatus = Field(default=LoadStatus.NOT_LOADED, description="加载状态")
    error: str | None = Field(default=None, description="加载错误")
