"""
@PURPOSE: 数据模型模块，使用Pydantic定义所有数据结构
@OUTLINE:
  - ReferenceKind, LoadStatus, Category, ReferenceItem, Attribute, ReferenceList: 参考数据
  - StagedFile, ExistingImage, NewImage, ImageRef: 图片引用
  - Variant, VariantKind, StockPolicy: 变体
  - Credentials, FormStep, ProductSettings, FormModel: 表单
  - SaveResult: 保存结果
@DEPENDENCIES:
  - 内部: .reference, .image, .variant, .form, .result
"""

from .form import Credentials, FormModel, FormStep, ProductSettings
from .image import ExistingImage, ImageRef, NewImage, StagedFile
from .reference import (
    GATED_KINDS,
    Attribute,
    AttributeKind,
    Category,
    LoadStatus,
    ReferenceItem,
    ReferenceKind,
    ReferenceList,
)
from .result import SaveResult
from .variant import StockPolicy, Variant, VariantKind

__all__ = [
    "GATED_KINDS",
    "Attribute",
    "AttributeKind",
    "Category",
    "Credentials",
    "ExistingImage",
    "FormModel",
    "FormStep",
    "ImageRef",
    "LoadStatus",
    "NewImage",
    "ProductSettings",
    "ReferenceItem",
    "ReferenceKind",
    "ReferenceList",
    "SaveResult",
    "StagedFile",
    "StockPolicy",
    "Variant",
    "VariantKind",
]
