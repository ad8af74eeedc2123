"""
@PURPOSE: 商品编辑核心逻辑（与展示层无关）
@OUTLINE:
  - EditProductSession: 编辑会话（桌面端/移动端共用）
  - ReferenceDataStore: 参考数据仓库
  - ProductLoader, LoaderState: 商品加载状态机
  - VariantCollection: 变体集合
  - ImageSetManager: 主图/图集管理
  - AttributeFilter, filter_attributes: 规格属性过滤
  - SaveCoordinator, build_update_payload: 保存
  - validate_step: 步骤校验
  - Notifier, LoggingNotifier, RecordingNotifier: 通知
"""

from .attribute_filter import AttributeFilter, filter_attributes
from .image_set import ImageSetManager, validate_image_files
from .notifier import LoggingNotifier, Notifier, RecordingNotifier
from .payload import build_update_payload
from .product_loader import LoaderState, ProductLoader
from .product_mapper import map_product
from .reference_store import ReferenceDataStore
from .save_coordinator import SaveCoordinator
from .session import EditProductSession
from .validation import missing_basic_fields, missing_variant_fields, validate_step
from .variant_collection import VariantCollection

__all__ = [
    "AttributeFilter",
    "EditProductSession",
    "ImageSetManager",
    "LoaderState",
    "LoggingNotifier",
    "Notifier",
    "ProductLoader",
    "RecordingNotifier",
    "ReferenceDataStore",
    "SaveCoordinator",
    "VariantCollection",
    "build_update_payload",
    "filter_attributes",
    "map_product",
    "missing_basic_fields",
    "missing_variant_fields",
    "validate_image_files",
    "validate_step",
]
