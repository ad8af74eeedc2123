"""
@PURPOSE: 测试 Mock 模块
@OUTLINE:
  - MockSellerApi: 对象级假 API 客户端
  - MockSellerServer: httpx 传输层假服务端
  - Data Mocks: 商品详情、参考数据、类目片段
@DEPENDENCIES:
  - 外部: httpx
"""

from .api_mock import MockSellerApi, MockSellerServer, success_update
from .data_mock import (
    ATTRIBUTE_ROWS,
    CATEGORY_OPTIONS_HTML,
    REFERENCE_ROWS,
    make_product,
    make_variant_row,
    product_response,
    staged_file,
)

__all__ = [
    "ATTRIBUTE_ROWS",
    "CATEGORY_OPTIONS_HTML",
    "MockSellerApi",
    "MockSellerServer",
    "REFERENCE_ROWS",
    "make_product",
    "make_variant_row",
    "product_response",
    "staged_file",
    "success_update",
]
