"""
@PURPOSE: 卖家后台 API 访问层
@OUTLINE:
  - SellerApiClient: httpx 异步客户端
  - build_reference_fetchers: 参考数据加载函数表
  - parse_category_options: 类目 <option> 片段解析
"""

from .category_parser import parse_category_options
from .client import ReferenceFetcher, SellerApiClient, build_reference_fetchers

__all__ = [
    "ReferenceFetcher",
    "SellerApiClient",
    "build_reference_fetchers",
    "parse_category_options",
]
