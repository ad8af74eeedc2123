"""
@PURPOSE: 卖家后台 API 客户端，提供参考数据、商品详情与商品更新的 HTTP 调用
@OUTLINE:
  - class SellerApiClient: API 客户端主类
    - async def get_seller_categories(): 获取卖家可用类目（HTML 片段）
    - async def get_taxes() ... get_warranties(): 获取各类下拉参考数据
    - async def get_product_attributes(): 获取动态属性定义
    - async def get_product(): 获取单个商品详情
    - async def update_product(): 提交商品更新（multipart）
  - def build_reference_fetchers(): 为参考数据仓库构建每个列表的加载函数
@GOTCHAS:
  - 响应体 status == 0 视为失败, 即使 HTTP 状态码为 200
  - 服务端出错时可能返回 HTML 页面, 需要识别后按失败处理
  - 传输层异常统一包装为 SellerApiError, 调用方只需捕获一种异常
@DEPENDENCIES:
  - 外部: httpx
  - 内部: ..config.settings, ..errors, .category_parser
@RELATED: endpoints.py, ../core/reference_store.py, ../core/save_coordinator.py
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping, Sequence
from typing import Any

import httpx
from loguru import logger

from ..config.settings import ApiConfig, settings
from ..errors import SellerApiError
from ..models.form import Credentials
from ..models.reference import Attribute, Category, ReferenceItem, ReferenceKind
from . import endpoints
from .category_parser import parse_category_options

FileField = tuple[str, tuple[str, bytes, str]]
ReferenceFetcher = Callable[[Credentials], Awaitable[list[Any]]]


class SellerApiClient:
    """卖家后台 API 客户端.

    Examples:
        >>> async with SellerApiClient(token="abc") as client:
        ...     taxes = await client.get_taxes()
        ...     product = await client.get_product("42")
    """

    def __init__(
        self,
        token: str,
        *,
        config: ApiConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """初始化 API 客户端.

        Args:
            token: 卖家 Bearer token
            config: API 配置, 默认使用全局配置
            transport: 自定义传输层（测试时注入 httpx.MockTransport）
        """
        self._token = token
        self._config = config or settings.api
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return f"{self._config.base_url.rstrip('/')}{self._config.api_prefix}"

    async def _get_client(self) -> httpx.AsyncClient:
        """获取或创建 HTTP 客户端."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self._token}",
                    "Accept": "application/json",
                },
                timeout=self._config.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """关闭 HTTP 客户端."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> SellerApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # ========== 请求与响应 ==========

    async def _request(
        self,
        method: str,
        path: str,
        *,
        action: str,
        **kwargs: Any,
    ) -> httpx.Response:
        client = await self._get_client()
        logger.debug(f"{action}: {method} {path}")
        try:
            return await client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(f"{action}超时: {e}")
            raise SellerApiError(f"{action}超时, 请稍后重试") from e
        except httpx.HTTPError as e:
            logger.error(f"{action}网络错误: {e}")
            raise SellerApiError(f"{action}失败: 网络错误") from e

    def _parse_response(self, response: httpx.Response, action: str) -> dict[str, Any]:
        """解析 JSON 响应并检查业务状态.

        Raises:
            SellerApiError: HTML 页面、非法 JSON、status == 0 或 HTTP 错误
        """
        status_code = response.status_code
        content_type = response.headers.get("content-type", "")

        if "text/html" in content_type or response.text.lstrip().startswith("<"):
            logger.error(f"{action}失败: 服务端返回 HTML 页面 (HTTP {status_code})")
            raise SellerApiError(
                f"{action}失败: 服务端返回了错误页面", status_code=status_code
            )

        try:
            result = response.json()
        except ValueError as e:
            logger.error(f"{action}失败: 响应不是合法 JSON")
            raise SellerApiError(
                f"{action}失败: 响应格式错误", status_code=status_code
            ) from e

        if not isinstance(result, dict):
            raise SellerApiError(f"{action}失败: 响应格式错误", status_code=status_code)

        if str(result.get("status")) == "0":
            message = result.get("message") or f"{action}失败"
            logger.warning(f"API 返回错误: {message}")
            raise SellerApiError(message, status_code=status_code)

        if response.is_error:
            message = result.get("message") or f"HTTP 错误: {status_code}"
            logger.error(f"{action}失败: {message}")
            raise SellerApiError(message, status_code=status_code)

        return result

    async def _get_json(self, path: str, action: str, **params: Any) -> dict[str, Any]:
        response = await self._request("GET", path, action=action, params=params or None)
        return self._parse_response(response, action)

    @staticmethod
    def _data_list(result: dict[str, Any]) -> list[dict[str, Any]]:
        """提取列表数据, 兼容 ``data`` 直接为列表与分页对象两种格式."""
        data = result.get("data")
        if isinstance(data, dict):
            data = data.get("data", data.get("list"))
        if not isinstance(data, list):
            return []
        return [row for row in data if isinstance(row, dict)]

    async def _get_items(self, path: str, action: str, **params: Any) -> list[ReferenceItem]:
        result = await self._get_json(path, action, **params)
        items = [ReferenceItem.from_api(row) for row in self._data_list(result)]
        logger.debug(f"{action}成功: {len(items)} 条")
        return items

    # ========== 参考数据 ==========

    async def get_seller_categories(self, seller_id: str) -> list[Category]:
        """获取卖家可用类目.

        接口返回 ``<option>`` HTML 片段, 缩进层级由 ``&nbsp;`` 数量表示。

        Args:
            seller_id: 卖家 ID

        Returns:
            按服务端顺序排列的类目列表
        """
        action = "获取类目"
        response = await self._request(
            "GET",
            endpoints.SELLER_CATEGORIES,
            action=action,
            params={"seller_id": seller_id},
        )
        if response.is_error:
            logger.error(f"{action}失败: HTTP {response.status_code}")
            raise SellerApiError(
                f"HTTP 错误: {response.status_code}", status_code=response.status_code
            )
        return parse_category_options(response.text)

    async def get_taxes(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.TAXES, "获取税率")

    async def get_brands(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.BRANDS, "获取品牌")

    async def get_colors(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.COLORS, "获取颜色")

    async def get_sizes(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.SIZES, "获取尺码")

    async def get_materials(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.MATERIALS, "获取材质")

    async def get_patterns(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.PATTERNS, "获取图案")

    async def get_units(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.UNITS, "获取单位")

    async def get_countries(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.COUNTRIES, "获取国家")

    async def get_tags(self) -> list[ReferenceItem]:
        return await self._get_items(endpoints.TAGS, "获取标签")

    async def get_warranties(self) -> list[ReferenceItem]:
        return await self._get_items(
            endpoints.WARRANTIES, "获取质保", limit=endpoints.WARRANTY_LIMIT
        )

    async def get_product_attributes(self) -> list[Attribute]:
        """获取全部动态属性定义（未按类目过滤）."""
        result = await self._get_json(endpoints.ATTRIBUTES, "获取商品属性")
        attributes = [Attribute.from_api(row) for row in self._data_list(result)]
        logger.debug(f"获取商品属性成功: {len(attributes)} 条")
        return attributes

    # ========== 商品 ==========

    async def get_product(self, product_id: str) -> dict[str, Any]:
        """获取单个商品详情.

        Args:
            product_id: 商品 ID

        Returns:
            原始 API 响应, 成功时 ``status == 1`` 且 ``data`` 为商品对象
        """
        path = endpoints.GET_PRODUCT_BY_ID.format(product_id=product_id)
        result = await self._get_json(path, "获取商品详情")
        logger.info(f"获取商品详情: {product_id} (status={result.get('status')})")
        return result

    async def update_product(
        self,
        data: Mapping[str, Sequence[str]],
        files: Sequence[FileField] = (),
    ) -> dict[str, Any]:
        """提交商品更新.

        Args:
            data: 表单字段, 每个字段可重复多次（如 ``variant_id[]``）
            files: multipart 文件字段 ``(字段名, (文件名, 内容, MIME))``

        Returns:
            原始 API 响应
        """
        action = "更新商品"
        response = await self._request(
            "POST",
            endpoints.UPDATE_PRODUCT,
            action=action,
            data={key: list(values) for key, values in data.items()},
            files=list(files) or None,
            timeout=self._config.upload_timeout,
        )
        result = self._parse_response(response, action)
        logger.info(f"{action}响应: status={result.get('status')}")
        return result


def build_reference_fetchers(client: SellerApiClient) -> dict[ReferenceKind, ReferenceFetcher]:
    """为每个参考数据列表构建加载函数.

    Args:
        client: API 客户端

    Returns:
        列表种类 -> 接收凭证的异步加载函数
    """

    def simple(method: Callable[[], Awaitable[list[Any]]]) -> ReferenceFetcher:
        async def fetch(credentials: Credentials) -> list[Any]:
            return await method()

        return fetch

    async def fetch_categories(credentials: Credentials) -> list[Any]:
        return await client.get_seller_categories(credentials.seller_id)

    return {
        ReferenceKind.CATEGORIES: fetch_categories,
        ReferenceKind.TAXES: simple(client.get_taxes),
        ReferenceKind.BRANDS: simple(client.get_brands),
        ReferenceKind.COLORS: simple(client.get_colors),
        ReferenceKind.SIZES: simple(client.get_sizes),
        ReferenceKind.MATERIALS: simple(client.get_materials),
        ReferenceKind.PATTERNS: simple(client.get_patterns),
        ReferenceKind.UNITS: simple(client.get_units),
        ReferenceKind.COUNTRIES: simple(client.get_countries),
        ReferenceKind.TAGS: simple(client.get_tags),
        ReferenceKind.WARRANTIES: simple(client.get_warranties),
        ReferenceKind.ATTRIBUTES: simple(client.get_product_attributes),
    }
