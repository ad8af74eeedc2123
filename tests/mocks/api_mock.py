"""
@PURPOSE: 卖家后台 API Mock（对象级假客户端 + httpx 传输层假服务端）
@OUTLINE:
  - MockSellerApi: 实现 SellerApiClient 接口的假客户端, 记录调用次数
  - MockSellerServer: httpx.MockTransport 处理函数, 按路径返回固定响应
@DEPENDENCIES:
  - 外部: httpx
  - 内部: product_editor.api, product_editor.models
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import httpx

from product_editor.api import endpoints
from product_editor.api.category_parser import parse_category_options
from product_editor.errors import SellerApiError
from product_editor.models.reference import Attribute, ReferenceItem, ReferenceKind

from .data_mock import ATTRIBUTE_ROWS, CATEGORY_OPTIONS_HTML, REFERENCE_ROWS, product_response

API_PREFIX = "/api"

_REFERENCE_PATHS: dict[str, ReferenceKind] = {
    endpoints.TAXES: ReferenceKind.TAXES,
    endpoints.BRANDS: ReferenceKind.BRANDS,
    endpoints.COLORS: ReferenceKind.COLORS,
    endpoints.SIZES: ReferenceKind.SIZES,
    endpoints.MATERIALS: ReferenceKind.MATERIALS,
    endpoints.PATTERNS: ReferenceKind.PATTERNS,
    endpoints.UNITS: ReferenceKind.UNITS,
    endpoints.COUNTRIES: ReferenceKind.COUNTRIES,
    endpoints.TAGS: ReferenceKind.TAGS,
    endpoints.WARRANTIES: ReferenceKind.WARRANTIES,
}


def success_update() -> dict[str, Any]:
    return {"status": 1, "message": "Product updated successfully"}


@dataclass
class MockSellerApi:
    """模拟 SellerApiClient.

    Attributes:
        product: get_product 返回的响应
        update_response: update_product 返回的响应
        fail_kinds: 这些参考列表加载时抛出 SellerApiError
        product_gate: 设置后 get_product 会等待该事件
        update_gate: 设置后 update_product 会等待该事件
        update_error: update_product 抛出的异常
    """

    product: dict[str, Any] = field(default_factory=product_response)
    update_response: dict[str, Any] = field(default_factory=success_update)
    fail_kinds: set[ReferenceKind] = field(default_factory=set)
    product_gate: asyncio.Event | None = None
    update_gate: asyncio.Event | None = None
    update_error: Exception | None = None

    product_calls: list[str] = field(default_factory=list)
    update_calls: list[tuple[dict[str, list[str]], list[Any]]] = field(default_factory=list)
    reference_calls: list[ReferenceKind] = field(default_factory=list)

    async def __aenter__(self) -> MockSellerApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        return None

    async def _items(self, kind: ReferenceKind) -> list[ReferenceItem]:
        self.reference_calls.append(kind)
        await asyncio.sleep(0)
        if kind in self.fail_kinds:
            raise SellerApiError(f"获取{kind.value}失败")
        return [ReferenceItem.from_api(row) for row in REFERENCE_ROWS[kind]]

    async def get_seller_categories(self, seller_id: str) -> list[Any]:
        self.reference_calls.append(ReferenceKind.CATEGORIES)
        if ReferenceKind.CATEGORIES in self.fail_kinds:
            raise SellerApiError("HTTP 错误: 500", status_code=500)
        return parse_category_options(CATEGORY_OPTIONS_HTML)

    async def get_taxes(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.TAXES)

    async def get_brands(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.BRANDS)

    async def get_colors(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.COLORS)

    async def get_sizes(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.SIZES)

    async def get_materials(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.MATERIALS)

    async def get_patterns(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.PATTERNS)

    async def get_units(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.UNITS)

    async def get_countries(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.COUNTRIES)

    async def get_tags(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.TAGS)

    async def get_warranties(self) -> list[ReferenceItem]:
        return await self._items(ReferenceKind.WARRANTIES)

    async def get_product_attributes(self) -> list[Attribute]:
        self.reference_calls.append(ReferenceKind.ATTRIBUTES)
        if ReferenceKind.ATTRIBUTES in self.fail_kinds:
            raise SellerApiError("获取商品属性失败")
        return [Attribute.from_api(row) for row in ATTRIBUTE_ROWS]

    async def get_product(self, product_id: str) -> dict[str, Any]:
        self.product_calls.append(product_id)
        if self.product_gate is not None:
            await self.product_gate.wait()
        return self.product

    async def update_product(
        self,
        data: Mapping[str, Sequence[str]],
        files: Sequence[Any] = (),
    ) -> dict[str, Any]:
        self.update_calls.append(({k: list(v) for k, v in data.items()}, list(files)))
        if self.update_gate is not None:
            await self.update_gate.wait()
        if self.update_error is not None:
            raise self.update_error
        return self.update_response

    @property
    def last_update(self) -> dict[str, list[str]]:
        return self.update_calls[-1][0]

    @property
    def last_files(self) -> list[Any]:
        return self.update_calls[-1][1]


ResponseFactory = Callable[[httpx.Request], httpx.Response]


@dataclass
class MockSellerServer:
    """基于 httpx.MockTransport 的假服务端.

    Examples:
        >>> server = MockSellerServer()
        >>> client = SellerApiClient("token", transport=server.transport())
    """

    product: dict[str, Any] = field(default_factory=product_response)
    update_response: dict[str, Any] = field(default_factory=success_update)
    overrides: dict[str, ResponseFactory] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def respond(self, path: str, status_code: int = 200, **kwargs: Any) -> None:
        """覆盖某个接口的响应（path 不含 /api 前缀）."""
        self.overrides[API_PREFIX + path] = lambda request: httpx.Response(status_code, **kwargs)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path in self.overrides:
            return self.overrides[path](request)

        relative = path[len(API_PREFIX):] if path.startswith(API_PREFIX) else path
        if relative == endpoints.SELLER_CATEGORIES:
            return httpx.Response(
                200,
                text=CATEGORY_OPTIONS_HTML,
                headers={"content-type": "text/html; charset=utf-8"},
            )
        if relative in _REFERENCE_PATHS:
            rows = REFERENCE_ROWS[_REFERENCE_PATHS[relative]]
            return httpx.Response(200, json={"status": 1, "data": rows})
        if relative == endpoints.ATTRIBUTES:
            return httpx.Response(200, json={"status": 1, "data": ATTRIBUTE_ROWS})
        if relative.startswith("/products/edit/"):
            return httpx.Response(200, json=self.product)
        if relative == endpoints.UPDATE_PRODUCT and request.method == "POST":
            return httpx.Response(200, json=self.update_response)

        return httpx.Response(404, text="<html><body>Not Found</body></html>")

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == API_PREFIX + path]
