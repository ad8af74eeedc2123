"""
@PURPOSE: 商品加载器，在参考数据全部加载后只拉取一次商品详情并映射为表单
@OUTLINE:
  - class LoaderState: 加载状态机
  - class ProductLoader: 商品加载器
    - async def load(): 门控 + 闩锁后拉取商品
@GOTCHAS:
  - 闩锁（state = LOADING_PRODUCT）必须在 await 之前设置, 防止并发第二次调用重复拉取
  - NOT_FOUND 为终态, 会话不允许保存
@DEPENDENCIES:
  - 外部: loguru
  - 内部: ..api.client, .reference_store, .product_mapper, .notifier
@RELATED: session.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from loguru import logger

from ..errors import ProductEditError, ProductNotFoundError
from ..models.form import Credentials, FormModel
from .notifier import Notifier
from .product_mapper import map_product
from .reference_store import ReferenceDataStore


class ProductFetcher(Protocol):
    async def get_product(self, product_id: str) -> dict[str, Any]: ...


class LoaderState(str, Enum):
    """商品加载状态."""

    AWAITING_REFS = "awaiting_refs"
    LOADING_PRODUCT = "loading_product"
    READY = "ready"
    NOT_FOUND = "not_found"


class ProductLoader:
    """商品加载器.

    状态转换::

        AWAITING_REFS --(参考数据就绪 + 有商品ID)--> LOADING_PRODUCT
        LOADING_PRODUCT --(status == 1 且有 data)--> READY
        LOADING_PRODUCT --(其他任何结果)--> NOT_FOUND
    """

    def __init__(
        self,
        api: ProductFetcher,
        store: ReferenceDataStore,
        notifier: Notifier,
    ) -> None:
        self._api = api
        self._store = store
        self._notifier = notifier
        self.state = LoaderState.AWAITING_REFS
        self.error: str | None = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (LoaderState.READY, LoaderState.NOT_FOUND)

    def can_load(self, product_id: str) -> bool:
        return (
            self.state is LoaderState.AWAITING_REFS
            and bool(product_id)
            and self._store.is_fully_loaded()
        )

    async def load(
        self,
        product_id: str,
        credentials: Credentials,
        base: FormModel | None = None,
    ) -> FormModel | None:
        """拉取并映射商品.

        Args:
            product_id: 商品 ID
            credentials: 卖家凭证
            base: 当前表单（主变体默认值来源）

        Returns:
            成功时返回填充后的表单; 门控未通过、重复调用或加载失败时返回 None
        """
        if not self.can_load(product_id):
            logger.debug(f"跳过商品加载: state={self.state.value}, product_id={product_id!r}")
            return None

        self.state = LoaderState.LOADING_PRODUCT
        logger.info(f"开始加载商品: {product_id}")

        try:
            response = await self._api.get_product(product_id)
            data = response.get("data")
            if str(response.get("status")) != "1" or not isinstance(data, dict):
                raise ProductNotFoundError(product_id, response.get("message") or None)
            form = map_product(data, base)
        except ProductEditError as e:
            return self._fail(product_id, str(e))
        except Exception as e:
            logger.exception(f"商品数据映射失败: {product_id}")
            return self._fail(product_id, str(e))

        self.state = LoaderState.READY
        logger.success(
            f"商品加载完成: {product_id} "
            f"(变体 {1 + len(form.additional_variants)} 个, 图集 {len(form.gallery_existing)} 张)"
        )
        return form

    def _fail(self, product_id: str, message: str) -> None:
        self.state = LoaderState.NOT_FOUND
        self.error = message
        logger.error(f"商品加载失败 [{product_id}]: {message}")
        self._notifier.show_error("加载失败", "商品数据加载失败, 请重试")
        return None
