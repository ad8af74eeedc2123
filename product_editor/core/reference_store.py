"""
@PURPOSE: 参考数据仓库，并发加载全部下拉列表并提供“是否全部加载完成”的门控
@OUTLINE:
  - class ReferenceDataStore: 参考数据仓库
    - async def load_all(): 并发加载所有未加载的列表
    - def is_fully_loaded(): 门控判断（不含动态属性）
    - def add_listener(): 注册列表完成回调
    - def items() / status() / find(): 查询
@GOTCHAS:
  - 单个列表加载失败不会阻塞门控: 失败的列表为空并进入终态
  - 终态列表不会重新进入 LOADING
  - 各任务只写自己的列表槽位, 无需加锁
@DEPENDENCIES:
  - 外部: loguru
  - 内部: ..models.reference, ..api.client.ReferenceFetcher
@RELATED: product_loader.py, session.py
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

from ..api.client import ReferenceFetcher
from ..config.settings import settings
from ..models.form import Credentials
from ..models.reference import GATED_KINDS, LoadStatus, ReferenceKind, ReferenceList

Listener = Callable[[ReferenceKind], None]


class ReferenceDataStore:
    """参考数据仓库.

    Examples:
        >>> store = ReferenceDataStore(build_reference_fetchers(client))
        >>> await store.load_all(credentials)
        >>> store.is_fully_loaded()
        True
    """

    def __init__(
        self,
        fetchers: Mapping[ReferenceKind, ReferenceFetcher],
        *,
        distinguish_failures: bool | None = None,
    ) -> None:
        """初始化仓库.

        Args:
            fetchers: 列表种类 -> 加载函数
            distinguish_failures: 失败时标记 FAILED（默认读取配置）
        """
        if distinguish_failures is None:
            distinguish_failures = settings.reference.distinguish_failures

        self._fetchers = dict(fetchers)
        self._distinguish_failures = distinguish_failures
        self._lists: dict[ReferenceKind, ReferenceList[Any]] = {
            kind: ReferenceList() for kind in ReferenceKind
        }
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        """注册回调, 每个列表进入终态时调用一次."""
        self._listeners.append(listener)

    async def load_all(self, credentials: Credentials) -> None:
        """并发加载所有尚未加载的列表.

        Args:
            credentials: 卖家凭证
        """
        kinds = [
            kind for kind in ReferenceKind if self._lists[kind].status is LoadStatus.NOT_LOADED
        ]
        if not kinds:
            logger.debug("参考数据已全部加载, 跳过")
            return

        logger.info(f"开始并发加载参考数据: {len(kinds)} 个列表")
        await asyncio.gather(*(self._load_one(kind, credentials) for kind in kinds))

        failed = [kind.value for kind in kinds if self._lists[kind].error]
        if failed:
            logger.warning(f"参考数据加载完成, 失败列表: {', '.join(failed)}")
        else:
            logger.success("参考数据全部加载完成")

    async def _load_one(self, kind: ReferenceKind, credentials: Credentials) -> None:
        slot = self._lists[kind]
        slot.status = LoadStatus.LOADING

        fetcher = self._fetchers.get(kind)
        try:
            if fetcher is None:
                raise LookupError(f"未配置列表加载函数: {kind.value}")
            items = await fetcher(credentials)
        except Exception as e:
            logger.error(f"加载参考数据失败 [{kind.value}]: {e}")
            slot.items = []
            slot.error = str(e)
            slot.status = LoadStatus.FAILED if self._distinguish_failures else LoadStatus.LOADED
        else:
            slot.items = list(items)
            slot.error = None
            slot.status = LoadStatus.LOADED
            logger.debug(f"参考数据已加载 [{kind.value}]: {len(slot.items)} 条")

        self._notify(kind)

    def _notify(self, kind: ReferenceKind) -> None:
        for listener in list(self._listeners):
            listener(kind)

    def is_fully_loaded(self) -> bool:
        """全部门控列表均已进入终态（LOADED 或 FAILED）."""
        return all(self._lists[kind].status.is_settled for kind in GATED_KINDS)

    def status(self, kind: ReferenceKind) -> LoadStatus:
        return self._lists[kind].status

    def error(self, kind: ReferenceKind) -> str | None:
        return self._lists[kind].error

    def items(self, kind: ReferenceKind) -> list[Any]:
        """列表内容（只读, 重新加载时整体替换）."""
        return self._lists[kind].items

    def find(self, kind: ReferenceKind, item_id: str) -> Any | None:
        """按 ID 查找选项, 找不到返回 None."""
        if not item_id:
            return None
        return next(
            (item for item in self._lists[kind].items if str(item.id) == str(item_id)),
            None,
        )

    def label_of(self, kind: ReferenceKind, item_id: str) -> str:
        """选项显示名, 找不到时返回原 ID."""
        item = self.find(kind, item_id)
        return item.label if item is not None else item_id
