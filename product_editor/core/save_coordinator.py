"""
@PURPOSE: 保存协调器，组装并发送一次商品更新请求，处理结果通知与成功后的延迟跳转
@OUTLINE:
  - class SaveCoordinator: 保存协调器
    - async def save(): 保存表单
    - def dispose(): 离开页面, 忽略后续结果并取消待执行的跳转
@GOTCHAS:
  - 保存不可重入: 进行中的第二次调用直接返回 skipped 结果, 不发请求
  - 单次请求, 不重试, 不支持取消
  - 失败时表单保持原样, 可以直接重试
@DEPENDENCIES:
  - 外部: loguru
  - 内部: .payload, .notifier, ..api.client
@RELATED: session.py
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Protocol

from loguru import logger

from ..api.client import FileField
from ..config.settings import settings
from ..errors import ProductEditError
from ..models.form import Credentials, FormModel
from ..models.result import SaveResult
from .notifier import Notifier
from .payload import build_update_payload

Navigator = Callable[[str], None]

SUCCESS_FALLBACK = "商品更新成功"
FAILURE_FALLBACK = "商品更新失败"
ERROR_FALLBACK = "保存商品失败, 请重试"


class ProductUpdater(Protocol):
    async def update_product(
        self,
        data: Mapping[str, Sequence[str]],
        files: Sequence[FileField] = (),
    ) -> dict[str, Any]: ...


class SaveCoordinator:
    """保存协调器.

    Examples:
        >>> coordinator = SaveCoordinator(client, notifier, navigator=router.push)
        >>> result = await coordinator.save(form, credentials, product_id="42")
        >>> result.success
        True
    """

    def __init__(
        self,
        api: ProductUpdater,
        notifier: Notifier,
        navigator: Navigator | None = None,
        *,
        redirect_delay: float | None = None,
        redirect_path: str | None = None,
    ) -> None:
        """初始化保存协调器.

        Args:
            api: 提供 update_product 的 API 客户端
            notifier: 通知器
            navigator: 跳转回调, 为空时不跳转
            redirect_delay: 成功后跳转延迟（秒）, 默认读取配置
            redirect_path: 成功后跳转路径, 默认读取配置
        """
        self._api = api
        self._notifier = notifier
        self._navigator = navigator
        self._redirect_delay = (
            settings.form.redirect_delay if redirect_delay is None else redirect_delay
        )
        self._redirect_path = redirect_path or settings.form.redirect_path
        self._in_flight = False
        self._disposed = False
        self._redirect_handle: asyncio.TimerHandle | None = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def redirect_pending(self) -> bool:
        return self._redirect_handle is not None and not self._redirect_handle.cancelled()

    async def save(
        self,
        form: FormModel,
        credentials: Credentials,
        product_id: str,
    ) -> SaveResult:
        """保存表单.

        Args:
            form: 编辑表单（只读）
            credentials: 卖家凭证
            product_id: 商品 ID

        Returns:
            保存结果
        """
        if self._in_flight or self._disposed:
            logger.warning("保存正在进行或页面已关闭, 忽略本次提交")
            return SaveResult(success=False, message="保存正在进行中", skipped=True)

        self._in_flight = True
        logger.info(f"开始保存商品: {product_id}")
        try:
            data, files = build_update_payload(form, product_id, credentials.seller_id)
            logger.debug(
                f"更新请求: {len(data)} 个字段, {len(files)} 个文件, "
                f"变体 {len(data.get('variant_id[]', []))} 个"
            )
            response = await self._api.update_product(data, files)
        except ProductEditError as e:
            return self._finish_error("错误", str(e) or ERROR_FALLBACK)
        except Exception as e:
            logger.exception(f"保存商品异常: {product_id}")
            return self._finish_error("错误", str(e) or ERROR_FALLBACK)
        finally:
            self._in_flight = False

        message = response.get("message")
        if str(response.get("status")) == "1":
            return self._finish_success(_message_text(message, SUCCESS_FALLBACK))
        return self._finish_error("更新失败", _message_text(message, FAILURE_FALLBACK))

    def _finish_success(self, message: str) -> SaveResult:
        if self._disposed:
            logger.info(f"页面已关闭, 忽略保存结果: {message}")
            return SaveResult(success=True, message=message)

        logger.success(f"商品保存成功: {message}")
        self._notifier.show_success("保存成功", message)
        redirect_to = self._schedule_redirect()
        return SaveResult(success=True, message=message, redirect_to=redirect_to)

    def _finish_error(self, title: str, message: str) -> SaveResult:
        if self._disposed:
            logger.info(f"页面已关闭, 忽略保存结果: {message}")
            return SaveResult(success=False, message=message)

        logger.error(f"商品保存失败: {message}")
        self._notifier.show_error(title, message)
        return SaveResult(success=False, message=message)

    def _schedule_redirect(self) -> str | None:
        if self._navigator is None:
            return None
        if self._redirect_handle is not None:
            self._redirect_handle.cancel()
        loop = asyncio.get_running_loop()
        self._redirect_handle = loop.call_later(self._redirect_delay, self._navigate)
        logger.debug(f"{self._redirect_delay} 秒后跳转: {self._redirect_path}")
        return self._redirect_path

    def _navigate(self) -> None:
        self._redirect_handle = None
        if self._disposed or self._navigator is None:
            return
        self._navigator(self._redirect_path)

    def dispose(self) -> None:
        """离开页面: 后续到达的结果不再通知, 取消待执行的跳转."""
        self._disposed = True
        if self._redirect_handle is not None:
            self._redirect_handle.cancel()
            self._redirect_handle = None


def _message_text(message: Any, fallback: str) -> str:
    """服务端消息转为文本, 非字符串（如字段校验错误字典）序列化为 JSON."""
    if not message:
        return fallback
    if isinstance(message, str):
        return message
    try:
        return json.dumps(message, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(message)
