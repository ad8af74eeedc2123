"""
@PURPOSE: 通知接口（Toast 提示）及基于日志的默认实现
@OUTLINE:
  - class Notifier: 通知协议
  - class LoggingNotifier: 写入日志的通知器
  - class RecordingNotifier: 记录所有通知的通知器（CLI 汇总与测试使用）
@RELATED: save_coordinator.py, product_loader.py, ../__main__.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from loguru import logger


class Notifier(Protocol):
    """通知接口, 调用方不关心返回值."""

    def show_error(self, title: str, body: str) -> None: ...

    def show_success(self, title: str, body: str) -> None: ...


class LoggingNotifier:
    """将通知写入日志."""

    def show_error(self, title: str, body: str) -> None:
        logger.error(f"[{title}] {body}")

    def show_success(self, title: str, body: str) -> None:
        logger.success(f"[{title}] {body}")


@dataclass
class Notification:
    level: str
    title: str
    body: str


@dataclass
class RecordingNotifier:
    """记录全部通知, 可选转发给下游通知器."""

    forward_to: Notifier | None = None
    notifications: list[Notification] = field(default_factory=list)

    def show_error(self, title: str, body: str) -> None:
        self.notifications.append(Notification("error", title, body))
        if self.forward_to is not None:
            self.forward_to.show_error(title, body)

    def show_success(self, title: str, body: str) -> None:
        self.notifications.append(Notification("success", title, body))
        if self.forward_to is not None:
            self.forward_to.show_success(title, body)

    @property
    def errors(self) -> list[Notification]:
        return [n for n in self.notifications if n.level == "error"]

    @property
    def successes(self) -> list[Notification]:
        return [n for n in self.notifications if n.level == "success"]
