"""
@PURPOSE: 日志系统设置 - 配置结构化日志、日志轮转和多级别输出
@OUTLINE:
  - def format_detailed(): 详细格式化器
  - def format_json(): JSON格式化器
  - def format_simple(): 简单格式化器
  - def setup_logger(): 配置全局日志系统
  - def get_logger_with_context(): 获取带上下文的logger
@GOTCHAS:
  - loguru 会自动管理日志轮转
  - 库代码导入时不配置 sink, 由 CLI 入口调用 setup_logger()
  - JSON 格式适合生产环境日志分析
@DEPENDENCIES:
  - 外部: loguru
  - 内部: product_editor.config.settings
"""

import json
import sys
from typing import Any, Dict, Optional

from loguru import logger

from ..config.settings import settings

# 会被格式化器提取的上下文键
CONTEXT_KEYS = ("product_id", "step", "action")


# ========== 日志格式化器 ==========

def format_detailed(record: Dict[str, Any]) -> str:
    """详细格式化器（开发环境）.

    Args:
        record: 日志记录

    Returns:
        格式化后的日志字符串
    """
    extra = record["extra"]
    product_id = extra.get("product_id", "")
    step = extra.get("step", "")
    action = extra.get("action", "")

    context_parts = []
    if product_id:
        context_parts.append(f"product={product_id}")
    if step:
        context_parts.append(f"step={step}")
    if action:
        context_parts.append(f"action={action}")

    context_str = f" [{', '.join(context_parts)}]" if context_parts else ""

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>"
        f"{context_str} - "
        "<level>{message}</level>\n"
        "{exception}"
    )


def format_json(record: Dict[str, Any]) -> str:
    """JSON格式化器（生产环境）.

    Args:
        record: 日志记录

    Returns:
        JSON格式的日志字符串
    """
    log_entry = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
        "message": record["message"],
    }

    extra = record["extra"]
    context = {key: extra[key] for key in CONTEXT_KEYS if key in extra}
    if context:
        log_entry["context"] = context

    if record["exception"]:
        log_entry["exception"] = {
            "type": record["exception"].type.__name__,
            "value": str(record["exception"].value),
        }

    # loguru 会把返回值当作格式模板, 花括号需要转义
    line = json.dumps(log_entry, ensure_ascii=False)
    return line.replace("{", "{{").replace("}", "}}") + "\n"


def format_simple(record: Dict[str, Any]) -> str:
    """简单格式化器."""
    return (
        "{time:HH:mm:ss} | "
        "{level: <8} | "
        "{message}\n"
    )


# ========== 日志设置 ==========

def setup_logger(
    config: Optional[Any] = None,
    force: bool = False
) -> None:
    """配置全局日志系统.

    Args:
        config: 日志配置，默认使用 settings.logging
        force: 是否移除已有处理器后重新配置

    Examples:
        >>> from product_editor.utils.logger_setup import setup_logger
        >>> setup_logger()
    """
    if config is None:
        config = settings.logging

    if force:
        logger.remove()

    if config.format == "json":
        formatter = format_json
    elif config.format == "simple":
        formatter = format_simple
    else:  # detailed
        formatter = format_detailed

    if "console" in config.output:
        logger.add(
            sys.stderr,
            format=formatter,
            level=config.level,
            colorize=config.format != "json",
            backtrace=True,
            diagnose=False,
        )

    if "file" in config.output:
        log_file = settings.get_absolute_path(config.file_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            str(log_file),
            format=formatter,
            level=config.level,
            rotation=config.rotation,
            retention=config.retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
            encoding="utf-8",
        )

    logger.debug(
        f"日志系统已配置: level={config.level}, format={config.format}, output={config.output}"
    )


def get_logger_with_context(**context) -> Any:
    """获取带上下文的logger.

    Args:
        **context: 上下文键值对

    Returns:
        绑定了上下文的logger

    Examples:
        >>> log = get_logger_with_context(product_id="42", action="load")
        >>> log.info("开始加载商品")
    """
    return logger.bind(**context)
