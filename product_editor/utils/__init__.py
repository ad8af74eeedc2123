"""
@PURPOSE: 通用工具模块
@OUTLINE:
  - generate_slug: 商品名称转 slug
  - setup_logger, get_logger_with_context: 日志配置
@DEPENDENCIES:
  - 内部: .slug, .logger_setup
"""

from .logger_setup import get_logger_with_context, setup_logger
from .slug import generate_slug

__all__ = ["generate_slug", "get_logger_with_context", "setup_logger"]
