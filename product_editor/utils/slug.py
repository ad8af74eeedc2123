"""
@PURPOSE: 商品名称转 URL slug
@OUTLINE:
  - def generate_slug(): 纯函数, 名称 -> slug
"""

from __future__ import annotations

import re

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def generate_slug(name: str | None) -> str:
    """生成商品 slug.

    小写化并去除首尾空白, 删除 ``[a-z0-9\\s-]`` 以外的字符,
    空白串替换为单个连字符, 合并重复连字符, 去掉首尾连字符。

    Examples:
        >>> generate_slug("Men's T-Shirt!! 100% Cotton")
        'mens-t-shirt-100-cotton'
        >>> generate_slug("  --Multi   Space--  ")
        'multi-space'
        >>> generate_slug("")
        ''
    """
    if not name:
        return ""

    slug = _DISALLOWED.sub("", name.lower().strip())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")
