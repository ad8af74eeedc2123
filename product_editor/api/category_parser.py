"""
@PURPOSE: 解析卖家类目接口返回的 <option> 片段为层级类目列表
@OUTLINE:
  - def parse_category_options(): HTML 片段 -> list[Category]
  - def count_indent(): 统计缩进标记数量
@GOTCHAS:
  - 层级通过选项文本前的 &nbsp; 数量表示, 解析后可能是字面量 "&nbsp;" 或 \xa0 字符
  - value 为空或文本为空的占位选项（如 "Select Category"）被丢弃
@DEPENDENCIES:
  - 外部: beautifulsoup4
@RELATED: client.py, ../models/reference.py
"""

from __future__ import annotations

from bs4 import BeautifulSoup
from loguru import logger

from ..models.reference import Category

NBSP_ENTITY = "&nbsp;"
NBSP_CHAR = "\xa0"


def count_indent(text: str) -> int:
    """统计文本开头的缩进标记数量.

    Examples:
        >>> count_indent("\\xa0\\xa0Shoes")
        2
        >>> count_indent("&nbsp;&nbsp;&nbsp;Kids")
        3
    """
    depth = 0
    rest = text
    while rest:
        if rest.startswith(NBSP_ENTITY):
            rest = rest[len(NBSP_ENTITY):]
        elif rest.startswith(NBSP_CHAR):
            rest = rest[1:]
        else:
            break
        depth += 1
    return depth


def parse_category_options(markup: str) -> list[Category]:
    """解析 <option> 片段.

    Args:
        markup: 服务端返回的 HTML 片段

    Returns:
        按服务端顺序排列的类目列表

    Examples:
        >>> html = '<option value="1">Fashion</option><option value="2">&nbsp;&nbsp;Shoes</option>'
        >>> [(c.id, c.label, c.depth) for c in parse_category_options(html)]
        [('1', 'Fashion', 0), ('2', 'Shoes', 2)]
    """
    if not markup or not markup.strip():
        return []

    soup = BeautifulSoup(markup, "html.parser")
    categories: list[Category] = []

    for option in soup.find_all("option"):
        value = (option.get("value") or "").strip()
        raw_text = option.get_text()
        depth = count_indent(raw_text.lstrip(" \t\r\n"))
        label = raw_text.replace(NBSP_ENTITY, " ").replace(NBSP_CHAR, " ").strip()

        if not value or not label:
            continue

        categories.append(Category(id=value, label=label, depth=depth))

    logger.debug(f"解析类目选项: {len(categories)} 个")
    return categories
