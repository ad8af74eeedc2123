"""
@PURPOSE: 按所选类目过滤动态属性（规格参数）
@OUTLINE:
  - def filter_attributes(): 纯函数过滤
  - class AttributeFilter: 缓存最近一次结果的过滤器
@RELATED: session.py, ../models/reference.py
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models.reference import Attribute


def filter_attributes(
    attributes: Sequence[Attribute], selected_category_id: str
) -> list[Attribute]:
    """返回适用于所选类目的属性, 保持原顺序.

    Examples:
        >>> attrs = [Attribute(id="1", applicable_category_ids=frozenset({"3", "5"}))]
        >>> [a.id for a in filter_attributes(attrs, "5")]
        ['1']
        >>> filter_attributes(attrs, "")
        []
    """
    if not selected_category_id or not attributes:
        return []
    category_id = str(selected_category_id)
    return [attr for attr in attributes if category_id in attr.applicable_category_ids]


class AttributeFilter:
    """缓存最近一次 (属性列表, 类目) 的过滤结果.

    属性列表按对象标识比较, 仓库重新加载后会得到新的列表对象。
    """

    def __init__(self) -> None:
        self._attributes: Sequence[Attribute] | None = None
        self._category_id: str | None = None
        self._result: list[Attribute] = []

    def __call__(
        self, attributes: Sequence[Attribute], selected_category_id: str
    ) -> list[Attribute]:
        if attributes is not self._attributes or selected_category_id != self._category_id:
            self._result = filter_attributes(attributes, selected_category_id)
            self._attributes = attributes
            self._category_id = selected_category_id
        return list(self._result)
