"""
@PURPOSE: 编辑页展示层（桌面端 / 移动端）, 共享同一个 EditProductSession
@OUTLINE:
  - DesktopEditProductView: 桌面端布局
  - MobileEditProductView: 移动端布局
  - get_view(): 按布局名称创建视图
"""

from ..core.session import EditProductSession
from .base import EditProductView, yes_no
from .desktop import DesktopEditProductView
from .mobile import MobileEditProductView

VIEWS: dict[str, type[EditProductView]] = {
    DesktopEditProductView.layout_name: DesktopEditProductView,
    MobileEditProductView.layout_name: MobileEditProductView,
}


def get_view(layout: str, session: EditProductSession) -> EditProductView:
    """按布局名称创建视图.

    Raises:
        ValueError: 未知布局
    """
    try:
        view_cls = VIEWS[layout]
    except KeyError as e:
        raise ValueError(f"未知布局: {layout}, 可选: {', '.join(VIEWS)}") from e
    return view_cls(session)


__all__ = [
    "DesktopEditProductView",
    "EditProductView",
    "MobileEditProductView",
    "VIEWS",
    "get_view",
    "yes_no",
]
