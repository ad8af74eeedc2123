"""
@PURPOSE: 测试桌面端与移动端展示层
@OUTLINE:
  - class TestDesktopView: 桌面端布局
  - class TestMobileView: 移动端布局
  - class TestNotFoundView: 加载失败页面
@DEPENDENCIES:
  - 外部: pytest, rich
  - 内部: product_editor.views
"""

import pytest
from rich.console import Console

from product_editor.core.session import EditProductSession
from product_editor.models.form import FormStep
from product_editor.models.variant import VariantKind
from product_editor.views import (
    DesktopEditProductView,
    MobileEditProductView,
    get_view,
    yes_no,
)
from tests.mocks import MockSellerApi


def render_text(renderable) -> str:
    console = Console(record=True, width=160, color_system=None)
    console.print(renderable)
    return console.export_text()


class TestDesktopView:
    """测试桌面端视图."""

    @pytest.mark.asyncio
    async def test_all_sections_rendered(self, loaded_session) -> None:
        """测试全部步骤同屏展示, 下拉显示名称而不是 ID."""
        text = render_text(DesktopEditProductView(loaded_session).render())

        assert "Edit Product #42" in text
        assert "Cotton Crew T-Shirt" in text
        assert "T-Shirts" in text
        assert "GST 12%" in text
        assert "summer, cotton" in text
        assert "Primary (#501)" in text
        assert "Fabric" in text
        assert "Is Returnable" in text
        assert "Yes" in text

    @pytest.mark.asyncio
    async def test_new_variant_column(self, loaded_session) -> None:
        """测试新增变体显示为新列."""
        loaded_session.variants.add_empty()

        text = render_text(DesktopEditProductView(loaded_session).variant_grid())

        assert "Variant 2 (new)" in text
        assert "Piece" in text

    @pytest.mark.asyncio
    async def test_loose_hides_packet_rows(self, loaded_session) -> None:
        """测试 Loose 类型隐藏 Packet 专属字段."""
        loaded_session.variants.update_primary("kind", VariantKind.LOOSE)

        text = render_text(DesktopEditProductView(loaded_session).variant_grid())

        assert "Variant Type" not in text
        assert "Flavour" not in text
        assert "Loose" in text

    @pytest.mark.asyncio
    async def test_no_specifications_message(self, loaded_session) -> None:
        """测试类目没有适用属性时显示提示."""
        loaded_session.set_field("category_id", "1")

        text = render_text(DesktopEditProductView(loaded_session).render())

        assert "No specifications available" in text


class TestMobileView:
    """测试移动端视图."""

    @pytest.mark.asyncio
    async def test_only_current_step(self, loaded_session) -> None:
        """测试只展示当前步骤."""
        view = MobileEditProductView(loaded_session)

        basic = render_text(view.render())
        assert "Step 1/4" in basic
        assert "Product Name" in basic
        assert "Is Returnable" not in basic

        loaded_session.step = FormStep.SETTINGS
        settings = render_text(view.render())
        assert "Step 4/4" in settings
        assert "Is Returnable" in settings
        assert "Product Name" not in settings

    @pytest.mark.asyncio
    async def test_variant_cards(self, loaded_session) -> None:
        """测试变体逐个以卡片展示."""
        loaded_session.variants.copy(loaded_session.variants.primary)
        loaded_session.step = FormStep.VARIANTS

        text = render_text(MobileEditProductView(loaded_session).render())

        assert "Primary (#501)" in text
        assert "Variant 2 (new)" in text
        assert text.count("499.00") == 2

    @pytest.mark.asyncio
    async def test_shares_session_with_desktop(self, loaded_session) -> None:
        """测试两种布局读取同一个会话."""
        loaded_session.set_field("name", "Shared Name")

        desktop = render_text(get_view("desktop", loaded_session).render())
        loaded_session.step = FormStep.BASIC_INFO
        mobile = render_text(get_view("mobile", loaded_session).render())

        assert "Shared Name" in desktop
        assert "Shared Name" in mobile


class TestNotFoundView:
    """测试加载失败页面."""

    @pytest.mark.asyncio
    async def test_not_found_panel(self, credentials, notifier) -> None:
        """测试 NOT_FOUND 时两种布局都显示失败页面."""
        api = MockSellerApi(product={"status": 0})
        session = EditProductSession(api, credentials, "404", notifier=notifier)
        await session.open()

        for layout in ("desktop", "mobile"):
            text = render_text(get_view(layout, session).render())
            assert "Product Not Found" in text
            assert "商品 [404] 不存在或加载失败" in text
            assert "/products/manage" in text
        session.close()


class TestHelpers:
    """测试展示辅助函数."""

    def test_yes_no(self) -> None:
        """测试布尔值只在展示层转换为 Yes/No."""
        assert yes_no(True) == "Yes"
        assert yes_no(False) == "No"

    def test_unknown_layout(self, session) -> None:
        """测试未知布局."""
        with pytest.raises(ValueError):
            get_view("tablet", session)
