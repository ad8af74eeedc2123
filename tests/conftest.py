"""
@PURPOSE: Pytest配置文件，配置测试环境和fixtures
@OUTLINE:
  - pytest_configure(): 注册标记
  - credentials: 卖家凭证
  - mock_api / mock_server: 假 API 客户端与假服务端
  - notifier: 记录通知的通知器
  - loaded_form: 已映射的商品表单
  - session / loaded_session: 编辑会话
@DEPENDENCIES:
  - 外部: pytest, pytest-asyncio
  - 内部: tests.mocks, product_editor
"""

from __future__ import annotations

import pytest

from product_editor.api.client import SellerApiClient
from product_editor.core.notifier import RecordingNotifier
from product_editor.core.product_mapper import map_product
from product_editor.core.session import EditProductSession
from product_editor.models.form import Credentials, FormModel
from tests.mocks import MockSellerApi, MockSellerServer, make_product


def pytest_configure(config):
    """配置pytest."""
    config.addinivalue_line("markers", "asyncio: 标记异步测试")
    config.addinivalue_line("markers", "integration: 标记集成测试（完整加载-编辑-保存流程）")


pytest_plugins = ("pytest_asyncio",)


@pytest.fixture
def credentials() -> Credentials:
    """卖家凭证."""
    return Credentials(token="test-token", seller_id="77")


@pytest.fixture
def mock_api() -> MockSellerApi:
    """对象级假 API 客户端."""
    return MockSellerApi()


@pytest.fixture
def mock_server() -> MockSellerServer:
    """httpx 传输层假服务端."""
    return MockSellerServer()


@pytest.fixture
def api_client(mock_server: MockSellerServer) -> SellerApiClient:
    """连接到假服务端的真实 API 客户端."""
    return SellerApiClient("test-token", transport=mock_server.transport())


@pytest.fixture
def notifier() -> RecordingNotifier:
    """记录全部通知."""
    return RecordingNotifier()


@pytest.fixture
def loaded_form() -> FormModel:
    """由示例商品映射得到的表单."""
    return map_product(make_product())


@pytest.fixture
def session(mock_api, credentials, notifier) -> EditProductSession:
    """未打开的编辑会话."""
    return EditProductSession(mock_api, credentials, "42", notifier=notifier)


@pytest.fixture
async def loaded_session(session: EditProductSession):
    """已加载商品的编辑会话."""
    assert await session.open()
    yield session
    session.close()
