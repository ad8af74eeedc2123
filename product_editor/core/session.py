"""
@PURPOSE: 商品编辑会话，桌面端与移动端共享的唯一业务核心
@OUTLINE:
  - class EditProductSession: 编辑会话
    - async def open(): 加载参考数据, 门控通过后加载商品
    - def set_field() / set_setting() / set_spec_value(): 表单修改
    - def filtered_attributes(): 当前类目适用的规格属性
    - def go_to_step() / next_step() / previous_step(): 步骤切换（向前切换时校验）
    - async def save(): 保存
    - def close(): 离开页面
@GOTCHAS:
  - 每个参考列表完成时都会重新检查门控, 门控一旦通过立即开始加载商品（不等待动态属性）
  - 修改商品名称会重新生成 slug
  - 商品加载失败（NOT_FOUND）后不允许保存
@DEPENDENCIES:
  - 外部: loguru, pydantic
  - 内部: .reference_store, .product_loader, .variant_collection, .image_set,
          .attribute_filter, .save_coordinator, .validation, ..utils
@RELATED: ../views/, ../__main__.py
"""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import ValidationError

from ..api.client import SellerApiClient, build_reference_fetchers
from ..errors import FormValidationError, ProductEditError
from ..models.form import Credentials, FormModel, FormStep, ProductSettings
from ..models.reference import Attribute, ReferenceKind
from ..models.result import SaveResult
from ..utils.logger_setup import get_logger_with_context
from ..utils.slug import generate_slug
from .attribute_filter import AttributeFilter
from .image_set import ImageSetManager
from .notifier import LoggingNotifier, Notifier
from .product_loader import LoaderState, ProductLoader
from .reference_store import ReferenceDataStore
from .save_coordinator import Navigator, SaveCoordinator
from .validation import validate_step
from .variant_collection import VariantCollection


class EditProductSession:
    """商品编辑会话.

    Examples:
        >>> async with SellerApiClient(token) as client:
        ...     session = EditProductSession(client, credentials, "42")
        ...     await session.open()
        ...     session.set_field("name", "Cotton Kurta")
        ...     session.variants.update_primary("price", "499.00")
        ...     result = await session.save()
    """

    def __init__(
        self,
        api: SellerApiClient,
        credentials: Credentials,
        product_id: str,
        *,
        notifier: Notifier | None = None,
        navigator: Navigator | None = None,
        store: ReferenceDataStore | None = None,
        redirect_delay: float | None = None,
    ) -> None:
        """初始化会话.

        Args:
            api: 卖家后台 API 客户端
            credentials: 卖家凭证
            product_id: 要编辑的商品 ID
            notifier: 通知器, 默认写日志
            navigator: 保存成功后的跳转回调
            store: 参考数据仓库, 默认基于 api 构建
            redirect_delay: 保存成功后跳转延迟（秒）, 默认读取配置
        """
        self.product_id = str(product_id or "")
        self.credentials = credentials
        self.notifier: Notifier = notifier or LoggingNotifier()

        self.store = store or ReferenceDataStore(build_reference_fetchers(api))
        self.loader = ProductLoader(api, self.store, self.notifier)
        self.form = FormModel()
        self.variants = VariantCollection(self.form)
        self.images = ImageSetManager(self.form)
        self.attribute_filter = AttributeFilter()
        self.saver = SaveCoordinator(
            api, self.notifier, navigator, redirect_delay=redirect_delay
        )
        self.step = FormStep.BASIC_INFO

        self._log = get_logger_with_context(product_id=self.product_id)
        self._load_task: asyncio.Task[None] | None = None
        self._closed = False
        self.store.add_listener(self._on_reference_loaded)

    # ========== 状态 ==========

    @property
    def state(self) -> LoaderState:
        return self.loader.state

    @property
    def is_ready(self) -> bool:
        return self.loader.state is LoaderState.READY

    @property
    def not_found(self) -> bool:
        return self.loader.state is LoaderState.NOT_FOUND

    # ========== 加载 ==========

    async def open(self) -> bool:
        """加载参考数据与商品.

        Returns:
            商品是否加载成功
        """
        self._log.bind(action="open").info("打开商品编辑页")
        await self.store.load_all(self.credentials)
        self._start_product_load()
        if self._load_task is not None:
            await self._load_task
        if not self.product_id and not self.is_ready:
            self._log.warning("未提供商品 ID, 不加载商品")
        return self.is_ready

    def _on_reference_loaded(self, kind: ReferenceKind) -> None:
        self._start_product_load()

    def _start_product_load(self) -> None:
        if self._closed or self._load_task is not None:
            return
        if not self.loader.can_load(self.product_id):
            return
        self._load_task = asyncio.get_running_loop().create_task(self._load_product())

    async def _load_product(self) -> None:
        form = await self.loader.load(self.product_id, self.credentials, base=self.form)
        if form is None or self._closed:
            return
        self._bind(form)

    def _bind(self, form: FormModel) -> None:
        self.form = form
        self.variants.bind(form)
        self.images.bind(form)

    # ========== 表单修改 ==========

    def _require_editable(self) -> None:
        if self.not_found:
            raise ProductEditError(f"商品 [{self.product_id}] 加载失败, 无法编辑")

    def set_field(self, field: str, value: Any) -> None:
        """修改基础字段. 修改商品名称时重新生成 slug.

        Raises:
            ProductEditError: 未知字段或值不合法
        """
        self._require_editable()
        if field not in FormModel.basic_fields():
            raise ProductEditError(f"未知的商品字段: {field}")

        if field == "tag_ids":
            value = _unique_ids(value)
        try:
            setattr(self.form, field, value)
            if field == "name":
                self.form.slug = generate_slug(str(value))
        except ValidationError as e:
            raise ProductEditError(f"字段 {field} 的值不合法: {value!r}") from e
        self._log.bind(action="set_field").debug(f"{field} = {value!r}")

    def set_setting(self, field: str, value: Any) -> None:
        """修改商品设置字段."""
        self._require_editable()
        if field not in ProductSettings.model_fields:
            raise ProductEditError(f"未知的商品设置字段: {field}")
        try:
            setattr(self.form.settings, field, value)
        except ValidationError as e:
            raise ProductEditError(f"设置 {field} 的值不合法: {value!r}") from e

    def set_spec_value(self, attribute_id: str, value: str) -> None:
        """设置规格值. 切换类目后旧的规格值会保留并照常提交."""
        self._require_editable()
        self.form.spec_values = {**self.form.spec_values, str(attribute_id): value}

    def filtered_attributes(self) -> list[Attribute]:
        """当前所选类目适用的动态属性."""
        return self.attribute_filter(
            self.store.items(ReferenceKind.ATTRIBUTES), self.form.category_id
        )

    # ========== 步骤 ==========

    def go_to_step(self, step: FormStep) -> bool:
        """切换步骤.

        向前切换时依次校验要离开的每个步骤, 失败时发送一条汇总通知并停留在原步骤。

        Returns:
            是否切换成功
        """
        target = FormStep(step)
        if target > self.step:
            try:
                for leaving in FormStep:
                    if self.step <= leaving < target:
                        validate_step(leaving, self.form)
            except FormValidationError as e:
                self.notifier.show_error("缺少必填字段", e.message)
                return False

        self._log.bind(step=target.name).debug(f"切换步骤: {self.step.name} -> {target.name}")
        self.step = target
        return True

    def next_step(self) -> bool:
        if self.step is FormStep.SETTINGS:
            return False
        return self.go_to_step(FormStep(self.step + 1))

    def previous_step(self) -> bool:
        if self.step is FormStep.BASIC_INFO:
            return False
        return self.go_to_step(FormStep(self.step - 1))

    # ========== 保存 ==========

    async def save(self) -> SaveResult:
        """保存商品.

        商品未加载成功时不发送请求。
        """
        if not self.is_ready:
            message = "商品未加载, 无法保存"
            self._log.bind(action="save").warning(message)
            self.notifier.show_error("错误", message)
            return SaveResult(success=False, message=message)

        return await self.saver.save(self.form, self.credentials, self.product_id)

    def close(self) -> None:
        """离开页面: 忽略未完成请求的结果."""
        self._closed = True
        self.saver.dispose()
        if self._load_task is not None and not self._load_task.done():
            self._load_task.cancel()
        self._log.bind(action="close").debug("关闭商品编辑页")


def _unique_ids(value: Any) -> list[str]:
    if isinstance(value, str):
        value = value.split(",")
    result: list[str] = []
    for item in value or []:
        text = str(item).strip()
        if text and text not in result:
            result.append(text)
    return result

