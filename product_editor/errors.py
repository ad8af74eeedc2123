"""
@PURPOSE: 定义商品编辑流程相关的自定义异常
@OUTLINE:
  - ProductEditError: 所有商品编辑异常的基类
  - SellerApiError: 卖家后台 API 返回错误或响应无法解析
  - ProductNotFoundError: 商品加载失败（不存在或接口错误）
  - FormValidationError: 步骤校验失败，汇总全部缺失字段
  - InvalidFileTypeError: 上传文件类型不合法，整批拒绝
  - VariantError: 变体集合操作不合法
  - PayloadError: 更新请求缺少必填字段
@DEPENDENCIES:
  - 外部: 无
"""

from __future__ import annotations

from collections.abc import Sequence


class ProductEditError(Exception):
    """商品编辑异常基类."""


class SellerApiError(ProductEditError):
    """卖家后台 API 调用失败时抛出此异常.

    覆盖三类情况：HTTP 状态码错误、响应体 ``status == 0``、
    返回 HTML 错误页或非法 JSON。
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """初始化 API 异常.

        Args:
            message: 错误消息（优先使用服务端返回的 message）
            status_code: HTTP 状态码（可选）
        """
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ProductNotFoundError(ProductEditError):
    """商品加载失败，编辑会话进入 NOT_FOUND 终止状态."""

    def __init__(self, product_id: str, message: str | None = None) -> None:
        self.product_id = product_id
        self.message = message or f"商品 [{product_id}] 不存在或加载失败"
        super().__init__(self.message)


class FormValidationError(ProductEditError):
    """步骤校验失败时抛出此异常.

    校验会扫描全部字段后再报告，``missing_fields`` 包含所有缺失字段名。
    """

    def __init__(self, step: str, missing_fields: Sequence[str]) -> None:
        """初始化校验异常.

        Args:
            step: 校验失败的步骤名
            missing_fields: 缺失的字段名列表（按表单顺序）
        """
        self.step = step
        self.missing_fields = list(missing_fields)
        self.message = f"请填写以下必填字段: {', '.join(self.missing_fields)}"
        super().__init__(self.message)


class InvalidFileTypeError(ProductEditError):
    """上传文件中存在不支持的类型，整批文件被拒绝."""

    def __init__(self, invalid_files: Sequence[str]) -> None:
        self.invalid_files = list(invalid_files)
        self.message = (
            f"以下文件类型不允许: {', '.join(self.invalid_files)}。"
            "仅支持 JPEG、JPG、PNG、GIF 格式"
        )
        super().__init__(self.message)


class VariantError(ProductEditError):
    """变体集合操作不合法（删除主变体、未知变体、未知字段等）."""


class PayloadError(ProductEditError):
    """组装更新请求时缺少必填字段."""

    def __init__(self, missing_fields: Sequence[str]) -> None:
        self.missing_fields = list(missing_fields)
        self.message = f"更新请求缺少必填字段: {', '.join(self.missing_fields)}"
        super().__init__(self.message)
