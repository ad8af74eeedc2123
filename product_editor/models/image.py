"""
@PURPOSE: 定义商品图片引用模型（已存在的服务端图片 / 本地暂存的新文件）
@OUTLINE:
  - class StagedFile: 本地暂存的待上传文件
  - class ExistingImage: 服务端已持久化的图片
  - class NewImage: 尚未上传的新图片
  - ImageRef: 两者的标签联合类型
  - def is_allowed_image(): 判断文件是否为允许的图片类型
@DEPENDENCIES:
  - 外部: pydantic
@RELATED: core/image_set.py, core/payload.py
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

ALLOWED_IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/gif"})
ALLOWED_IMAGE_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif"})


class StagedFile(BaseModel):
    """本地暂存的待上传文件.

    Attributes:
        filename: 文件名
        content_type: MIME 类型（可能为空）
        data: 文件内容
    """

    filename: str = Field(..., min_length=1, description="文件名")
    content_type: str = Field(default="", description="MIME 类型")
    data: bytes = Field(default=b"", repr=False, description="文件内容")

    @classmethod
    def from_path(cls, path: str | Path) -> StagedFile:
        """读取本地文件, 按扩展名推断 MIME 类型.

        Examples:
            >>> staged = StagedFile.from_path("photos/front.png")
            >>> staged.content_type
            'image/png'
        """
        file_path = Path(path)
        content_type, _ = mimetypes.guess_type(file_path.name)
        return cls(
            filename=file_path.name,
            content_type=content_type or "",
            data=file_path.read_bytes(),
        )

    def as_upload(self) -> tuple[str, bytes, str]:
        """转换为 httpx multipart 文件元组."""
        return (self.filename, self.data, self.content_type or "application/octet-stream")


def is_allowed_image(file: StagedFile) -> bool:
    """MIME 类型或扩展名任一匹配即视为合法图片（不区分大小写）."""
    if file.content_type.lower() in ALLOWED_IMAGE_MIME_TYPES:
        return True
    return Path(file.filename).suffix.lower() in ALLOWED_IMAGE_EXTENSIONS


class ExistingImage(BaseModel):
    """服务端已持久化的图片.

    ``remote_id`` 为空的旧数据无法被显式标记删除。
    """

    source: Literal["existing"] = "existing"
    url: str = Field(..., min_length=1, description="图片地址")
    remote_id: str | None = Field(default=None, description="服务端图片ID")


class NewImage(BaseModel):
    """本地暂存、尚未上传的图片."""

    source: Literal["new"] = "new"
    file: StagedFile


ImageRef = Annotated[Union[ExistingImage, NewImage], Field(discriminator="source")]
