"""
@PURPOSE: 商品主图与图集管理（暂存新图片、移除已有图片并记录待删除 ID）
@OUTLINE:
  - def validate_image_files(): 整批校验文件类型
  - class ImageSetManager: 主图/图集操作
    - def set_main(): 设置主图
    - def remove_main(): 移除主图
    - def add_gallery_files(): 追加图集文件
    - def remove_gallery_at(): 按拼接索引移除图集图片
@GOTCHAS:
  - 图集索引针对“已有图片在前 + 新图片在后”的拼接列表, 与界面列表和提交顺序一致
  - 只有带 remote_id 的已有图片会记录到 deleted_image_ids
  - 任一文件类型不合法即整批拒绝, 不会部分接受
@DEPENDENCIES:
  - 外部: loguru
  - 内部: ..models.image, ..models.form
@RELATED: payload.py, variant_collection.py
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from ..errors import InvalidFileTypeError
from ..models.form import FormModel
from ..models.image import ExistingImage, ImageRef, NewImage, StagedFile, is_allowed_image


def validate_image_files(files: Iterable[StagedFile]) -> list[StagedFile]:
    """校验一批文件, 全部合法时原样返回.

    Raises:
        InvalidFileTypeError: 错误信息只列出不合法的文件
    """
    batch = list(files)
    invalid = [f.filename for f in batch if not is_allowed_image(f)]
    if invalid:
        logger.warning(f"文件类型不合法, 整批拒绝: {invalid}")
        raise InvalidFileTypeError(invalid)
    return batch


class ImageSetManager:
    """主图与图集管理."""

    def __init__(self, form: FormModel) -> None:
        self._form = form

    def bind(self, form: FormModel) -> None:
        self._form = form

    @property
    def deleted_image_ids(self) -> list[str]:
        return list(self._form.deleted_image_ids)

    @property
    def has_main_image(self) -> bool:
        return self._form.main_image is not None

    @property
    def gallery(self) -> list[ImageRef]:
        """已有图片在前、新图片在后的拼接列表."""
        return [*self._form.gallery_existing, *self._form.gallery_new]

    def _record_deletion(self, image: ExistingImage) -> None:
        if image.remote_id:
            self._form.deleted_image_ids = [*self._form.deleted_image_ids, image.remote_id]
            logger.debug(f"记录待删除图片: {image.remote_id}")

    def set_main(self, file: StagedFile) -> None:
        """替换主图, 原有的已存在主图记录为待删除."""
        validate_image_files([file])
        current = self._form.main_image
        if isinstance(current, ExistingImage):
            self._record_deletion(current)
        self._form.main_image = NewImage(file=file)
        logger.debug(f"设置主图: {file.filename}")

    def remove_main(self) -> None:
        """移除主图. 新暂存的主图直接丢弃, 不记录删除."""
        current = self._form.main_image
        if current is None:
            return
        if isinstance(current, ExistingImage):
            self._record_deletion(current)
        self._form.main_image = None

    def add_gallery_files(self, files: Iterable[StagedFile]) -> None:
        """追加图集文件.

        Raises:
            InvalidFileTypeError: 存在不允许的文件类型, 本批一个都不添加
        """
        batch = validate_image_files(files)
        self._form.gallery_new = [*self._form.gallery_new, *(NewImage(file=f) for f in batch)]
        logger.debug(f"图集新增 {len(batch)} 张")

    def remove_gallery_at(self, index: int) -> None:
        """按拼接索引移除图集图片.

        Raises:
            IndexError: 索引越界
        """
        existing = self._form.gallery_existing
        new = self._form.gallery_new
        if not 0 <= index < len(existing) + len(new):
            raise IndexError(f"图集索引越界: {index}")

        if index < len(existing):
            removed = existing[index]
            self._form.gallery_existing = [img for i, img in enumerate(existing) if i != index]
            self._record_deletion(removed)
        else:
            offset = index - len(existing)
            self._form.gallery_new = [img for i, img in enumerate(new) if i != offset]
