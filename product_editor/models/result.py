"""
@PURPOSE: 定义商品保存结果的数据结构
@OUTLINE:
  - class SaveResult: 一次保存操作的结果
@DEPENDENCIES:
  - 外部: pydantic
@RELATED: core/save_coordinator.py
"""

from datetime import datetime

from pydantic import BaseModel, Field


class SaveResult(BaseModel):
    """保存结果.

    Attributes:
        success: 服务端是否确认成功
        message: 展示给用户的消息（服务端原文或默认文案）
        skipped: 已有保存在进行中, 本次未发出请求
        redirect_to: 成功后计划跳转的路径
        completed_at: 完成时间
    """

    success: bool = Field(..., description="是否成功")
    message: str = Field(default="", description="结果消息")
    skipped: bool = Field(default=False, description="是否因重复提交被跳过")
    redirect_to: str | None = Field(default=None, description="计划跳转路径")
    completed_at: str = Field(
        default_factory=lambda: datetime.now().isoformat(), description="完成时间"
    )
