"""
@PURPOSE: 卖家后台商品编辑核心, 加载参考数据与商品, 编辑基础信息/变体/规格/设置并提交更新
@OUTLINE:
  - 参考数据并发加载与门控
  - 商品加载状态机与字段映射
  - 变体集合、主图/图集管理、步骤校验
  - 更新请求组装与保存协调
  - 桌面端/移动端两种展示层
@DEPENDENCIES:
  - 外部: httpx, pydantic, loguru, beautifulsoup4, rich, typer
@AUTHOR: Beimeng Team
"""

__version__ = "0.1.0"
__author__ = "Beimeng Team"
