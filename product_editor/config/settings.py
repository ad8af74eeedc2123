"""
@PURPOSE: 应用配置管理，使用Pydantic Settings管理配置，支持多环境和从YAML加载
@OUTLINE:
  - class ApiConfig: 卖家后台 API 配置
  - class LoggingConfig: 日志配置
  - class ReferenceConfig: 参考数据加载配置
  - class FormConfig: 表单行为配置
  - class Settings: 应用配置主类
  - def load_environment_config(): 加载环境配置
  - def create_settings(): 创建配置实例
@GOTCHAS:
  - 卖家 token 应存储在.env文件中, 不要提交到git
  - 环境配置文件优先级: 环境变量 > YAML > 默认值
@DEPENDENCIES:
  - 外部: pydantic, pydantic_settings, pyyaml
@RELATED: __init__.py, environments/*.yaml
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ========== 子配置类 ==========

class ApiConfig(BaseSettings):
    """卖家后台 API 配置.

    Attributes:
        base_url: 后台根地址
        api_prefix: API 路径前缀
        timeout: 普通请求超时（秒）
        upload_timeout: 带文件上传的请求超时（秒）
    """
    base_url: str = Field(default="https://seller.bringmart.in", description="后台根地址")
    api_prefix: str = Field(default="/api", description="API 路径前缀")
    timeout: float = Field(default=10.0, gt=0, description="普通请求超时（秒）")
    upload_timeout: float = Field(default=30.0, gt=0, description="上传请求超时（秒）")


class LoggingConfig(BaseSettings):
    """日志配置.

    Attributes:
        level: 日志级别
        format: 日志格式（detailed|json|simple）
        output: 输出目标列表
        file_path: 文件路径
        rotation: 轮转大小
        retention: 保留时间
    """
    level: str = Field(default="INFO", description="日志级别")
    format: str = Field(default="detailed", description="日志格式")
    output: List[str] = Field(default=["console"], description="输出目标")
    file_path: str = Field(default="data/logs/product_editor.log", description="文件路径")
    rotation: str = Field(default="10 MB", description="轮转大小")
    retention: str = Field(default="7 days", description="保留时间")


class ReferenceConfig(BaseSettings):
    """参考数据加载配置.

    Attributes:
        distinguish_failures: 加载失败时标记为 FAILED 而不是 LOADED（都视为加载结束）
    """
    distinguish_failures: bool = Field(default=False, description="区分加载失败状态")


class FormConfig(BaseSettings):
    """表单行为配置.

    Attributes:
        redirect_delay: 保存成功后跳转延迟（秒）
        redirect_path: 保存成功后跳转路径
    """
    redirect_delay: float = Field(default=2.0, ge=0, description="保存成功后跳转延迟（秒）")
    redirect_path: str = Field(default="/products/manage", description="保存成功后跳转路径")


# ========== 主配置类 ==========

class Settings(BaseSettings):
    """应用配置主类.

    从环境变量、.env文件和YAML配置文件加载配置。
    优先级：环境变量 > YAML > 默认值

    Examples:
        >>> from product_editor.config import settings
        >>> settings.api.base_url
        'https://seller.bringmart.in'
    """

    environment: str = Field(default="development", description="运行环境")

    # 卖家凭证（从.env加载）
    seller_token: str = Field(default="", description="卖家 Bearer token")
    seller_id: str = Field(default="", description="卖家 ID")

    api: ApiConfig = Field(default_factory=ApiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reference: ReferenceConfig = Field(default_factory=ReferenceConfig)
    form: FormConfig = Field(default_factory=FormConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",  # 支持 API__TIMEOUT=20
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """验证环境名称."""
        valid_envs = ["development", "staging", "production"]
        if v not in valid_envs:
            raise ValueError(f"环境必须是: {valid_envs}")
        return v

    def get_absolute_path(self, relative_path: str) -> Path:
        """将相对路径转换为基于当前工作目录的绝对路径."""
        return Path.cwd() / relative_path

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典（隐藏敏感信息）."""
        data = self.model_dump()
        if data.get("seller_token"):
            data["seller_token"] = "***"
        return data


# ========== 配置加载 ==========

def load_environment_config(env: str = "development") -> Dict[str, Any]:
    """从YAML文件加载环境配置，支持别名引用."""

    config_dir = Path(__file__).parent / "environments"
    target_file = config_dir / f"{env}.yaml"

    def _load(file_path: Path, seen: set[Path]) -> Dict[str, Any]:
        if file_path in seen:
            raise ValueError(f"检测到环境配置的循环引用: {file_path}")
        seen.add(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"环境配置文件不存在: {file_path}")

        with file_path.open("r", encoding="utf-8") as handle:
            content = yaml.safe_load(handle)

        if content is None:
            return {}

        if isinstance(content, str):
            alias = content.strip()
            if not alias:
                raise ValueError(f"环境配置别名不能为空: {file_path}")

            if alias.endswith((".yaml", ".yml")):
                alias_file = file_path.parent / alias
            else:
                alias_file = file_path.parent / f"{alias}.yaml"

            return _load(alias_file, seen)

        if not isinstance(content, dict):
            raise TypeError(
                f"环境配置 {file_path} 必须是字典或别名字符串, 当前类型: {type(content).__name__}",
            )

        return content

    return _load(target_file, set())


def create_settings(env: Optional[str] = None) -> Settings:
    """创建配置实例.

    Args:
        env: 环境名称，如果为None则从环境变量获取

    Returns:
        配置实例
    """
    if env is None:
        env = os.getenv("ENVIRONMENT", "development")

    yaml_config = load_environment_config(env)

    # YAML配置作为子配置默认值, 环境变量仍可覆盖顶层字段
    return Settings(
        environment=env,
        api=ApiConfig(**yaml_config.get("api", {})),
        logging=LoggingConfig(**yaml_config.get("logging", {})),
        reference=ReferenceConfig(**yaml_config.get("reference", {})),
        form=FormConfig(**yaml_config.get("form", {})),
    )


# ========== 全局配置实例 ==========

settings = create_settings(os.getenv("ENVIRONMENT", "development"))
