"""
Settings Configuration
使用 Pydantic 进行配置验证和管理
"""
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from utils.exceptions import ConfigurationError


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


class FetcherSettings(BaseSettings):
    """网络抓取配置"""
    timeout: float = Field(default=20.0, gt=0, description="页面/RSS 请求超时时间(秒)")
    long_timeout: float = Field(default=60.0, gt=0, description="合成类长请求超时时间(秒)")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User Agent")
    accept: str = Field(
        default="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        description="文本请求 Accept 头",
    )
    accept_json: str = Field(default="application/json", description="JSON 请求 Accept 头")
    accept_language: str = Field(default="ja,en;q=0.5", description="Accept-Language 头")
    follow_redirects: bool = Field(default=True, description="是否跟随重定向")

    class Config:
        env_prefix = "FETCH_"


class ExtractorSettings(BaseSettings):
    """正文抽取配置"""
    default_max_chars: int = Field(default=2000, gt=0, description="默认最大字符数")
    region_keywords: List[str] = Field(
        default_factory=lambda: ["content", "main", "article"],
        description="正文区域 id/class 关键词",
    )
    truncation_notice: str = Field(
        default="\n\n（...省略。全文は公式サイトをご確認ください）",
        description="截断提示",
    )

    class Config:
        env_prefix = "EXTRACT_"


class AggregatorSettings(BaseSettings):
    """聚合器配置"""
    default_limit: int = Field(default=10, ge=0, description="默认返回条数")
    show_progress: bool = Field(default=False, description="是否显示进度条")

    class Config:
        env_prefix = "AGGREGATE_"


class Settings(BaseSettings):
    """主配置类 - 聚合所有子配置"""

    fetcher: FetcherSettings = Field(default_factory=FetcherSettings)
    extractor: ExtractorSettings = Field(default_factory=ExtractorSettings)
    aggregator: AggregatorSettings = Field(default_factory=AggregatorSettings)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @classmethod
    def load_from_env_file(cls, env_path: Optional[Path] = None) -> "Settings":
        """从指定的 .env 文件加载配置"""
        if env_path is None:
            # 默认查找 config/.env
            env_path = Path(__file__).parent / ".env"

        if env_path.exists():
            from dotenv import load_dotenv
            load_dotenv(env_path)

        try:
            return cls(
                fetcher=FetcherSettings(),
                extractor=ExtractorSettings(),
                aggregator=AggregatorSettings(),
            )
        except ValidationError as exc:
            raise ConfigurationError(
                "Invalid settings in environment",
                details={"errors": [f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors()]},
            ) from exc


@lru_cache()
def get_settings() -> Settings:
    """获取全局配置单例"""
    return Settings.load_from_env_file()


# 便捷访问
def get_fetcher_settings() -> FetcherSettings:
    return get_settings().fetcher


def get_extractor_settings() -> ExtractorSettings:
    return get_settings().extractor


def get_aggregator_settings() -> AggregatorSettings:
    return get_settings().aggregator
