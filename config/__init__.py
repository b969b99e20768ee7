"""
Configuration Management Module
统一配置管理，抓取超时/UA/抽取参数均从这里注入
"""
from .settings import (
    Settings,
    FetcherSettings,
    ExtractorSettings,
    AggregatorSettings,
    get_settings,
    get_fetcher_settings,
    get_extractor_settings,
    get_aggregator_settings,
)

__all__ = [
    "Settings",
    "FetcherSettings",
    "ExtractorSettings",
    "AggregatorSettings",
    "get_settings",
    "get_fetcher_settings",
    "get_extractor_settings",
    "get_aggregator_settings",
]
