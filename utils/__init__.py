"""
Utils Module
通用工具函数
"""
from .logger import setup_logger
from .exceptions import (
    Skill60Error,
    ConfigurationError,
    FetchError,
    FetchTimeoutError,
)

__all__ = [
    "setup_logger",
    "Skill60Error",
    "ConfigurationError",
    "FetchError",
    "FetchTimeoutError",
]
