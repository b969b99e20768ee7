"""
Custom Exceptions
自定义异常类
"""
from typing import Optional


class Skill60Error(Exception):
    """抓取引擎基础异常类"""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self):
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(Skill60Error):
    """配置错误"""
    pass


class FetchError(Skill60Error):
    """
    抓取错误

    HTTP 非 2xx 时 status_code/reason 为响应状态；
    网络层失败时 status_code 为 None。
    """

    def __init__(
        self,
        message: str,
        url: str = "",
        status_code: Optional[int] = None,
        reason: str = "",
        **kwargs,
    ):
        super().__init__(message, kwargs)
        self.url = url
        self.status_code = status_code
        self.reason = reason

    @classmethod
    def from_status(cls, url: str, status_code: int, reason: str) -> "FetchError":
        return cls(f"HTTP {status_code} {reason}".rstrip(), url=url, status_code=status_code, reason=reason)


class FetchTimeoutError(FetchError):
    """请求超时 (请求已被取消)"""

    def __init__(self, url: str, timeout: float):
        super().__init__(f"Timed out after {timeout:g}s", url=url)
        self.timeout = timeout
