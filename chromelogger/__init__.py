"""
chromelogger：把服务端调试日志通过 X-ChromeLogger-Data 响应头发给浏览器 Chrome Logger 扩展。

用法：
    import chromelogger

    chromelogger.log("order", order)
    chromelogger.warn("slow query", elapsed_ms)
    chromelogger.group("auth")
    chromelogger.info(user)
    chromelogger.group_end()

    # FastAPI：注册中间件，每个请求一个 Session，响应时写出 header
    from chromelogger.observability import setup_chromelogger
    setup_chromelogger(app)
"""

from typing import Any, Mapping

from chromelogger.core import (
    BACKTRACE_LEVEL,
    HEADER_NAME,
    ChromeLogger,
    EntryKind,
    Session,
    get_session,
    register_field_lister,
    session_scope,
)

_logger = ChromeLogger()

log = _logger.log
warn = _logger.warn
error = _logger.error
info = _logger.info
group = _logger.group
group_collapsed = _logger.group_collapsed
group_end = _logger.group_end
table = _logger.table
groupCollapsed = _logger.group_collapsed
groupEnd = _logger.group_end


def add_setting(key: str, value: Any) -> None:
    get_session().add_setting(key, value)


def add_settings(settings: Mapping[str, Any]) -> None:
    get_session().add_settings(settings)


def get_setting(key: str) -> Any:
    return get_session().get_setting(key)


__all__ = [
    "BACKTRACE_LEVEL",
    "HEADER_NAME",
    "ChromeLogger",
    "EntryKind",
    "Session",
    "get_session",
    "session_scope",
    "register_field_lister",
    "log",
    "warn",
    "error",
    "info",
    "group",
    "group_collapsed",
    "group_end",
    "table",
    "groupCollapsed",
    "groupEnd",
    "add_setting",
    "add_settings",
    "get_setting",
]
