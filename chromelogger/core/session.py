"""
请求级 Session：累积的日志行、已出现过的调用位置、设置项、待写出的 header。

每个请求（线程 / asyncio task）通过 ContextVar 持有自己的 Session，
get_session() 首次调用时惰性创建，之后在同一上下文内返回同一实例。
"""

from __future__ import annotations

import contextvars
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set

from chromelogger.core.models import BACKTRACE_LEVEL, LogEntry


def _default_settings() -> Dict[str, Any]:
    from config.settings import settings
    return {BACKTRACE_LEVEL: settings.chromelogger.backtrace_level}


class Session:
    """一次请求内的 Chrome Logger 状态，随请求结束丢弃"""

    def __init__(
        self,
        request_uri: str = "",
        timestamp: Optional[float] = None,
        settings: Optional[Mapping[str, Any]] = None,
    ):
        self.request_uri = request_uri
        self.timestamp = time.time() if timestamp is None else timestamp
        self.rows: List[LogEntry] = []
        self.backtraces: Set[str] = set()
        self.headers: Dict[str, str] = {}
        self._settings: Dict[str, Any] = _default_settings()
        if settings:
            self.add_settings(settings)

    # ── 设置项 ──

    def add_setting(self, key: str, value: Any) -> None:
        self._settings[key] = value

    def add_settings(self, settings: Mapping[str, Any]) -> None:
        for key, value in settings.items():
            self.add_setting(key, value)

    def get_setting(self, key: str) -> Any:
        return self._settings.get(key)

    @property
    def settings(self) -> Dict[str, Any]:
        return dict(self._settings)

    # ── 日志行 ──

    def append(self, entry: LogEntry) -> None:
        self.rows.append(entry)

    def seen_origin(self, origin: str) -> bool:
        return origin in self.backtraces

    def record_origin(self, origin: str) -> None:
        self.backtraces.add(origin)

    def set_header(self, name: str, value: str) -> None:
        """同名 header 覆盖写入，与 PHP header() 行为一致"""
        self.headers[name] = value

    def __repr__(self) -> str:
        return f"Session(request_uri={self.request_uri!r}, rows={len(self.rows)})"


_current: contextvars.ContextVar[Optional[Session]] = contextvars.ContextVar(
    "chromelogger_session", default=None
)


def get_session() -> Session:
    """返回当前上下文的 Session，不存在时创建"""
    session = _current.get()
    if session is None:
        session = Session()
        _current.set(session)
    return session


def current_session() -> Optional[Session]:
    """当前上下文的 Session，未创建时返回 None（不会新建）"""
    return _current.get()


@contextmanager
def session_scope(request_uri: str = "", timestamp: Optional[float] = None) -> Iterator[Session]:
    """
    为一次请求安装全新的 Session，退出时恢复之前的上下文。

        with session_scope(request_uri="/orders?id=1") as session:
            chromelogger.log("hello")
        session.headers  # {"X-ChromeLogger-Data": "..."}
    """
    session = Session(request_uri=request_uri, timestamp=timestamp)
    token = _current.set(session)
    try:
        yield session
    finally:
        _current.reset(token)
