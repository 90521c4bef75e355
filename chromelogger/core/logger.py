"""
日志行构建：归一化参数 → 计算调用位置 → 追加到 Session → 重写 header。

每次 log 调用都会同步重新编码整张表并覆盖 header（而不是请求结束时统一写出），
这样即使响应中途中断，已记录的日志也已经在 header 里。
"""

from __future__ import annotations

import os
import sys
from typing import Any, Callable, List, Optional, Sequence, Tuple

from chromelogger.core.encoder import PayloadEncoder
from chromelogger.core.models import BACKTRACE_LEVEL, EntryKind, LogEntry
from chromelogger.core.normalizer import normalize_args
from chromelogger.core.session import Session, get_session
from chromelogger.log import get_logger
from chromelogger.observability.metrics import metrics

logger = get_logger(__name__)

UNKNOWN_ORIGIN = "unknown"

Frame = Tuple[Optional[str], Optional[int]]
StackInspector = Callable[[int], Sequence[Frame]]

_PACKAGE_DIR = os.path.normcase(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


def _is_internal(filename: str) -> bool:
    path = os.path.normcase(os.path.abspath(filename))
    return path.startswith(_PACKAGE_DIR + os.sep)


def default_stack_inspector(limit: int) -> List[Frame]:
    """
    返回调用栈上 chromelogger 包外的前 limit 帧 (file, line)，由内向外。
    frames[0] 即直接调用 log() / warn() ... 的位置。
    """
    frames: List[Frame] = []
    frame = sys._getframe(1)
    while frame is not None and _is_internal(frame.f_code.co_filename):
        frame = frame.f_back
    while frame is not None and len(frames) < limit:
        frames.append((frame.f_code.co_filename, frame.f_lineno))
        frame = frame.f_back
    return frames


def _backtrace_level(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return 1
    return max(level, 1)


class ChromeLogger:
    """
    日志入口。未显式传入 session 时使用当前请求上下文的 Session。

        cl = ChromeLogger()
        cl.log("user", user)
        cl.group("sql")
        cl.info(query, params)
        cl.group_end()
    """

    def __init__(
        self,
        session: Optional[Session] = None,
        encoder: Optional[PayloadEncoder] = None,
        stack_inspector: Optional[StackInspector] = None,
    ):
        self._session = session
        self._encoder = encoder
        self.stack_inspector = stack_inspector or default_stack_inspector

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else get_session()

    @property
    def encoder(self) -> PayloadEncoder:
        # 未指定时每次按当前配置构造，header_limit 热更新立即生效
        return self._encoder if self._encoder is not None else PayloadEncoder()

    @property
    def enabled(self) -> bool:
        from config.settings import settings
        return settings.chromelogger.enabled

    # ── 入口 ──

    def log(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.LOG, args)

    def warn(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.WARN, args)

    def error(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.ERROR, args)

    def info(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.INFO, args)

    def group(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.GROUP, args)

    def group_collapsed(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.GROUP_COLLAPSED, args)

    def group_end(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.GROUP_END, args)

    def table(self, *args: Any) -> Session:
        return self.add_entry(EntryKind.TABLE, args)

    # console API 风格别名
    groupCollapsed = group_collapsed
    groupEnd = group_end

    # ── 内部 ──

    def add_entry(self, kind: EntryKind | str, args: Sequence[Any]) -> Session:
        """追加一行并重写 header。任何内部异常都只记日志，不抛给调用方"""
        session = self.session
        kind = EntryKind(kind)
        if not args and kind is not EntryKind.GROUP_END:
            return session
        if not self.enabled:
            return session

        try:
            values = normalize_args(args)
            origin = self._origin(session)
            self._add_row(session, LogEntry(values, origin, kind))
        except Exception as e:
            metrics.errors_total.inc()
            logger.warning("[chromelogger] %s entry dropped: %s", kind.value or "log", e, exc_info=True)
        return session

    def _origin(self, session: Session) -> str:
        level = _backtrace_level(session.get_setting(BACKTRACE_LEVEL))
        frames = self.stack_inspector(level)
        if len(frames) < level:
            return UNKNOWN_ORIGIN
        filename, lineno = frames[level - 1]
        if not filename or lineno is None:
            return UNKNOWN_ORIGIN
        return f"{filename} : {lineno}"

    def _add_row(self, session: Session, entry: LogEntry) -> None:
        origin = entry.origin
        # 同一位置重复输出（例如循环里）只保留第一次的位置，节省 header 空间
        if origin is not None and session.seen_origin(origin):
            origin = None
        # group 标记的位置没有意义
        if entry.kind.is_group:
            origin = None
        if origin is not None:
            session.record_origin(origin)
        entry.origin = origin

        session.append(entry)
        try:
            self.encoder.encode_and_emit(session)
        except Exception:
            # 编码失败的行不能留在表里，否则之后每次重写 header 都会失败
            session.rows.pop()
            raise
        metrics.rows_total.labels(kind=entry.kind.value or "log").inc()
