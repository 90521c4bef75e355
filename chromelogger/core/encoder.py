"""
Payload 编码：整张日志表 → JSON → base64，写入 X-ChromeLogger-Data header。

多数 HTTPD 默认单行 header 上限 8Kb（Apache LimitRequestFieldSize 等），
超出会导致 500。超限时丢弃全部行，只发送一条说明超限的 error 行。
"""

from __future__ import annotations

import base64
import json
import math
from typing import Any, Dict, List, Optional, Tuple

from chromelogger.core.models import COLUMNS, HEADER_NAME, VERSION, EntryKind, LogEntry
from chromelogger.core.session import Session
from chromelogger.log import get_logger
from chromelogger.observability.metrics import metrics

logger = get_logger(__name__)

_SIZE_UNITS = ["bytes", "Kb", "Mb", "Gb", "Tb"]


def _round_half_up(value: float) -> float:
    return math.floor(value * 100 + 0.5) / 100


def format_size(size: float) -> str:
    """8192 → '8Kb'，9000 → '8.79Kb'，0 → '0Kb'"""
    if size <= 0:
        return "0Kb"
    exp = 0
    while size >= 1024 ** exp:
        exp += 1
    exp = min(max(exp, 1), len(_SIZE_UNITS))
    value = _round_half_up(size / 1024 ** (exp - 1))
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text}{_SIZE_UNITS[exp - 1]}"


def _stringify(value: Any) -> str:
    """json.dumps 的 default：无法 str() 的值用占位符代替"""
    try:
        return str(value)
    except Exception:
        return f"[unconvertible {type(value).__name__}]"


def encode(data: Dict[str, Any]) -> str:
    """JSON（非 ASCII 字符转义为 \\uXXXX）→ UTF-8 → base64，结果可直接作为 header 值"""
    text = json.dumps(data, default=_stringify)
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def decode(value: str) -> Dict[str, Any]:
    return json.loads(base64.b64decode(value).decode("utf-8"))


def oversize_message(limit: int, actual: int) -> str:
    return (
        f"ChromeLogger Error: The HTML header will surpass the limit of {format_size(limit)} "
        f"({format_size(actual)}) - You can increase the header_limit setting "
        f"(CHROMELOGGER_HEADER_LIMIT), according to your HTTP server's header size limit "
        f"(e.g. Apache LimitRequestFieldSize)"
    )


class PayloadEncoder:
    """把 Session 的全部日志行编码成一个 header，并执行大小上限检查"""

    def __init__(self, limit: Optional[int] = None, header_name: str = HEADER_NAME):
        if limit is None:
            from config.settings import settings
            limit = settings.chromelogger.header_limit
        self.limit = int(limit)
        self.header_name = header_name

    def build(self, session: Session, rows: Optional[List[List[Any]]] = None) -> Dict[str, Any]:
        if rows is None:
            rows = [entry.as_row() for entry in session.rows]
        return {
            "version": VERSION,
            "columns": list(COLUMNS),
            "rows": rows,
            "request_uri": session.request_uri,
        }

    def _header(self, data: Dict[str, Any]) -> Tuple[str, int]:
        value = encode(data)
        return value, len(f"{self.header_name}: {value}")

    def encode_and_emit(self, session: Session) -> str:
        """重新编码整张表并写入 session.headers；返回最终 header 值"""
        value, length = self._header(self.build(session))
        if length > self.limit:
            logger.warning(
                "[chromelogger] header %s exceeds limit %s, rows replaced (uri=%s, rows=%d)",
                format_size(length), format_size(self.limit), session.request_uri, len(session.rows),
            )
            metrics.payload_oversize_total.inc()
            error_row = LogEntry([oversize_message(self.limit, length)], "", EntryKind.ERROR)
            value, length = self._header(self.build(session, rows=[error_row.as_row()]))

        metrics.header_bytes.observe(length)
        session.set_header(self.header_name, value)
        return value
