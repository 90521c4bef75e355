"""
Chrome Logger 协议常量与日志行模型。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

VERSION = "4.1.0"
HEADER_NAME = "X-ChromeLogger-Data"
COLUMNS = ["log", "backtrace", "type"]

BACKTRACE_LEVEL = "backtrace_level"

JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class EntryKind(str, Enum):
    """日志行类型，取值即为协议中 type 列的字符串。"""

    LOG = ""
    WARN = "warn"
    ERROR = "error"
    GROUP = "group"
    INFO = "info"
    GROUP_END = "groupEnd"
    GROUP_COLLAPSED = "groupCollapsed"
    TABLE = "table"

    @property
    def is_group(self) -> bool:
        return self in (EntryKind.GROUP, EntryKind.GROUP_END, EntryKind.GROUP_COLLAPSED)


@dataclass
class LogEntry:
    """一次 log 调用产生的一行：已归一化的参数 + 调用位置 + 类型"""

    values: List[JsonValue] = field(default_factory=list)
    origin: Optional[str] = None
    kind: EntryKind = EntryKind.LOG

    def as_row(self) -> List[Any]:
        return [self.values, self.origin, self.kind.value]
