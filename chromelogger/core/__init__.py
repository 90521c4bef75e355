"""核心：值归一化、日志行构建、payload 编码、请求级 Session。"""

from .models import BACKTRACE_LEVEL, COLUMNS, HEADER_NAME, VERSION, EntryKind, LogEntry
from .fields import Field, FieldLister, Visibility, register_field_lister, unregister_field_lister
from .normalizer import Normalizer, normalize, normalize_args
from .session import Session, current_session, get_session, session_scope
from .encoder import PayloadEncoder, format_size
from .logger import ChromeLogger

__all__ = [
    "BACKTRACE_LEVEL",
    "COLUMNS",
    "HEADER_NAME",
    "VERSION",
    "EntryKind",
    "LogEntry",
    "Field",
    "FieldLister",
    "Visibility",
    "register_field_lister",
    "unregister_field_lister",
    "Normalizer",
    "normalize",
    "normalize_args",
    "Session",
    "current_session",
    "get_session",
    "session_scope",
    "PayloadEncoder",
    "format_size",
    "ChromeLogger",
]
