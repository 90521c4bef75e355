"""库内部日志管理：分级、控制台 + 可选文件输出。"""
from .log_manager import (
    LogManager,
    get_logger,
    init_logging,
)

__all__ = ["LogManager", "get_logger", "init_logging"]
