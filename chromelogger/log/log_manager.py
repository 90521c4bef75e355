"""
日志管理模块：库自身的分级日志（控制台 + 可选文件）。

注意区分：这里是 chromelogger 内部运行日志，写到 stderr / 文件；
发往浏览器的日志行走 chromelogger.core，不经过 logging。
"""
import logging
from pathlib import Path
from typing import Any

# 默认配置
DEFAULT_LEVEL = "INFO"
DEFAULT_CONSOLE_OUTPUT = True
LOG_FILE_NAME = "chromelogger.log"


class LogManager:
    """
    统一日志管理：分级（DEBUG/INFO/WARNING/ERROR）、控制台输出，
    配置了 log_dir 时额外写入 <log_dir>/chromelogger.log。
    """

    def __init__(self, config: dict[str, Any] | None = None):
        config = config or {}
        self.log_dir = Path(config["log_dir"]) if config.get("log_dir") else None
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self.console_output = config.get("console_output", DEFAULT_CONSOLE_OUTPUT)
        level_name = (config.get("level") or DEFAULT_LEVEL).upper()
        self.level = getattr(logging, level_name, logging.INFO)

        self._formatter = logging.Formatter(
            "%(asctime)s.%(msecs)03d | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    @property
    def log_file(self) -> Path | None:
        if self.log_dir is None:
            return None
        return self.log_dir / LOG_FILE_NAME

    def get_logger(self, name: str) -> logging.Logger:
        """获取具名 logger，按配置绑定控制台 / 文件 handler."""
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        logger.setLevel(self.level)
        logger.propagate = False

        if self.console_output:
            ch = logging.StreamHandler()
            ch.setLevel(self.level)
            ch.setFormatter(self._formatter)
            logger.addHandler(ch)

        if self.log_file is not None:
            fh = logging.FileHandler(self.log_file, encoding="utf-8")
            fh.setLevel(self.level)
            fh.setFormatter(self._formatter)
            logger.addHandler(fh)

        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger


# 模块级单例，便于 get_logger 使用
_manager: LogManager | None = None


def _get_manager(config: dict[str, Any] | None = None) -> LogManager:
    global _manager
    if _manager is None:
        _manager = LogManager(config)
    return _manager


def init_logging(config: dict[str, Any] | None = None) -> LogManager:
    """初始化日志. 未传 config 时读取 config.settings 的 logging 段."""
    cfg = config
    if cfg is None:
        from config.settings import settings
        cfg = settings.logging.as_dict()
    global _manager
    _manager = LogManager(cfg)
    return _manager


def get_logger(name: str, config: dict[str, Any] | None = None) -> logging.Logger:
    """获取 logger。若尚未初始化则用 config 或 settings.logging 初始化."""
    if _manager is None:
        init_logging(config=config)
    return _get_manager().get_logger(name)
