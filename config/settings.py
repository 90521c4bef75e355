"""
统一配置模块
- 配置文件: config/chromelogger_config.json（可调参数）
- 本地覆盖: config/chromelogger_config.local.json（本地私密配置）
- 环境变量优先覆盖（CHROMELOGGER_*）
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass
from typing import Dict, Any, Optional
from dotenv import load_dotenv

load_dotenv()

# 加载 config/chromelogger_config.json + config/chromelogger_config.local.json（本地覆盖）
_CONFIG_PATH = Path(__file__).parent / "chromelogger_config.json"
_LOCAL_CONFIG_PATH = Path(__file__).parent / "chromelogger_config.local.json"


def _load_json(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


_RAW_CONFIG: Dict[str, Any] = _load_json(_CONFIG_PATH)
if _LOCAL_CONFIG_PATH.exists():
    _RAW_CONFIG = _deep_merge(_RAW_CONFIG, _load_json(_LOCAL_CONFIG_PATH))


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ChromeLoggerSettings:
    """Chrome Logger 输出配置"""
    enabled: bool = True
    backtrace_level: int = 1        # 1 = 直接调用 log() 的那一帧
    header_limit: int = 8192        # 8Kb，多数 HTTPD 默认的单行 header 上限


@dataclass
class LoggingSettings:
    """库自身日志（非浏览器输出）"""
    level: str = "INFO"
    console_output: bool = True
    log_dir: Optional[str] = None   # 不配置则不写文件

    def as_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "console_output": self.console_output,
            "log_dir": self.log_dir,
        }


def _chromelogger_from_config() -> Dict[str, Any]:
    return (_RAW_CONFIG.get("chromelogger") or {})


def _logging_from_config() -> Dict[str, Any]:
    return (_RAW_CONFIG.get("logging") or {})


class Settings:
    def __init__(self):
        c = _chromelogger_from_config()
        self.chromelogger = ChromeLoggerSettings(
            enabled=_env_bool("CHROMELOGGER_ENABLED", bool(c.get("enabled", True))),
            backtrace_level=int(os.getenv("CHROMELOGGER_BACKTRACE_LEVEL") or c.get("backtrace_level", 1)),
            header_limit=int(os.getenv("CHROMELOGGER_HEADER_LIMIT") or c.get("header_limit", 8192)),
        )
        lg = _logging_from_config()
        self.logging = LoggingSettings(
            level=str(os.getenv("CHROMELOGGER_LOG_LEVEL") or lg.get("level", "INFO")).upper(),
            console_output=bool(lg.get("console_output", True)),
            log_dir=lg.get("log_dir") or None,
        )


# 全局单例
settings = Settings()
