"""
配置加载 / 日志管理测试
"""

import logging

from config import settings as settings_module
from chromelogger.log import LogManager


# ── 配置 ──

class TestSettings:
    def test_deep_merge(self):
        merged = settings_module._deep_merge(
            {"chromelogger": {"enabled": True, "header_limit": 8192}, "logging": {"level": "INFO"}},
            {"chromelogger": {"header_limit": 16384}},
        )
        assert merged == {
            "chromelogger": {"enabled": True, "header_limit": 16384},
            "logging": {"level": "INFO"},
        }

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CHROMELOGGER_HEADER_LIMIT", "4096")
        monkeypatch.setenv("CHROMELOGGER_BACKTRACE_LEVEL", "2")
        monkeypatch.setenv("CHROMELOGGER_ENABLED", "false")
        fresh = settings_module.Settings()
        assert fresh.chromelogger.header_limit == 4096
        assert fresh.chromelogger.backtrace_level == 2
        assert fresh.chromelogger.enabled is False

    def test_defaults(self, monkeypatch):
        for name in ("CHROMELOGGER_HEADER_LIMIT", "CHROMELOGGER_BACKTRACE_LEVEL", "CHROMELOGGER_ENABLED"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr(settings_module, "_RAW_CONFIG", {})
        fresh = settings_module.Settings()
        assert fresh.chromelogger.header_limit == 8192
        assert fresh.chromelogger.backtrace_level == 1
        assert fresh.chromelogger.enabled is True
        assert fresh.logging.log_dir is None


# ── 日志管理 ──

class TestLogManager:
    def test_console_only(self):
        manager = LogManager({"level": "debug", "console_output": True})
        logger = manager.get_logger("chromelogger.tests.console")
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
        assert manager.log_file is None

    def test_file_output(self, tmp_path):
        manager = LogManager({"log_dir": str(tmp_path), "console_output": False})
        logger = manager.get_logger("chromelogger.tests.file")
        logger.info("written")
        for handler in logger.handlers:
            handler.flush()
        assert "written" in (tmp_path / "chromelogger.log").read_text(encoding="utf-8")

    def test_silent_without_outputs(self):
        manager = LogManager({"console_output": False})
        logger = manager.get_logger("chromelogger.tests.silent")
        assert [type(h) for h in logger.handlers] == [logging.NullHandler]
