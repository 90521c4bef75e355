"""
Session / 设置项单元测试：惰性单例、请求隔离、add_setting / get_setting
"""

import contextvars
import threading

import chromelogger
from config.settings import settings
from chromelogger.core.models import BACKTRACE_LEVEL
from chromelogger.core.session import Session, current_session, get_session, session_scope


# ── 设置项 ──

class TestSettings:
    def test_missing_setting_is_none(self, chrome_session):
        assert chrome_session.get_setting("nonexistent") is None

    def test_round_trip(self, chrome_session):
        marker = object()
        chrome_session.add_setting("custom", marker)
        assert chrome_session.get_setting("custom") is marker

    def test_add_settings(self, chrome_session):
        chrome_session.add_settings({"a": 1, BACKTRACE_LEVEL: 3})
        assert chrome_session.get_setting("a") == 1
        assert chrome_session.get_setting(BACKTRACE_LEVEL) == 3

    def test_default_backtrace_level_from_config(self, restore_settings):
        restore_settings.backtrace_level = 4
        assert Session().get_setting(BACKTRACE_LEVEL) == 4

    def test_constructor_settings(self):
        session = Session(settings={BACKTRACE_LEVEL: 2, "x": "y"})
        assert session.settings == {BACKTRACE_LEVEL: 2, "x": "y"}

    def test_module_level_api(self, chrome_session):
        assert chromelogger.get_setting("nonexistent") is None
        chromelogger.add_setting("k", [1, 2])
        chromelogger.add_settings({"j": "v"})
        assert chrome_session.get_setting("k") == [1, 2]
        assert chromelogger.get_setting("j") == "v"

    def test_settings_not_shared_between_sessions(self):
        first, second = Session(), Session()
        first.add_setting(BACKTRACE_LEVEL, 9)
        assert second.get_setting(BACKTRACE_LEVEL) == settings.chromelogger.backtrace_level


# ── 作用域 ──

class TestSessionScope:
    def test_get_session_returns_scoped_instance(self, chrome_session):
        assert get_session() is chrome_session
        assert get_session() is get_session()

    def test_request_info_captured_once(self, chrome_session):
        assert chrome_session.request_uri == "/test?case=1"
        assert chrome_session.timestamp == 1700000000.0

    def test_nested_scope_restores_previous(self, chrome_session):
        with session_scope(request_uri="/inner") as inner:
            assert get_session() is inner
            chromelogger.log("inner only")
        assert get_session() is chrome_session
        assert len(inner.rows) == 1
        assert chrome_session.rows == []

    def test_lazy_creation_in_fresh_context(self, chrome_session):
        seen = {}

        def worker():
            seen["before"] = current_session()
            seen["session"] = get_session()
            seen["again"] = get_session()

        thread = threading.Thread(target=lambda: contextvars.Context().run(worker))
        thread.start()
        thread.join()

        assert seen["before"] is None
        assert seen["session"] is seen["again"]
        assert seen["session"] is not chrome_session

    def test_headers_replaced_not_appended(self):
        session = Session()
        session.set_header("X-Test", "1")
        session.set_header("X-Test", "2")
        assert session.headers == {"X-Test": "2"}
