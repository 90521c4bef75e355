"""
共享 Fixtures: 每个测试独立的请求 Session / 可控调用栈 / 配置还原。
"""

import pytest

from config.settings import settings
from chromelogger.core.session import session_scope


@pytest.fixture(autouse=True)
def restore_settings():
    """测试可随意修改 settings.chromelogger，结束后还原"""
    cfg = settings.chromelogger
    saved = (cfg.enabled, cfg.backtrace_level, cfg.header_limit)
    cfg.enabled = True
    yield cfg
    cfg.enabled, cfg.backtrace_level, cfg.header_limit = saved


@pytest.fixture(autouse=True)
def chrome_session(restore_settings):
    """每个测试一个全新的请求级 Session"""
    with session_scope(request_uri="/test?case=1", timestamp=1700000000.0) as session:
        yield session


class FakeStack:
    """按给定帧列表返回调用栈，记录每次请求的层数"""

    def __init__(self, frames):
        self.frames = list(frames)
        self.calls = []

    def __call__(self, limit):
        self.calls.append(limit)
        return self.frames[:limit]


@pytest.fixture
def fake_stack():
    return FakeStack([("/srv/app/views.py", 42), ("/srv/app/router.py", 7)])
