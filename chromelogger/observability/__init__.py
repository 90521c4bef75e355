"""
Observability 模块：FastAPI 中间件接入 + Prometheus metrics。

用法：
    from chromelogger.observability import setup_chromelogger, metrics

    setup_chromelogger(app)
"""

from chromelogger.observability.metrics import metrics
from chromelogger.observability.middleware import ChromeLoggerMiddleware
from chromelogger.observability.setup import setup_chromelogger

__all__ = ["setup_chromelogger", "ChromeLoggerMiddleware", "metrics"]
