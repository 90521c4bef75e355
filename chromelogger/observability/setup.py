"""
一键接入：注册 Chrome Logger 中间件 + debug 路由。
"""

from fastapi import FastAPI

from chromelogger.observability.middleware import ChromeLoggerMiddleware
from chromelogger.log import get_logger

logger = get_logger(__name__)


def setup_chromelogger(app: FastAPI, debug_routes: bool = True) -> None:
    """
    在 FastAPI app 上挂载 Chrome Logger 组件。

    应在 router 注册之后、启动之前调用。
    """
    # 1. 注册中间件
    app.add_middleware(ChromeLoggerMiddleware)

    # 2. 注册 /debug/chromelogger/* 端点
    if debug_routes:
        from chromelogger.api.routes_debug import router as debug_router
        app.include_router(debug_router)

    logger.info("[chromelogger] middleware%s registered", " + debug routes" if debug_routes else "")
