"""
FastAPI 中间件：每个 HTTP 请求一个 Chrome Logger Session，响应时写出 header。
"""

import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from chromelogger.core.session import session_scope
from chromelogger.log import get_logger

logger = get_logger(__name__)

_SKIP_PATHS = ("/metrics", "/health")


def _request_uri(request: Request) -> str:
    """path + query，与 REQUEST_URI 一致"""
    uri = request.url.path
    if request.url.query:
        uri = f"{uri}?{request.url.query}"
    return uri


class ChromeLoggerMiddleware(BaseHTTPMiddleware):
    """为请求安装独立 Session；handler 内的 log 调用写入该 Session，响应前拷贝 header。"""

    async def dispatch(self, request: Request, call_next):
        # 跳过 /metrics 和 /health 本身，避免自引用噪音
        if request.url.path in _SKIP_PATHS:
            return await call_next(request)

        with session_scope(request_uri=_request_uri(request), timestamp=time.time()) as session:
            response: Response = await call_next(request)

        for name, value in session.headers.items():
            response.headers[name] = value
        if session.rows:
            logger.debug(
                "[middleware] %s %s → %d row(s) emitted",
                request.method, session.request_uri, len(session.rows),
            )
        return response
