"""
Debug API：热切换 Chrome Logger 输出，查看当前配置。
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from config.settings import settings

router = APIRouter(tags=["debug"])


class ToggleRequest(BaseModel):
    enabled: bool = Field(False, description="是否向浏览器输出日志")


class StatusResponse(BaseModel):
    enabled: bool
    header_limit: int = Field(..., description="header 行长度上限（字节）")
    backtrace_level: int = Field(..., description="默认调用栈层级，1 = 直接调用者")


@router.post("/debug/chromelogger/toggle")
def toggle_chromelogger(body: ToggleRequest) -> dict:
    """热切换 Chrome Logger 输出（无需重启）。"""
    settings.chromelogger.enabled = body.enabled
    return {"ok": True, "enabled": body.enabled}


@router.get("/debug/chromelogger/status", response_model=StatusResponse)
def chromelogger_status() -> StatusResponse:
    """查看当前 Chrome Logger 配置。"""
    cfg = settings.chromelogger
    return StatusResponse(
        enabled=cfg.enabled,
        header_limit=cfg.header_limit,
        backtrace_level=cfg.backtrace_level,
    )
