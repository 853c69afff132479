import time

from fastapi import APIRouter, Depends

from ..config import settings
from ..core.supervisor import AIConnectionSupervisor
from ..types import AppStatusResponse, McpStatusResponse, ServerInfo, SupervisorActionResponse
from .deps import get_supervisor

router = APIRouter(prefix="/api")

_STARTED_AT = time.monotonic()
MANUAL_FALLBACK_REASON = "Manual fallback activation for testing"


@router.get("/mcp-status", response_model=McpStatusResponse)
async def mcp_status(supervisor: AIConnectionSupervisor = Depends(get_supervisor)) -> McpStatusResponse:
    return McpStatusResponse(mcp=supervisor.get_status())


@router.get("/status", response_model=AppStatusResponse)
async def app_status(supervisor: AIConnectionSupervisor = Depends(get_supervisor)) -> AppStatusResponse:
    status = supervisor.get_status()
    return AppStatusResponse(
        server=ServerInfo(port=settings.port, uptime=round(time.monotonic() - _STARTED_AT, 3)),
        mcp={
            "connected": status.connected,
            "status": "active" if status.connected else "inactive",
            "fallbackMode": status.fallback_active,
            "lastError": status.last_error,
            "retryCount": status.retry_count,
            "maxRetries": status.max_retries,
            "hasModel": status.has_model,
        },
    )


@router.post("/mcp-restart", response_model=SupervisorActionResponse)
async def restart_supervisor(supervisor: AIConnectionSupervisor = Depends(get_supervisor)) -> SupervisorActionResponse:
    ok = await supervisor.restart()
    return SupervisorActionResponse(
        success=ok,
        message="AI model connection restarted successfully" if ok else "Failed to restart AI model connection",
        mcp=supervisor.get_status(),
    )


@router.post("/force-fallback", response_model=SupervisorActionResponse)
async def force_fallback(supervisor: AIConnectionSupervisor = Depends(get_supervisor)) -> SupervisorActionResponse:
    supervisor.enable_fallback_mode(MANUAL_FALLBACK_REASON)
    return SupervisorActionResponse(
        success=True,
        message="Fallback mode activated successfully",
        mcp=supervisor.get_status(),
    )
