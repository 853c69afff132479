from typing import Any, Dict

from fastapi import APIRouter, Depends

from ..core.supervisor import AIConnectionSupervisor
from ..providers.tatum import TatumProvider
from .deps import get_data_provider, get_supervisor

router = APIRouter()


@router.get("/healthz")
async def health_check(
    provider: TatumProvider = Depends(get_data_provider),
    supervisor: AIConnectionSupervisor = Depends(get_supervisor),
) -> Dict[str, Any]:
    """Data provider health plus the model connection state"""

    data_status = await provider.health_check()
    model_status = supervisor.get_status()

    if data_status["status"] == "healthy" and model_status.connected:
        overall = "healthy"
    else:
        overall = "degraded"

    return {
        "status": overall,
        "providers": {"tatum": data_status},
        "model": model_status.model_dump(by_alias=True),
    }
