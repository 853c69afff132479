from fastapi import APIRouter, Depends

from ..providers.tatum import TatumProvider
from ..services.analytics import get_network_analytics
from ..types import AnalyticsResponse
from .deps import get_data_provider

router = APIRouter(prefix="/api")


@router.get("/analytics", response_model=AnalyticsResponse)
async def analytics(provider: TatumProvider = Depends(get_data_provider)) -> AnalyticsResponse:
    """Gas price and block height for every supported chain"""
    return AnalyticsResponse(data=await get_network_analytics(provider))
