from fastapi import APIRouter, Depends, HTTPException

from ..config import settings
from ..providers.tatum import TatumProvider
from ..types import ApiKeyTestRequest, ApiKeyTestResponse
from .deps import get_data_provider

router = APIRouter(prefix="/api")


@router.post("/test-key", response_model=ApiKeyTestResponse)
async def test_key(body: ApiKeyTestRequest, provider: TatumProvider = Depends(get_data_provider)) -> ApiKeyTestResponse:
    if not body.api_key:
        raise HTTPException(status_code=400, detail="API key is required")
    return ApiKeyTestResponse(**await provider.test_api_key(body.api_key))


@router.get("/test-current-key", response_model=ApiKeyTestResponse)
async def test_current_key(provider: TatumProvider = Depends(get_data_provider)) -> ApiKeyTestResponse:
    if not settings.has_tatum_key:
        return ApiKeyTestResponse(
            success=False,
            message="API key not configured",
            error="Please set TATUM_API_KEY in your .env file",
        )
    return ApiKeyTestResponse(**await provider.test_api_key())
