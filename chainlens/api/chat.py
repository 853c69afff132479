from fastapi import APIRouter, Depends

from ..core.responder import ChatResponder
from ..types import ChatRequest, ChatResponse
from .deps import get_responder

router = APIRouter(prefix="/api")


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(request: ChatRequest, responder: ChatResponder = Depends(get_responder)) -> ChatResponse:
    """Answer a chat message; falls back to canned replies when the model is down"""

    outcome = await responder.classify_and_respond(request.message)
    return ChatResponse(
        response=outcome.text,
        mcp_connected=outcome.connected,
        fallback_mode=outcome.fallback_active,
        last_error=outcome.last_error,
        status=outcome.status_label,
        used_model=outcome.used_model,
        intent=outcome.intent.category.value if outcome.intent else None,
    )
