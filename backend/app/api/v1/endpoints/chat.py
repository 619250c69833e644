from fastapi import APIRouter, Depends, Request

from app.api.deps import get_chat_service
from app.core.rate_limiting import limiter, RATE_LIMITS
from app.schemas.brief import ChatRequest, ChatResponse
from app.services.chat import ChatService

router = APIRouter()

@router.post("/chat", response_model=ChatResponse)
@limiter.limit(RATE_LIMITS["chat"])
async def chat_about_brief(
    request: Request,
    payload: ChatRequest,
    chat_service: ChatService = Depends(get_chat_service)
):
    """
    Answer a question using only a case brief, given inline or by job id
    """
    answer = await chat_service.answer(payload.userMessage, brief=payload.brief, brief_id=payload.briefId)
    return ChatResponse(answer=answer)
