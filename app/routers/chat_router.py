from fastapi import APIRouter, Depends, HTTPException
import logging

from ..application.services.analysis_service import AnalysisService
from ..schemas.chat.chat import PersonaChatRequest, PersonaReply, ChatHistoryResponse
from ..schemas.common.common import ErrorResponse
from .dependencies import get_analysis_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/chat", tags=["Time Portal"])


@router.post("/persona", response_model=PersonaReply, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def chat_with_persona(
    body: PersonaChatRequest,
    service: AnalysisService = Depends(get_analysis_service),
):
    try:
        return await service.persona_reply(body.message, body.persona, user_id=body.userId)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Error generating persona response")
        raise HTTPException(status_code=500, detail="Failed to generate response")


@router.get("/history/{user_id}", response_model=ChatHistoryResponse)
def get_chat_history(
    user_id: str,
    service: AnalysisService = Depends(get_analysis_service),
):
    """Stored chat messages of a user, oldest first."""
    return {"messages": service.chat_history(user_id)}
