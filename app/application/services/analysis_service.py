from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

from ..ports.analysis_repo import AnalysisStore, RecordKind, StoredRecord
from ...schemas.chat.chat import Persona, PersonaReply
from ...schemas.design.design import DesignRoastResult
from ...schemas.startup.startup import StartupAnalysisResult
from .ai_response_service import AIResponseService

logger = logging.getLogger(__name__)

_VALID_PERSONAS = ", ".join(p.value for p in Persona)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


@dataclass
class AnalysisService:
    ai: AIResponseService
    store: Optional[AnalysisStore] = None

    async def analyze_startup(self, idea: Any, user_id: Optional[str] = None) -> StartupAnalysisResult:
        if _is_blank(idea):
            raise HTTPException(status_code=400, detail="Please provide a valid startup idea")

        result = await self.ai.analyze_startup(idea)

        if self._should_persist(user_id):
            record_id = self.store.put(
                RecordKind.STARTUP_ANALYSIS,
                {"idea": idea, **result.model_dump(mode="json")},
                user_id,
            )
            logger.info(f"Stored startup analysis {record_id} for user {user_id}")
        return result

    async def roast_design(self, image_data: Optional[str], user_id: Optional[str] = None) -> DesignRoastResult:
        result = await self.ai.roast_design(image_data)

        if self._should_persist(user_id):
            # Only the critique is kept; uploaded images are not stored
            record_id = self.store.put(
                RecordKind.DESIGN_ROAST,
                {"imageUrl": None, **result.model_dump(mode="json")},
                user_id,
            )
            logger.info(f"Stored design roast {record_id} for user {user_id}")
        return result

    async def persona_reply(self, message: Any, persona: Any, user_id: Optional[str] = None) -> PersonaReply:
        if _is_blank(message):
            raise HTTPException(status_code=400, detail="Please provide a message")
        try:
            persona = Persona(persona)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Please provide a valid persona ({_VALID_PERSONAS})")

        reply = await self.ai.persona_reply(message, persona)

        if self._should_persist(user_id):
            self.store.put_many(
                RecordKind.CHAT_MESSAGE,
                [
                    {"sender": "user", "message": message},
                    {"sender": persona.value, "message": reply.response},
                ],
                user_id,
            )
        return reply

    def get_startup_analysis(self, record_id: str) -> Dict[str, Any]:
        return self._get(RecordKind.STARTUP_ANALYSIS, record_id, "Startup analysis not found")

    def get_design_roast(self, record_id: str) -> Dict[str, Any]:
        return self._get(RecordKind.DESIGN_ROAST, record_id, "Design roast not found")

    def chat_history(self, user_id: str) -> List[Dict[str, Any]]:
        store = self._require_store()
        return [r.to_dict() for r in store.list_by_user(user_id)]

    def _get(self, kind: RecordKind, record_id: str, not_found: str) -> Dict[str, Any]:
        record: Optional[StoredRecord] = self._require_store().get(kind, record_id)
        if record is None:
            raise HTTPException(status_code=404, detail=not_found)
        return record.to_dict()

    def _require_store(self) -> AnalysisStore:
        if self.store is None:
            raise HTTPException(status_code=503, detail="Persistence is not configured")
        return self.store

    def _should_persist(self, user_id: Optional[str]) -> bool:
        if not user_id:
            return False
        if self.store is None:
            logger.debug(f"Persistence disabled; not storing result for user {user_id}")
            return False
        return True
