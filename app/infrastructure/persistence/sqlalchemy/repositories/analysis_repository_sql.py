from typing import Any, Dict, List, Optional
from sqlalchemy.engine import Engine
from sqlmodel import select

from .....db.models import StartupAnalysis, DesignRoast, ChatMessage
from .....db.session import session_scope
from .....application.ports.analysis_repo import AnalysisStore, RecordKind, StoredRecord


def _to_row(kind: RecordKind, record: Dict[str, Any], user_id: str):
    if kind == RecordKind.STARTUP_ANALYSIS:
        return StartupAnalysis(
            user_id=user_id,
            idea=record["idea"],
            analysis=record["analysis"],
            market_fit=record["marketFit"],
            tech_stack=list(record["techStack"]),
            competitors=list(record["competitors"]),
            emoji=record["emoji"],
        )
    if kind == RecordKind.DESIGN_ROAST:
        return DesignRoast(
            user_id=user_id,
            image_url=record.get("imageUrl"),
            title=record["title"],
            score=record["score"],
            feedback=[dict(item) for item in record["feedback"]],
            suggested_fix=record["suggestedFix"],
        )
    return ChatMessage(user_id=user_id, sender=record["sender"], message=record["message"])


def _to_data(kind: RecordKind, row) -> Dict[str, Any]:
    if kind == RecordKind.STARTUP_ANALYSIS:
        return {
            "idea": row.idea,
            "analysis": row.analysis,
            "marketFit": row.market_fit,
            "techStack": list(row.tech_stack or []),
            "competitors": list(row.competitors or []),
            "emoji": row.emoji,
        }
    if kind == RecordKind.DESIGN_ROAST:
        return {
            "imageUrl": row.image_url,
            "title": row.title,
            "score": row.score,
            "feedback": list(row.feedback or []),
            "suggestedFix": row.suggested_fix,
        }
    return {"sender": row.sender, "message": row.message}


_TABLES = {
    RecordKind.STARTUP_ANALYSIS: StartupAnalysis,
    RecordKind.DESIGN_ROAST: DesignRoast,
    RecordKind.CHAT_MESSAGE: ChatMessage,
}


class SqlAnalysisStore(AnalysisStore):
    def __init__(self, engine: Engine):
        self.engine = engine

    def _to_record(self, kind: RecordKind, row) -> StoredRecord:
        return StoredRecord(
            id=str(row.id),
            kind=kind,
            user_id=row.user_id,
            data=_to_data(kind, row),
            created_at=row.created_at,
        )

    def put(self, kind: RecordKind, record: Dict[str, Any], user_id: str) -> str:
        row = _to_row(kind, record, user_id)
        with session_scope(self.engine) as session:
            session.add(row)
            session.commit()
            session.refresh(row)
            return str(row.id)

    def put_many(self, kind: RecordKind, records: List[Dict[str, Any]], user_id: str) -> List[str]:
        rows = [_to_row(kind, record, user_id) for record in records]
        with session_scope(self.engine) as session:
            session.add_all(rows)
            session.commit()
            for row in rows:
                session.refresh(row)
            return [str(row.id) for row in rows]

    def get(self, kind: RecordKind, record_id: str) -> Optional[StoredRecord]:
        try:
            pk = int(record_id)
        except (TypeError, ValueError):
            return None
        with session_scope(self.engine) as session:
            row = session.get(_TABLES[kind], pk)
            return self._to_record(kind, row) if row else None

    def list_by_user(self, user_id: str) -> List[StoredRecord]:
        with session_scope(self.engine) as session:
            rows = session.exec(
                select(ChatMessage)
                .where(ChatMessage.user_id == user_id)
                .order_by(ChatMessage.created_at, ChatMessage.id)
            ).all()
            return [self._to_record(RecordKind.CHAT_MESSAGE, r) for r in rows]
