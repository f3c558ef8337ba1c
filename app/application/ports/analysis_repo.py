from typing import Any, Dict, List, Optional, Protocol
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class RecordKind(str, Enum):
    STARTUP_ANALYSIS = "startup_analysis"
    DESIGN_ROAST = "design_roast"
    CHAT_MESSAGE = "chat_message"


@dataclass
class StoredRecord:
    id: str
    kind: RecordKind
    user_id: str
    data: Dict[str, Any]
    created_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            **self.data,
            "userId": self.user_id,
            "createdAt": self.created_at.isoformat(),
        }


class AnalysisStore(Protocol):
    def put(self, kind: RecordKind, record: Dict[str, Any], user_id: str) -> str:
        ...

    def put_many(self, kind: RecordKind, records: List[Dict[str, Any]], user_id: str) -> List[str]:
        """Store several records of one kind together; none are kept if any fails."""
        ...

    def get(self, kind: RecordKind, record_id: str) -> Optional[StoredRecord]:
        ...

    def list_by_user(self, user_id: str) -> List[StoredRecord]:
        """Chat messages of a user, oldest first."""
        ...
