from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter

from ....application.ports.analysis_repo import AnalysisStore, RecordKind, StoredRecord

COLLECTIONS = {
    RecordKind.STARTUP_ANALYSIS: "startupAnalyses",
    RecordKind.DESIGN_ROAST: "designRoasts",
    RecordKind.CHAT_MESSAGE: "chatMessages",
}

# Chat messages are ordered by "timestamp", the other collections carry "createdAt"
_TIME_FIELD = {
    RecordKind.STARTUP_ANALYSIS: "createdAt",
    RecordKind.DESIGN_ROAST: "createdAt",
    RecordKind.CHAT_MESSAGE: "timestamp",
}


class FirestoreAnalysisStore(AnalysisStore):
    def __init__(self, client):
        self.client = client

    def _to_record(self, kind: RecordKind, doc) -> StoredRecord:
        data = dict(doc.to_dict() or {})
        user_id = data.pop("userId", "")
        created_at = data.pop(_TIME_FIELD[kind], None) or datetime.now(timezone.utc)
        return StoredRecord(id=doc.id, kind=kind, user_id=user_id, data=data, created_at=created_at)

    def put(self, kind: RecordKind, record: Dict[str, Any], user_id: str) -> str:
        doc = {**record, "userId": user_id, _TIME_FIELD[kind]: datetime.now(timezone.utc)}
        _, ref = self.client.collection(COLLECTIONS[kind]).add(doc)
        return ref.id

    def put_many(self, kind: RecordKind, records: List[Dict[str, Any]], user_id: str) -> List[str]:
        collection = self.client.collection(COLLECTIONS[kind])
        batch = self.client.batch()
        now = datetime.now(timezone.utc)
        ids = []
        for i, record in enumerate(records):
            ref = collection.document()
            # Distinct times keep the batch in insertion order
            batch.set(ref, {**record, "userId": user_id, _TIME_FIELD[kind]: now + timedelta(microseconds=i)})
            ids.append(ref.id)
        batch.commit()
        return ids

    def get(self, kind: RecordKind, record_id: str) -> Optional[StoredRecord]:
        snapshot = self.client.collection(COLLECTIONS[kind]).document(record_id).get()
        return self._to_record(kind, snapshot) if snapshot.exists else None

    def list_by_user(self, user_id: str) -> List[StoredRecord]:
        kind = RecordKind.CHAT_MESSAGE
        query = (
            self.client.collection(COLLECTIONS[kind])
            .where(filter=FieldFilter("userId", "==", user_id))
            .order_by(_TIME_FIELD[kind])
        )
        return [self._to_record(kind, doc) for doc in query.stream()]
