from datetime import datetime, timedelta, timezone
import itertools

import pytest

from app.application.ports.analysis_repo import RecordKind
from app.infrastructure.persistence.firestore.analysis_repository_firestore import FirestoreAnalysisStore
from app.infrastructure.persistence.firestore.user_repository_firestore import FirestoreUserRepository

_ids = itertools.count(1)


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocRef:
    def __init__(self, collection, doc_id):
        self.collection = collection
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self.id, self.collection.docs.get(self.id))

    def set(self, data):
        self.collection.docs[self.id] = dict(data)


class FakeQuery:
    def __init__(self, collection, filters=(), order=None):
        self.collection = collection
        self.filters = list(filters)
        self.order = order

    def where(self, filter):
        self.collection.client.queries.append((filter.field_path, filter.op_string, filter.value))
        return FakeQuery(self.collection, self.filters + [filter], self.order)

    def order_by(self, field):
        return FakeQuery(self.collection, self.filters, field)

    def stream(self):
        docs = [
            FakeSnapshot(doc_id, data)
            for doc_id, data in self.collection.docs.items()
            if all(data.get(f.field_path) == f.value for f in self.filters)
        ]
        if self.order:
            docs.sort(key=lambda s: s.to_dict()[self.order])
        return iter(docs)


class FakeCollection(FakeQuery):
    def __init__(self, client, name):
        self.client = client
        self.name = name
        self.docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocRef(self, doc_id or f"doc{next(_ids)}")

    def add(self, data):
        ref = self.document()
        ref.set(data)
        return datetime.now(timezone.utc), ref


class FakeBatch:
    def __init__(self, client):
        self.client = client
        self.writes = []

    def set(self, ref, data):
        self.writes.append((ref, data))

    def commit(self):
        if self.client.fail_commit:
            raise RuntimeError("deadline exceeded")
        for ref, data in self.writes:
            ref.set(data)


class FakeFirestore:
    def __init__(self):
        self.collections = {}
        self.queries = []
        self.fail_commit = False

    def collection(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(self, name)
        return self.collections[name]

    def batch(self):
        return FakeBatch(self)


STARTUP = {
    "idea": "Meal planner",
    "analysis": "Crowded but viable.",
    "marketFit": 64,
    "techStack": ["React Native"],
    "competitors": ["Mealime"],
    "emoji": "🚀",
}


@pytest.fixture
def client():
    return FakeFirestore()


def test_records_go_to_named_collections(client):
    store = FirestoreAnalysisStore(client)
    store.put(RecordKind.STARTUP_ANALYSIS, STARTUP, "u1")
    store.put(RecordKind.DESIGN_ROAST, {"imageUrl": None, "title": "Busy", "score": 4}, "u1")
    store.put(RecordKind.CHAT_MESSAGE, {"sender": "user", "message": "hi"}, "u1")
    assert sorted(client.collections) == ["chatMessages", "designRoasts", "startupAnalyses"]


def test_time_field_depends_on_kind(client):
    store = FirestoreAnalysisStore(client)
    store.put(RecordKind.STARTUP_ANALYSIS, STARTUP, "u1")
    store.put(RecordKind.CHAT_MESSAGE, {"sender": "user", "message": "hi"}, "u1")
    (analysis,) = client.collection("startupAnalyses").docs.values()
    (chat,) = client.collection("chatMessages").docs.values()
    assert isinstance(analysis["createdAt"], datetime) and "timestamp" not in analysis
    assert isinstance(chat["timestamp"], datetime) and "createdAt" not in chat
    assert analysis["userId"] == chat["userId"] == "u1"


def test_get_round_trip(client):
    store = FirestoreAnalysisStore(client)
    record_id = store.put(RecordKind.STARTUP_ANALYSIS, STARTUP, "u1")
    record = store.get(RecordKind.STARTUP_ANALYSIS, record_id)
    assert record.id == record_id
    assert record.user_id == "u1"
    assert record.data == STARTUP
    assert record.to_dict()["marketFit"] == 64
    assert store.get(RecordKind.STARTUP_ANALYSIS, "missing") is None
    assert store.get(RecordKind.DESIGN_ROAST, record_id) is None


def test_chat_history_filters_by_user_and_orders_by_timestamp(client):
    store = FirestoreAnalysisStore(client)
    chats = client.collection("chatMessages")
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    chats.docs["late"] = {"sender": "past", "message": "two", "userId": "u1", "timestamp": base + timedelta(minutes=5)}
    chats.docs["early"] = {"sender": "user", "message": "one", "userId": "u1", "timestamp": base}
    chats.docs["other"] = {"sender": "user", "message": "x", "userId": "u2", "timestamp": base}

    history = store.list_by_user("u1")
    assert [r.data["message"] for r in history] == ["one", "two"]
    assert history[0].created_at == base
    assert "timestamp" not in history[0].data
    assert client.queries[-1] == ("userId", "==", "u1")


def test_put_many_commits_in_one_batch_in_order(client):
    store = FirestoreAnalysisStore(client)
    ids = store.put_many(
        RecordKind.CHAT_MESSAGE,
        [{"sender": "user", "message": "ping"}, {"sender": "future", "message": "pong"}],
        "u1",
    )
    assert len(ids) == 2
    assert [r.data["message"] for r in store.list_by_user("u1")] == ["ping", "pong"]


def test_failed_batch_stores_nothing(client):
    client.fail_commit = True
    store = FirestoreAnalysisStore(client)
    with pytest.raises(RuntimeError):
        store.put_many(RecordKind.CHAT_MESSAGE, [{"sender": "user", "message": "lost"}], "u1")
    assert client.collection("chatMessages").docs == {}


def test_user_profiles(client):
    repo = FirestoreUserRepository(client)
    assert repo.get_by_uid("fb-1") is None
    created = repo.create("fb-1", "Rizul")
    stored = client.collection("users").docs["fb-1"]
    assert stored["uid"] == "fb-1" and stored["username"] == "Rizul"
    profile = repo.get_by_uid("fb-1")
    assert profile.username == "Rizul"
    assert profile.created_at == created.created_at
