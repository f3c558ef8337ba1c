import json
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.application.ports.analysis_repo import RecordKind, StoredRecord
from app.application.services.fallback import FallbackGenerator
from app.core.config import Settings
from app.main import create_app


def make_settings(**overrides) -> Settings:
    values = dict(
        _env_file=None,
        GEMINI_API_KEY="",
        PERSISTENCE_BACKEND="none",
        RATE_LIMIT_PER_MINUTE=0,
    )
    values.update(overrides)
    return Settings(**values)


class FakeAI:
    def __init__(self, text: str):
        self.text = text

    async def generate_text(self, prompt: str) -> str:
        return self.text

    async def generate_from_image(self, prompt: str, image_bytes: bytes, mime_type: str) -> str:
        return self.text


class FakeStore:
    def __init__(self):
        self.rows = []

    def put(self, kind, record, user_id):
        rec = StoredRecord(str(len(self.rows) + 1), kind, user_id, dict(record), datetime.utcnow())
        self.rows.append(rec)
        return rec.id

    def put_many(self, kind, records, user_id):
        return [self.put(kind, record, user_id) for record in records]

    def get(self, kind, record_id):
        return next((r for r in self.rows if r.kind == kind and r.id == record_id), None)

    def list_by_user(self, user_id):
        return [r for r in self.rows if r.kind == RecordKind.CHAT_MESSAGE and r.user_id == user_id]


def make_client(ai_provider=None, store=None, **settings) -> TestClient:
    app = create_app(
        make_settings(**settings),
        ai_provider=ai_provider,
        store=store,
        user_repo=None,
        fallback=FallbackGenerator.seeded(7),
    )
    return TestClient(app)


def test_health_ok_in_simulation_mode():
    resp = make_client().get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_health_ok_with_model_configured():
    resp = make_client(ai_provider=FakeAI("whatever")).get("/api/health")
    assert resp.json() == {"status": "ok"}


@pytest.mark.parametrize("idea", ["AI personal shopping assistant", "x", "一个应用"])
def test_startup_analysis_shape(idea):
    resp = make_client().post("/api/startup/analyze", json={"idea": idea})
    assert resp.status_code == 200
    body = resp.json()
    assert set(body) == {"analysis", "marketFit", "techStack", "competitors", "emoji"}
    assert isinstance(body["marketFit"], int) and 1 <= body["marketFit"] <= 100
    assert body["techStack"] and all(isinstance(t, str) for t in body["techStack"])
    assert body["competitors"] and all(isinstance(c, str) for c in body["competitors"])
    assert isinstance(body["emoji"], str) and len(body["emoji"]) == 1


@pytest.mark.parametrize("payload", [{}, {"idea": ""}, {"idea": "   "}, {"idea": 42}, {"idea": ["a"]}])
def test_startup_analysis_rejects_bad_idea(payload):
    resp = make_client().post("/api/startup/analyze", json=payload)
    assert resp.status_code == 400
    assert isinstance(resp.json()["error"], str)


def test_startup_analysis_blank_idea_message():
    resp = make_client().post("/api/startup/analyze", json={"idea": ""})
    assert resp.json() == {"error": "Please provide a valid startup idea"}


def test_non_json_body_is_client_error():
    resp = make_client().post(
        "/api/startup/analyze", content=b"idea=hello", headers={"content-type": "application/json"}
    )
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_model_output_normalized_through_endpoint():
    text = 'foo{"marketFit":"77","techStack":["x"],"competitors":["y"],"analysis":"z","emoji":"🚀"}bar'
    resp = make_client(ai_provider=FakeAI(text)).post("/api/startup/analyze", json={"idea": "Rockets"})
    assert resp.status_code == 200
    assert resp.json() == {"marketFit": 77, "techStack": ["x"], "competitors": ["y"], "analysis": "z", "emoji": "🚀"}


def test_model_output_without_json_is_fallback_not_error():
    resp = make_client(ai_provider=FakeAI("Sorry, no JSON today.")).post("/api/startup/analyze", json={"idea": "Rockets"})
    assert resp.status_code == 200
    assert 50 <= resp.json()["marketFit"] <= 79


@pytest.mark.parametrize("market_fit", ["NaN", "1e999"])
def test_non_finite_market_fit_is_fallback_not_error(market_fit):
    text = '{"analysis":"a","marketFit":%s,"techStack":["x"],"competitors":["y"],"emoji":"🚀"}' % market_fit
    resp = make_client(ai_provider=FakeAI(text)).post("/api/startup/analyze", json={"idea": "Rockets"})
    assert resp.status_code == 200
    assert 50 <= resp.json()["marketFit"] <= 79


def test_design_roast_without_image():
    client = make_client()
    for _ in range(5):
        resp = client.post("/api/design/roast", json={})
        assert resp.status_code == 200
        body = resp.json()
        assert len(body["feedback"]) == 3
        assert all(item["type"] in {"positive", "negative", "warning"} for item in body["feedback"])
        assert isinstance(body["score"], int) and 1 <= body["score"] <= 10


def test_fallback_schema_is_stable_across_calls():
    client = make_client()
    first = client.post("/api/design/roast", json={}).json()
    second = client.post("/api/design/roast", json={"imageData": None}).json()
    assert set(first) == set(second)
    assert {k: type(v) for k, v in first.items()} == {k: type(v) for k, v in second.items()}


def test_model_roast_has_fallback_schema():
    roast = {
        "title": "Busy",
        "score": "6",
        "feedback": [
            {"type": "warning", "text": "a"},
            {"type": "negative", "text": "b"},
            {"type": "positive", "text": "c"},
        ],
        "suggestedFix": "Less.",
    }
    image = "data:image/png;base64,iVBORw0KGgo="
    model_body = make_client(ai_provider=FakeAI(json.dumps(roast))).post(
        "/api/design/roast", json={"imageData": image}
    ).json()
    fallback_body = make_client().post("/api/design/roast", json={"imageData": image}).json()
    assert model_body["score"] == 6
    assert {k: type(v) for k, v in model_body.items()} == {k: type(v) for k, v in fallback_body.items()}


@pytest.mark.parametrize("persona", ["past", "present", "future"])
def test_persona_chat(persona):
    resp = make_client().post("/api/chat/persona", json={"message": "How do I stay motivated?", "persona": persona})
    assert resp.status_code == 200
    body = resp.json()
    assert list(body) == ["response"]
    assert isinstance(body["response"], str) and body["response"]


@pytest.mark.parametrize(
    "payload",
    [
        {"message": "hi", "persona": "sideways"},
        {"message": "", "persona": "past"},
        {"message": "hi"},
        {"persona": "future"},
    ],
)
def test_persona_chat_rejects_bad_input(payload):
    resp = make_client().post("/api/chat/persona", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_user_id_triggers_persistence_and_history():
    store = FakeStore()
    client = make_client(store=store)
    client.post("/api/startup/analyze", json={"idea": "Tutor marketplace", "userId": "fb-1"})
    client.post("/api/design/roast", json={"userId": "fb-1"})
    client.post("/api/chat/persona", json={"message": "Hello?", "persona": "past", "userId": "fb-1"})
    client.post("/api/chat/persona", json={"message": "Anyone?", "persona": "past"})
    assert [r.kind for r in store.rows] == [
        RecordKind.STARTUP_ANALYSIS,
        RecordKind.DESIGN_ROAST,
        RecordKind.CHAT_MESSAGE,
        RecordKind.CHAT_MESSAGE,
    ]

    analysis = client.get("/api/startup/analyses/1")
    assert analysis.status_code == 200
    assert analysis.json()["idea"] == "Tutor marketplace"
    assert analysis.json()["userId"] == "fb-1"

    roast = client.get("/api/design/roasts/2")
    assert roast.status_code == 200
    assert roast.json()["imageUrl"] is None

    history = client.get("/api/chat/history/fb-1").json()["messages"]
    assert [m["sender"] for m in history] == ["user", "past"]


def test_unknown_record_is_404():
    resp = make_client(store=FakeStore()).get("/api/design/roasts/404")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Design roast not found"}


def test_retrieval_without_persistence_is_503():
    resp = make_client().get("/api/chat/history/fb-1")
    assert resp.status_code == 503


def test_persistence_failure_is_500():
    class BrokenStore(FakeStore):
        def put(self, kind, record, user_id):
            raise RuntimeError("disk full")

    resp = make_client(store=BrokenStore()).post("/api/startup/analyze", json={"idea": "x", "userId": "fb-1"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to analyze startup idea"}


def test_rate_limit_exempts_health():
    client = make_client(RATE_LIMIT_PER_MINUTE=2)
    assert client.post("/api/design/roast", json={}).status_code == 200
    assert client.post("/api/design/roast", json={}).status_code == 200
    limited = client.post("/api/design/roast", json={})
    assert limited.status_code == 429
    assert "error" in limited.json()
    assert client.get("/api/health").status_code == 200


def test_oversized_request_rejected():
    resp = make_client(MAX_REQUEST_SIZE=100).post("/api/startup/analyze", json={"idea": "x" * 500})
    assert resp.status_code == 413


def test_sql_backend_end_to_end():
    app = create_app(
        make_settings(PERSISTENCE_BACKEND="sql", DATABASE_URL="sqlite://"),
        ai_provider=None,
        fallback=FallbackGenerator.seeded(1),
    )
    with TestClient(app) as client:
        created = client.post("/api/users", json={"uid": "fb-9", "username": "Rizul"})
        assert created.status_code == 200
        assert client.get("/api/users/fb-9").json()["username"] == "Rizul"
        assert client.get("/api/users/nobody").status_code == 404

        client.post("/api/chat/persona", json={"message": "Hi", "persona": "present", "userId": "fb-9"})
        messages = client.get("/api/chat/history/fb-9").json()["messages"]
        assert [m["sender"] for m in messages] == ["user", "present"]

        detailed = client.get("/api/health/detailed").json()
        assert detailed["ai"] == "simulation"
        assert detailed["database"]["ok"] is True


def test_run_serves_on_configured_host_and_port(monkeypatch):
    import uvicorn
    from app.main import run

    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda target, **kwargs: calls.append((target, kwargs)))
    run(make_settings(HOST="127.0.0.1", PORT=9123))
    assert calls == [("app.main:app", {"host": "127.0.0.1", "port": 9123, "workers": 1, "log_level": "info"})]
