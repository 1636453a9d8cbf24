"""HTTP surface tests using FastAPI's TestClient."""


class TestClarifyRoutes:

    def test_health(self, client):
        assert client.get("/api/health").json() == {"ok": True}

    def test_start_reply_complete(self, client, generic_meeting_parse):
        response = client.post("/api/voice/clarify/start", json={
            "session_id": "voice-1",
            "parsed": generic_meeting_parse,
            "missing_fields": ["title", "time", "duration"],
        })
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "awaiting_clarification"
        assert body["pending_fields"] == ["title", "time", "duration"]
        assert body["question"]["field_name"] == "title"

        body = client.post("/api/voice/clarify/reply", json={
            "session_id": "voice-1",
            "parsed": {},
            "transcript": "call it Team Standup",
        }).json()
        assert body["draft"]["title"] == "Team Standup"
        assert body["pending_fields"] == ["time", "duration"]
        assert body["answered_field"] == "title"
        assert body["question"]["field_name"] == "due_time"

        body = client.post("/api/voice/clarify/reply", json={
            "session_id": "voice-1",
            "parsed": {"start_time": "09:30:00", "duration_minutes": 30},
            "transcript": "nine thirty for half an hour",
        }).json()
        assert body["status"] == "complete"
        assert body["draft"]["due_time"] == "09:30:00"
        assert body["draft"]["duration_minutes"] == 30
        assert body["question"] is None

    def test_get_snapshot(self, client):
        client.post("/api/voice/clarify/start", json={
            "session_id": "voice-2", "parsed": {}, "missing_fields": ["date"]})
        body = client.get("/api/voice/clarify/voice-2").json()
        assert body["pending_fields"] == ["date"]
        assert body["turns"] == 0

    def test_reply_without_session(self, client):
        response = client.post("/api/voice/clarify/reply", json={
            "session_id": "nope", "parsed": {}, "transcript": "Team Standup"})
        assert response.status_code == 404

    def test_reply_when_complete(self, client):
        client.post("/api/voice/clarify/start", json={
            "session_id": "voice-3", "parsed": {"title": "Retro"}, "missing_fields": []})
        response = client.post("/api/voice/clarify/reply", json={
            "session_id": "voice-3", "parsed": {}, "transcript": "Retro"})
        assert response.status_code == 409

    def test_abort(self, client):
        client.post("/api/voice/clarify/start", json={
            "session_id": "voice-4", "parsed": {}, "missing_fields": ["title"]})
        assert client.delete("/api/voice/clarify/voice-4").status_code == 200
        assert client.get("/api/voice/clarify/voice-4").status_code == 404

    def test_invalid_body(self, client):
        response = client.post("/api/voice/clarify/start", json={"session_id": ""})
        assert response.status_code == 422
