"""
Tests for note endpoints and note summaries.
"""
import asyncio
import threading
import httpx
from app.core.config import settings
from app.models.note import Note
from app.services import summary_service


def _create_note(client, headers, **fields):
    payload = {"title": "Packing", "content": "Passport, adapters, rain jacket"}
    payload.update(fields)
    response = client.post("/api/notes", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()


def _mock_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_create_trip_note(client, alice_headers, trip):
    note = _create_note(client, alice_headers, trip_id=trip["id"])
    assert note["trip_id"] == trip["id"]
    assert note["date"].endswith("Z")
    assert note["summary"] is None


def test_standalone_notes_are_listed_per_user(client, alice_headers, bob_headers, trip):
    """Test that only the caller's notes without a trip are listed."""
    mine = _create_note(client, alice_headers)
    _create_note(client, alice_headers, trip_id=trip["id"])
    _create_note(client, bob_headers)
    
    response = client.get("/api/notes", headers=alice_headers)
    assert [n["id"] for n in response.json()] == [mine["id"]]


def test_list_trip_notes_newest_first(client, alice_headers, trip):
    first = _create_note(client, alice_headers, trip_id=trip["id"])
    second = _create_note(client, alice_headers, trip_id=trip["id"])
    
    response = client.get(f"/api/notes/trip/{trip['id']}", headers=alice_headers)
    assert [n["id"] for n in response.json()] == [second["id"], first["id"]]


def test_update_and_delete_note(client, alice_headers):
    note = _create_note(client, alice_headers)
    
    response = client.patch(f"/api/notes/{note['id']}", json={"content": "Just the passport"}, headers=alice_headers)
    assert response.status_code == 200
    assert response.json()["content"] == "Just the passport"
    
    assert client.delete(f"/api/notes/{note['id']}", headers=alice_headers).status_code == 200
    assert client.get(f"/api/notes/{note['id']}", headers=alice_headers).status_code == 404


def test_update_missing_note_returns_404(client, alice_headers):
    response = client.patch("/api/notes/999", json={"content": "x"}, headers=alice_headers)
    assert response.status_code == 404


def test_summary_without_keys_stores_message(client, alice_headers):
    """Test that a missing configuration is stored as the summary."""
    note = _create_note(client, alice_headers, is_summary=True)
    
    stored = client.get(f"/api/notes/{note['id']}", headers=alice_headers).json()
    assert stored["summary"] == summary_service.missing_keys_message()


def test_summary_available(client, alice_headers, monkeypatch):
    response = client.get("/api/notes/summary-available", headers=alice_headers)
    assert response.json() == {"available": False}
    
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    response = client.get("/api/notes/summary-available", headers=alice_headers)
    assert response.json() == {"available": True}


def test_cohere_summary(monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    seen = []
    
    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"generations": [{"text": "Bring a passport."}]})
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    
    assert summary == "Bring a passport."
    assert len(seen) == 1
    assert seen[0].headers["Authorization"] == "Bearer co-key"


def test_cohere_failure_falls_back_to_huggingface(monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", "hf-key")
    
    def handler(request):
        if request.url == httpx.URL(settings.COHERE_API_URL):
            return httpx.Response(500, text="unavailable")
        return httpx.Response(200, json=[{"generated_text": "Passport first."}])
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    assert summary == "Passport first."


def test_cohere_failure_without_fallback(monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    
    def handler(request):
        return httpx.Response(429, text="rate limited")
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    assert summary == summary_service.ERROR_SUMMARY


def test_huggingface_error_status(monkeypatch):
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", "hf-key")
    
    def handler(request):
        return httpx.Response(503, json={"error": "loading"})
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    assert summary == summary_service.ERROR_SUMMARY


def test_empty_generation(monkeypatch):
    monkeypatch.setattr(settings, "HUGGINGFACE_API_KEY", "hf-key")
    
    def handler(request):
        return httpx.Response(200, json=[])
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    assert summary == summary_service.NO_SUMMARY


def test_transport_error(monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)
    
    summary = asyncio.run(summary_service.request_summary("Packing", "Passport", client=_mock_client(handler)))
    assert summary == summary_service.ERROR_SUMMARY


def test_summarize_note_stores_result(db_session, monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    note = Note(created_by=1, title="Packing", content="Passport", date="2024-04-01T00:00:00.000Z")
    db_session.add(note)
    db_session.commit()
    
    def handler(request):
        return httpx.Response(200, json={"generations": [{"text": "Passport."}]})
    
    asyncio.run(summary_service.summarize_note(note.id, note.title, note.content, client=_mock_client(handler)))
    
    db_session.expire_all()
    assert db_session.query(Note).filter(Note.id == note.id).first().summary == "Passport."


def test_summarize_note_saves_off_the_event_loop(monkeypatch):
    monkeypatch.setattr(settings, "COHERE_API_KEY", "co-key")
    saved = []
    
    def record_save(note_id, summary, session_factory=None):
        saved.append((note_id, summary, threading.get_ident()))
    
    def handler(request):
        return httpx.Response(200, json={"generations": [{"text": "Passport."}]})
    
    async def run():
        await summary_service.summarize_note(7, "Packing", "Passport", client=_mock_client(handler))
        return threading.get_ident()
    
    monkeypatch.setattr(summary_service, "save_summary", record_save)
    loop_thread = asyncio.run(run())
    
    assert [(note_id, summary) for note_id, summary, _ in saved] == [(7, "Passport.")]
    assert saved[0][2] != loop_thread


def test_save_summary_for_deleted_note_is_ignored(db_session):
    summary_service.save_summary(12345, "orphan")
    assert db_session.query(Note).count() == 0
