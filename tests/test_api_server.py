"""
Tests for the signing-page endpoint (FastAPI TestClient over tmp_path stores).
"""

from __future__ import annotations

from backend_bundlebot.bundles import Bundle, Transfer

USER_ID = "42"
ADDR = "11111111111111111111111111111112"


def _session(ctx) -> str:
    return ctx.sessions.create_session(Bundle(user_id=USER_ID, transfers=(Transfer(ADDR, "0.5"),)))


def test_get_session_returns_bundle(client, ctx):
    session_id = _session(ctx)
    r = client.get("/phantom/send/session", params={"session": session_id})
    assert r.status_code == 200
    assert r.json() == {"bundle": [{"address": ADDR, "amount": "0.5"}]}


def test_get_session_unknown_or_missing_is_404(client):
    r = client.get("/phantom/send/session", params={"session": "nope"})
    assert r.status_code == 404
    assert r.json() == {"error": "Session not found"}
    assert client.get("/phantom/send/session").status_code == 404


def test_post_signed_then_get_reflects_signatures(client, ctx):
    session_id = _session(ctx)
    r = client.post("/phantom/send/signed", json={"session": session_id, "signatures": ["sigA"]})
    assert r.status_code == 200
    assert r.json() == {"success": True}
    data = client.get("/phantom/send/session", params={"session": session_id}).json()
    assert data["signatures"] == ["sigA"]
    assert data["bundle"] == [{"address": ADDR, "amount": "0.5"}]


def test_post_signed_rejects_bad_payloads(client, ctx):
    session_id = _session(ctx)
    bad_bodies = [
        {"session": "unknown", "signatures": ["sigA"]},
        {"signatures": ["sigA"]},
        {"session": session_id},
        {"session": session_id, "signatures": "sigA"},
    ]
    for body in bad_bodies:
        r = client.post("/phantom/send/signed", json=body)
        assert r.status_code == 400, body
        assert r.json() == {"error": "Invalid session or signatures"}
    assert "signatures" not in ctx.sessions.get_session(session_id)


def test_post_signed_rejects_malformed_bodies(client, ctx):
    session_id = _session(ctx)
    cases = [
        {"json": {"session": 123, "signatures": ["sigA"]}},
        {"json": [session_id]},
        {"content": b"{bad", "headers": {"content-type": "application/json"}},
        {"content": b""},
    ]
    for kwargs in cases:
        r = client.post("/phantom/send/signed", **kwargs)
        assert r.status_code == 400, kwargs
        assert r.json() == {"error": "Invalid session or signatures"}
    assert "signatures" not in ctx.sessions.get_session(session_id)


def test_static_pages_served(client):
    for path in ("/phantom/connect", "/phantom/send"):
        r = client.get(path)
        assert r.status_code == 200
        assert "text/html" in r.headers["content-type"]
    assert client.get("/assets/send.js").status_code == 200


def test_missing_page_is_500(client, monkeypatch, tmp_path):
    import backend_bundlebot.api_server.server as server

    monkeypatch.setattr(server, "PUBLIC_DIR", tmp_path / "empty")
    r = client.get("/phantom/connect")
    assert r.status_code == 500


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
