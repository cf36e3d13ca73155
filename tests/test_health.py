from muu.config import settings


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": "1.0.0"}


def test_ready_when_db_and_key_present(client):
    resp = client.get("/ready")

    assert resp.status_code == 200
    assert resp.json() == {"db": "ok", "provider_key": "ok"}


def test_ready_reports_missing_provider_key(client, provider, monkeypatch):
    monkeypatch.setattr(settings, "groq_api_key", None)

    resp = client.get("/ready")

    assert resp.status_code == 503
    assert resp.json() == {"db": "ok", "provider_key": "missing"}
    assert provider.calls == 0
