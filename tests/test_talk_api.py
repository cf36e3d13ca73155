import json

import pytest
from fastapi.testclient import TestClient

from conftest import completion_body
from muu.main import app
from muu.routers.talk import get_completion_proxy


def test_talk_returns_reply(client, provider):
    resp = client.post("/api/talk", json={"message": "  今天有點悶  "})

    assert resp.status_code == 200
    assert resp.json() == {"reply": "我在這裡，慢慢說就好。"}
    (request,) = provider.requests
    assert json.loads(request.content)["messages"][1]["content"] == "今天有點悶"


def test_talk_ignores_turn_counter(client, provider):
    resp = client.post("/api/talk", json={"message": "hi", "turn": 3})

    assert resp.status_code == 200
    assert provider.calls == 1


@pytest.mark.parametrize("message", ["", "   ", "\n\t"])
def test_blank_message_rejected_before_provider(client, provider, message):
    resp = client.post("/api/talk", json={"message": message})

    assert resp.status_code == 400
    assert resp.json() == {"error": "missing or malformed message"}
    assert provider.calls == 0


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"[]",
        b'{"text": "hi"}',
        b'{"message": 123}',
        b'{"message": null}',
    ],
)
def test_malformed_body_rejected_before_provider(client, provider, raw):
    resp = client.post(
        "/api/talk", content=raw, headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 400
    assert resp.json() == {"error": "missing or malformed message"}
    assert provider.calls == 0


def test_message_over_limit_rejected_before_provider(client, provider):
    resp = client.post("/api/talk", json={"message": "a" * 3001})

    assert resp.status_code == 400
    assert resp.json() == {"error": "message too long (limit 3000)"}
    assert provider.calls == 0


def test_limit_applies_to_trimmed_message(client, provider):
    resp = client.post("/api/talk", json={"message": "  " + "a" * 3000 + "  "})

    assert resp.status_code == 200
    assert provider.calls == 1


def test_provider_error_status_is_propagated(client, provider):
    provider.status_code = 500
    provider.text_body = "upstream exploded"

    resp = client.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "provider returned HTTP 500", "detail": "upstream exploded"}


def test_rate_limited_provider_surfaces_429(client, provider):
    provider.status_code = 429
    provider.json_body = {"error": {"message": "Rate limit reached"}}

    resp = client.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 429
    assert "Rate limit reached" in resp.json()["detail"]


def test_empty_reply_is_an_error_not_a_reply(client, provider):
    provider.json_body = completion_body("   ")

    resp = client.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 502
    body = resp.json()
    assert "reply" not in body
    assert body["error"] == "provider returned no reply content"
    assert body["detail"]["choices"][0]["message"]["content"] == "   "


def test_timeout_returns_504(client, provider):
    provider.timeout_seconds = 0.05
    provider.delay = 5.0

    resp = client.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 504
    assert "did not respond" in resp.json()["error"]
    assert provider.cancelled


def test_missing_api_key_returns_500_without_calling_provider(client, provider):
    app.dependency_overrides[get_completion_proxy] = lambda: provider.proxy(api_key=None)

    resp = client.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "GROQ_API_KEY is not configured"}
    assert provider.calls == 0


def test_unhandled_exception_returns_internal_error(client):
    class ExplodingProxy:
        async def complete(self, message):
            raise RuntimeError("kaboom")

    app.dependency_overrides[get_completion_proxy] = lambda: ExplodingProxy()

    with TestClient(app, raise_server_exceptions=False) as c:
        resp = c.post("/api/talk", json={"message": "hello"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "internal error", "detail": "kaboom"}
