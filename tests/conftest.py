"""Shared fixtures: throwaway SQLite database, fake Groq provider, app client."""

from __future__ import annotations

import asyncio
import os
import tempfile
from typing import Any, Optional

# Settings are read at import time, so the environment must be ready first.
_DB_DIR = tempfile.mkdtemp(prefix="muu-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/muu.db"
os.environ["GROQ_API_KEY"] = "test-key"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import httpx  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from muu.database import engine  # noqa: E402
from muu.main import app  # noqa: E402
from muu.models import Base  # noqa: E402
from muu.routers.talk import get_completion_proxy  # noqa: E402
from muu.services.completion import CompletionProxy, ProviderConfig  # noqa: E402


def completion_body(content: Optional[str]) -> dict[str, Any]:
    """A minimal chat-completions response carrying `content`."""
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "model": "llama-3.1-8b-instant",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


class TrackingTransport(httpx.MockTransport):
    """MockTransport that remembers whether the owning client closed it."""

    def __init__(self, handler) -> None:
        super().__init__(handler)
        self.closed = False

    async def aclose(self) -> None:
        self.closed = True
        await super().aclose()


class FakeProvider:
    """
    Stand-in for the Groq API. Tweak status_code / json_body / text_body /
    delay / error before the call; inspect `requests` afterwards.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.json_body: Any = completion_body("我在這裡，慢慢說就好。")
        self.text_body: Optional[str] = None
        self.delay = 0.0
        self.error: Optional[Exception] = None
        self.cancelled = False
        self.timeout_seconds = 12.0
        self.transport = TrackingTransport(self._handle)

    @property
    def calls(self) -> int:
        return len(self.requests)

    def proxy(self, api_key: Optional[str] = "test-key") -> CompletionProxy:
        config = ProviderConfig(api_key=api_key, timeout_seconds=self.timeout_seconds)
        return CompletionProxy(config, transport=self.transport)

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        if self.error is not None:
            raise self.error
        if self.text_body is not None:
            return httpx.Response(self.status_code, text=self.text_body)
        return httpx.Response(self.status_code, json=self.json_body)


async def _reset_schema() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(provider: FakeProvider):
    """App client with a clean database and the fake provider wired in."""
    asyncio.run(_reset_schema())
    app.dependency_overrides[get_completion_proxy] = lambda: provider.proxy()
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
