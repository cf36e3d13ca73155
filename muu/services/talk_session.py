"""
Client-side talk session — the in-memory conversation a chat window keeps.

The server is stateless per message, so the log lives here. When /api/talk
answers with an error, the session records the error and shows a canned
fallback reply marked `fallback=True`; the server itself never invents
assistant text.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Literal, Optional

import httpx

from muu.utils.prompts import FALLBACK_REPLY, STALLED_REPLY

logger = logging.getLogger(__name__)

TALK_PATH = "/api/talk"


@dataclass
class SessionMessage:
    id: str
    role: Literal["user", "assistant"]
    text: str
    fallback: bool = False


class TalkSession:
    """Turn-indexed message log that calls the talk endpoint once per message."""

    def __init__(
        self,
        base_url: str = "",
        client: Optional[httpx.Client] = None,
        timeout: float = 30.0,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout)
        self.messages: list[SessionMessage] = []
        self.error: Optional[str] = None

    @property
    def turn(self) -> int:
        """Number of user messages sent so far."""
        return sum(1 for m in self.messages if m.role == "user")

    def send(self, text: str) -> Optional[SessionMessage]:
        """
        Send one message and return the assistant message appended to the log
        (a fallback one on failure). Blank input is ignored and returns None.
        """
        clean = text.strip()
        if not clean:
            return None

        self.error = None
        next_turn = self.turn + 1
        self._append("user", clean)

        try:
            resp = self._client.post(TALK_PATH, json={"message": clean, "turn": next_turn})
        except httpx.HTTPError as exc:
            logger.warning("Talk request failed: %s", exc)
            self.error = str(exc)
            return self._append("assistant", STALLED_REPLY, fallback=True)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        reply = str(data.get("reply") or "").strip()
        if resp.is_success and reply:
            return self._append("assistant", reply)

        if resp.is_success:
            self.error = "empty reply"
        else:
            self.error = str(data.get("error") or f"HTTP {resp.status_code}")
        logger.warning("Talk turn %d failed: %s", next_turn, self.error)
        return self._append("assistant", FALLBACK_REPLY, fallback=True)

    def reset(self) -> None:
        self.messages.clear()
        self.error = None

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> TalkSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _append(
        self, role: Literal["user", "assistant"], text: str, fallback: bool = False
    ) -> SessionMessage:
        msg = SessionMessage(id=uuid.uuid4().hex, role=role, text=text, fallback=fallback)
        self.messages.append(msg)
        return msg
