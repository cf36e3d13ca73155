"""
Completion proxy — forwards one talk message to the Groq chat-completions API.

Every call sends the fixed persona instruction plus the user's message and
makes exactly one outbound request under a wall-clock deadline:

  missing API key      → ConfigurationError      (nothing is sent)
  deadline exceeded    → CompletionTimeoutError  (request cancelled, connection closed)
  non-2xx / transport  → ProviderError           (upstream status + raw body)
  malformed response   → ProviderError
  blank content        → EmptyReplyError

complete() folds these into a CompletionFailure so the talk router can map
them onto real HTTP statuses. There are no retries and no conversation memory.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional, Union

import httpx
from pydantic import BaseModel, Field, ValidationError

from muu.config import Settings
from muu.utils.prompts import PERSONA_INSTRUCTION

logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
GROQ_MODEL = "llama-3.1-8b-instant"
TEMPERATURE = 0.6
MAX_TOKENS = 500
TIMEOUT_SECONDS = 12.0


@dataclass(frozen=True)
class ProviderConfig:
    """Everything the proxy needs to reach the provider."""

    api_key: Optional[str]
    base_url: str = GROQ_BASE_URL
    model: str = GROQ_MODEL
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_TOKENS
    timeout_seconds: float = TIMEOUT_SECONDS

    @classmethod
    def from_settings(cls, settings: Settings) -> ProviderConfig:
        return cls(
            api_key=settings.groq_api_key or None,
            base_url=settings.groq_base_url,
            model=settings.groq_model,
            timeout_seconds=settings.groq_timeout_seconds,
        )


# ── Errors ───────────────────────────────────────────────────────────────────


class CompletionError(Exception):
    """Base class for every way a completion call can fail."""

    error_kind = "completion_error"
    http_status = 500

    def __init__(self, message: str, *, detail: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ConfigurationError(CompletionError):
    """The provider API key is not configured."""

    error_kind = "configuration"


class CompletionTimeoutError(CompletionError):
    """The provider did not answer before the deadline."""

    error_kind = "timeout"
    http_status = 504


class ProviderError(CompletionError):
    """
    The provider answered with a non-2xx status, could not be reached, or sent
    a body that does not match the chat-completions schema.
    """

    error_kind = "provider"

    def __init__(
        self,
        message: str,
        *,
        upstream_status: Optional[int] = None,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message, detail=body)
        self.upstream_status = upstream_status
        self.body = body
        if upstream_status is not None and upstream_status >= 400:
            self.http_status = upstream_status
        else:
            self.http_status = 502


class EmptyReplyError(CompletionError):
    """The provider returned a completion with no usable text."""

    error_kind = "empty_reply"
    http_status = 502


# ── Results ──────────────────────────────────────────────────────────────────


class CompletionSuccess(BaseModel):
    kind: Literal["success"] = "success"
    reply: str = Field(..., min_length=1)


class CompletionFailure(BaseModel):
    kind: Literal["failure"] = "failure"
    error_kind: str
    error: str
    detail: Optional[Any] = None
    http_status: int

    @classmethod
    def from_error(cls, exc: CompletionError) -> CompletionFailure:
        return cls(
            error_kind=exc.error_kind,
            error=exc.message,
            detail=exc.detail,
            http_status=exc.http_status,
        )


CompletionResult = Union[CompletionSuccess, CompletionFailure]


# ── Provider response schema ─────────────────────────────────────────────────


class _ProviderMessage(BaseModel):
    # Key is required; null content counts as an empty reply.
    content: Optional[str]


class _ProviderChoice(BaseModel):
    message: _ProviderMessage


class _ProviderResponse(BaseModel):
    choices: list[_ProviderChoice] = Field(..., min_length=1)


def _describe_schema_errors(exc: ValidationError) -> str:
    return ", ".join(
        ".".join(str(part) for part in err["loc"]) or "<root>" for err in exc.errors()
    )


# ── Proxy ────────────────────────────────────────────────────────────────────


class CompletionProxy:
    """
    Stateless proxy to the provider. Safe to share between concurrent requests;
    each call opens (and always closes) its own HTTP client.

    Pass `transport` to route requests somewhere other than the network
    (tests use httpx.MockTransport).
    """

    def __init__(
        self,
        config: ProviderConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config
        self._transport = transport

    def build_payload(self, message: str) -> dict[str, Any]:
        """Build the chat-completions request body for a single user message."""
        return {
            "model": self._config.model,
            "temperature": self._config.temperature,
            "max_tokens": self._config.max_tokens,
            "messages": [
                {"role": "system", "content": PERSONA_INSTRUCTION},
                {"role": "user", "content": message},
            ],
        }

    async def complete(self, message: str) -> CompletionResult:
        """Return the persona's reply to `message`, or a CompletionFailure."""
        try:
            reply = await self.request_reply(message)
        except CompletionError as exc:
            logger.warning(
                "Talk completion failed (%s, status=%s): %s",
                exc.error_kind,
                exc.http_status,
                exc.message,
            )
            return CompletionFailure.from_error(exc)
        return CompletionSuccess(reply=reply)

    async def request_reply(self, message: str) -> str:
        """
        Make the single outbound call and return the trimmed reply text.
        Raises a CompletionError subclass on any failure.
        """
        if not self._config.api_key:
            raise ConfigurationError("GROQ_API_KEY is not configured")

        payload = self.build_payload(message)
        timeout = self._config.timeout_seconds

        try:
            # wait_for cancels _post on expiry; the client context closes the connection.
            response = await asyncio.wait_for(self._post(payload), timeout=timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            raise CompletionTimeoutError(
                f"provider did not respond within {timeout:g}s"
            ) from exc
        except httpx.RequestError as exc:
            logger.error("Provider request to %s failed: %s", self._config.base_url, exc)
            raise ProviderError(f"provider request failed: {exc}") from exc

        if not response.is_success:
            logger.error(
                "Provider returned HTTP %s: %s", response.status_code, response.text[:500]
            )
            raise ProviderError(
                f"provider returned HTTP {response.status_code}",
                upstream_status=response.status_code,
                body=response.text,
            )

        return self._extract_reply(response)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self._config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._config.timeout_seconds,
            trust_env=False,
        ) as client:
            return await client.post(url, json=payload, headers=headers)

    def _extract_reply(self, response: httpx.Response) -> str:
        """Validate the response body and return choices[0].message.content, trimmed."""
        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                "provider returned a non-JSON body",
                upstream_status=response.status_code,
                body=response.text,
            ) from exc

        try:
            parsed = _ProviderResponse.model_validate(data)
        except ValidationError as exc:
            raise ProviderError(
                f"provider response missing or malformed field: {_describe_schema_errors(exc)}",
                upstream_status=response.status_code,
                body=response.text,
            ) from exc

        reply = (parsed.choices[0].message.content or "").strip()
        if not reply:
            raise EmptyReplyError("provider returned no reply content", detail=data)
        return reply
