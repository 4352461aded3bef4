from __future__ import annotations

from typing import Any

import httpx
import structlog
from backend_common.http_client import ErrorKind, ServiceClient

from ..config import Settings, get_settings
from ..exceptions import (
    ConfigurationError,
    GenerationDecodeError,
    GenerationStatusError,
    GenerationTransportError,
)

logger = structlog.get_logger(__name__)


def _extract_content(envelope: Any) -> str:
    choices = envelope.get("choices") if isinstance(envelope, dict) else None
    if not isinstance(choices, list) or not choices:
        raise GenerationDecodeError("Response envelope has no choices")
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str):
        raise GenerationDecodeError("Response envelope has no choices[0].message.content string")
    return content


class GenerationClient:
    """Chat-completion client holding the bearer credential for the process lifetime."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        if not settings.OPENAI_API_KEY:
            raise ConfigurationError("OPENAI_API_KEY must be set in the environment or .env file")

        self._api_key = settings.OPENAI_API_KEY
        self._url = settings.OPENAI_BASE_URL
        self._model = settings.OPENAI_MODEL
        self._max_tokens = settings.OPENAI_MAX_TOKENS
        self._temperature = settings.OPENAI_TEMPERATURE
        self._timeout = settings.OPENAI_TIMEOUT_SECONDS
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    def build_payload(self, prompt: str, system_instruction: str) -> dict[str, Any]:
        return {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": self._max_tokens,
            "temperature": self._temperature,
        }

    async def send(self, prompt: str, system_instruction: str) -> str:
        """Send one chat-completion request and return the first choice's text as-is."""
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(prompt, system_instruction)

        async with ServiceClient(timeout=self._timeout, transport=self._transport) as client:
            resp = await client.post(
                self._url,
                headers=headers,
                json=payload,
                expected_status=200,
                model=self._model,
            )

        if not resp.success:
            if resp.error_kind is ErrorKind.transport:
                raise GenerationTransportError(resp.error or "Generation request failed")
            if resp.error_kind is ErrorKind.status:
                raise GenerationStatusError(resp.status_code)
            raise GenerationDecodeError(resp.error or "Generation response is not JSON")

        content = _extract_content(resp.data)
        logger.info("generation_response_received", model=self._model, chars=len(content))
        return content
