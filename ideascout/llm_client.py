"""Ollama generate-endpoint client used for report synthesis."""
from __future__ import annotations

import time
from typing import Any

import httpx

from ideascout.config import settings
from ideascout.services import logger as log_service


class OllamaClient:
    """Thin async client for `POST /api/generate` with streaming disabled.

    `generate` never raises: an unreachable endpoint, a non-2xx status, a
    timeout or an unexpected body all come back as an empty string.
    """

    def __init__(
        self,
        *,
        endpoint: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        base = (endpoint or settings.ollama_endpoint).strip() or "http://localhost:11434"
        self.endpoint = base.rstrip("/")
        self.model = model or get_model()
        self.timeout = float(timeout if timeout is not None else settings.llm_timeout_seconds)
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self.endpoint}/api/generate"

    async def generate(self, prompt: str, *, caller: str = "analysis") -> str:
        payload: dict[str, Any] = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
        }
        t0 = time.monotonic()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(self.generate_url, json=payload)
                response.raise_for_status()
                data = response.json()
            text = data.get("response") if isinstance(data, dict) else None
            if not isinstance(text, str):
                text = ""
        except Exception as exc:
            log_service.log_llm_call(
                model=self.model,
                caller=caller,
                prompt_chars=len(prompt),
                duration_ms=int((time.monotonic() - t0) * 1000),
                status="error",
                error=f"{type(exc).__name__}: {exc}",
            )
            return ""

        log_service.log_llm_call(
            model=self.model,
            caller=caller,
            prompt_chars=len(prompt),
            response_chars=len(text),
            duration_ms=int((time.monotonic() - t0) * 1000),
        )
        return text


def get_model() -> str:
    """Get the configured Ollama model name."""
    return settings.ollama_model or "llama3"


_client: OllamaClient | None = None


def client() -> OllamaClient:
    """Get or create the LLM client."""
    global _client
    if _client is None:
        _client = OllamaClient()
    return _client
