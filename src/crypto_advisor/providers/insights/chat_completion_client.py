"""Client for OpenAI-compatible /chat/completions endpoints.

OpenRouter and the HuggingFace router speak the same request/response shape,
so one client serves both; only base URL, model and key differ.
"""
import logging

import httpx

from crypto_advisor.providers.core import (DashboardProviderABC,
                                           InvalidContentError,
                                           ProviderNotConfiguredError)

logger = logging.getLogger(__name__)

DEFAULT_MAX_TOKENS = 150


class ChatCompletionClient(DashboardProviderABC):
    """Single-prompt chat completion against one backend."""

    def __init__(
        self,
        name: str,
        base_url: str,
        model: str,
        api_key: str | None = None,
        timeout: float = 15.0,
        temperature: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        super().__init__(
            self._make_client(base_url=base_url, headers=headers, timeout=timeout, transport=transport)
        )
        self.name = name
        self.model = model
        self._configured = bool(api_key)
        self._temperature = temperature

    @property
    def configured(self) -> bool:
        return self._configured

    async def complete(self, prompt: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
        """Return the assistant text for prompt, stripped.

        Raises:
            ProviderNotConfiguredError: No API key was supplied.
            InvalidContentError: The answer carried no text.
            httpx.HTTPStatusError: Non-2xx answer (429 included).
        """
        if not self._configured:
            raise ProviderNotConfiguredError(f"{self.name} API key not configured")

        payload: dict = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": max_tokens,
        }
        if self._temperature is not None:
            payload["temperature"] = self._temperature

        response = await self._client.post("/chat/completions", json=payload)
        response.raise_for_status()
        choices = response.json().get("choices") or []
        message = (choices[0].get("message") or {}) if choices else {}
        content = (message.get("content") or "").strip()
        if not content:
            raise InvalidContentError(f"{self.name} returned an empty completion")
        logger.debug("%s completion: %d chars", self.name, len(content))
        return content
