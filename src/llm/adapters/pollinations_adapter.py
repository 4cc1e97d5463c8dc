# src/llm/adapters/pollinations_adapter.py - v1
"""Pollinations text adapter implementing BaseTextProvider.

The provider is addressed by a plain GET: the model id is the path and the
prompts and sampling parameters travel as query parameters.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from talentgen.core.errors import ProviderError
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.models import ProviderResponse

DEFAULT_TEXT_URL = "https://text.pollinations.ai"
DEFAULT_TIMEOUT_S = 30.0


class PollinationsAdapter(BaseTextProvider):
    """Pollinations text API adapter."""

    def __init__(
        self,
        model: str = "openai",
        base_url: str = DEFAULT_TEXT_URL,
        client: httpx.AsyncClient | None = None,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        **kwargs: Any,
    ):
        self._model = model
        self._base_url = base_url.rstrip("/")
        if client is None:
            client = httpx.AsyncClient(timeout=httpx.Timeout(timeout_s))
            self._owns_client = True
        else:
            self._owns_client = False
        self._client = client

    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        model: str,
        temperature: float,
        seed: int,
    ) -> ProviderResponse:
        model = model or self._model
        params = {
            "temperature": str(temperature),
            "seed": str(seed),
            "system": system,
            "prompt": prompt,
        }

        t0 = time.monotonic()
        resp = await self._client.get(
            f"{self._base_url}/{model}",
            params=params,
            headers={"Accept": "text/plain"},
        )
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.is_success:
            raise ProviderError(
                f"Pollinations API error: {resp.status_code} {resp.reason_phrase}",
                status_code=resp.status_code,
            )

        return ProviderResponse(
            content=resp.text,
            model=model,
            provider="pollinations",
            latency_ms=latency,
        )

    @property
    def provider_name(self) -> str:
        return "pollinations"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
