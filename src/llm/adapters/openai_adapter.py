# src/llm/adapters/openai_adapter.py - v1
"""OpenAI chat-completions adapter implementing BaseTextProvider.

Uses the official openai SDK (pip install openai). The seed is forwarded
so repeated requests stay as reproducible as the API allows.
"""

from __future__ import annotations

import time
from typing import Any

from talentgen.core.errors import ProviderError
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.models import ProviderResponse


class OpenAIAdapter(BaseTextProvider):
    """OpenAI GPT adapter."""

    def __init__(self, model: str = "gpt-4o-mini", api_key: str = "", **kwargs: Any):
        self._model = model
        self._api_key = api_key
        self._client: Any = None

    def _get_client(self) -> Any:
        if self._client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError(
                    "openai package required: pip install 'talentgen[openai]'"
                ) from e
            self._client = openai.AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        model: str,
        temperature: float,
        seed: int,
    ) -> ProviderResponse:
        client = self._get_client()
        # "openai" is the Pollinations alias; map it to the configured model.
        model_name = self._model if model in ("", "openai") else model

        t0 = time.monotonic()
        resp = await client.chat.completions.create(
            model=model_name,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            temperature=temperature,
            seed=seed,
        )
        latency = int((time.monotonic() - t0) * 1000)

        if not resp.choices:
            raise ProviderError("OpenAI API returned no choices")

        return ProviderResponse(
            content=resp.choices[0].message.content or "",
            model=model_name,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.close()
