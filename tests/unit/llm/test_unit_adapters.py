# tests/unit/llm/test_unit_adapters.py - v1
"""Tests for text provider adapters and the provider factory."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import pytest

from talentgen.config.settings import Settings
from talentgen.core.errors import ProviderError
from talentgen.llm.adapters.openai_adapter import OpenAIAdapter
from talentgen.llm.adapters.pollinations_adapter import PollinationsAdapter
from talentgen.llm.base_client import BaseTextProvider
from talentgen.llm.client_factory import (
    UnsupportedProviderError,
    available_providers,
    create_text_provider,
    register_provider,
)


def _pollinations(handler) -> PollinationsAdapter:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return PollinationsAdapter(base_url="https://text.example/", client=client)


class TestPollinationsAdapter:
    @pytest.mark.asyncio
    async def test_get_request_shape(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="A strong match.")

        adapter = _pollinations(handler)
        resp = await adapter.complete(
            "You are a recruiter", "Analyze this", model="openai", temperature=0.7, seed=42
        )

        assert resp.content == "A strong match."
        assert resp.provider == "pollinations"
        assert resp.model == "openai"
        req = seen[0]
        assert req.method == "GET"
        assert req.url.path == "/openai"
        assert req.url.params["temperature"] == "0.7"
        assert req.url.params["seed"] == "42"
        assert req.url.params["system"] == "You are a recruiter"
        assert req.url.params["prompt"] == "Analyze this"
        assert req.headers["accept"] == "text/plain"

    @pytest.mark.asyncio
    async def test_non_success_raises_provider_error(self):
        adapter = _pollinations(lambda request: httpx.Response(503))
        with pytest.raises(ProviderError, match="Pollinations API error: 503 Service Unavailable") as exc_info:
            await adapter.complete("s", "p", model="openai", temperature=0.7, seed=42)
        assert exc_info.value.provider_status == 503

    @pytest.mark.asyncio
    async def test_empty_model_uses_default(self):
        paths: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            paths.append(request.url.path)
            return httpx.Response(200, text="ok")

        adapter = _pollinations(handler)
        await adapter.complete("s", "p", model="", temperature=0.7, seed=1)
        assert paths == ["/openai"]

    @pytest.mark.asyncio
    async def test_injected_client_not_closed(self):
        client = AsyncMock(spec=httpx.AsyncClient)
        adapter = PollinationsAdapter(client=client)
        await adapter.aclose()
        client.aclose.assert_not_awaited()

    def test_provider_name(self):
        assert PollinationsAdapter(client=AsyncMock()).provider_name == "pollinations"


class TestOpenAIAdapter:
    def _adapter_with(self, completion) -> tuple[OpenAIAdapter, AsyncMock]:
        adapter = OpenAIAdapter(model="gpt-4o-mini", api_key="sk-test")
        client = AsyncMock()
        client.chat.completions.create = AsyncMock(return_value=completion)
        adapter._client = client
        return adapter, client

    @pytest.mark.asyncio
    async def test_maps_pollinations_alias_and_forwards_seed(self):
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="Hello"))]
        )
        adapter, client = self._adapter_with(completion)

        resp = await adapter.complete("sys", "user", model="openai", temperature=0.7, seed=42)

        assert resp.content == "Hello"
        assert resp.model == "gpt-4o-mini"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["seed"] == 42
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}

    @pytest.mark.asyncio
    async def test_explicit_model_passed_through(self):
        completion = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content="x"))]
        )
        adapter, client = self._adapter_with(completion)
        await adapter.complete("s", "p", model="gpt-4o", temperature=0.1, seed=1)
        assert client.chat.completions.create.call_args.kwargs["model"] == "gpt-4o"

    @pytest.mark.asyncio
    async def test_no_choices_raises(self):
        adapter, _ = self._adapter_with(SimpleNamespace(choices=[]))
        with pytest.raises(ProviderError, match="no choices"):
            await adapter.complete("s", "p", model="openai", temperature=0.7, seed=42)


class TestClientFactory:
    def test_available_providers(self):
        assert {"pollinations", "openai"} <= set(available_providers())

    def test_create_pollinations_from_settings(self):
        s = Settings(_env_file=None, llm_model="mistral", pollinations_text_url="https://t.example")
        provider = create_text_provider("pollinations", s)
        assert isinstance(provider, PollinationsAdapter)
        assert provider._model == "mistral"
        assert provider._base_url == "https://t.example"

    @pytest.mark.asyncio
    async def test_pollinations_uses_request_timeout(self):
        s = Settings(_env_file=None, request_timeout_s=45)
        provider = create_text_provider("pollinations", s)
        assert provider._client.timeout == httpx.Timeout(45.0)
        await provider.aclose()

    @pytest.mark.asyncio
    async def test_pollinations_default_timeout(self):
        provider = create_text_provider("pollinations", Settings(_env_file=None))
        assert provider._client.timeout.read == 30.0
        await provider.aclose()

    def test_create_openai_from_settings(self):
        s = Settings(_env_file=None, llm_provider="openai", openai_api_key="sk-x")
        provider = create_text_provider("openai", s)
        assert isinstance(provider, OpenAIAdapter)
        assert provider._api_key == "sk-x"

    def test_unsupported_provider(self):
        with pytest.raises(UnsupportedProviderError, match="Available"):
            create_text_provider("nope")

    def test_register_custom_provider(self):
        register_provider("custom-test", "talentgen.llm.adapters.pollinations_adapter.PollinationsAdapter")
        provider = create_text_provider("custom-test")
        assert isinstance(provider, BaseTextProvider)
