# src/llm/client_factory.py - v2
"""Factory: instantiate a text provider from its name.

Adapters are registered by class path and imported lazily so optional
SDKs are only required when their provider is selected.
"""

from __future__ import annotations

import importlib
import logging

from talentgen.config.settings import Settings
from talentgen.llm.base_client import BaseTextProvider

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "pollinations": "talentgen.llm.adapters.pollinations_adapter.PollinationsAdapter",
    "openai": "talentgen.llm.adapters.openai_adapter.OpenAIAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_text_provider(
    provider: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseTextProvider:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier (pollinations, openai).
        settings: Application settings (for endpoints and API keys).
        **kwargs: Additional adapter-specific arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported text provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    if settings is not None:
        if provider == "pollinations":
            init_kwargs.setdefault("model", settings.llm_model)
            init_kwargs.setdefault("base_url", settings.pollinations_text_url)
            if settings.request_timeout_s:
                init_kwargs.setdefault("timeout_s", settings.request_timeout_s)
        elif provider == "openai":
            init_kwargs.setdefault("api_key", settings.openai_api_key)

    logger.debug("Creating text provider: provider=%s", provider)
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseTextProvider.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered text provider: %s -> %s", name, class_path)


def available_providers() -> list[str]:
    return sorted(_PROVIDER_REGISTRY)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
