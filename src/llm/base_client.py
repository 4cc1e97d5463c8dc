# src/llm/base_client.py - v1
"""Abstract text-generation provider interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from talentgen.llm.models import ProviderResponse


class BaseTextProvider(ABC):
    """Unified interface for all text-generation providers.

    One ``complete`` call is one attempt; retries, timeouts and circuit
    breaking are applied by the caller.
    """

    @abstractmethod
    async def complete(
        self,
        system: str,
        prompt: str,
        *,
        model: str,
        temperature: float,
        seed: int,
    ) -> ProviderResponse:
        """Generate text for a system/user prompt pair.

        Raises:
            ProviderError: On a non-success response.
        """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (pollinations, openai)."""

    async def aclose(self) -> None:
        """Release network resources. No-op by default."""
