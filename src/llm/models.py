# src/llm/models.py - v1
"""Provider-level types."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class ProviderResponse(BaseModel):
    """Normalized response from any text provider."""

    content: str
    model: str
    provider: str
    latency_ms: int = 0
    raw_response: Any = None
