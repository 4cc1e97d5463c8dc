# src/cache/fingerprint.py - v2
"""Deterministic cache keys for generation requests.

Keys are SHA-256 digests over canonical JSON (sorted keys, fixed
separators), so two requests with identical semantic content always hash
identically regardless of construction order.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any

from talentgen.core.models import GenerationRequest, ImageOptions

TEXT_PREFIX = "ai:text"
IMAGE_PREFIX = "ai:image"
_FALLBACK_SUFFIX = ":fallback"


def _digest(payload: dict[str, Any]) -> str:
    canonical = json.dumps(payload, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def compute_cache_key(request: GenerationRequest) -> str:
    """Primary cache key for a text request (TTL and fallback message excluded)."""
    return f"{TEXT_PREFIX}:{_digest(request.cache_identity())}"


def compute_image_cache_key(prompt: str, options: ImageOptions) -> str:
    """Cache key for an image URL request."""
    return f"{IMAGE_PREFIX}:{_digest({'prompt': prompt, **options.model_dump()})}"


def fallback_key(key: str) -> str:
    """Derived key of the durable fallback slot paired with a primary key."""
    return f"{key}{_FALLBACK_SUFFIX}"
