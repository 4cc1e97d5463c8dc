# src/generation/image.py - v1
"""Image URL construction and cached, silently degrading image generation.

The image provider is never called here: it resolves the returned URL
lazily. Unlike text, image generation has no circuit breaker and never
raises; any failure yields a placeholder image reference.
"""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

from talentgen.cache.base_cache_store import BaseCacheStore
from talentgen.cache.fingerprint import compute_image_cache_key
from talentgen.core.models import ImageOptions

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_URL = "https://image.pollinations.ai/prompt"
DEFAULT_IMAGE_TTL_S = 86400

DEFAULT_PLACEHOLDER_IMAGE = (
    'data:image/svg+xml,%3Csvg xmlns="http://www.w3.org/2000/svg" width="1200" '
    'height="630" viewBox="0 0 1200 630"%3E%3Crect fill="%234F46E5" width="1200" '
    'height="630"/%3E%3Ctext x="50%25" y="50%25" dominant-baseline="middle" '
    'text-anchor="middle" font-family="sans-serif" font-size="48" '
    'fill="white"%3EJob Opportunity%3C/text%3E%3C/svg%3E'
)

# Same unreserved set as JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def build_image_url(
    prompt: str,
    options: ImageOptions | None = None,
    base_url: str = DEFAULT_IMAGE_URL,
) -> str:
    """Deterministic provider URL for a prompt.

    Raises:
        ValueError: If the prompt is blank.
    """
    if not prompt or not prompt.strip():
        raise ValueError("Image prompt must not be empty")
    options = options or ImageOptions()

    query = {
        "width": options.width,
        "height": options.height,
        "seed": options.seed,
    }
    if options.no_logo:
        query["nologo"] = "true"

    encoded_prompt = quote(prompt, safe=_URI_COMPONENT_SAFE)
    return f"{base_url.rstrip('/')}/{encoded_prompt}?{urlencode(query)}"


class ImageGenerator:
    """Cached image URL generation with placeholder degradation."""

    def __init__(
        self,
        store: BaseCacheStore,
        base_url: str = DEFAULT_IMAGE_URL,
        ttl_s: int = DEFAULT_IMAGE_TTL_S,
        placeholder: str = DEFAULT_PLACEHOLDER_IMAGE,
    ) -> None:
        self._store = store
        self._base_url = base_url
        self._ttl_s = ttl_s
        self._placeholder = placeholder

    async def generate_image(
        self,
        prompt: str,
        options: ImageOptions | None = None,
        fallback_url: str | None = None,
    ) -> str:
        """Return a provider URL for prompt, or a placeholder on any failure."""
        options = options or ImageOptions()
        try:
            key = compute_image_cache_key(prompt, options)
            cached = await self._store.get(key)
            if cached:
                logger.debug("Returning cached image URL")
                return cached

            url = build_image_url(prompt, options, base_url=self._base_url)
            await self._store.set(key, url, self._ttl_s)
            return url
        except Exception as exc:
            placeholder = fallback_url or self._placeholder
            logger.warning(
                "Using placeholder image after generation error: %s", exc,
                exc_info=True,
            )
            return placeholder
