# tests/unit/core/test_unit_errors.py - v1
"""Tests for core/errors.py: codes, status codes and serialization."""

from __future__ import annotations

import pytest

from talentgen.core.errors import (
    AppError,
    ErrorCode,
    GenerationUnavailable,
    ProviderError,
    RateLimitExceeded,
    ValidationError,
)


class TestErrorTaxonomy:
    @pytest.mark.parametrize(
        ("error", "code", "status"),
        [
            (ValidationError("bad"), ErrorCode.VALIDATION_ERROR, 400),
            (RateLimitExceeded(5), ErrorCode.RATE_LIMIT_EXCEEDED, 429),
            (GenerationUnavailable("down"), ErrorCode.AI_SERVICE_ERROR, 503),
            (ProviderError("500", 500), ErrorCode.PROVIDER_ERROR, 502),
        ],
    )
    def test_codes(self, error, code, status):
        assert isinstance(error, AppError)
        assert error.code is code
        assert error.status_code == status

    def test_to_dict_minimal(self):
        assert ValidationError("job is required").to_dict() == {
            "code": "VALIDATION_ERROR",
            "message": "job is required",
        }

    def test_to_dict_with_fallback(self):
        body = GenerationUnavailable("stale", fallback="old").to_dict()
        assert body["fallback"] == "old"
        assert "details" not in body


class TestRateLimitExceeded:
    def test_message_with_retry_after(self):
        err = RateLimitExceeded(45)
        assert err.message == "Too many requests. Please try again in 45 seconds"
        assert err.details == {"retryAfter": 45}

    def test_message_without_retry_after(self):
        assert RateLimitExceeded().message == "Too many requests. Please try again later"


class TestGenerationUnavailable:
    def test_has_fallback(self):
        assert GenerationUnavailable("x", fallback="cached").has_fallback
        assert not GenerationUnavailable("x").has_fallback

    def test_empty_string_fallback_counts(self):
        assert GenerationUnavailable("x", fallback="").has_fallback

    def test_provider_status_kept(self):
        assert ProviderError("Pollinations API error: 503", 503).provider_status == 503
