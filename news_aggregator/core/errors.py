"""
Error taxonomy for the aggregation core.

Per-provider errors (QuotaExceededError, ProviderUnavailableError) are
recorded in that provider's result and never escalate on their own.
AllProvidersFailedError is the only error the coordinator raises after
fan-out. InvalidQueryError is raised before any provider is invoked.
"""

from __future__ import annotations

from typing import Any


class AggregationError(Exception):
    """Base class for all aggregation errors."""


class InvalidQueryError(AggregationError, ValueError):
    """The query violates a precondition (e.g., empty topic)."""


class ProviderError(AggregationError):
    """Base class for errors attributed to a single provider."""

    def __init__(self, provider_id: str, message: str):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id
        self.message = message


class QuotaExceededError(ProviderError):
    """The provider's daily request ceiling has been reached."""

    def __init__(self, provider_id: str, limit: int | None = None):
        message = "daily request quota reached"
        if limit is not None:
            message = f"daily request quota of {limit} reached"
        super().__init__(provider_id, message)
        self.limit = limit


class ProviderUnavailableError(ProviderError):
    """Network, timeout, HTTP status or payload failure for one provider."""

    def __init__(self, provider_id: str, message: str, status_code: int | None = None):
        super().__init__(provider_id, message)
        self.status_code = status_code


class AllProvidersFailedError(AggregationError):
    """Every configured provider returned an error.

    Attributes:
        provider_results: The per-provider results, each carrying its error
    """

    def __init__(self, provider_results: list[Any]):
        errors = ", ".join(
            f"{result.provider_id}={result.error}" for result in provider_results
        )
        super().__init__(f"All providers failed: {errors or 'no providers configured'}")
        self.provider_results = provider_results
