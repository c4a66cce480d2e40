"""Provider factory and registry for the content-search adapters."""

from __future__ import annotations

import httpx

from ..config import AppConfig
from ..core.quota import QuotaTracker
from .base import ProviderAdapter
from .gnews import GNewsAdapter
from .guardian import GuardianAdapter
from .newsapi import NewsAPIAdapter
from .newsapi_ai import NewsAPIAIAdapter
from .newsdata import NewsDataAdapter
from .nyt import NYTAdapter


ProviderBuilder = type[ProviderAdapter]

_PROVIDER_REGISTRY: dict[str, ProviderBuilder] = {
    "guardian": GuardianAdapter,
    "nyt": NYTAdapter,
    "newsapi": NewsAPIAdapter,
    "gnews": GNewsAdapter,
    "newsdata": NewsDataAdapter,
    "newsapi_ai": NewsAPIAIAdapter,
}


def available_providers() -> list[str]:
    """Return the set of registered provider names."""
    return sorted(_PROVIDER_REGISTRY.keys())


def create_provider(
    name: str,
    cfg: AppConfig,
    quota: QuotaTracker,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderAdapter:
    """Build one provider adapter from runtime config."""
    key = name.lower().strip()
    builder = _PROVIDER_REGISTRY.get(key)
    if builder is None:
        supported = ", ".join(available_providers())
        raise ValueError(f"Unsupported provider: {name}. Supported: {supported}")
    settings = cfg.providers.get(key)
    if settings is None:
        raise ValueError(f"No settings configured for provider: {name}")
    quota.set_limit(key, settings.daily_quota)
    return builder(settings, quota, cfg.http, transport)


def build_providers(
    cfg: AppConfig,
    quota: QuotaTracker,
    only: list[str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[ProviderAdapter]:
    """Build the enabled providers in configured order.

    Args:
        cfg: Application configuration
        quota: Shared quota tracker; each provider's ceiling is registered on it
        only: Optional provider names to use instead of the configured list.
              Configured providers keep their order; others are appended.
        transport: Optional httpx transport shared by every adapter (tests)

    Returns:
        Provider adapters in the order of cfg.aggregation.providers
    """
    names = [name.lower().strip() for name in cfg.aggregation.providers]
    if only:
        wanted = [name.lower().strip() for name in only]
        names = [name for name in names if name in wanted] + [
            name for name in dict.fromkeys(wanted) if name not in names
        ]
    providers = []
    for key in names:
        settings = cfg.providers.get(key)
        if settings is not None and not settings.enabled:
            continue
        providers.append(create_provider(key, cfg, quota, transport))
    return providers
