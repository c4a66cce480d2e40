"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- AggregationConfig: Target/max sizes, score threshold, retries, provider order
- DedupConfig: Deduplication settings
- ScoringConfig: Keyword lists and the enterprise-grade threshold
- ProviderSettings: Per-provider endpoint, quota and weighting (one per provider)
- HttpConfig: Shared HTTP client settings
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container

Environment variables TARGET_ARTICLES_PER_QUERY and MAX_ARTICLES_PER_QUERY
override the aggregation sizes; provider API keys are read from the
environment variable named by each provider's api_key_env.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import os
from typing import Any

import yaml


@dataclass
class AggregationConfig:
    """Configuration for a single aggregation call.

    Attributes:
        target_articles: Desired final size; reaching it marks the result enterprise-grade
        max_articles: Hard cap on the final size
        min_score: Articles at or below this composite score are dropped
        retries: Retry attempts per provider after a ProviderUnavailable error
        retry_backoff_seconds: Linear backoff step between retries
        providers: Enabled provider ids, in the order their results are concatenated
    """

    target_articles: int = 18
    max_articles: int = 25
    min_score: float = 0.25
    retries: int = 0
    retry_backoff_seconds: float = 0.5
    providers: list[str] = field(
        default_factory=lambda: ["guardian", "nyt", "newsapi", "gnews", "newsdata"]
    )


@dataclass
class DedupConfig:
    """Configuration for article deduplication.

    Attributes:
        enabled: Whether to perform deduplication
        title_similarity_threshold: Jaccard index (0-1) above which titles are duplicates
    """

    enabled: bool = True
    title_similarity_threshold: float = 0.85


@dataclass
class ScoringConfig:
    """Keyword lists used by the relevance scorer.

    Attributes:
        domain_keywords: Domain (ESG) keywords, 0.08 each
        high_value_entities: Core business entities, 0.15 each
        secondary_entities: Competitor entities, 0.12 each
        enterprise_threshold: Composite score above which an article is enterprise-grade
    """

    domain_keywords: list[str] = field(
        default_factory=lambda: [
            "sustainability",
            "ESG",
            "carbon",
            "emissions",
            "climate",
            "environmental",
            "governance",
            "compliance",
            "regulation",
            "circular economy",
            "renewable",
            "petrochemical",
            "chemical industry",
            "polymer",
            "polyethylene",
            "CBAM",
            "carbon border",
            "net zero",
            "decarbonization",
            "green transition",
        ]
    )
    high_value_entities: list[str] = field(
        default_factory=lambda: [
            "borouge",
            "petrochemical",
            "polyethylene",
            "polypropylene",
            "polymer",
            "chemical industry",
        ]
    )
    secondary_entities: list[str] = field(
        default_factory=lambda: [
            "sabic",
            "dow chemical",
            "exxonmobil",
            "basf",
            "shell",
            "total",
        ]
    )
    enterprise_threshold: float = 0.4


@dataclass
class ProviderSettings:
    """Configuration for one content-search provider.

    Attributes:
        api_key_env: Environment variable containing the API key
        api_key: Optional inline API key (overrides env var)
        base_url: Base URL of the provider API
        timeout_seconds: Per-request timeout
        page_size: Number of articles requested (or kept)
        daily_quota: Daily request ceiling
        credibility: Static trust weight in [0, 1]
        priority_weight: Source priority weight in [0, 1]
        esg_focus: How ESG-focused the provider's coverage is (informational)
        lookback_days: Date window for providers that accept one
        enabled: Whether the provider may be built at all
    """

    api_key_env: str = ""
    api_key: str | None = None
    base_url: str = ""
    timeout_seconds: float = 10.0
    page_size: int = 10
    daily_quota: int = 100
    credibility: float = 0.5
    priority_weight: float = 0.5
    esg_focus: float = 0.5
    lookback_days: int | None = None
    enabled: bool = True


def _default_providers() -> dict[str, ProviderSettings]:
    return {
        "guardian": ProviderSettings(
            api_key_env="GUARDIAN_API_KEY",
            base_url="https://content.guardianapis.com",
            page_size=10,
            daily_quota=1000,
            credibility=0.95,
            priority_weight=0.95,
            esg_focus=0.98,
            lookback_days=30,
        ),
        "nyt": ProviderSettings(
            api_key_env="NYT_API_KEY",
            base_url="https://api.nytimes.com/svc/search/v2",
            page_size=8,
            daily_quota=1000,
            credibility=0.92,
            priority_weight=0.92,
            esg_focus=0.85,
            lookback_days=30,
        ),
        "newsapi": ProviderSettings(
            api_key_env="NEWSAPI_ORG_KEY",
            base_url="https://newsapi.org/v2",
            page_size=12,
            daily_quota=100,
            credibility=0.85,
            priority_weight=0.88,
            esg_focus=0.75,
            lookback_days=21,
        ),
        "gnews": ProviderSettings(
            api_key_env="GNEWS_API_KEY",
            base_url="https://gnews.io/api/v4",
            page_size=10,
            daily_quota=100,
            credibility=0.80,
            priority_weight=0.82,
            esg_focus=0.78,
        ),
        "newsdata": ProviderSettings(
            api_key_env="NEWSDATA_IO_KEY",
            base_url="https://newsdata.io/api/1",
            page_size=8,
            daily_quota=200,
            credibility=0.75,
            priority_weight=0.78,
            esg_focus=0.82,
        ),
        "newsapi_ai": ProviderSettings(
            api_key_env="NEWSAPI_AI_KEY",
            base_url="https://newsapi.ai/api/v1",
            timeout_seconds=15.0,
            page_size=20,
            daily_quota=100,
            credibility=0.5,
            priority_weight=0.5,
            esg_focus=0.8,
        ),
    }


@dataclass
class HttpConfig:
    """Shared HTTP client settings.

    Attributes:
        trust_env: Whether to respect system proxy settings
        user_agent: HTTP User-Agent header string
    """

    trust_env: bool = True
    user_agent: str = "news-aggregator/0.1"


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "aggregator.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    aggregation: AggregationConfig = field(default_factory=AggregationConfig)
    dedup: DedupConfig = field(default_factory=DedupConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    providers: dict[str, ProviderSettings] = field(default_factory=_default_providers)
    http: HttpConfig = field(default_factory=HttpConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None, env: dict[str, str] | None = None) -> AppConfig:
    """Load configuration from a YAML file with defaults and env overrides."""
    cfg = AppConfig()
    if path:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        cfg = _merge_config(cfg, raw)
    return apply_env_overrides(cfg, os.environ if env is None else env)


def apply_env_overrides(cfg: AppConfig, env: dict[str, str]) -> AppConfig:
    """Apply TARGET_ARTICLES_PER_QUERY / MAX_ARTICLES_PER_QUERY overrides.

    Values that are not positive integers are ignored.
    """
    target = _positive_int(env.get("TARGET_ARTICLES_PER_QUERY"))
    if target is not None:
        cfg.aggregation.target_articles = target
    maximum = _positive_int(env.get("MAX_ARTICLES_PER_QUERY"))
    if maximum is not None:
        cfg.aggregation.max_articles = maximum
    return cfg


def _positive_int(value: str | None) -> int | None:
    if not value:
        return None
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number > 0 else None


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if key == "providers" and isinstance(value, dict):
            for name, overrides in value.items():
                merged = data["providers"].get(name, {})
                merged.update(overrides or {})
                data["providers"][name] = merged
        elif isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update(value)
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return asdict(cfg)


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        aggregation=AggregationConfig(**data["aggregation"]),
        dedup=DedupConfig(**data["dedup"]),
        scoring=ScoringConfig(**data["scoring"]),
        providers={
            name: ProviderSettings(**settings)
            for name, settings in data["providers"].items()
        },
        http=HttpConfig(**data["http"]),
        logging=LoggingConfig(**data["logging"]),
    )


def get_api_key(cfg: ProviderSettings) -> str | None:
    """Get API key from inline config or environment variable."""
    if cfg.api_key:
        return cfg.api_key
    if not cfg.api_key_env:
        return None
    return os.getenv(cfg.api_key_env)
