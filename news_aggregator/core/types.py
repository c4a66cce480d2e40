"""
Core data types for the news aggregator.

This module defines the structures that flow through one aggregation call:
- Article: A provider result normalized into the common shape
- ScoredArticle: Article with relevance, domain, impact and composite scores
- ProviderResult: Outcome of one provider invocation (articles or error)
- QueryContext: Validated, immutable input for one aggregation call
- AggregationStats: Diagnostics derived from the final ranked set
- AggregationResult: Final ranked articles plus diagnostics

None of these are persisted; they live for the duration of a single call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from .errors import InvalidQueryError

UNKNOWN_SOURCE = "Unknown source"
NO_DESCRIPTION = "No description"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Article:
    """An article normalized from a provider's native response.

    Every field has a concrete value so deduplication and scoring never
    have to deal with missing data.

    Attributes:
        title: The article headline (never empty)
        url: Canonical URL used as the primary dedup key; empty means unique
        provider_id: Identifier of the provider that supplied the article
        source_name: Publication name (e.g., "The Guardian")
        body_text: Truncated text excerpt used for scoring
        description: Short description for display
        published_at: Publication timestamp (timezone-aware)
        provider_credibility: Trust weight in [0, 1]
        provider_priority_weight: Provider priority weight in [0, 1]
        image_url: Optional lead image URL
    """
    title: str
    url: str
    provider_id: str
    source_name: str = UNKNOWN_SOURCE
    body_text: str = ""
    description: str = NO_DESCRIPTION
    published_at: datetime = field(default_factory=utcnow)
    provider_credibility: float = 0.5
    provider_priority_weight: float = 0.5
    image_url: str | None = None


@dataclass
class ScoredArticle:
    """Article with its derived scores.

    Attributes:
        article: The underlying normalized Article
        relevance_score: Topic term overlap score, clamped to [0, 1]
        domain_score: Domain keyword score, clamped to [0, 1]
        impact_score: Named entity score, clamped to [0, 1]
        composite_score: Weighted total used for filtering and ranking, in [0, 1]
        enterprise_grade: Whether composite_score exceeds the diagnostic threshold
    """
    article: Article
    relevance_score: float = 0.0
    domain_score: float = 0.0
    impact_score: float = 0.0
    composite_score: float = 0.0
    enterprise_grade: bool = False

    def to_dict(self) -> dict[str, Any]:
        art = self.article
        return {
            "title": art.title,
            "description": art.description,
            "body_text": art.body_text,
            "url": art.url,
            "source_name": art.source_name,
            "provider_id": art.provider_id,
            "published_at": art.published_at.isoformat(),
            "image_url": art.image_url,
            "credibility": art.provider_credibility,
            "relevance_score": self.relevance_score,
            "domain_score": self.domain_score,
            "impact_score": self.impact_score,
            "composite_score": self.composite_score,
            "enterprise_grade": self.enterprise_grade,
        }


@dataclass
class ProviderResult:
    """Outcome of a single provider invocation.

    Either articles is populated (success) or error is set (failure). A
    failed provider always carries an empty article list.

    Attributes:
        provider_id: The provider that was invoked
        articles: Normalized articles returned by the provider
        error: The exception raised by the provider, or None on success
        raw_count: Number of usable articles the provider returned, counted
                   after normalization. Items without a title are not
                   counted, so efficiency is measured against usable yield.
        elapsed_ms: Wall time spent on the provider, including retries
        attempts: Number of attempts made
    """
    provider_id: str
    articles: list[Article] = field(default_factory=list)
    error: Exception | None = None
    raw_count: int = 0
    elapsed_ms: int = 0
    attempts: int = 0

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.raw_count,
            "error": str(self.error) if self.error else None,
            "elapsed_ms": self.elapsed_ms,
            "attempts": self.attempts,
        }


@dataclass(frozen=True)
class QueryContext:
    """Immutable input for one aggregation call.

    The topic is trimmed on construction; an empty topic or a non-positive
    size raises InvalidQueryError before any provider can be invoked.
    """
    topic: str
    target_count: int = 18
    max_count: int = 25

    def __post_init__(self) -> None:
        topic = (self.topic or "").strip()
        if not topic:
            raise InvalidQueryError("Topic must be a non-empty string")
        if self.target_count < 1:
            raise InvalidQueryError(f"target_count must be positive, got {self.target_count}")
        if self.max_count < 1:
            raise InvalidQueryError(f"max_count must be positive, got {self.max_count}")
        object.__setattr__(self, "topic", topic)


@dataclass
class AggregationStats:
    """Diagnostics describing the final selected set."""
    total_providers_configured: int = 0
    per_provider_counts: dict[str, int] = field(default_factory=dict)
    source_efficiency: dict[str, float] = field(default_factory=dict)
    provider_errors: dict[str, str | None] = field(default_factory=dict)
    unique_sources_used: int = 0
    diversity_score: float = 0.0
    quality_score: float = 0.0
    average_articles_per_source: float = 0.0
    impact_relevant_count: int = 0
    raw_count: int = 0
    final_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_providers_configured": self.total_providers_configured,
            "per_provider_counts": dict(self.per_provider_counts),
            "source_efficiency": dict(self.source_efficiency),
            "provider_errors": dict(self.provider_errors),
            "unique_sources_used": self.unique_sources_used,
            "diversity_score": self.diversity_score,
            "quality_score": self.quality_score,
            "average_articles_per_source": self.average_articles_per_source,
            "impact_relevant_count": self.impact_relevant_count,
            "raw_count": self.raw_count,
            "final_count": self.final_count,
        }


@dataclass
class AggregationResult:
    """Final ranked articles with per-provider results and statistics."""
    topic: str
    articles: list[ScoredArticle]
    provider_results: list[ProviderResult]
    stats: AggregationStats
    target_count: int
    processing_ms: int = 0

    @property
    def raw_count(self) -> int:
        return sum(result.raw_count for result in self.provider_results)

    @property
    def final_count(self) -> int:
        return len(self.articles)

    @property
    def enterprise_grade(self) -> bool:
        return self.final_count >= self.target_count

    def to_dict(self) -> dict[str, Any]:
        return {
            "topic": self.topic,
            "articles": [item.to_dict() for item in self.articles],
            "source_breakdown": {r.provider_id: r.to_dict() for r in self.provider_results},
            "statistics": self.stats.to_dict(),
            "raw_count": self.raw_count,
            "final_count": self.final_count,
            "enterprise_grade": self.enterprise_grade,
            "processing_ms": self.processing_ms,
        }
