"""
Diagnostics over the final ranked set.

Everything here is a pure function of data already computed by the
pipeline; nothing performs I/O.
"""

from __future__ import annotations

from collections import Counter

from .types import AggregationStats, ProviderResult, ScoredArticle

# Articles with an impact score above this count as impact-relevant.
IMPACT_RELEVANT_THRESHOLD = 0.3


def summarize(
    final_articles: list[ScoredArticle],
    provider_results: list[ProviderResult],
    total_providers: int | None = None,
) -> AggregationStats:
    """Build statistics for the final article set.

    Args:
        final_articles: The ranked, selected articles
        provider_results: One result per invoked provider
        total_providers: Number of configured providers; defaults to the
                         number of provider results

    Returns:
        AggregationStats with per-provider yield, diversity and quality
    """
    if total_providers is None:
        total_providers = len(provider_results)

    distribution = Counter(item.article.provider_id for item in final_articles)
    unique_sources = len(distribution)

    counts = {}
    efficiency = {}
    errors = {}
    for result in provider_results:
        final_count = distribution.get(result.provider_id, 0)
        counts[result.provider_id] = final_count
        efficiency[result.provider_id] = (
            final_count / result.raw_count if result.raw_count > 0 else 0.0
        )
        errors[result.provider_id] = str(result.error) if result.error else None

    # Articles whose provider has no result entry are still counted.
    for provider_id, final_count in distribution.items():
        counts.setdefault(provider_id, final_count)

    diversity = diversity_score(final_articles, total_providers)

    return AggregationStats(
        total_providers_configured=total_providers,
        per_provider_counts=counts,
        source_efficiency=efficiency,
        provider_errors=errors,
        unique_sources_used=unique_sources,
        diversity_score=diversity,
        quality_score=quality_score(final_articles, total_providers),
        average_articles_per_source=len(final_articles) / max(unique_sources, 1),
        impact_relevant_count=sum(
            1 for item in final_articles if item.impact_score > IMPACT_RELEVANT_THRESHOLD
        ),
        raw_count=sum(result.raw_count for result in provider_results),
        final_count=len(final_articles),
    )


def diversity_score(final_articles: list[ScoredArticle], total_providers: int) -> float:
    """Fraction of configured providers represented in the final set."""
    if total_providers <= 0:
        return 0.0
    providers = {item.article.provider_id for item in final_articles}
    return len(providers) / total_providers


def quality_score(final_articles: list[ScoredArticle], total_providers: int) -> float:
    """Weighted average of relevance, credibility, diversity and enterprise ratio.

    Returns 0.0 for an empty set.
    """
    if not final_articles:
        return 0.0
    count = len(final_articles)
    avg_relevance = sum(item.relevance_score for item in final_articles) / count
    avg_credibility = sum(item.article.provider_credibility for item in final_articles) / count
    enterprise_ratio = sum(1 for item in final_articles if item.enterprise_grade) / count
    diversity = diversity_score(final_articles, total_providers)
    return (
        avg_relevance * 0.3
        + avg_credibility * 0.3
        + diversity * 0.2
        + enterprise_ratio * 0.2
    )
