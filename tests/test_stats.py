"""Tests for aggregation statistics."""

from __future__ import annotations

import pytest

from news_aggregator.core.errors import ProviderUnavailableError
from news_aggregator.core.stats import diversity_score, quality_score, summarize
from news_aggregator.core.types import Article, ProviderResult, ScoredArticle


def _scored(
    provider_id: str,
    credibility: float,
    relevance: float,
    enterprise: bool,
    impact: float = 0.0,
) -> ScoredArticle:
    article = Article(
        title=f"{provider_id} story",
        url=f"https://{provider_id}.example/story",
        provider_id=provider_id,
        provider_credibility=credibility,
    )
    return ScoredArticle(
        article=article,
        relevance_score=relevance,
        impact_score=impact,
        composite_score=0.5,
        enterprise_grade=enterprise,
    )


def _results() -> list[ProviderResult]:
    return [
        ProviderResult(provider_id="guardian", raw_count=4),
        ProviderResult(provider_id="nyt", raw_count=2),
        ProviderResult(provider_id="gnews", error=ProviderUnavailableError("gnews", "HTTP 500")),
    ]


def test_summarize_counts_and_efficiency():
    final = [
        _scored("guardian", 0.95, 0.36, True, impact=0.45),
        _scored("nyt", 0.92, 0.12, False),
    ]

    stats = summarize(final, _results(), total_providers=5)

    assert stats.total_providers_configured == 5
    assert stats.per_provider_counts == {"guardian": 1, "nyt": 1, "gnews": 0}
    assert stats.source_efficiency == {"guardian": 0.25, "nyt": 0.5, "gnews": 0.0}
    assert stats.provider_errors["gnews"] == "gnews: HTTP 500"
    assert stats.provider_errors["guardian"] is None
    assert stats.unique_sources_used == 2
    assert stats.diversity_score == pytest.approx(0.4)
    assert stats.average_articles_per_source == pytest.approx(1.0)
    assert stats.impact_relevant_count == 1
    assert stats.raw_count == 6
    assert stats.final_count == 2


def test_quality_score_weights():
    final = [
        _scored("guardian", 0.95, 0.36, True),
        _scored("nyt", 0.92, 0.12, False),
    ]

    expected = 0.24 * 0.3 + 0.935 * 0.3 + 0.4 * 0.2 + 0.5 * 0.2
    assert quality_score(final, 5) == pytest.approx(expected)
    assert summarize(final, _results(), total_providers=5).quality_score == pytest.approx(expected)


def test_empty_final_set():
    stats = summarize([], _results(), total_providers=5)

    assert stats.quality_score == 0.0
    assert stats.diversity_score == 0.0
    assert stats.per_provider_counts == {"guardian": 0, "nyt": 0, "gnews": 0}
    assert stats.average_articles_per_source == 0.0
    assert stats.final_count == 0


def test_total_providers_defaults_to_result_count():
    stats = summarize([_scored("guardian", 0.9, 0.1, False)], _results())

    assert stats.total_providers_configured == 3
    assert stats.diversity_score == pytest.approx(1 / 3)


def test_diversity_with_no_providers():
    assert diversity_score([_scored("guardian", 0.9, 0.1, False)], 0) == 0.0


def test_counts_cover_articles_without_a_result_entry():
    stats = summarize([_scored("newsapi_ai", 0.9, 0.1, False)], [], total_providers=5)

    assert stats.per_provider_counts == {"newsapi_ai": 1}
    assert stats.source_efficiency == {}


def test_counts_and_efficiency_list_the_same_providers():
    stats = summarize([_scored("guardian", 0.95, 0.36, True)], _results(), total_providers=5)

    assert set(stats.per_provider_counts) == set(stats.source_efficiency) == set(stats.provider_errors)
