"""Tests for threshold filtering, ranking and truncation."""

from __future__ import annotations

from news_aggregator.config import AggregationConfig
from news_aggregator.core.ranking import select_articles
from news_aggregator.core.types import Article, ScoredArticle


def _scored(title: str, score: float) -> ScoredArticle:
    article = Article(title=title, url=f"https://example.com/{title}", provider_id="nyt")
    return ScoredArticle(article=article, composite_score=score)


def test_drops_scores_at_or_below_threshold():
    scored = [_scored("low", 0.2), _scored("edge", 0.25), _scored("ok", 0.26)]

    selected = select_articles(scored, min_score=0.25, max_count=10)

    assert [s.article.title for s in selected] == ["ok"]


def test_sorts_descending_by_composite():
    scored = [_scored("b", 0.4), _scored("a", 0.9), _scored("c", 0.3)]

    selected = select_articles(scored, min_score=0.25, max_count=10)

    assert [s.article.title for s in selected] == ["a", "b", "c"]
    for left, right in zip(selected, selected[1:]):
        assert left.composite_score >= right.composite_score


def test_ties_keep_collection_order():
    scored = [_scored("first", 0.5), _scored("top", 0.8), _scored("second", 0.5), _scored("third", 0.5)]

    selected = select_articles(scored, min_score=0.25, max_count=10)

    assert [s.article.title for s in selected] == ["top", "first", "second", "third"]


def test_truncates_to_max_count():
    scored = [_scored(f"item{i}", 0.3 + i * 0.01) for i in range(40)]

    selected = select_articles(scored, min_score=0.25, max_count=25)

    assert len(selected) == 25
    assert selected[0].article.title == "item39"


def test_empty_result_is_valid():
    assert select_articles([_scored("low", 0.1)], min_score=0.25, max_count=5) == []
    assert select_articles([], min_score=0.25, max_count=5) == []


def test_non_positive_max_count_returns_nothing():
    assert select_articles([_scored("ok", 0.9)], min_score=0.25, max_count=0) == []


def test_default_minimum_score_is_pinned():
    # Current behavior pin: 0.25 was tuned empirically.
    assert AggregationConfig().min_score == 0.25
