"""Threshold filtering, ranking and truncation of scored articles."""

from __future__ import annotations

from .types import ScoredArticle

DEFAULT_MIN_SCORE = 0.25


def select_articles(
    scored: list[ScoredArticle],
    min_score: float = DEFAULT_MIN_SCORE,
    max_count: int = 25,
) -> list[ScoredArticle]:
    """Filter, rank and cap scored articles.

    Articles with a composite score at or below `min_score` are dropped.
    The rest are sorted by composite score, highest first; ties keep their
    collection order. An empty result is valid and not an error.

    Args:
        scored: Scored articles in collection order
        min_score: Exclusive lower bound on the composite score
        max_count: Maximum number of articles to return

    Returns:
        At most `max_count` articles, sorted descending by composite score
    """
    if max_count <= 0:
        return []
    relevant = [item for item in scored if item.composite_score > min_score]
    # sorted() is stable, so equal scores stay in collection order
    ranked = sorted(relevant, key=lambda item: item.composite_score, reverse=True)
    return ranked[:max_count]
