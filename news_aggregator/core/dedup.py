"""
Article deduplication using URL matching and word-set title comparison.

This module removes duplicate articles based on:
1. Exact URL matches (the same story returned by two providers)
2. Title similarity (same story, different URLs)

Title similarity is the Jaccard index of the lowercased word sets. It
ignores word order and does no stemming, so heavily reworded headlines
for the same event are not detected.
"""

from __future__ import annotations

from .types import Article

DEFAULT_TITLE_THRESHOLD = 0.85


def dedup_articles(
    articles: list[Article], threshold: float = DEFAULT_TITLE_THRESHOLD
) -> list[Article]:
    """Remove duplicate articles from a list.

    Articles are visited in collection order and the first one seen wins:
    1. Skip if its non-empty URL was already kept
    2. Skip if its title is more than `threshold` similar to a kept title

    Args:
        articles: List of articles to deduplicate
        threshold: Jaccard similarity above which titles are duplicates.
                   Default 0.85.

    Returns:
        Deduplicated list of articles, preserving original order
    """
    seen_urls: set[str] = set()
    kept: list[Article] = []
    word_sets: list[set[str]] = []

    for article in articles:
        if article.url and article.url in seen_urls:
            continue
        words = title_words(article.title)
        if _is_similar_title(words, word_sets, threshold):
            continue
        if article.url:
            seen_urls.add(article.url)
        word_sets.append(words)
        kept.append(article)

    return kept


def title_words(title: str) -> set[str]:
    return set(title.lower().split())


def jaccard_similarity(first: str, second: str) -> float:
    """Return the Jaccard index of the lowercased word sets of two titles.

    Two empty titles have similarity 0.0.
    """
    return _jaccard(title_words(first), title_words(second))


def _jaccard(first: set[str], second: set[str]) -> float:
    union = first | second
    if not union:
        return 0.0
    return len(first & second) / len(union)


def _is_similar_title(words: set[str], kept: list[set[str]], threshold: float) -> bool:
    for existing in kept:
        if _jaccard(words, existing) > threshold:
            return True
    return False
