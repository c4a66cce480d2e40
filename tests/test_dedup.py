"""Tests for URL and title-similarity deduplication."""

from __future__ import annotations

from itertools import combinations

from news_aggregator.core.dedup import dedup_articles, jaccard_similarity
from news_aggregator.core.types import Article


def _article(title: str, url: str = "", provider_id: str = "guardian") -> Article:
    return Article(title=title, url=url, provider_id=provider_id)


def _mixed_articles() -> list[Article]:
    return [
        _article("SABIC carbon tax pressure grows on Gulf petrochemical producers", "https://a.com/1"),
        _article("SABIC carbon tax pressure grows on Gulf petrochemical producers today", "https://b.com/1", "nyt"),
        _article("EU finalises CBAM reporting rules", "https://a.com/2"),
        _article("EU finalises CBAM reporting rules", "https://a.com/2", "gnews"),
        _article("Polymer recycling plant opens in Singapore", ""),
        _article("Borouge expands polyolefin capacity", ""),
        _article("Borouge expands polyolefin capacity", "", "newsdata"),
        _article("Net zero pledges under scrutiny", "https://c.com/9"),
    ]


def test_drops_exact_url_duplicates():
    articles = [
        _article("First headline", "https://example.com/story"),
        _article("Completely different headline", "https://example.com/story", "nyt"),
    ]

    kept = dedup_articles(articles)

    assert [a.title for a in kept] == ["First headline"]


def test_drops_near_duplicate_titles_first_seen_wins():
    original = _article(
        "SABIC carbon tax pressure grows on Gulf petrochemical producers this quarter amid talks",
        "https://guardian.example/sabic",
    )
    reworded = _article(
        "SABIC carbon tax pressure grows on Gulf petrochemical producers this quarter amid talks analysts",
        "https://nyt.example/sabic",
        "nyt",
    )

    kept = dedup_articles([original, reworded])

    assert kept == [original]


def test_similarity_exactly_at_threshold_is_kept():
    base_words = [f"word{i}" for i in range(17)]
    first = _article(" ".join(base_words), "https://x.com/1")
    # 17 shared words out of a 20-word union: similarity is exactly 0.85
    second = _article(" ".join(base_words + ["extra1", "extra2", "extra3"]), "https://x.com/2")

    assert jaccard_similarity(first.title, second.title) == 17 / 20
    assert len(dedup_articles([first, second])) == 2


def test_empty_urls_are_treated_as_unique():
    articles = [
        _article("Carbon markets rally", ""),
        _article("Shell exits chemicals joint venture", ""),
    ]

    assert len(dedup_articles(articles)) == 2


def test_dropped_article_url_is_not_recorded():
    first = _article("Polyethylene prices climb in Asia", "https://a.com/1")
    near_dup = _article("Polyethylene prices climb in Asia", "https://b.com/2")
    different = _article("Renewable feedstock pilot announced", "https://b.com/2")

    kept = dedup_articles([first, near_dup, different])

    assert [a.url for a in kept] == ["https://a.com/1", "https://b.com/2"]


def test_jaccard_similarity_ignores_case_and_order():
    assert jaccard_similarity("Carbon Tax Europe", "europe carbon tax") == 1.0
    assert jaccard_similarity("carbon tax", "carbon border") == 1 / 3
    assert jaccard_similarity("", "") == 0.0


def test_dedup_is_idempotent():
    once = dedup_articles(_mixed_articles())

    assert dedup_articles(once) == once


def test_dedup_output_has_unique_urls_and_dissimilar_titles():
    kept = dedup_articles(_mixed_articles())

    urls = [a.url for a in kept if a.url]
    assert len(urls) == len(set(urls))
    for left, right in combinations(kept, 2):
        assert jaccard_similarity(left.title, right.title) <= 0.85


def test_dedup_preserves_order():
    kept = dedup_articles(_mixed_articles())

    assert [a.title for a in kept] == [
        "SABIC carbon tax pressure grows on Gulf petrochemical producers",
        "EU finalises CBAM reporting rules",
        "Polymer recycling plant opens in Singapore",
        "Borouge expands polyolefin capacity",
        "Net zero pledges under scrutiny",
    ]
