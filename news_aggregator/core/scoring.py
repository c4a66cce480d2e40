"""
Relevance and quality scoring for normalized articles.

The composite score is a fixed weighted sum of four sub-scores plus a
baseline. The baseline gives every article a non-zero floor so that
lower-weighted providers are not starved out of the ranking.

    composite = 0.2
              + 0.25 * relevance
              + 0.20 * domain
              + 0.20 * impact
              + 0.10 * credibility
              + 0.05 * priority_weight

Sub-scores and the composite are clamped to [0, 1].
"""

from __future__ import annotations

from ..config import ScoringConfig
from .types import Article, ScoredArticle

BASELINE = 0.2

TOPIC_TERM_POINTS = 0.12
DOMAIN_KEYWORD_POINTS = 0.08
HIGH_VALUE_ENTITY_POINTS = 0.15
SECONDARY_ENTITY_POINTS = 0.12

RELEVANCE_WEIGHT = 0.25
DOMAIN_WEIGHT = 0.20
IMPACT_WEIGHT = 0.20
CREDIBILITY_WEIGHT = 0.10
PRIORITY_WEIGHT = 0.05

# Topic terms of this length or shorter are ignored ("of", "eu").
MIN_TERM_LENGTH = 2


def score_article(
    article: Article, topic: str, cfg: ScoringConfig | None = None
) -> ScoredArticle:
    """Score a single article against a topic.

    Pure function: the article is not modified.

    Args:
        article: The normalized article to score
        topic: The query topic
        cfg: Keyword lists and the enterprise-grade threshold

    Returns:
        ScoredArticle carrying the sub-scores and the clamped composite
    """
    cfg = cfg or ScoringConfig()
    text = f"{article.title} {article.body_text}".lower()

    relevance = _clamp(TOPIC_TERM_POINTS * _count_topic_terms(topic, text))
    domain = _clamp(DOMAIN_KEYWORD_POINTS * _count_present(cfg.domain_keywords, text))
    impact = _clamp(
        HIGH_VALUE_ENTITY_POINTS * _count_present(cfg.high_value_entities, text)
        + SECONDARY_ENTITY_POINTS * _count_present(cfg.secondary_entities, text)
    )

    composite = (
        BASELINE
        + relevance * RELEVANCE_WEIGHT
        + domain * DOMAIN_WEIGHT
        + impact * IMPACT_WEIGHT
        + _clamp(article.provider_credibility) * CREDIBILITY_WEIGHT
        + _clamp(article.provider_priority_weight) * PRIORITY_WEIGHT
    )
    composite = _clamp(composite)

    return ScoredArticle(
        article=article,
        relevance_score=relevance,
        domain_score=domain,
        impact_score=impact,
        composite_score=composite,
        enterprise_grade=composite > cfg.enterprise_threshold,
    )


def score_articles(
    articles: list[Article], topic: str, cfg: ScoringConfig | None = None
) -> list[ScoredArticle]:
    return [score_article(article, topic, cfg) for article in articles]


def _count_topic_terms(topic: str, text: str) -> int:
    # Repeated terms count once per occurrence in the topic.
    return sum(
        1 for term in topic.lower().split() if len(term) > MIN_TERM_LENGTH and term in text
    )


def _count_present(keywords: list[str], text: str) -> int:
    return sum(1 for keyword in keywords if keyword and keyword.lower() in text)


def _clamp(value: float) -> float:
    return max(0.0, min(value, 1.0))
