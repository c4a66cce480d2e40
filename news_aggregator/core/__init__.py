"""
Core domain models and aggregation logic.

This package contains the data types and the pure dedup, scoring,
ranking and statistics functions. None of it performs I/O.
"""

from .errors import (
    AggregationError,
    AllProvidersFailedError,
    InvalidQueryError,
    ProviderError,
    ProviderUnavailableError,
    QuotaExceededError,
)
from .types import (
    AggregationResult,
    AggregationStats,
    Article,
    ProviderResult,
    QueryContext,
    ScoredArticle,
)
from .quota import QuotaTracker
from .dedup import dedup_articles, jaccard_similarity
from .scoring import score_article, score_articles
from .ranking import select_articles
from .stats import summarize

__all__ = [
    "AggregationError",
    "AllProvidersFailedError",
    "InvalidQueryError",
    "ProviderError",
    "ProviderUnavailableError",
    "QuotaExceededError",
    "AggregationResult",
    "AggregationStats",
    "Article",
    "ProviderResult",
    "QueryContext",
    "ScoredArticle",
    "QuotaTracker",
    "dedup_articles",
    "jaccard_similarity",
    "score_article",
    "score_articles",
    "select_articles",
    "summarize",
]
