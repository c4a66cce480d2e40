"""
NewsAPI.ai (Event Registry) article search adapter.

Unlike the other providers, credibility here is per article: publishers on
the trusted list get TRUSTED_CREDIBILITY, everything else the configured
provider credibility.
"""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter

TRUSTED_CREDIBILITY = 0.9

TRUSTED_SOURCES = (
    "reuters",
    "bloomberg",
    "financial times",
    "wall street journal",
    "chemical week",
    "icis",
    "plastics news",
    "oil gas journal",
    "chemical engineering",
    "process worldwide",
    "hydrocarbon processing",
)

BODY_CHARS = 500


class NewsAPIAIAdapter(ProviderAdapter):
    provider_id = "newsapi_ai"
    display_name = "NewsAPI.ai"
    endpoint_path = "/article/getArticles"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        return {
            "apiKey": api_key,
            "query": enhance_query(topic),
            "articlesCount": self.settings.page_size,
            "articlesSortBy": "rel",
            "includeArticleBody": "true",
            "includeArticleImage": "true",
            "articleBodyLen": BODY_CHARS,
            "lang": "eng",
        }

    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        articles = payload.get("articles") if isinstance(payload, dict) else None
        if not articles:
            return []
        if isinstance(articles, dict):
            return articles.get("results") or []
        return articles

    def normalize(self, item: dict[str, Any]) -> Article | None:
        source_name = _source_name(item.get("source"))
        body = item.get("body") or item.get("description")
        return self.make_article(
            title=item.get("title"),
            url=item.get("url"),
            source_name=source_name,
            description=body,
            content=body,
            published_at=item.get("dateTime") or item.get("publishedAt"),
            image_url=item.get("image"),
            credibility=self.source_credibility(source_name),
        )

    def source_credibility(self, source_name: str | None) -> float:
        name = (source_name or "").lower()
        if any(trusted in name for trusted in TRUSTED_SOURCES):
            return TRUSTED_CREDIBILITY
        return self.credibility


def enhance_query(topic: str) -> str:
    """Wrap a topic with petrochemical context and, if missing, ESG context."""
    terms = ['(petrochemical OR "chemical industry" OR polymer)', topic]
    lowered = topic.lower()
    if "esg" not in lowered and "sustainability" not in lowered:
        terms.append('(ESG OR sustainability OR "environmental impact")')
    return " AND ".join(terms)


def _source_name(source: Any) -> str | None:
    if isinstance(source, dict):
        return source.get("title") or source.get("name")
    if isinstance(source, str):
        return source
    return None
