"""NewsAPI.org /everything adapter."""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter, date_from


class NewsAPIAdapter(ProviderAdapter):
    provider_id = "newsapi"
    display_name = "NewsAPI"
    endpoint_path = "/everything"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        params = {
            "q": f"{topic} AND (petrochemical OR chemical OR sustainability OR ESG)",
            "apiKey": api_key,
            "sortBy": "relevance",
            "pageSize": self.settings.page_size,
            "language": "en",
        }
        if self.settings.lookback_days is not None:
            params["from"] = date_from(self.settings.lookback_days)
        return params

    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        return payload["articles"]

    def normalize(self, item: dict[str, Any]) -> Article | None:
        source = item.get("source") or {}
        description = item.get("description")
        return self.make_article(
            title=item.get("title"),
            url=item.get("url"),
            source_name=source.get("name") if isinstance(source, dict) else source,
            description=description,
            content=item.get("content") or description,
            published_at=item.get("publishedAt"),
            image_url=item.get("urlToImage"),
        )
