"""NewsData.io latest-news adapter."""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter


class NewsDataAdapter(ProviderAdapter):
    provider_id = "newsdata"
    display_name = "NewsData"
    endpoint_path = "/news"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        return {
            "apikey": api_key,
            "q": topic,
            "language": "en",
            "category": "business,environment",
            "size": self.settings.page_size,
        }

    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        return payload["results"]

    def normalize(self, item: dict[str, Any]) -> Article | None:
        description = item.get("description")
        return self.make_article(
            title=item.get("title"),
            url=item.get("link"),
            source_name=item.get("source_id"),
            description=description,
            content=item.get("content") or description,
            published_at=item.get("pubDate"),
            image_url=item.get("image_url"),
        )
