"""GNews.io search adapter."""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter, date_from


class GNewsAdapter(ProviderAdapter):
    provider_id = "gnews"
    display_name = "GNews"
    endpoint_path = "/search"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        params = {
            "q": f"{topic} sustainability OR ESG OR chemical OR petrochemical",
            "token": api_key,
            "lang": "en",
            "country": "us,gb,ae,sg",
            "max": self.settings.page_size,
            "sortby": "relevance",
        }
        if self.settings.lookback_days is not None:
            params["from"] = f"{date_from(self.settings.lookback_days)}T00:00:00Z"
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
            image_url=item.get("image"),
        )
