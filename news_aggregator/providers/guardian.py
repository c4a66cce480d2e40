"""The Guardian content API adapter."""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter, date_from, strip_html

DESCRIPTION_CHARS = 300


class GuardianAdapter(ProviderAdapter):
    provider_id = "guardian"
    display_name = "The Guardian"
    endpoint_path = "/search"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        params = {
            "q": f"{topic} AND (sustainability OR ESG OR environment OR climate)",
            "api-key": api_key,
            "page-size": self.settings.page_size,
            "order-by": "relevance",
            "section": "business|environment|world",
            "show-fields": "headline,body,thumbnail,shortUrl",
        }
        if self.settings.lookback_days is not None:
            params["from-date"] = date_from(self.settings.lookback_days)
        return params

    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        return payload["response"]["results"]

    def normalize(self, item: dict[str, Any]) -> Article | None:
        fields = item.get("fields")
        if not isinstance(fields, dict):
            fields = {}
        body = strip_html(fields.get("body"))
        return self.make_article(
            title=item.get("webTitle") or fields.get("headline"),
            url=fields.get("shortUrl") or item.get("webUrl"),
            source_name=self.display_name,
            description=body[:DESCRIPTION_CHARS],
            content=body,
            published_at=item.get("webPublicationDate"),
            image_url=fields.get("thumbnail"),
        )
