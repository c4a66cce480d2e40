"""New York Times Article Search API adapter."""

from __future__ import annotations

from typing import Any

from ..core.types import Article
from .base import ProviderAdapter, date_from

NYT_MEDIA_BASE = "https://www.nytimes.com/"


class NYTAdapter(ProviderAdapter):
    provider_id = "nyt"
    display_name = "The New York Times"
    endpoint_path = "/articlesearch.json"

    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        params = {
            "q": f"{topic} AND (business OR environment OR regulation)",
            "api-key": api_key,
            "sort": "relevance",
            "page": 0,
        }
        if self.settings.lookback_days is not None:
            params["begin_date"] = date_from(self.settings.lookback_days, compact=True)
            params["end_date"] = date_from(0, compact=True)
        return params

    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        # The API has no page size parameter; it always returns up to 10 docs.
        return payload["response"]["docs"][: self.settings.page_size]

    def normalize(self, item: dict[str, Any]) -> Article | None:
        headline = item.get("headline")
        if isinstance(headline, str):
            headline = {"main": headline}
        elif not isinstance(headline, dict):
            headline = {}
        lead = item.get("lead_paragraph")
        return self.make_article(
            title=headline.get("main"),
            url=item.get("web_url"),
            source_name=self.display_name,
            description=item.get("abstract") or lead,
            content=lead,
            published_at=item.get("pub_date"),
            image_url=_image_url(item.get("multimedia")),
        )


def _image_url(multimedia: Any) -> str | None:
    if not isinstance(multimedia, list) or not multimedia:
        return None
    first = multimedia[0]
    if not isinstance(first, dict) or not first.get("url"):
        return None
    url = str(first["url"])
    if url.startswith("http"):
        return url
    return f"{NYT_MEDIA_BASE}{url.lstrip('/')}"
