"""
Abstract base class for content-search provider adapters.

New providers should inherit from ProviderAdapter and implement
build_params, extract_items and normalize. The base class owns the
shared request flow:

1. Reject an empty topic
2. Take a slot from the quota tracker (no network call if none is left)
3. Issue one HTTP GET with the provider's own timeout
4. Map every I/O failure to ProviderUnavailableError
5. Normalize each raw item into an Article with explicit defaults

Adapters never retry; retry policy belongs to the coordinator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
import logging
from typing import Any

from bs4 import BeautifulSoup
import httpx

from ..config import HttpConfig, ProviderSettings, get_api_key
from ..core.errors import InvalidQueryError, ProviderUnavailableError, QuotaExceededError
from ..core.quota import QuotaTracker
from ..core.types import NO_DESCRIPTION, UNKNOWN_SOURCE, Article, utcnow

logger = logging.getLogger(__name__)

MAX_BODY_CHARS = 2000

_TIMESTAMP_FORMATS = (
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d",
)


class ProviderAdapter(ABC):
    """Base class for provider adapters.

    Attributes:
        provider_id: Stable identifier used for quotas, stats and config lookup
        display_name: Human-readable provider name
        endpoint_path: Path appended to the configured base URL
        settings: Provider configuration (endpoint, quota, weights)
        quota: Shared quota tracker
    """

    provider_id: str = ""
    display_name: str = ""
    endpoint_path: str = ""

    def __init__(
        self,
        settings: ProviderSettings,
        quota: QuotaTracker,
        http_cfg: HttpConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.quota = quota
        self.http_cfg = http_cfg or HttpConfig()
        self._transport = transport

    @property
    def credibility(self) -> float:
        return self.settings.credibility

    @property
    def priority_weight(self) -> float:
        return self.settings.priority_weight

    @property
    def timeout(self) -> float:
        return self.settings.timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}{self.endpoint_path}"

    @property
    def api_key(self) -> str | None:
        return get_api_key(self.settings)

    async def fetch(self, topic: str) -> list[Article]:
        """Search the provider for a topic and return normalized articles.

        Raises:
            InvalidQueryError: If the topic is empty
            QuotaExceededError: If the daily quota is used up (no request is made)
            ProviderUnavailableError: On missing key, timeout, HTTP or payload errors
        """
        topic = (topic or "").strip()
        if not topic:
            raise InvalidQueryError("Topic must be a non-empty string")

        limit = self.quota.limit_for(self.provider_id)
        if not self.quota.can_invoke(self.provider_id):
            raise QuotaExceededError(self.provider_id, limit)

        api_key = self.api_key
        if not api_key:
            raise ProviderUnavailableError(
                self.provider_id, f"missing API key ({self.settings.api_key_env})"
            )

        if not self.quota.try_acquire(self.provider_id):
            raise QuotaExceededError(self.provider_id, limit)

        payload = await self._get(self.build_params(topic, api_key))

        try:
            items = self.extract_items(payload)
            if not isinstance(items, list):
                raise TypeError(f"expected a list of items, got {type(items).__name__}")
            articles = []
            for item in items:
                if not isinstance(item, dict):
                    continue
                article = self.normalize(item)
                if article is not None:
                    articles.append(article)
        except (KeyError, TypeError, AttributeError, IndexError) as exc:
            raise ProviderUnavailableError(
                self.provider_id, f"Malformed payload: {type(exc).__name__}: {exc}"
            ) from exc

        logger.debug("%s returned %d articles", self.display_name, len(articles))
        return articles

    async def _get(self, params: dict[str, Any]) -> Any:
        headers = {"User-Agent": self.http_cfg.user_agent, "Accept": "application/json"}
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=headers,
                follow_redirects=True,
                trust_env=self.http_cfg.trust_env,
                transport=self._transport,
            ) as client:
                resp = await client.get(self.endpoint, params=params)
                resp.raise_for_status()
                return resp.json()
        except httpx.TimeoutException as exc:
            raise ProviderUnavailableError(self.provider_id, f"TimeoutError: {exc}") from exc
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise ProviderUnavailableError(
                self.provider_id, f"HTTP {status}", status_code=status
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderUnavailableError(
                self.provider_id, f"{type(exc).__name__}: {exc}"
            ) from exc
        except ValueError as exc:
            raise ProviderUnavailableError(
                self.provider_id, f"Malformed payload: {exc}"
            ) from exc

    def make_article(
        self,
        *,
        title: Any,
        url: Any,
        source_name: Any = None,
        description: Any = None,
        content: Any = None,
        published_at: Any = None,
        image_url: Any = None,
        credibility: float | None = None,
    ) -> Article | None:
        """Build an Article with explicit defaults for every missing field.

        Returns None when the item has no usable title.
        """
        title_text = clean_text(title)
        if not title_text:
            return None
        description_text = clean_text(description)
        return Article(
            title=title_text,
            url=clean_text(url),
            provider_id=self.provider_id,
            source_name=clean_text(source_name) or UNKNOWN_SOURCE,
            body_text=build_body_text(description_text, clean_text(content)),
            description=description_text or NO_DESCRIPTION,
            published_at=parse_timestamp(published_at),
            provider_credibility=self.credibility if credibility is None else credibility,
            provider_priority_weight=self.priority_weight,
            image_url=clean_text(image_url) or None,
        )

    @abstractmethod
    def build_params(self, topic: str, api_key: str) -> dict[str, Any]:
        """Return the query parameters for a topic search."""
        raise NotImplementedError

    @abstractmethod
    def extract_items(self, payload: Any) -> list[dict[str, Any]]:
        """Return the raw article items from a decoded response."""
        raise NotImplementedError

    @abstractmethod
    def normalize(self, item: dict[str, Any]) -> Article | None:
        """Convert one raw item into an Article, or None to skip it."""
        raise NotImplementedError


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return " ".join(value.split())


def strip_html(value: Any) -> str:
    text = clean_text(value)
    if "<" not in text:
        return text
    return clean_text(BeautifulSoup(text, "html.parser").get_text(" ", strip=True))


def build_body_text(description: str, content: str, max_chars: int = MAX_BODY_CHARS) -> str:
    """Join description and content into one excerpt for scoring."""
    parts = []
    for part in (description, content):
        if part and part not in parts:
            parts.append(part)
    return " ".join(parts)[:max_chars]


def parse_timestamp(value: Any) -> datetime:
    """Parse a provider timestamp, falling back to now() when missing or invalid.

    Naive timestamps are assumed to be UTC.
    """
    text = clean_text(value)
    if not text:
        return utcnow()
    parsed = None
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        for fmt in _TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(text, fmt)
                break
            except ValueError:
                continue
    if parsed is None:
        return utcnow()
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def date_from(days_ago: int, compact: bool = False, now: datetime | None = None) -> str:
    """Return the UTC date `days_ago` days back as YYYY-MM-DD (or YYYYMMDD)."""
    day = (now or utcnow()) - timedelta(days=days_ago)
    return day.strftime("%Y%m%d" if compact else "%Y-%m-%d")
