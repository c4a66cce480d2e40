"""
Fan-out coordination for multi-provider topic searches.

This module coordinates one aggregation call:
1. Validate the query (before any provider is invoked)
2. Invoke every configured provider concurrently, capturing each outcome
3. Concatenate successful results in configured provider order
4. Deduplicate, score, rank and truncate
5. Summarize the final set

A provider failure never cancels or affects its siblings. Only the
failure of every provider is raised, as AllProvidersFailedError.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any

import httpx

from .config import AppConfig
from .core.dedup import dedup_articles
from .core.errors import (
    AllProvidersFailedError,
    ProviderError,
    ProviderUnavailableError,
    QuotaExceededError,
)
from .core.quota import QuotaTracker
from .core.ranking import select_articles
from .core.scoring import score_articles
from .core.stats import summarize
from .core.types import AggregationResult, Article, ProviderResult, QueryContext
from .logging_utils import LOGGER_NAME, log_event
from .providers.factory import build_providers


class Aggregator:
    """Fans a topic out to all providers and ranks the combined results.

    The aggregator owns the quota tracker and hands the same instance to
    every provider adapter it builds.

    Attributes:
        cfg: Application configuration
        quota: Shared per-provider quota tracker
        providers: Provider adapters in configured order
        logger: Logger for structured events
    """

    def __init__(
        self,
        cfg: AppConfig | None = None,
        providers: list[Any] | None = None,
        quota: QuotaTracker | None = None,
        logger: logging.Logger | None = None,
        only: list[str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.cfg = cfg or AppConfig()
        self.quota = quota or QuotaTracker()
        if providers is None:
            providers = build_providers(self.cfg, self.quota, only=only, transport=transport)
        self.providers = list(providers)
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def build_context(
        self,
        topic: str,
        target_count: int | None = None,
        max_count: int | None = None,
    ) -> QueryContext:
        """Build a validated QueryContext, filling sizes from config.

        Raises:
            InvalidQueryError: If the topic is empty or a size is not positive
        """
        return QueryContext(
            topic=topic,
            target_count=(
                target_count if target_count is not None else self.cfg.aggregation.target_articles
            ),
            max_count=max_count if max_count is not None else self.cfg.aggregation.max_articles,
        )

    async def aggregate(self, ctx: QueryContext) -> AggregationResult:
        """Run one aggregation call.

        Args:
            ctx: Validated query context

        Returns:
            AggregationResult with the ranked articles and diagnostics

        Raises:
            AllProvidersFailedError: If every configured provider failed
        """
        start = time.monotonic()
        log_event(
            self.logger,
            "Aggregation start",
            event="aggregation_start",
            topic=ctx.topic,
            providers=[provider.provider_id for provider in self.providers],
        )

        tasks = [
            asyncio.create_task(self._run_provider(provider, ctx.topic))
            for provider in self.providers
        ]
        results: list[ProviderResult] = list(await asyncio.gather(*tasks))

        if all(not result.ok for result in results):
            log_event(
                self.logger,
                "All providers failed",
                level=logging.ERROR,
                event="all_providers_failed",
                topic=ctx.topic,
                errors={result.provider_id: str(result.error) for result in results},
            )
            raise AllProvidersFailedError(results)

        collected: list[Article] = []
        for result in results:
            collected.extend(result.articles)

        if self.cfg.dedup.enabled:
            unique = dedup_articles(collected, self.cfg.dedup.title_similarity_threshold)
        else:
            unique = collected
        log_event(
            self.logger,
            "Dedup complete",
            event="dedup_complete",
            before=len(collected),
            after=len(unique),
        )

        scored = score_articles(unique, ctx.topic, self.cfg.scoring)
        final = select_articles(scored, self.cfg.aggregation.min_score, ctx.max_count)
        stats = summarize(final, results, total_providers=len(self.providers))

        processing_ms = int((time.monotonic() - start) * 1000)
        result = AggregationResult(
            topic=ctx.topic,
            articles=final,
            provider_results=results,
            stats=stats,
            target_count=ctx.target_count,
            processing_ms=processing_ms,
        )
        log_event(
            self.logger,
            "Aggregation complete",
            event="aggregation_complete",
            topic=ctx.topic,
            raw_count=result.raw_count,
            final_count=result.final_count,
            diversity_score=stats.diversity_score,
            quality_score=stats.quality_score,
            processing_ms=processing_ms,
        )
        return result

    async def _run_provider(self, provider: Any, topic: str) -> ProviderResult:
        """Invoke one provider, converting any failure into a ProviderResult.

        ProviderUnavailableError is retried up to cfg.aggregation.retries
        times with linear backoff; quota errors are not retried.
        """
        provider_id = provider.provider_id
        retries = max(0, self.cfg.aggregation.retries)
        backoff = self.cfg.aggregation.retry_backoff_seconds
        start = time.monotonic()
        error: ProviderError | None = None
        attempts = 0

        for attempt in range(retries + 1):
            attempts = attempt + 1
            try:
                articles = await provider.fetch(topic)
            except QuotaExceededError as exc:
                error = exc
                log_event(
                    self.logger,
                    "Provider quota exceeded",
                    level=logging.WARNING,
                    event="quota_exceeded",
                    provider=provider_id,
                )
                break
            except ProviderUnavailableError as exc:
                error = exc
            except Exception as exc:  # noqa: BLE001
                self.logger.debug("Unexpected provider failure", exc_info=True)
                error = ProviderUnavailableError(provider_id, f"{type(exc).__name__}: {exc}")
            else:
                elapsed_ms = int((time.monotonic() - start) * 1000)
                log_event(
                    self.logger,
                    "Provider ok",
                    event="provider_ok",
                    provider=provider_id,
                    count=len(articles),
                    elapsed_ms=elapsed_ms,
                    attempts=attempts,
                )
                return ProviderResult(
                    provider_id=provider_id,
                    articles=list(articles),
                    raw_count=len(articles),
                    elapsed_ms=elapsed_ms,
                    attempts=attempts,
                )
            if attempt < retries:
                await asyncio.sleep(backoff * (attempt + 1))

        elapsed_ms = int((time.monotonic() - start) * 1000)
        if not isinstance(error, QuotaExceededError):
            log_event(
                self.logger,
                "Provider failed",
                level=logging.WARNING,
                event="provider_failed",
                provider=provider_id,
                error=str(error),
                attempts=attempts,
            )
        return ProviderResult(
            provider_id=provider_id,
            error=error,
            elapsed_ms=elapsed_ms,
            attempts=attempts,
        )

    def usage_stats(self) -> dict[str, Any]:
        """Return quota usage and the configured sizes."""
        return {
            "rate_limits": self.quota.usage(),
            "target_articles": self.cfg.aggregation.target_articles,
            "max_articles": self.cfg.aggregation.max_articles,
            "active_sources": len(self.providers),
        }

    def reset_daily_counters(self) -> None:
        """Reset all provider quotas. Called once per UTC day by a scheduler."""
        self.quota.reset_all()
        log_event(self.logger, "Quota counters reset", event="quota_reset")


def run_aggregation(
    topic: str,
    target_count: int | None = None,
    max_count: int | None = None,
    cfg: AppConfig | None = None,
    aggregator: Aggregator | None = None,
) -> AggregationResult:
    """Synchronous entry point for one aggregation call.

    The query is validated before any provider is built or invoked.

    Raises:
        InvalidQueryError: If the topic is empty after trimming or a size is not positive
        AllProvidersFailedError: If every provider failed
    """
    cfg = cfg or (aggregator.cfg if aggregator else AppConfig())
    ctx = QueryContext(
        topic=topic,
        target_count=target_count if target_count is not None else cfg.aggregation.target_articles,
        max_count=max_count if max_count is not None else cfg.aggregation.max_articles,
    )
    aggregator = aggregator or Aggregator(cfg)
    return asyncio.run(aggregator.aggregate(ctx))
