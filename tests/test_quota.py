"""Tests for the per-provider quota tracker."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from news_aggregator.core.quota import QuotaTracker


def test_can_invoke_until_ceiling():
    quota = QuotaTracker({"gnews": 2})

    assert quota.can_invoke("gnews")
    quota.record_invocation("gnews")
    quota.record_invocation("gnews")

    assert not quota.can_invoke("gnews")
    assert quota.used("gnews") == 2
    assert quota.remaining("gnews") == 0


def test_unknown_provider_uses_default_limit():
    quota = QuotaTracker(default_limit=1)

    assert quota.limit_for("mystery") == 1
    assert quota.try_acquire("mystery")
    assert not quota.try_acquire("mystery")


def test_counters_are_independent_per_provider():
    quota = QuotaTracker({"guardian": 1, "nyt": 1})

    quota.record_invocation("guardian")

    assert not quota.can_invoke("guardian")
    assert quota.can_invoke("nyt")


def test_reset_all_restores_capacity():
    quota = QuotaTracker({"newsapi": 1})
    quota.record_invocation("newsapi")

    quota.reset_all()

    assert quota.can_invoke("newsapi")
    assert quota.used("newsapi") == 0


def test_usage_snapshot():
    quota = QuotaTracker({"guardian": 1000, "newsdata": 200})
    quota.record_invocation("newsdata")

    usage = quota.usage()

    assert usage["newsdata"] == {"daily": 200, "used": 1, "remaining": 199}
    assert usage["guardian"] == {"daily": 1000, "used": 0, "remaining": 1000}


def test_try_acquire_never_exceeds_ceiling_under_contention():
    quota = QuotaTracker({"gnews": 10})

    with ThreadPoolExecutor(max_workers=16) as pool:
        granted = list(pool.map(lambda _: quota.try_acquire("gnews"), range(200)))

    assert granted.count(True) == 10
    assert quota.used("gnews") == 10
