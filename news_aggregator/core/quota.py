"""
Per-provider daily request quotas.

Counters are in-memory and last for the lifetime of the process. The
tracker is the only state shared between concurrent provider calls, so
every read-modify-write holds the lock.
"""

from __future__ import annotations

import threading


class QuotaTracker:
    """Tracks daily request counts against a fixed ceiling per provider.

    Attributes:
        default_limit: Ceiling used for providers without an explicit limit
    """

    def __init__(self, limits: dict[str, int] | None = None, default_limit: int = 100):
        self.default_limit = default_limit
        self._limits: dict[str, int] = dict(limits or {})
        self._used: dict[str, int] = {}
        self._lock = threading.Lock()

    def limit_for(self, provider_id: str) -> int:
        return self._limits.get(provider_id, self.default_limit)

    def set_limit(self, provider_id: str, limit: int) -> None:
        with self._lock:
            self._limits[provider_id] = limit

    def used(self, provider_id: str) -> int:
        with self._lock:
            return self._used.get(provider_id, 0)

    def remaining(self, provider_id: str) -> int:
        with self._lock:
            return max(0, self.limit_for(provider_id) - self._used.get(provider_id, 0))

    def can_invoke(self, provider_id: str) -> bool:
        with self._lock:
            return self._used.get(provider_id, 0) < self.limit_for(provider_id)

    def record_invocation(self, provider_id: str) -> None:
        with self._lock:
            self._used[provider_id] = self._used.get(provider_id, 0) + 1

    def try_acquire(self, provider_id: str) -> bool:
        """Check capacity and record an invocation in one step.

        Returns:
            True if a slot was taken, False if the ceiling is already reached
        """
        with self._lock:
            used = self._used.get(provider_id, 0)
            if used >= self.limit_for(provider_id):
                return False
            self._used[provider_id] = used + 1
            return True

    def reset_all(self) -> None:
        """Zero every counter. Called once per UTC day by an external scheduler."""
        with self._lock:
            self._used.clear()

    def usage(self) -> dict[str, dict[str, int]]:
        """Return a snapshot of usage for every known provider."""
        with self._lock:
            names = sorted(set(self._limits) | set(self._used))
            snapshot = {}
            for name in names:
                daily = self.limit_for(name)
                used = self._used.get(name, 0)
                snapshot[name] = {"daily": daily, "used": used, "remaining": max(0, daily - used)}
            return snapshot
