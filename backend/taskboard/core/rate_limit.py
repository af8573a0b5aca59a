"""Token Bucket Rate Limiting: pure bucket arithmetic keyed by client.

Invariants:
    - Bucket capacity = burst; refill = requests_per_minute / 60 tokens per second
    - A request consumes exactly one token; tokens never exceed capacity
    - Time is passed in (monotonic seconds): no clock reads inside the bucket

Design Decisions:
    - Per-client buckets in a plain dict: single-process service, no shared cache
    - Fully refilled idle buckets are evicted so the dict stays bounded by the
      clients seen within one idle window
    - retry_after computed from the deficit so 429 responses carry Retry-After
"""

import math
from dataclasses import dataclass, field


@dataclass
class TokenBucket:
    capacity: float
    refill_per_second: float
    tokens: float | None = None
    updated_at: float | None = None

    def __post_init__(self):
        if self.tokens is None:
            self.tokens = self.capacity

    def _refill(self, now: float) -> None:
        if self.updated_at is not None and now > self.updated_at:
            elapsed = now - self.updated_at
            self.tokens = min(
                self.capacity, self.tokens + elapsed * self.refill_per_second,
            )
        if self.updated_at is None or now > self.updated_at:
            self.updated_at = now

    def try_acquire(self, now: float) -> bool:
        self._refill(now)
        if self.tokens >= 1:
            self.tokens -= 1
            return True
        return False

    def retry_after(self) -> int:
        """Whole seconds until one token is available."""
        if self.tokens >= 1 or self.refill_per_second <= 0:
            return 0
        return max(1, math.ceil((1 - self.tokens) / self.refill_per_second))


@dataclass
class RateLimiter:
    """Per-client token buckets sharing one configuration.

    Buckets idle long enough to have refilled completely are indistinguishable
    from fresh ones, so they are swept at most once per idle window.
    """
    requests_per_minute: int
    burst: int
    _buckets: dict[str, TokenBucket] = field(default_factory=dict)
    _last_sweep: float | None = None

    @property
    def _capacity(self) -> float:
        return float(max(self.burst, 1))

    @property
    def _refill_per_second(self) -> float:
        return self.requests_per_minute / 60.0

    @property
    def idle_window(self) -> float:
        """Seconds after which an untouched bucket is back at full capacity."""
        if self._refill_per_second <= 0:
            return math.inf
        return self._capacity / self._refill_per_second

    @property
    def tracked_clients(self) -> int:
        return len(self._buckets)

    def _bucket(self, client: str) -> TokenBucket:
        bucket = self._buckets.get(client)
        if bucket is None:
            bucket = TokenBucket(
                capacity=self._capacity,
                refill_per_second=self._refill_per_second,
            )
            self._buckets[client] = bucket
        return bucket

    def sweep(self, now: float) -> int:
        """Drop buckets idle for at least one idle window; return how many."""
        self._last_sweep = now
        stale = [
            client for client, bucket in self._buckets.items()
            if bucket.updated_at is not None
            and now - bucket.updated_at >= self.idle_window
        ]
        for client in stale:
            del self._buckets[client]
        return len(stale)

    def check(self, client: str, now: float) -> tuple[bool, int]:
        """Return (allowed, retry_after_seconds) and consume a token if allowed."""
        if self._last_sweep is None:
            self._last_sweep = now
        elif now - self._last_sweep >= self.idle_window:
            self.sweep(now)
        bucket = self._bucket(client)
        if bucket.try_acquire(now):
            return True, 0
        return False, bucket.retry_after()
