"""
In-memory exchange rate cache with a fixed TTL.

Entries live in a lock-striped map: every pair hashes to one shard and
only writes to that shard take its lock. Reads are lock-free because
entries are immutable and always replaced wholesale.
"""

import threading
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Dict, List, Optional

import structlog

from apps.exchange.domain.interfaces import Clock
from apps.exchange.domain.models import CacheEntry, RatePair
from apps.exchange.infrastructure.clock import SystemClock

logger = structlog.get_logger(__name__)

DEFAULT_TTL = timedelta(hours=1)
DEFAULT_SHARDS = 16


class _Shard:

    __slots__ = ("lock", "entries")

    def __init__(self):
        self.lock = threading.Lock()
        self.entries: Dict[RatePair, CacheEntry] = {}


class RateCache:
    """
    Concurrency-safe mapping RatePair -> CacheEntry.

    Expired entries stay physically present until overwritten or
    invalidated, but lookup() never returns them.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        shards: int = DEFAULT_SHARDS,
        clock: Optional[Clock] = None,
    ):
        if ttl <= timedelta(0):
            raise ValueError(f"Cache TTL must be positive, got {ttl}")
        if shards < 1:
            raise ValueError(f"Shard count must be at least 1, got {shards}")

        self.ttl = ttl
        self.clock = clock or SystemClock()
        self._shards: List[_Shard] = [_Shard() for _ in range(shards)]

    def _shard_for(self, pair: RatePair) -> _Shard:
        return self._shards[hash(pair) % len(self._shards)]

    def lookup(self, pair: RatePair) -> Optional[CacheEntry]:
        """Return the entry for pair, or None if absent or expired."""
        entry = self._shard_for(pair).entries.get(pair)
        if entry is None:
            return None

        if not entry.is_fresh(self.clock.now()):
            logger.debug(
                "exchange_rate_cache_expired",
                pair=str(pair),
                expires_at=entry.expires_at.isoformat(),
            )
            return None

        return entry

    def store(self, pair: RatePair, rate: Decimal, fetched_at: datetime) -> CacheEntry:
        """Insert or overwrite the entry for pair. Last writer wins."""
        entry = CacheEntry.create(rate, fetched_at, self.ttl)
        shard = self._shard_for(pair)
        with shard.lock:
            shard.entries[pair] = entry
        return entry

    def invalidate(self, pair: RatePair) -> None:
        shard = self._shard_for(pair)
        with shard.lock:
            shard.entries.pop(pair, None)

    def clear(self) -> None:
        for shard in self._shards:
            with shard.lock:
                shard.entries.clear()

    def __contains__(self, pair: RatePair) -> bool:
        # Physical presence, expired or not
        return pair in self._shard_for(pair).entries

    def __len__(self) -> int:
        return sum(len(shard.entries) for shard in self._shards)
