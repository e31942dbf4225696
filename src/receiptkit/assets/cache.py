#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

"""Process-wide cache for remote images.

Entries live for ``ttl_seconds`` after the fetch that created them and are
evicted least-recently-used first once ``capacity`` is reached. Concurrent
misses on one URL share a single fetch. Failed fetches resolve to the
placeholder image and are never stored.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Callable, Final

from ..config.loader import CacheConfig
from ..core.errors import AssetFetchError
from .fetch import PLACEHOLDER_ASSET, Asset, AssetFetcher, HttpAssetFetcher

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS: Final = 12 * 60 * 60
DEFAULT_CAPACITY: Final = 1000
DEFAULT_SWEEP_INTERVAL_SECONDS: Final = 60 * 60


@dataclass
class CacheEntry:
    key: str
    value: Asset
    inserted_at: float


@dataclass(frozen=True)
class CacheStats:
    size: int
    capacity: int
    ttl_seconds: float
    in_flight: int


class AssetCache:
    def __init__(
        self,
        fetcher: AssetFetcher,
        *,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        capacity: int = DEFAULT_CAPACITY,
        sweep_interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        placeholder: Asset = PLACEHOLDER_ASSET,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        if sweep_interval_seconds <= 0:
            raise ValueError("sweep_interval_seconds must be positive")
        self._fetcher = fetcher
        self._ttl = float(ttl_seconds)
        self._capacity = capacity
        self._sweep_interval = float(sweep_interval_seconds)
        self._clock = clock
        self._placeholder = placeholder
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._in_flight: dict[str, Future[Asset]] = {}
        # Guards _entries and _in_flight only. Fetches run outside it.
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._sweeper: threading.Thread | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def _is_live(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.inserted_at < self._ttl

    def resolve(self, url: str) -> Asset:
        """Return the image for url, fetching it at most once per TTL window."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is not None:
                if self._is_live(entry, self._clock()):
                    self._entries.move_to_end(url)
                    return entry.value
                del self._entries[url]
            future = self._in_flight.get(url)
            owner = future is None
            if future is None:
                future = Future()
                self._in_flight[url] = future

        if not owner:
            return future.result()
        return self._fetch(url, future)

    def _fetch(self, url: str, future: Future[Asset]) -> Asset:
        try:
            asset = self._fetcher.fetch(url)
        except AssetFetchError as exc:
            logger.warning("%s; using placeholder", exc)
            asset = self._placeholder
            with self._lock:
                self._in_flight.pop(url, None)
        except Exception as exc:
            with self._lock:
                self._in_flight.pop(url, None)
            future.set_exception(exc)
            raise
        else:
            with self._lock:
                self._store(url, asset)
                self._in_flight.pop(url, None)
        future.set_result(asset)
        return asset

    def _store(self, url: str, asset: Asset) -> None:
        if url in self._entries:
            del self._entries[url]
        while len(self._entries) >= self._capacity:
            evicted, _entry = self._entries.popitem(last=False)
            logger.debug("asset cache full, evicted %s", evicted)
        self._entries[url] = CacheEntry(key=url, value=asset, inserted_at=self._clock())

    def sweep(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in self._entries.items() if not self._is_live(entry, now)]
            for key in expired:
                del self._entries[key]
        if expired:
            logger.debug("asset cache sweep removed %d entries", len(expired))
        return len(expired)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                capacity=self._capacity,
                ttl_seconds=self._ttl,
                in_flight=len(self._in_flight),
            )

    def start_sweeper(self) -> None:
        if self._sweeper is not None and self._sweeper.is_alive():
            return
        self._stop.clear()
        self._sweeper = threading.Thread(
            target=self._sweep_loop, name="receiptkit-asset-sweeper", daemon=True
        )
        self._sweeper.start()

    def stop_sweeper(self, timeout: float | None = None) -> None:
        self._stop.set()
        sweeper = self._sweeper
        self._sweeper = None
        if sweeper is not None:
            sweeper.join(timeout)

    def _sweep_loop(self) -> None:
        while not self._stop.wait(self._sweep_interval):
            self.sweep()


_DEFAULT_CACHE: AssetCache | None = None
_DEFAULT_LOCK = threading.Lock()


def default_asset_cache(config: CacheConfig | None = None) -> AssetCache:
    """Return the process-wide cache, creating it and its sweeper on first use.

    ``config`` only applies to the call that creates the cache.
    """
    global _DEFAULT_CACHE
    with _DEFAULT_LOCK:
        if _DEFAULT_CACHE is None:
            settings = config or CacheConfig()
            cache = AssetCache(
                HttpAssetFetcher(timeout=settings.fetch_timeout_seconds),
                ttl_seconds=settings.ttl_seconds,
                capacity=settings.capacity,
                sweep_interval_seconds=settings.sweep_interval_seconds,
            )
            cache.start_sweeper()
            _DEFAULT_CACHE = cache
        return _DEFAULT_CACHE


__all__ = [
    "AssetCache",
    "CacheEntry",
    "CacheStats",
    "DEFAULT_CAPACITY",
    "DEFAULT_SWEEP_INTERVAL_SECONDS",
    "DEFAULT_TTL_SECONDS",
    "default_asset_cache",
]
