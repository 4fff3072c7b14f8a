"""Per-key mutual exclusion for stock and order mutations.

Every read-check-write on a product's quantity, and every status
transition of an order, runs while holding the lock for that key.
Multi-key holds acquire in sorted key order, so two callers touching
overlapping product sets cannot deadlock. Locks are re-entrant: a thread
that already holds a key may acquire it again.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import ExitStack, contextmanager


def product_key(product_id: str) -> str:
    return f"product:{product_id}"


def order_key(order_id: int) -> str:
    return f"order:{order_id}"


def sku_key(sku: str) -> str:
    return f"sku:{sku.strip().lower()}"


class KeyedLockRegistry:

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, keys: Iterable[str]) -> Iterator[None]:
        """Acquire every key in *keys* (deduplicated, sorted) for the block."""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                lock.acquire()
                stack.callback(lock.release)
            yield
