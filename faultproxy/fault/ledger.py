# -*- coding: utf-8 -*-
"""
    faultproxy
    ~~~~~~~~~~
    Local HTTP forwarding proxy that injects latency and scripted
    failures in front of a real upstream service.

    :copyright: (c) 2013-present by Abhinav Singh and contributors.
    :license: BSD, see LICENSE for more details.
"""
import threading
from typing import Dict, Optional

from ..common.constants import UNLIMITED_FAILURES


class FailureLedger:
    """Counts failures injected so far, per failure rule pattern.

    Entries are created lazily, an absent pattern has a count of 0.
    Counts live as long as the ledger, there is no reset besides
    creating a new ledger (i.e. restarting the proxy).

    Check-and-increment is guarded by a lock, so that exactly the first
    ``times`` matching requests fail even when a ledger is shared
    across threads.
    """

    def __init__(self) -> None:
        self._counts: Dict[bytes, int] = {}
        self._lock = threading.Lock()

    def count(self, pattern: bytes) -> int:
        with self._lock:
            return self._counts.get(pattern, 0)

    def increment(self, pattern: bytes) -> int:
        with self._lock:
            return self._increment(pattern)

    def try_increment(self, pattern: bytes, times: int) -> Optional[int]:
        """Record one more failure for pattern unless its budget is exhausted.

        Returns the updated count, or None when ``times`` failures were
        already recorded.  ``times=-1`` never runs out."""
        with self._lock:
            if times != UNLIMITED_FAILURES and \
                    self._counts.get(pattern, 0) >= times:
                return None
            return self._increment(pattern)

    def snapshot(self) -> Dict[bytes, int]:
        with self._lock:
            return dict(self._counts)

    def _increment(self, pattern: bytes) -> int:
        self._counts[pattern] = self._counts.get(pattern, 0) + 1
        return self._counts[pattern]
