"""Per-submitter memory of recently submitted URLs."""

import time
from typing import Callable


class SubmissionCache:
    """Key-presence store where every entry expires `ttl` seconds after `set`.

    Expiry is lazy: stale entries are dropped when looked up. Nothing bounds
    the size within the TTL window. A TTL of 0 means entries never match.
    """

    def __init__(self, ttl: float, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._expires: dict[str, float] = {}

    def has(self, url: str) -> bool:
        expires_at = self._expires.get(url)
        if expires_at is None:
            return False
        if self._clock() >= expires_at:
            del self._expires[url]
            return False
        return True

    def set(self, url: str) -> None:
        self._expires[url] = self._clock() + self.ttl
