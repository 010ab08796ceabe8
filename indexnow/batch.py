"""Batched, paced IndexNow POSTs."""

import logging
import time
from typing import Callable

import requests

from indexnow.analytics import AnalyticsAggregator
from indexnow.cache import SubmissionCache
from indexnow.config import Config
from indexnow.errors import SubmissionError

log = logging.getLogger("indexnow.batch")


def chunked(urls: list[str], size: int) -> list[list[str]]:
    return [urls[i:i + size] for i in range(0, len(urls), size)]


class BatchSubmitter:
    """Sends URL lists to the engine one chunk at a time.

    Chunks go out strictly in order with `rate_limit_delay` ms between them.
    The first failing chunk stops the run. Not safe for concurrent callers.
    """

    def __init__(
        self,
        config: Config,
        client,
        cache: SubmissionCache,
        analytics: AnalyticsAggregator,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self.config = config
        self.client = client
        self.cache = cache
        self.analytics = analytics
        self._sleep = sleep
        self._clock = clock

    def payload(self, urls: list[str]) -> dict:
        return {
            "host": self.config.host,
            "key": self.config.key,
            "keyPath": self.config.key_path,
            "urlList": list(urls),
        }

    def delay(self, ms: float) -> None:
        self._sleep(ms / 1000)

    def submit_batch(self, urls: list[str]) -> None:
        if not urls:
            return

        log.info("Submitting batch of %d urls", len(urls))
        start = self._clock()
        try:
            resp = self.client.post_json(self.config.endpoint, self.payload(urls))
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            self.analytics.record_failure(len(urls))
            log.error("Batch of %d urls rejected: HTTP %s", len(urls), status)
            raise SubmissionError(f"IndexNow rejected batch: HTTP {status}", urls, status) from e
        except Exception as e:
            self.analytics.record_failure(len(urls))
            log.error("Error submitting batch: %s", e)
            raise SubmissionError(f"IndexNow request failed: {e}", urls) from e
        elapsed_ms = (self._clock() - start) * 1000

        self.analytics.record_success(len(urls), elapsed_ms)
        for url in urls:
            self.cache.set(url)
        log.info("Batch submitted successfully: %s (%.0f ms)", getattr(resp, "status_code", "?"), elapsed_ms)

    def process_batch(self, urls: list[str]) -> None:
        batches = chunked(list(urls), self.config.batch_size)
        for i, batch in enumerate(batches):
            self.submit_batch(batch)
            if i + 1 < len(batches):
                self.delay(self.config.rate_limit_delay)
