"""IndexNow submission entry point: single URLs, URL lists and sitemaps."""

import logging
import time
from datetime import date, datetime

from indexnow.analytics import Analytics, AnalyticsAggregator
from indexnow.batch import BatchSubmitter
from indexnow.cache import SubmissionCache
from indexnow.config import Config
from indexnow.sitemap import SitemapParser
from indexnow.transport import HttpClient

log = logging.getLogger("indexnow.submitter")


class IndexNowSubmitter:
    """Submits URLs to one engine with batching, pacing and a recent-URL cache.

    Each instance owns its cache and analytics; nothing is shared between
    instances. Calls on one instance must not overlap.
    """

    def __init__(self, config: Config | dict | None = None, client=None,
                 sleep=time.sleep, clock=time.monotonic, **overrides):
        if config is None or isinstance(config, dict):
            config = Config.from_mapping({**(config or {}), **overrides})
        elif overrides:
            raise TypeError(f"Unexpected settings with a Config instance: {', '.join(sorted(overrides))}")
        self.config = config
        self._owns_client = client is None
        self.client = client or HttpClient()
        self.cache = SubmissionCache(config.cache_ttl, clock=clock)
        self.analytics = AnalyticsAggregator()
        self.batches = BatchSubmitter(config, self.client, self.cache, self.analytics, sleep=sleep)
        self.sitemaps = SitemapParser(self.client)

    def submit_urls(self, urls: list[str]) -> None:
        uncached = [url for url in urls if not self.cache.has(url)]
        log.info("Submitting %d uncached URLs", len(uncached))
        if uncached:
            self.batches.process_batch(uncached)

    def submit_single_url(self, url: str) -> None:
        log.info("Checking cache for URL: %s", url)
        if self.cache.has(url):
            log.info("URL %s already submitted recently. Skipping.", url)
            return
        self.submit_urls([url])

    def submit_from_sitemap(self, sitemap_url: str, modified_since: date | datetime | None = None) -> None:
        entries = self.sitemaps.fetch_and_parse(sitemap_url)
        urls = self.sitemaps.filter_since(entries, modified_since)
        if modified_since is None:
            log.info("Found %d URLs in sitemap", len(urls))
        else:
            log.info("Found %d of %d sitemap URLs modified since %s", len(urls), len(entries), modified_since)
        if urls:
            self.submit_urls(urls)

    def get_analytics(self) -> Analytics:
        return self.analytics.snapshot()

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()
