"""Sitemap fetch + parse: urlset > url > {loc, lastmod?}."""

import logging
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import date, datetime, timezone

import requests

from indexnow.errors import ParseError

log = logging.getLogger("indexnow.sitemap")

_FRACTION = re.compile(r"(?<=:\d\d)\.(\d+)")
_REDUCED_FORMATS = ("%Y-%m", "%Y")


@dataclass(frozen=True)
class SitemapEntry:
    loc: str
    lastmod: datetime | None = None


def _local(tag: str) -> str:
    """Strip the {namespace} prefix ElementTree puts on tag names."""
    return tag.rsplit("}", 1)[-1]


def _parse_reduced(text: str) -> datetime | None:
    """YYYY-MM and YYYY, taken as the start of the period."""
    for fmt in _REDUCED_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def parse_timestamp(value: str | date | datetime | None) -> datetime | None:
    """Parse a W3C datetime (YYYY through full timestamp) into an aware datetime.

    Naive values are taken as UTC. Returns None for empty or unparseable input.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text)
        try:
            dt = datetime.fromisoformat(text)
        except ValueError:
            dt = _parse_reduced(text)
            if dt is None:
                return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def parse_sitemap(xml_text: str, source: str | None = None) -> list[SitemapEntry]:
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        where = f" at {source}" if source else ""
        raise ParseError(f"Invalid sitemap XML{where}: {e}", source) from e

    if _local(root.tag) != "urlset":
        log.warning("Sitemap root is <%s>, not <urlset>; no URLs taken", _local(root.tag))
        return []

    entries = []
    for node in root:
        if _local(node.tag) != "url":
            continue
        loc = lastmod = None
        for child in node:
            name = _local(child.tag)
            if name == "loc":
                loc = (child.text or "").strip()
            elif name == "lastmod":
                lastmod = child.text
        if not loc:
            continue
        parsed = parse_timestamp(lastmod)
        if lastmod and parsed is None:
            log.debug("Unparseable lastmod %r for %s", lastmod, loc)
        entries.append(SitemapEntry(loc=loc, lastmod=parsed))
    return entries


class SitemapParser:
    """Fetches a sitemap through an injected client exposing get_text(url)."""

    def __init__(self, client):
        self.client = client

    def fetch_and_parse(self, sitemap_url: str) -> list[SitemapEntry]:
        log.info("Fetching sitemap %s", sitemap_url)
        try:
            body = self.client.get_text(sitemap_url)
            entries = parse_sitemap(body, source=sitemap_url)
        except (requests.RequestException, ParseError) as e:
            log.error("Error processing sitemap %s: %s", sitemap_url, e)
            raise
        log.debug("Parsed %d sitemap entries", len(entries))
        return entries

    @staticmethod
    def filter_since(entries: list[SitemapEntry], cutoff: date | datetime | None = None) -> list[str]:
        """Locations of entries modified at or after `cutoff`, in document order.

        Without a cutoff every location is returned. With one, entries that
        lack a lastmod are dropped.
        """
        if cutoff is None:
            return [e.loc for e in entries]
        since = parse_timestamp(cutoff)
        return [e.loc for e in entries if e.lastmod is not None and e.lastmod >= since]
