"""Fetch child-safety news from RSS search feeds."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

from bs4 import BeautifulSoup

from guardianbee.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    translate_http_errors,
)
from guardianbee.config.sources import DEFAULT_USER_AGENT, NEWS_DELAY_SECONDS
from guardianbee.domain.errors import FetchUnavailable
from guardianbee.domain.model import SourceType
from guardianbee.domain.ports.fetching import FetchResult, SourceAdapter

from .translator import NewsItem, mention_records, translate_mention

if TYPE_CHECKING:
    from guardianbee.domain.model import CaseDraft
    from guardianbee.domain.ports.fetching import RawRecord

log = getLogger(__name__)

_TIMEOUT_SECONDS = 30.0
GOOGLE_NEWS_SEARCH = "https://news.google.com/rss/search"


@dataclass(frozen=True, slots=True)
class NewsFeed:
    name: str
    query: str

    @property
    def url(self) -> str:
        return f"{GOOGLE_NEWS_SEARCH}?q={quote(self.query)}&hl=zh-TW&gl=TW&ceid=TW:zh-Hant"


NEWS_FEEDS: tuple[NewsFeed, ...] = (
    NewsFeed("虐童", "虐童"),
    NewsFeed("保母虐童", "保母 虐童"),
    NewsFeed("幼兒園不當對待", "幼兒園 不當對待"),
    NewsFeed("補習班性騷擾", "補習班 性騷擾"),
    NewsFeed("教練猥褻", "教練 猥褻"),
)


def _text(value: str | None) -> str:
    if not value:
        return ""
    return BeautifulSoup(value, "html.parser").get_text(" ", strip=True)


def parse_feed(document: str, feed: str = "") -> list[NewsItem]:
    """Items of an RSS 2.0 document; items without title or link are ignored."""

    root = ET.fromstring(document)
    items: list[NewsItem] = []
    for element in root.iter("item"):
        title = _text(element.findtext("title"))
        link = (element.findtext("link") or "").strip()
        if not title or not link:
            continue
        items.append(
            NewsItem(
                title=title,
                link=link,
                summary=_text(element.findtext("description")),
                pub_date=(element.findtext("pubDate") or "").strip(),
                feed=feed,
            )
        )
    return items


def news_resilience(delay_seconds: float = NEWS_DELAY_SECONDS) -> ResilienceConfig:
    return ResilienceConfig(
        name="news",
        timeout_seconds=_TIMEOUT_SECONDS,
        ratelimit=RateLimit.paced(delay_seconds),
        default_headers={"User-Agent": DEFAULT_USER_AGENT},
    )


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class NewsFeedAdapter:
    """Unverified media reports; one record per suspect named in an item."""

    feeds: tuple[NewsFeed, ...] = NEWS_FEEDS
    resilience: ResilienceConfig = field(default_factory=news_resilience)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )

    @property
    def name(self) -> str:
        return "news"

    @property
    def source_type(self) -> SourceType:
        return SourceType.MEDIA_REPORT

    async def fetch(self) -> FetchResult:
        result = FetchResult()
        seen_links: set[str] = set()
        failed_feeds = 0
        async with self.client_factory(self.resilience) as client:
            for feed in self.feeds:
                try:
                    items = await self._feed_items(client, feed)
                except FetchUnavailable as exc:
                    failed_feeds += 1
                    log.warning("Skipping news feed %s: %s", feed.name, exc)
                    continue
                fresh = [item for item in items if item.link not in seen_links]
                seen_links.update(item.link for item in fresh)
                for item in fresh:
                    result.records.extend(mention_records(item))

        if self.feeds and failed_feeds == len(self.feeds):
            raise FetchUnavailable(self.name, "every news feed failed")
        result.failed_items += failed_feeds
        log.info(
            "News: %s item(s) seen, %s suspect mention(s), %s feed failure(s)",
            len(seen_links),
            len(result.records),
            failed_feeds,
        )
        return result

    def normalize(self, raw: RawRecord) -> CaseDraft:
        return translate_mention(raw, source=self.name)

    async def _feed_items(self, client: ResilientClient, feed: NewsFeed) -> list[NewsItem]:
        async with translate_http_errors(self.name):
            response = await client.get(feed.url)
            response.raise_for_status()
        try:
            return parse_feed(response.text, feed.name)
        except ET.ParseError as exc:
            raise FetchUnavailable(self.name, f"invalid RSS from {feed.name}: {exc}") from exc


if TYPE_CHECKING:
    _adapter_check: SourceAdapter = NewsFeedAdapter()
