"""Public interface for the news feed adapter."""

from __future__ import annotations

from .client import NEWS_FEEDS, NewsFeed, NewsFeedAdapter, news_resilience, parse_feed
from .schema import NewsMentionRecord
from .translator import (
    NewsItem,
    extract_suspect_names,
    is_child_related,
    mention_records,
    news_date,
    translate_mention,
)

__all__ = [
    "NEWS_FEEDS",
    "NewsFeed",
    "NewsFeedAdapter",
    "NewsItem",
    "NewsMentionRecord",
    "extract_suspect_names",
    "is_child_related",
    "mention_records",
    "news_date",
    "news_resilience",
    "parse_feed",
    "translate_mention",
]
