"""Shared fixtures for news feed adapter tests."""

from __future__ import annotations

import pytest

RSS_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>虐童 - Google 新聞</title>
    <item>
      <title>台中市男子陳○明涉嫌性侵女童 遭羈押 - 自由時報</title>
      <link>https://news.test/articles/1</link>
      <pubDate>Wed, 15 Jan 2025 18:30:00 GMT</pubDate>
      <description>&lt;a href="https://news.test/articles/1"&gt;台中市男子陳○明涉嫌性侵女童&lt;/a&gt;&amp;nbsp;&lt;font color="#6f6f6f"&gt;自由時報&lt;/font&gt;</description>
    </item>
    <item>
      <title>保母陳○華與男子林○○涉虐童 檢方起訴</title>
      <link>https://news.test/articles/2</link>
      <pubDate>Thu, 16 Jan 2025 02:00:00 +0800</pubDate>
      <description>高雄市托育案</description>
    </item>
    <item>
      <title>股市今日收紅</title>
      <link>https://news.test/articles/3</link>
    </item>
    <item>
      <title>沒有連結的新聞</title>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def rss_document() -> str:
    return RSS_DOCUMENT
