"""
News Tool
NHK / Yahoo!ニュース 分类 RSS 实时抓取
"""
from __future__ import annotations

from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import math
from typing import Dict, List, Optional, Sequence, Tuple

from aggregator import Aggregator
from core import FeedEntry, SourceDescriptor
from processing import parse_entries
from sources import BoundedFetcher


# key -> (url, label)
NHK_FEEDS: Dict[str, Tuple[str, str]] = {
    "top": ("https://www3.nhk.or.jp/rss/news/cat0.xml", "主要"),
    "society": ("https://www3.nhk.or.jp/rss/news/cat1.xml", "社会"),
    "science": ("https://www3.nhk.or.jp/rss/news/cat3.xml", "科学文化"),
    "politics": ("https://www3.nhk.or.jp/rss/news/cat4.xml", "政治"),
    "life": ("https://www3.nhk.or.jp/rss/news/cat5.xml", "暮らし"),
    "business": ("https://www3.nhk.or.jp/rss/news/cat6.xml", "ビジネス"),
    "local": ("https://www3.nhk.or.jp/rss/news/cat7.xml", "地域"),
}

YAHOO_FEEDS: Dict[str, Tuple[str, str]] = {
    "top": ("https://news.yahoo.co.jp/rss/topics/top-picks.xml", "主要"),
    "domestic": ("https://news.yahoo.co.jp/rss/topics/domestic.xml", "国内"),
    "business": ("https://news.yahoo.co.jp/rss/topics/business.xml", "経済"),
    "life": ("https://news.yahoo.co.jp/rss/topics/life.xml", "ライフ"),
    "local": ("https://news.yahoo.co.jp/rss/topics/local.xml", "地域"),
    "it": ("https://news.yahoo.co.jp/rss/topics/it.xml", "IT"),
}

PROVIDERS = {"nhk": ("NHK", NHK_FEEDS), "yahoo": ("Yahoo", YAHOO_FEEDS)}
SOURCES = ("nhk", "yahoo", "both")
CATEGORIES = ("top", "society", "life", "business", "local", "science", "politics", "all")

NO_RESULTS = "該当するニュースが見つかりませんでした。"


def select_feeds(source: str = "nhk", category: str = "all") -> List[SourceDescriptor]:
    """根据来源和分类展开为数据源列表；Yahoo 没有 society，映射到 domestic"""
    if source not in SOURCES:
        raise ValueError(f"unknown news source: {source}")
    if category not in CATEGORIES:
        raise ValueError(f"unknown news category: {category}")

    wanted = []
    if source != "yahoo":
        wanted.append(("nhk", category))
    if source != "nhk":
        wanted.append(("yahoo", "domestic" if category == "society" else category))

    feeds: List[SourceDescriptor] = []
    for provider, cat in wanted:
        name, table = PROVIDERS[provider]
        keys = list(table) if cat == "all" else [cat] if cat in table else []
        for key in keys:
            url, label = table[key]
            feeds.append(SourceDescriptor(key=f"{provider}:{key}", url=url, label=f"{name} {label}"))
    return feeds


def filter_by_keyword(entries: Sequence[FeedEntry], keyword: str) -> List[FeedEntry]:
    """空格分隔的 OR 检索，匹配标题和摘要 (不区分大小写)"""
    keywords = [kw for kw in keyword.lower().split() if kw]
    if not keywords:
        return list(entries)
    return [
        entry
        for entry in entries
        if any(kw in f"{entry.title} {entry.description}".lower() for kw in keywords)
    ]


def format_pub_date(value: str) -> str:
    """RFC 822 / ISO 日期 -> 'YYYY-MM-DD HH:MM' (UTC)；解析失败时原样返回"""
    text = (value or "").strip()
    if not text:
        return ""
    try:
        dt = parsedate_to_datetime(text)
    except (TypeError, ValueError):
        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M")


async def fetch_news(
    source: str = "nhk",
    category: str = "all",
    keyword: str = "",
    limit: int = 10,
    *,
    fetcher: Optional[BoundedFetcher] = None,
    aggregator: Optional[Aggregator] = None,
) -> str:
    """
    抓取新闻并格式化为展示文本

    Args:
        source: nhk / yahoo / both
        category: 分类，all 为全部
        keyword: 过滤关键词 (空格分隔 OR)
        limit: 返回条数 (1-30)
    """
    if not 1 <= int(limit) <= 30:
        raise ValueError(f"limit must be between 1 and 30, got {limit}")

    fetcher = fetcher or BoundedFetcher()
    aggregator = aggregator or Aggregator()
    feeds = select_feeds(source, category)
    per_feed = max(3, math.ceil(limit / len(feeds))) if feeds else 0

    async def _grab(feed: SourceDescriptor) -> List[FeedEntry]:
        xml = await fetcher.fetch_text(feed.url)
        return filter_by_keyword(parse_entries(xml), keyword)[:per_feed]

    report = await aggregator.fetch_all(feeds, _grab, limit=limit)

    lines = []
    for i, item in enumerate(report.items, start=1):
        entry: FeedEntry = item.value
        provider = PROVIDERS[item.source_key.split(":", 1)[0]][0]
        lines.append(
            f"{i}. 【{provider}】{entry.title}\n"
            f"   {format_pub_date(entry.published_at)}\n"
            f"   {entry.link}\n"
            f"   {entry.description[:150]}"
        )
    body = "\n\n".join(lines) if lines else NO_RESULTS

    return (
        f"📰 ニュース {len(report.items)}件取得（リアルタイム・"
        f"{report.success_count}/{report.attempted_count}フィード取得成功）\n\n{body}"
    )
