"""
Pension Tool
日本年金機構 (nenkin.go.jp) 新着情報与页面正文
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional

from pydantic import BaseModel

from processing import ContentExtractor, normalize_text
from sources import BoundedFetcher
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

NENKIN_BASE = "https://www.nenkin.go.jp"
PAGE_MAX_CHARS = 3000
PENSION_DIAL = "0570-05-1165"

# <dt>日付</dt><dd><a href>タイトル</a>
DEFINITION_LIST_PATTERN = re.compile(
    r"<dt[^>]*>([\d./]+)</dt>\s*<dd[^>]*><a\s+href=\"([^\"]*)\"[^>]*>(.*?)</a>",
    re.DOTALL,
)
# <li><span>日付</span> ... <a href>タイトル</a>
LIST_ITEM_PATTERN = re.compile(
    r"<li[^>]*>\s*<span[^>]*>([\d./]+)</span>.*?<a\s+href=\"([^\"]*)\"[^>]*>(.*?)</a>",
    re.DOTALL,
)

EMPTY_PAGE = "ページの内容を取得できませんでした。公式サイトで直接ご確認ください。"


class Notice(BaseModel):
    """年金機構のお知らせ 1 件"""
    date: str
    title: str
    url: str


STANDING_NOTICES = [
    Notice(date="常設", title="老齢年金の受給要件", url=f"{NENKIN_BASE}/service/jukyu/roureinenkin/jukyu-yoken/20150401-02.html"),
    Notice(date="常設", title="繰り下げ・繰り上げ受給", url=f"{NENKIN_BASE}/service/jukyu/roureinenkin/kurisage-kuriage/20140421-02.html"),
    Notice(date="常設", title="在職老齢年金", url=f"{NENKIN_BASE}/service/jukyu/roureinenkin/zaishoku/20150401-01.html"),
    Notice(date="常設", title="ねんきんネット", url=f"{NENKIN_BASE}/n_net/"),
]


def absolute_url(path: str) -> str:
    return path if path.startswith("http") else f"{NENKIN_BASE}{path}"


def parse_notices(html: str, limit: int) -> List[Notice]:
    """
    从首页 HTML 中提取新着列表

    先尝试 dt/dd 结构，没有结果再尝试 li/span 结构；
    都没有时返回常设链接。
    """
    for pattern in (DEFINITION_LIST_PATTERN, LIST_ITEM_PATTERN):
        notices = []
        for match in pattern.finditer(html or ""):
            if len(notices) >= limit:
                break
            notices.append(
                Notice(
                    date=match.group(1),
                    title=normalize_text(match.group(3)),
                    url=absolute_url(match.group(2)),
                )
            )
        if notices:
            return notices

    return STANDING_NOTICES[:limit]


async def fetch_nenkin_news(limit: int = 10, *, fetcher: Optional[BoundedFetcher] = None) -> str:
    """新着情報 (1-20 件)"""
    if not 1 <= int(limit) <= 20:
        raise ValueError(f"limit must be between 1 and 20, got {limit}")

    fetcher = fetcher or BoundedFetcher()
    try:
        html = await fetcher.fetch_text(NENKIN_BASE)
    except FetchError as exc:
        logger.error(f"nenkin news fetch failed: {exc}")
        return f"❌ 年金機構サイト取得エラー: {exc}"

    notices = parse_notices(html, limit)
    text = "\n\n".join(
        f"{i}. [{notice.date}] {notice.title}\n   {notice.url}"
        for i, notice in enumerate(notices, start=1)
    )
    return (
        f"🏛️ 日本年金機構 新着情報（リアルタイム取得）\n\n{text}\n\n"
        f"💡 詳細を読むには nenkin-page にURLのパスを渡してください。\n"
        f"📞 年金ダイヤル: {PENSION_DIAL}"
    )


async def fetch_nenkin_page(
    path: str,
    *,
    fetcher: Optional[BoundedFetcher] = None,
    extractor: Optional[ContentExtractor] = None,
) -> str:
    """年金機構の個別ページ本文"""
    fetcher = fetcher or BoundedFetcher()
    extractor = extractor or ContentExtractor()
    url = absolute_url(path)

    try:
        html = await fetcher.fetch_text(url)
    except FetchError as exc:
        logger.error(f"nenkin page fetch failed for {url}: {exc}")
        return f"❌ ページ取得エラー: {exc}"

    content = extractor.extract(html, PAGE_MAX_CHARS).text or EMPTY_PAGE
    return f"🏛️ 年金機構ページ: {url}\n\n{content}"
