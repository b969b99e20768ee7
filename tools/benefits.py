"""
Senior Benefits Tool
JR 各社 / 航空公司 シニア特典页面实时抓取，以及任意 URL 正文抽取
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from aggregator import Aggregator
from config import get_extractor_settings
from core import ExtractedText, SourceDescriptor
from processing import ContentExtractor
from sources import BoundedFetcher
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

SITES: Dict[str, Dict[str, str]] = {
    "zipangu": {
        "url": "https://www.jreast.co.jp/otona/zipangu/",
        "label": "JRジパング倶楽部",
        "category": "transport",
    },
    "otonavi": {
        "url": "https://www.jr-odekake.net/goyoyaku/otonavi/",
        "label": "おとなびWEB早特（JR西日本）",
        "category": "transport",
    },
    "jreast_otona": {
        "url": "https://www.jreast.co.jp/otona/",
        "label": "大人の休日倶楽部（JR東日本）",
        "category": "transport",
    },
    "fullmoon": {
        "url": "https://www.jreast.co.jp/tickets/info.aspx?GoodsCd=2817",
        "label": "フルムーン夫婦グリーンパス",
        "category": "transport",
    },
    "jal_silver": {
        "url": "https://www.jal.co.jp/jp/ja/dom/fare/rule/r_silver.html",
        "label": "JAL当日シルバー割引",
        "category": "travel",
    },
    "ana_senior": {
        "url": "https://www.ana.co.jp/ja/jp/book-plan/fare/domestic/smart-senior/",
        "label": "ANAスマートシニア空割",
        "category": "travel",
    },
}

SITE_MAX_CHARS = 1500
SCRAPE_MIN_CHARS = 500
SCRAPE_MAX_CHARS = 5000


def select_sites(sites: Sequence[str] = ("all",)) -> List[SourceDescriptor]:
    """'all' 展开为全部站点，顺序与 SITES 定义一致"""
    unknown = [s for s in sites if s != "all" and s not in SITES]
    if unknown:
        raise ValueError(f"unknown sites: {unknown}")

    keys = list(SITES) if "all" in sites else list(dict.fromkeys(sites))
    return [
        SourceDescriptor(key=key, url=SITES[key]["url"], label=SITES[key]["label"])
        for key in keys
    ]


async def fetch_senior_sites(
    sites: Sequence[str] = ("all",),
    *,
    fetcher: Optional[BoundedFetcher] = None,
    extractor: Optional[ContentExtractor] = None,
    aggregator: Optional[Aggregator] = None,
) -> str:
    """并发抓取多个特典站点，成功和失败的站点都按声明顺序列出"""
    fetcher = fetcher or BoundedFetcher()
    extractor = extractor or ContentExtractor()
    aggregator = aggregator or Aggregator()
    targets = select_sites(sites)

    async def _scrape(site: SourceDescriptor) -> List[ExtractedText]:
        html = await fetcher.fetch_text(site.url)
        return [extractor.extract(html, SITE_MAX_CHARS)]

    # 页面不去重
    report = await aggregator.fetch_all(targets, _scrape, key=lambda _: None, limit=len(targets))

    sections = []
    for i, outcome in enumerate(report.outcomes, start=1):
        if outcome.ok:
            content = outcome.payload[0].text if outcome.payload else ""
            sections.append(f"━━━ {i}. {outcome.label} ━━━\n🔗 {outcome.url}\n\n{content}")
        else:
            sections.append(f"━━━ {i}. 取得失敗 ━━━\n{outcome.label}: {outcome.error}")

    return (
        f"🎁 シニア特典サイト（{report.success_count}/{report.attempted_count}サイト取得成功）\n\n"
        + "\n\n".join(sections)
    )


async def scrape_url(
    url: str,
    max_chars: Optional[int] = None,
    *,
    fetcher: Optional[BoundedFetcher] = None,
    extractor: Optional[ContentExtractor] = None,
) -> str:
    """抓取任意 URL 的正文；max_chars 缺省时使用 EXTRACT_DEFAULT_MAX_CHARS"""
    if max_chars is None:
        max_chars = get_extractor_settings().default_max_chars
    if not SCRAPE_MIN_CHARS <= int(max_chars) <= SCRAPE_MAX_CHARS:
        raise ValueError(f"max_chars must be between {SCRAPE_MIN_CHARS} and {SCRAPE_MAX_CHARS}")

    fetcher = fetcher or BoundedFetcher()
    extractor = extractor or ContentExtractor()

    try:
        html = await fetcher.fetch_text(url)
    except FetchError as exc:
        logger.error(f"scrape_url failed for {url}: {exc}")
        return f"❌ URL取得エラー: {exc}"

    extracted = extractor.extract(html, max_chars)
    return f"🌐 {url}\n\n{extracted.text}"
