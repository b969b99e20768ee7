"""
Market Tool
シニア求人の市場検索：Indeed RSS / ハローワーク / シルバー人材センター 三路并发
"""
from __future__ import annotations

from typing import List, Optional, Sequence
from urllib.parse import quote, urlencode

from aggregator import Aggregator
from core import SourceDescriptor
from processing import parse_entries
from sources import BoundedFetcher


INDEED_RSS = "https://jp.indeed.com/rss"
HELLOWORK_URL = "https://www.hellowork.mhlw.go.jp/"
SILVER_URL = "https://www.zsjc.or.jp/"

NATIONWIDE = "全国"
INDEED_MAX_TITLES = 10
MAX_SKILLS = 10
MAX_REGION_CHARS = 50

# key -> (见出し, 失败时前缀)
SECTIONS = {
    "indeed": ("Indeed", "Indeed検索エラー"),
    "hellowork": ("ハローワーク", "ハローワーク検索エラー"),
    "silver": ("シルバー人材センター", "シルバー人材検索エラー"),
}


def build_indeed_url(keyword: str, region: str) -> str:
    params = {
        "q": f"シニア {keyword}",
        "l": "" if region == NATIONWIDE else region,
    }
    return f"{INDEED_RSS}?{urlencode(params, quote_via=quote)}"


async def search_indeed(keyword: str, region: str, *, fetcher: BoundedFetcher) -> str:
    """Indeed 求人 RSS 的标题列表 (最多 10 件)；抓取失败时抛出 FetchError"""
    xml = await fetcher.fetch_text(build_indeed_url(keyword, region))
    titles = [entry.title for entry in parse_entries(xml)][:INDEED_MAX_TITLES]
    if not titles:
        return f"Indeed: {keyword}の求人情報が見つかりませんでした。"
    return f"Indeed検索結果（{len(titles)}件）:\n" + "\n".join(
        f"{i}. {title}" for i, title in enumerate(titles, start=1)
    )


def hellowork_guide(keyword: str, region: str) -> str:
    # ハローワークインターネットサービスには公開 API がない
    return (
        f"ハローワーク: {keyword}の検索は手動で {HELLOWORK_URL} をご確認ください。\n"
        f'検索キーワード: "{keyword}" + "{region}"'
    )


async def search_silver_jinzai(region: str, *, fetcher: BoundedFetcher) -> str:
    """シルバー人材センター案内；サイトに到達できることを確認してから返す"""
    await fetcher.fetch_text(SILVER_URL)
    return (
        "全国シルバー人材センター事業協会:\n"
        f"{region}のシルバー人材センターは {SILVER_URL} から検索できます。\n"
        "主な仕事: 清掃、施設管理、事務補助、保育補助、学習指導など"
    )


def _validate(skills: Sequence[str], region: str) -> List[str]:
    cleaned = [skill.strip() for skill in skills if skill and skill.strip()]
    if not 1 <= len(cleaned) <= MAX_SKILLS:
        raise ValueError(f"skills must contain 1 to {MAX_SKILLS} keywords, got {len(cleaned)}")
    if not 1 <= len(region.strip()) <= MAX_REGION_CHARS:
        raise ValueError(f"region must be 1 to {MAX_REGION_CHARS} characters")
    return cleaned


async def fetch_market_value(
    skills: Sequence[str],
    region: str = NATIONWIDE,
    age_range: str = "60+",
    *,
    fetcher: Optional[BoundedFetcher] = None,
    aggregator: Optional[Aggregator] = None,
) -> str:
    """
    并发检索三个求人来源并拼成一份报告

    Args:
        skills: 技能关键词 (1-10 个)
        region: 地域，全国 时不限定地点
        age_range: 年龄层，只用于展示

    Returns:
        各来源一节的展示文本；失败的来源显示错误行
    """
    skills = _validate(skills, region)
    region = region.strip()
    keyword = " ".join(skills)
    fetcher = fetcher or BoundedFetcher()
    aggregator = aggregator or Aggregator()

    sources = [
        SourceDescriptor(key="indeed", url=build_indeed_url(keyword, region), label="Indeed"),
        SourceDescriptor(key="hellowork", url=HELLOWORK_URL, label="ハローワーク"),
        SourceDescriptor(key="silver", url=SILVER_URL, label="シルバー人材センター"),
    ]

    async def _search(source: SourceDescriptor) -> List[str]:
        if source.key == "indeed":
            return [await search_indeed(keyword, region, fetcher=fetcher)]
        if source.key == "silver":
            return [await search_silver_jinzai(region, fetcher=fetcher)]
        return [hellowork_guide(keyword, region)]

    report = await aggregator.fetch_all(sources, _search, key=lambda _: None, limit=len(sources))

    sections = []
    for outcome in report.outcomes:
        heading, error_prefix = SECTIONS[outcome.source_key]
        if outcome.ok and outcome.payload:
            body = outcome.payload[0]
        else:
            body = f"{error_prefix}: {outcome.error}"
        sections.append(f"--- {heading} ---\n{body}")

    return (
        "💼 市場価値・求人検索結果\n"
        f"スキル: {', '.join(skills)}\n"
        f"地域: {region}\n"
        f"年齢層: {age_range}\n\n"
        + "\n\n".join(sections)
    )
