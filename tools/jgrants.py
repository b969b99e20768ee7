"""
jGrants Tool
デジタル庁 jGrants 公开 API (免认证) 补助金检索与详情
"""
from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote, urlencode

from sources import BoundedFetcher
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

JGRANTS_BASE = "https://api.jgrants-portal.go.jp/exp/v1/public/subsidies"
JGRANTS_V2 = "https://api.jgrants-portal.go.jp/exp/v2/public/subsidies/id"


def format_date(value: Optional[str], default: str = "未定") -> str:
    """ISO 日时 -> 'YYYY-MM-DD' (UTC)"""
    text = str(value or "").strip()
    if not text:
        return default
    try:
        dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return text[:10]
    if dt.tzinfo is None:
        return dt.strftime("%Y-%m-%d")
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%d")


def format_amount(value: Any) -> str:
    """円 -> '万円' 表记"""
    if not value:
        return "記載なし"
    try:
        man = float(value) / 10000
    except (TypeError, ValueError):
        return "記載なし"
    if man.is_integer():
        return f"{int(man):,}万円"
    return f"{man:,.3f}".rstrip("0").rstrip(".") + "万円"


def build_search_url(keyword: str, area: str = "", limit: int = 10) -> str:
    params: Dict[str, str] = {"keyword": keyword}
    if area:
        params["target_area_search"] = area
    params["limit"] = str(limit)
    return f"{JGRANTS_BASE}?{urlencode(params)}"


async def search_subsidies(
    keyword: str = "高齢者",
    area: str = "",
    limit: int = 10,
    *,
    fetcher: Optional[BoundedFetcher] = None,
) -> str:
    """补助金检索"""
    if not 1 <= int(limit) <= 20:
        raise ValueError(f"limit must be between 1 and 20, got {limit}")

    fetcher = fetcher or BoundedFetcher()
    try:
        data = await fetcher.fetch_json(build_search_url(keyword, area, limit))
    except FetchError as exc:
        logger.error(f"jGrants search failed: {exc}")
        return f"❌ jGrants API エラー: {exc}"

    if not isinstance(data, dict):
        data = {}
    items = data.get("result") or []
    total = ((data.get("metadata") or {}).get("resultset") or {}).get("count", len(items))

    if not items:
        return f"jGrants API: 「{keyword}」の検索結果は0件でした。\n別のキーワードをお試しください。"

    text = "\n\n".join(
        f"{i}. {s.get('title', '')}\n"
        f"   ID: {s.get('id', '')}\n"
        f"   地域: {s.get('target_area_search') or '全国'} | 上限: {format_amount(s.get('subsidy_max_limit'))}"
        f" | 締切: {format_date(s.get('acceptance_end_datetime'))}\n"
        f"   従業員: {s.get('target_number_of_employees') or '制限なし'}"
        for i, s in enumerate(items, start=1)
    )
    area_text = f" / {area}" if area else ""
    return (
        f"💰 jGrants 補助金検索結果（リアルタイム）\n"
        f"🔍 「{keyword}」{area_text} → {total}件中{len(items)}件表示\n\n"
        f"{text}\n\n"
        f"💡 詳細を見るには jgrants-detail にIDを渡してください。"
    )


async def subsidy_detail(subsidy_id: str, *, fetcher: Optional[BoundedFetcher] = None) -> str:
    """补助金详情"""
    fetcher = fetcher or BoundedFetcher()
    try:
        data = await fetcher.fetch_json(f"{JGRANTS_V2}/{quote(subsidy_id, safe='')}")
    except FetchError as exc:
        logger.error(f"jGrants detail failed for {subsidy_id}: {exc}")
        return f"❌ jGrants 詳細取得エラー: {exc}"

    results = data.get("result") or [] if isinstance(data, dict) else []
    if not results:
        return f"ID: {subsidy_id} の補助金が見つかりませんでした。"
    s = results[0]

    workflows = "\n".join(
        f"  第{i}回: {w.get('fiscal_year_round') or ''} | 地域: {w.get('target_area_search') or '全国'}\n"
        f"    受付: {format_date(w.get('acceptance_start_datetime'), '?')} 〜 "
        f"{format_date(w.get('acceptance_end_datetime'), '?')}"
        for i, w in enumerate(s.get("workflow") or [], start=1)
    )

    parts = [
        f"📋 {s.get('title', '')}\n\n",
        f"{s.get('subsidy_catch_phrase') or ''}\n\n",
        f"📝 概要:\n{s.get('detail') or '記載なし'}\n\n",
        f"🎯 用途: {s.get('use_purpose') or '記載なし'}\n",
        f"🏭 業種: {s.get('industry') or '制限なし'}\n",
        f"📍 地域: {s.get('target_area_detail') or s.get('target_area_search') or '全国'}\n",
        f"💰 補助率: {s.get('subsidy_rate') or '記載なし'} | 上限: {format_amount(s.get('subsidy_max_limit'))}\n\n",
    ]
    if workflows:
        parts.append(f"📅 募集回次:\n{workflows}\n\n")
    if s.get("front_subsidy_detail_page_url"):
        parts.append(f"🔗 {s['front_subsidy_detail_page_url']}")
    return "".join(parts)
