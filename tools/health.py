"""
Health Tool
厚労省 健康情報见出し与气象厅天气预报
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional

from processing import normalize_text
from sources import BoundedFetcher
from utils.exceptions import FetchError


logger = logging.getLogger(__name__)

MHLW_HEALTH_URL = "https://www.mhlw.go.jp/stf/seisakunitsuite/bunya/kenkou_iryou/kenkou/index.html"
JMA_FORECAST_URL = "https://www.jma.go.jp/bosai/forecast/data/forecast/{code}.json"

HEALTH_CATEGORIES: Dict[str, str] = {
    "checkup": "健診・検診",
    "exercise": "運動・身体活動",
    "nutrition": "栄養・食生活",
    "mental": "こころの健康",
}
MAX_HEADINGS = 5
HEADING_PATTERN = re.compile(r"<h3[^>]*>(.*?)</h3>", re.IGNORECASE | re.DOTALL)

# 气象厅 府県予報区コード
AREA_CODES: Dict[str, str] = {
    "北海道": "016000",
    "青森": "020000",
    "岩手": "030000",
    "宮城": "040000",
    "秋田": "050000",
    "山形": "060000",
    "福島": "070000",
    "茨城": "080000",
    "栃木": "090000",
    "群馬": "100000",
    "埼玉": "110000",
    "千葉": "120000",
    "東京": "130000",
    "神奈川": "140000",
    "新潟": "150000",
    "富山": "160000",
    "石川": "170000",
    "福井": "180000",
    "山梨": "190000",
    "長野": "200000",
    "岐阜": "210000",
    "静岡": "220000",
    "愛知": "230000",
    "三重": "240000",
    "滋賀": "250000",
    "京都": "260000",
    "大阪": "270000",
    "兵庫": "280000",
    "奈良": "290000",
    "和歌山": "300000",
    "鳥取": "310000",
    "島根": "320000",
    "岡山": "330000",
    "広島": "340000",
    "山口": "350000",
    "徳島": "360000",
    "香川": "370000",
    "愛媛": "380000",
    "高知": "390000",
    "福岡": "400000",
    "佐賀": "410000",
    "長崎": "420000",
    "熊本": "430000",
    "大分": "440000",
    "宮崎": "450000",
    "鹿児島": "460000",
    "沖縄": "471000",
}
DEFAULT_AREA_CODE = AREA_CODES["東京"]
MAX_REGION_CHARS = 50


def get_area_code(region: str) -> str:
    """完全一致 -> 部分一致 (福井県 -> 福井) -> 東京"""
    region = region.strip()
    if region in AREA_CODES:
        return AREA_CODES[region]
    if region:
        for name, code in AREA_CODES.items():
            if name in region or region in name:
                return code
    return DEFAULT_AREA_CODE


def parse_headings(html: str, limit: int = MAX_HEADINGS) -> List[str]:
    headings = (normalize_text(match.group(1)) for match in HEADING_PATTERN.finditer(html or ""))
    return [heading for heading in headings if heading][:limit]


async def fetch_health_info(category: str = "checkup", *, fetcher: Optional[BoundedFetcher] = None) -> str:
    """厚労省健康ページの見出し (先頭 5 件)"""
    if category not in HEALTH_CATEGORIES:
        raise ValueError(f"unknown health category: {category}")

    fetcher = fetcher or BoundedFetcher()
    try:
        html = await fetcher.fetch_text(MHLW_HEALTH_URL)
    except FetchError as exc:
        logger.error(f"MHLW health page fetch failed: {exc}")
        return f"🏥 健康情報\n\n健康情報取得エラー: {exc}"

    headings = parse_headings(html)
    listing = "\n".join(f"{i}. {h}" for i, h in enumerate(headings, start=1)) or "情報取得中..."
    return (
        f"🏥 健康情報\n\n"
        f"厚労省 - {HEALTH_CATEGORIES[category]}\n"
        f"最新情報（一部）:\n{listing}\n\n"
        f"詳細: {MHLW_HEALTH_URL}"
    )


def _first(value: Any) -> Any:
    return value[0] if isinstance(value, list) and value else None


async def fetch_weather(region: str = "東京", *, fetcher: Optional[BoundedFetcher] = None) -> str:
    """
    气象厅天气预报

    Args:
        region: 地域名，按 AREA_CODES 解析，无法识别时使用东京

    Returns:
        发表时间和第一区域的天气文本
    """
    if not 1 <= len(region.strip()) <= MAX_REGION_CHARS:
        raise ValueError(f"region must be 1 to {MAX_REGION_CHARS} characters")

    fetcher = fetcher or BoundedFetcher()
    url = JMA_FORECAST_URL.format(code=get_area_code(region))
    try:
        data = await fetcher.fetch_json(url)
    except FetchError as exc:
        logger.error(f"JMA forecast fetch failed for {region}: {exc}")
        return f"🌤️ 天気情報\n\n天気情報取得エラー: {exc}"

    forecast = _first(data)
    if not isinstance(forecast, dict):
        return f"🌤️ 天気情報\n\n天気情報が取得できませんでした（地域: {region}）"

    series = _first(forecast.get("timeSeries"))
    area = _first(series.get("areas")) if isinstance(series, dict) else None
    weather = _first(area.get("weathers")) if isinstance(area, dict) else None

    return (
        f"🌤️ 天気情報\n\n"
        f"【{region}の天気】\n"
        f"発表: {forecast.get('reportDatetime') or '不明'}\n"
        f"天気: {weather or '情報なし'}"
    )
