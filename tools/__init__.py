"""
Tools
每个工具只是抓取引擎的一组配置：数据源 URL、抽取方式和展示模板
"""
from .benefits import fetch_senior_sites, scrape_url
from .health import fetch_health_info, fetch_weather
from .jgrants import search_subsidies, subsidy_detail
from .market import fetch_market_value
from .news import fetch_news
from .pension import fetch_nenkin_news, fetch_nenkin_page

__all__ = [
    "fetch_news",
    "fetch_senior_sites",
    "scrape_url",
    "fetch_nenkin_news",
    "fetch_nenkin_page",
    "search_subsidies",
    "subsidy_detail",
    "fetch_market_value",
    "fetch_health_info",
    "fetch_weather",
]
