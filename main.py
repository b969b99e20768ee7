"""CLI entrypoint: run one tool against the live sites and print its text."""

from __future__ import annotations

import argparse
import asyncio
import logging

from tools import (
    fetch_health_info,
    fetch_market_value,
    fetch_nenkin_news,
    fetch_nenkin_page,
    fetch_news,
    fetch_senior_sites,
    fetch_weather,
    scrape_url,
    search_subsidies,
    subsidy_detail,
)
from tools.benefits import SITES
from tools.health import HEALTH_CATEGORIES
from tools.news import CATEGORIES, SOURCES
from utils.exceptions import ConfigurationError
from utils.logger import setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SKILL60+ live site fetch CLI")
    parser.add_argument("--verbose", action="store_true")
    parser.add_argument("--log-file", default=None, help="also write logs to logs/<name>")
    sub = parser.add_subparsers(dest="command", required=True)

    news = sub.add_parser("news")
    news.add_argument("--source", choices=SOURCES, default="nhk")
    news.add_argument("--category", choices=CATEGORIES, default="all")
    news.add_argument("--keyword", default="")
    news.add_argument("--limit", type=int, default=10)

    sites = sub.add_parser("senior-sites")
    sites.add_argument("sites", nargs="*", help=f"{', '.join(SITES)} or all")

    scrape = sub.add_parser("scrape")
    scrape.add_argument("url")
    scrape.add_argument("--max-chars", type=int, default=None)

    nenkin_news = sub.add_parser("nenkin-news")
    nenkin_news.add_argument("--limit", type=int, default=10)

    nenkin_page = sub.add_parser("nenkin-page")
    nenkin_page.add_argument("path")

    search = sub.add_parser("jgrants-search")
    search.add_argument("--keyword", default="高齢者")
    search.add_argument("--area", default="")
    search.add_argument("--limit", type=int, default=10)

    detail = sub.add_parser("jgrants-detail")
    detail.add_argument("subsidy_id")

    market = sub.add_parser("market")
    market.add_argument("skills", nargs="+")
    market.add_argument("--region", default="全国")
    market.add_argument("--age-range", default="60+")

    health = sub.add_parser("health-info")
    health.add_argument("--category", choices=list(HEALTH_CATEGORIES), default="checkup")

    weather = sub.add_parser("weather")
    weather.add_argument("--region", default="東京")

    return parser


async def run(args: argparse.Namespace) -> str:
    if args.command == "news":
        return await fetch_news(args.source, args.category, args.keyword, args.limit)
    if args.command == "senior-sites":
        return await fetch_senior_sites(args.sites or ["all"])
    if args.command == "scrape":
        return await scrape_url(args.url, args.max_chars)
    if args.command == "nenkin-news":
        return await fetch_nenkin_news(args.limit)
    if args.command == "nenkin-page":
        return await fetch_nenkin_page(args.path)
    if args.command == "jgrants-search":
        return await search_subsidies(args.keyword, args.area, args.limit)
    if args.command == "jgrants-detail":
        return await subsidy_detail(args.subsidy_id)
    if args.command == "market":
        return await fetch_market_value(args.skills, args.region, args.age_range)
    if args.command == "health-info":
        return await fetch_health_info(args.category)
    if args.command == "weather":
        return await fetch_weather(args.region)
    raise ValueError(f"unknown command: {args.command}")


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    level = logging.DEBUG if args.verbose else logging.WARNING
    for name in ("sources", "processing", "aggregator", "tools"):
        setup_logger(name, level=level, log_file=args.log_file)

    try:
        text = asyncio.run(run(args))
    except ConfigurationError as exc:
        parser.exit(1, f"configuration error: {exc}\n")
    except ValueError as exc:
        parser.error(str(exc))
    print(text)


if __name__ == "__main__":
    main()
