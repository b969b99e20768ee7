"""
Data Aggregator
并发抓取多个数据源，逐源隔离失败，按声明顺序合并、去重、截断
"""
import asyncio
from typing import Any, Awaitable, Callable, Hashable, Iterable, List, Optional, Sequence
import logging

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from config import get_aggregator_settings
from core import AggregateItem, AggregateReport, FetchOutcome, FetchStatus, SourceDescriptor


logger = logging.getLogger(__name__)
console = Console()

SourceWork = Callable[[SourceDescriptor], Awaitable[Sequence[Any]]]
KeyFunc = Callable[[Any], Optional[Hashable]]


def title_key(value: Any) -> Optional[Hashable]:
    """默认去重键：条目标题；取不到时返回 None (不参与去重)"""
    if isinstance(value, dict):
        title = value.get("title")
    else:
        title = getattr(value, "title", None)
    # str.title 之类的方法不算标题
    return title if isinstance(title, str) and title else None


def dedupe_by_key(items: Iterable[AggregateItem], key: KeyFunc = title_key) -> List[AggregateItem]:
    """保留首次出现；键为 None 的条目全部保留"""
    unique: List[AggregateItem] = []
    seen = set()
    for item in items:
        identity = key(item.value)
        if identity is not None:
            if identity in seen:
                continue
            seen.add(identity)
        unique.append(item)
    return unique


class Aggregator:
    """
    数据聚合器

    所有源同时发出；单个源的失败或超时只记为该源的失败结果，
    不会取消其他源，也不会让整个调用抛出异常。
    """

    def __init__(self, show_progress: Optional[bool] = None):
        settings = get_aggregator_settings()
        self.default_limit = settings.default_limit
        self.show_progress = settings.show_progress if show_progress is None else show_progress

    async def _run_source(
        self,
        source: SourceDescriptor,
        work: SourceWork,
        on_done: Optional[Callable[[], None]] = None,
    ) -> FetchOutcome:
        try:
            payload = list(await work(source) or [])
        except Exception as exc:
            error = str(exc) or type(exc).__name__
            logger.warning(f"{source.label or source.key} source failed: {error}")
            outcome = FetchOutcome(
                source_key=source.key,
                label=source.label,
                url=source.url,
                status=FetchStatus.FAILURE,
                error=error,
            )
        else:
            outcome = FetchOutcome(
                source_key=source.key,
                label=source.label,
                url=source.url,
                status=FetchStatus.SUCCESS,
                payload=payload,
            )
        finally:
            if on_done is not None:
                on_done()
        return outcome

    async def _gather(self, sources: List[SourceDescriptor], work: SourceWork) -> List[FetchOutcome]:
        if not self.show_progress:
            return list(await asyncio.gather(*[self._run_source(s, work) for s in sources]))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task(
                f"[cyan]Fetching from {len(sources)} sources...",
                total=len(sources),
            )
            outcomes = await asyncio.gather(
                *[
                    self._run_source(s, work, on_done=lambda: progress.advance(task))
                    for s in sources
                ]
            )
        return list(outcomes)

    async def fetch_all(
        self,
        sources: Sequence[SourceDescriptor],
        work: SourceWork,
        *,
        key: KeyFunc = title_key,
        limit: Optional[int] = None,
    ) -> AggregateReport:
        """
        聚合所有源

        Args:
            sources: 数据源列表 (key 在一次调用内唯一)
            work: 针对单个源的异步处理，返回该源的条目序列
            key: 去重键函数，作用于条目本身
            limit: 最大返回条数，None 表示使用默认配置

        Returns:
            AggregateReport，outcomes 与 sources 一一对应
        """
        sources = list(sources)
        keys = [source.key for source in sources]
        if len(set(keys)) != len(keys):
            raise ValueError(f"source keys must be unique: {keys}")

        # gather 按传入顺序返回，与网络完成顺序无关
        outcomes = await self._gather(sources, work) if sources else []

        merged = [
            AggregateItem(source_key=outcome.source_key, label=outcome.label, value=value)
            for outcome in outcomes
            if outcome.ok
            for value in outcome.payload
        ]
        unique = dedupe_by_key(merged, key)

        max_items = self.default_limit if limit is None else limit
        unique = unique[: max(0, int(max_items))]

        report = AggregateReport(items=unique, outcomes=outcomes)
        logger.info(
            f"{report.summary_line()}, {len(merged)} items merged, {len(unique)} kept"
        )
        if report.failures:
            logger.warning(
                "Failed sources: " + ", ".join(outcome.source_key for outcome in report.failures)
            )
        return report


def print_summary(report: AggregateReport, title: str = "📊 Aggregation Summary") -> None:
    """打印结果摘要"""
    table = Table(title=title, show_header=True)
    table.add_column("Source", style="cyan")
    table.add_column("Status", style="magenta")
    table.add_column("Items", justify="right", style="green")
    table.add_column("Error", style="red")

    for outcome in report.outcomes:
        table.add_row(
            outcome.label or outcome.source_key,
            outcome.status.value,
            str(len(outcome.payload)),
            outcome.error or "",
        )

    table.add_row("", "", "", "")
    table.add_row(
        "[bold]Total[/bold]",
        f"[bold]{report.success_count}/{report.attempted_count}[/bold]",
        f"[bold]{len(report.items)}[/bold]",
        "",
    )

    console.print(table)
