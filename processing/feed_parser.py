"""
Feed Parser
宽松的 RSS 解析：逐个 <item> 块独立提取字段，不要求 XML 格式良好
"""
import logging
import re
from typing import Iterator, List, Optional

from core import FeedEntry
from processing.cleaner import decode_entities, normalize_text


logger = logging.getLogger(__name__)

ITEM_PATTERN = re.compile(r"<item\b[^>]*>(.*?)</item>", re.IGNORECASE | re.DOTALL)

_FIELD_PATTERNS = {}


def _patterns(tag: str):
    """(CDATA 形式, 普通形式) 两个模式，按标签名缓存"""
    if tag not in _FIELD_PATTERNS:
        escaped = re.escape(tag)
        _FIELD_PATTERNS[tag] = (
            re.compile(rf"<{escaped}(?:\s[^>]*)?>\s*<!\[CDATA\[(.*?)\]\]>", re.IGNORECASE | re.DOTALL),
            re.compile(rf"<{escaped}(?:\s[^>]*)?>(.*?)</{escaped}>", re.IGNORECASE | re.DOTALL),
        )
    return _FIELD_PATTERNS[tag]


def _field(block: str, tag: str) -> Optional[str]:
    """优先取 CDATA 内容，没有时退回普通文本；都没有返回 None"""
    cdata, plain = _patterns(tag)
    match = cdata.search(block) or plain.search(block)
    return match.group(1) if match else None


def _parse_block(block: str) -> Optional[FeedEntry]:
    title = normalize_text(_field(block, "title") or "")
    if not title:
        return None

    return FeedEntry(
        title=title,
        link=decode_entities((_field(block, "link") or "").strip()),
        published_at=(_field(block, "pubDate") or "").strip(),
        description=normalize_text(_field(block, "description") or ""),
    )


def iter_entries(raw_document: str) -> Iterator[FeedEntry]:
    """
    按出现顺序惰性产出条目

    缺失字段默认为空串；标题为空的块整体跳过。
    非 RSS 形状的输入产出零个条目。
    """
    if not raw_document:
        return

    for index, match in enumerate(ITEM_PATTERN.finditer(raw_document)):
        entry = _parse_block(match.group(1))
        if entry is None:
            logger.debug(f"Skipped feed item #{index}: no title")
            continue
        yield entry


def parse_entries(raw_document: str) -> List[FeedEntry]:
    """解析整个文档，返回条目列表 (纯函数，无 I/O)"""
    return list(iter_entries(raw_document))
