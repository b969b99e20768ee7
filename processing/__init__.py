"""
Processing Module
RSS 解析与 HTML 正文抽取 (同步、无 I/O)
"""
from .cleaner import decode_entities, normalize_text
from .feed_parser import iter_entries, parse_entries
from .extractor import ContentExtractor, extract_main_text

__all__ = [
    "decode_entities",
    "normalize_text",
    "iter_entries",
    "parse_entries",
    "ContentExtractor",
    "extract_main_text",
]
