"""
Content Extractor
HTML 正文抽取：按顺序尝试多个结构候选，第一个命中的区域作为正文
"""
import logging
import re
from typing import Iterable, Optional, Tuple, Union

from bs4 import BeautifulSoup, Comment, Tag

from config import get_extractor_settings
from core import ExtractedText
from processing.cleaner import normalize_text


logger = logging.getLogger(__name__)

# 无论命中哪一级都整体移除的非正文区域
CHROME_TAGS = ["nav", "footer", "header", "script", "style"]


class ContentExtractor:
    """
    正文抽取器

    候选顺序:
    1. <main> 区域
    2. id/class 以关键词开头的第一个 <div> (大小写不敏感)
    3. <body> 区域
    4. 整个文档
    """

    def __init__(
        self,
        region_keywords: Optional[Iterable[str]] = None,
        truncation_notice: Optional[str] = None,
    ):
        """
        Args:
            region_keywords: 第 2 级使用的关键词，默认取配置
            truncation_notice: 截断后追加的提示，默认取配置
        """
        settings = get_extractor_settings()
        keywords = list(settings.region_keywords if region_keywords is None else region_keywords)
        self.region_keywords = [kw for kw in keywords if kw]
        self.truncation_notice = (
            settings.truncation_notice if truncation_notice is None else truncation_notice
        )
        self._keyword_pattern = (
            re.compile("^(?:" + "|".join(re.escape(kw) for kw in self.region_keywords) + ")", re.IGNORECASE)
            if self.region_keywords
            else None
        )

    def _is_content_div(self, tag: Tag) -> bool:
        if tag.name != "div" or self._keyword_pattern is None:
            return False
        ident = str(tag.get("id") or "")
        classes = tag.get("class") or []
        class_text = " ".join(classes) if isinstance(classes, list) else str(classes)
        return bool(self._keyword_pattern.match(ident) or self._keyword_pattern.match(class_text))

    def select_region(self, soup: BeautifulSoup) -> Tuple[str, Union[BeautifulSoup, Tag]]:
        """返回 (命中级别, 区域节点)"""
        main = soup.find("main")
        if main is not None:
            return "main", main

        content_div = soup.find(self._is_content_div)
        if content_div is not None:
            return "keyword", content_div

        if soup.body is not None:
            return "body", soup.body

        return "document", soup

    @staticmethod
    def _strip_chrome(region: Union[BeautifulSoup, Tag]) -> None:
        for element in region.find_all(CHROME_TAGS):
            element.decompose()
        for comment in region.find_all(string=lambda text: isinstance(text, Comment)):
            comment.extract()

    def clean(self, html: str) -> str:
        """抽取并清洗正文，不做截断"""
        if not html:
            return ""

        soup = BeautifulSoup(html, "html.parser")
        level, region = self.select_region(soup)
        logger.debug(f"Main content matched at level '{level}'")

        self._strip_chrome(region)
        # 实体在解析时已全部解码；decode_contents 只会重新转义 & < >
        return normalize_text(region.decode_contents())

    def extract(self, html: str, max_chars: int) -> ExtractedText:
        """
        抽取正文并按字符预算截断

        Args:
            html: 原始 HTML
            max_chars: 最大字符数 (正整数)

        Returns:
            ExtractedText，超出预算时 text 为前 max_chars 个字符加截断提示
        """
        if int(max_chars) <= 0:
            raise ValueError(f"max_chars must be positive, got {max_chars}")

        text = self.clean(html)
        if len(text) <= max_chars:
            return ExtractedText(text=text, truncated=False)

        return ExtractedText(text=text[:max_chars] + self.truncation_notice, truncated=True)


def extract_main_text(html: str, max_chars: int) -> ExtractedText:
    """便捷函数：使用默认配置抽取正文"""
    return ContentExtractor().extract(html, max_chars)
