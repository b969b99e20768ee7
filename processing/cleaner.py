"""
Text Cleaner
标签剥离 / 实体解码 / 空白折叠，供 RSS 解析与正文抽取共用
"""
import re


TAG_PATTERN = re.compile(r"<[^>]+>")
ENTITY_PATTERN = re.compile(r"&(?:amp|lt|gt|quot|#39);")
MULTIPLE_SPACES = re.compile(r"\s+")

# 只解码这五种常见实体
ENTITIES = {
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
}


def decode_entities(text: str) -> str:
    """单遍解码，`&amp;lt;` 得到 `&lt;` 而不是 `<`"""
    return ENTITY_PATTERN.sub(lambda match: ENTITIES[match.group(0)], text)


def normalize_text(raw: str) -> str:
    """
    把一段标记文本变成可直接展示的纯文本

    Args:
        raw: 可能含有 HTML 标签和实体的文本

    Returns:
        去标签、解码、折叠空白并 trim 后的文本
    """
    if not raw:
        return ""

    text = TAG_PATTERN.sub(" ", raw)
    text = decode_entities(text)
    text = MULTIPLE_SPACES.sub(" ", text)
    return text.strip()
