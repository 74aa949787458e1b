"""RSS 2.0 文档解析与校验."""

import logging
import re
from typing import Any

from lxml import etree
from pydantic import BaseModel

logger = logging.getLogger(__name__)

# 属性名前缀，用于区分属性和子元素
ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"

# lxml 不接受带 encoding 声明的 str，文本已由 HTTP 层解码
_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


class InvalidFeedError(Exception):
    """Feed 文档无法解析或缺少必填字段."""


class RSSItem(BaseModel):
    """校验通过的条目，四个字段均非空."""

    title: str
    link: str
    description: str
    pub_date: str


class RSSFeed(BaseModel):
    """解析后的 Feed."""

    title: str
    link: str
    description: str
    items: list[RSSItem] = []


def _qualified_name(element: Any) -> str:
    """保留命名空间前缀，如 atom:link、dc:creator."""
    local_name = etree.QName(element).localname
    if element.prefix:
        return f"{element.prefix}:{local_name}"
    return local_name


def element_to_object(element: Any) -> Any:
    """
    把 XML 元素转换为 dict / str.

    - 无属性、无子元素的元素转换为去掉首尾空白的文本；
    - 属性以 ATTRIBUTE_PREFIX 为前缀作为键；
    - 同名子元素出现多次时合并为 list；
    - 有子元素时，全部文本（含子元素和尾随文本）放在 TEXT_KEY 下。
    """
    node: dict[str, Any] = {}
    has_children = False
    for name, value in element.attrib.items():
        node[ATTRIBUTE_PREFIX + etree.QName(name).localname] = value

    for child in element:
        # 跳过注释和处理指令
        if not isinstance(child.tag, str):
            continue
        has_children = True
        key = _qualified_name(child)
        value = element_to_object(child)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    if has_children:
        text = etree.tostring(
            element, method="text", encoding="unicode", with_tail=False
        ).strip()
    else:
        text = (element.text or "").strip()
    if not node:
        return text
    if text:
        node[TEXT_KEY] = text
    return node


def xml_to_object(document: str) -> dict[str, Any]:
    """解析 XML 文本，返回 {根元素名: 内容}."""
    try:
        document = _XML_DECLARATION.sub("", document.lstrip("\ufeff"), count=1)
        root = etree.fromstring(document, _PARSER)
    except etree.XMLSyntaxError as e:
        msg = f"无效的 Feed: XML 解析失败 ({e})"
        raise InvalidFeedError(msg) from e

    return {_qualified_name(root): element_to_object(root)}


def _text(value: Any) -> str:
    """取字段文本，缺失或不是纯文本时返回空串."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        text = value.get(TEXT_KEY)
        if isinstance(text, str):
            return text.strip()
    return ""


def _as_list(value: Any) -> list[Any]:
    """条目可能缺失、单个或多个，统一为 list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _parse_item(raw: Any) -> RSSItem | None:
    if not isinstance(raw, dict):
        return None

    fields = {
        "title": _text(raw.get("title")),
        "link": _text(raw.get("link")),
        "description": _text(raw.get("description")),
        "pub_date": _text(raw.get("pubDate")),
    }
    if not all(fields.values()):
        return None
    return RSSItem(**fields)


def parse_feed(document: str) -> RSSFeed:
    """
    解析 RSS 文档.

    channel 缺失或缺少 title/link/description 时整个文档无效；
    条目缺少任一字段时静默丢弃，保留文档中的顺序。

    Raises:
        InvalidFeedError: 文档无效
    """
    parsed = xml_to_object(document)
    root = next(iter(parsed.values()))

    channel = root.get("channel") if isinstance(root, dict) else None
    if isinstance(channel, list):
        channel = channel[0]
    if not isinstance(channel, dict):
        msg = "无效的 Feed: 缺少 channel"
        raise InvalidFeedError(msg)

    title = _text(channel.get("title"))
    link = _text(channel.get("link"))
    description = _text(channel.get("description"))
    if not (title and link and description):
        msg = "无效的 Feed: channel 缺少 title、link 或 description"
        raise InvalidFeedError(msg)

    raw_items = _as_list(channel.get("item"))
    items = [item for item in map(_parse_item, raw_items) if item is not None]

    dropped = len(raw_items) - len(items)
    if dropped:
        logger.debug(f"Feed {link} 丢弃了 {dropped} 个字段不完整的条目")

    return RSSFeed(title=title, link=link, description=description, items=items)
