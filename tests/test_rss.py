"""测试 RSS 解析与校验."""

from collections.abc import Callable

import pytest

from gator.core.rss import InvalidFeedError, parse_feed, xml_to_object


class TestXmlToObject:
    """测试 XML 转换."""

    def test_attributes_and_namespaces(self):
        """属性带前缀，命名空间元素保留前缀."""
        document = (
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">'
            "<channel>"
            '<atom:link href="https://example.com/feed.xml" rel="self"/>'
            "<title>T</title>"
            "</channel></rss>"
        )
        parsed = xml_to_object(document)

        rss = parsed["rss"]
        assert rss["@_version"] == "2.0"
        assert rss["channel"]["title"] == "T"
        assert rss["channel"]["atom:link"]["@_href"] == "https://example.com/feed.xml"

    def test_repeated_children_become_list(self):
        parsed = xml_to_object("<root><item>a</item><item>b</item></root>")
        assert parsed["root"]["item"] == ["a", "b"]

    def test_text_with_attributes(self):
        parsed = xml_to_object('<root><guid isPermaLink="false">abc</guid></root>')
        assert parsed["root"]["guid"] == {"@_isPermaLink": "false", "#text": "abc"}

    def test_bom_and_declaration(self):
        """允许 BOM 和 encoding 声明."""
        document = '\ufeff<?xml version="1.0" encoding="UTF-8"?><root>x</root>'
        assert xml_to_object(document) == {"root": "x"}

    def test_malformed(self):
        with pytest.raises(InvalidFeedError):
            xml_to_object("<rss><channel></rss>")


class TestParseFeed:
    """测试 parse_feed."""

    def test_valid_feed(self, build_rss: Callable[..., str], sample_items):
        """两个条目都有效，保留文档顺序."""
        feed = parse_feed(build_rss(sample_items))

        assert feed.title == "Test Feed"
        assert feed.link == "https://example.com"
        assert feed.description == "A test feed"
        assert [item.title for item in feed.items] == ["First Post", "Second Post"]
        assert feed.items[0].description == "<p>First <b>body</b></p>"
        assert feed.items[0].pub_date == "Mon, 06 Jan 2025 10:00:00 +0000"

    def test_single_item(self, build_rss: Callable[..., str], sample_items):
        """只有一个条目时也返回 list."""
        feed = parse_feed(build_rss(sample_items[:1]))
        assert len(feed.items) == 1

    def test_no_items(self, build_rss: Callable[..., str]):
        feed = parse_feed(build_rss([]))
        assert feed.items == []

    @pytest.mark.parametrize("missing", ["title", "link", "description"])
    def test_channel_missing_field(
        self, build_rss: Callable[..., str], sample_items, missing: str
    ):
        """channel 缺少必填字段时整个文档无效."""
        with pytest.raises(InvalidFeedError):
            parse_feed(build_rss(sample_items, **{missing: None}))

    def test_channel_empty_field(self, build_rss: Callable[..., str], sample_items):
        with pytest.raises(InvalidFeedError):
            parse_feed(build_rss(sample_items, title=""))

    def test_missing_channel(self):
        with pytest.raises(InvalidFeedError):
            parse_feed('<rss version="2.0"></rss>')

    def test_not_xml(self):
        with pytest.raises(InvalidFeedError):
            parse_feed("<html><body>not a feed")

    @pytest.mark.parametrize("missing", ["title", "link", "description", "pubDate"])
    def test_incomplete_item_dropped(
        self, build_rss: Callable[..., str], sample_items, missing: str
    ):
        """缺少任一字段的条目被丢弃，其它条目保留."""
        incomplete = {k: v for k, v in sample_items[0].items() if k != missing}
        feed = parse_feed(build_rss([incomplete, sample_items[1]]))

        assert [item.title for item in feed.items] == ["Second Post"]

    def test_empty_item_field_dropped(
        self, build_rss: Callable[..., str], sample_items
    ):
        empty_title = {**sample_items[0], "title": ""}
        feed = parse_feed(build_rss([empty_title, sample_items[1]]))

        assert [item.title for item in feed.items] == ["Second Post"]

    def test_ignores_extra_fields(self, build_rss: Callable[..., str], sample_items):
        """guid 等未知字段不影响结果."""
        item = {**sample_items[0], "guid": "abc", "category": "news"}
        feed = parse_feed(build_rss([item]))

        assert feed.items[0].link == "https://example.com/posts/1"

    def test_mixed_content_field(self, build_rss: Callable[..., str], sample_items):
        """字段中夹带未转义的子元素时保留全部文本."""
        item = {**sample_items[0], "description": "Hello <b>big</b> world"}
        feed = parse_feed(build_rss([item]))

        assert feed.items[0].description == "Hello big world"

    def test_field_with_only_child_element(
        self, build_rss: Callable[..., str], sample_items
    ):
        """字段只含子元素时条目不会被丢弃."""
        item = {**sample_items[0], "description": "<p>x</p>"}
        feed = parse_feed(build_rss([item]))

        assert len(feed.items) == 1
        assert feed.items[0].description == "x"
