"""Unit tests for processing.feed_parser."""

from __future__ import annotations

import types

from processing.feed_parser import iter_entries, parse_entries


FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Channel title is not an entry</title>
    <item>
      <title><![CDATA[年金のお知らせ]]></title>
      <link>https://example.jp/a</link>
      <pubDate>Mon, 09 Feb 2026 08:00:00 +0900</pubDate>
      <description><![CDATA[<p>支給日の&quot;変更&quot;について</p>]]></description>
    </item>
    <item>
      <title>Update</title>
      <link>https://example.jp/b?x=1&amp;y=2</link>
      <description>Plain   text
        across lines</description>
    </item>
  </channel>
</rss>
"""


def test_escaped_and_plain_titles_in_document_order():
    entries = parse_entries(FEED)

    assert [entry.title for entry in entries] == ["年金のお知らせ", "Update"]


def test_sub_fields_are_extracted_and_cleaned():
    first, second = parse_entries(FEED)

    assert first.link == "https://example.jp/a"
    assert first.published_at == "Mon, 09 Feb 2026 08:00:00 +0900"
    assert first.description == '支給日の"変更"について'
    assert second.link == "https://example.jp/b?x=1&y=2"
    assert second.published_at == ""
    assert second.description == "Plain text across lines"


def test_block_without_title_is_dropped():
    raw = """
    <item><link>https://example.jp/no-title</link></item>
    <item><title>   </title><description>blank title</description></item>
    <item><title>Kept</title></item>
    """

    entries = parse_entries(raw)

    assert [entry.title for entry in entries] == ["Kept"]
    assert entries[0].link == ""
    assert entries[0].description == ""


def test_five_escapes_are_decoded_and_tags_stripped():
    raw = (
        "<item><title>A &amp; B &lt;C&gt;</title>"
        "<description>&#39;quoted&#39; <b>bold</b>&amp;lt;kept&amp;gt;</description></item>"
    )

    (entry,) = parse_entries(raw)

    assert entry.title == "A & B <C>"
    assert entry.description == "'quoted' bold &lt;kept&gt;"


def test_non_rss_input_yields_nothing():
    assert parse_entries("") == []
    assert parse_entries("<html><body>No feed here</body></html>") == []
    assert parse_entries('{"items": []}') == []


def test_malformed_markup_does_not_fail_other_blocks():
    raw = """
    <item><title>First<title></item>
    <item><title>Second</title><description><![CDATA[unterminated</description></item>
    <item attr="x"><title>Third</title></item>
    """

    titles = [entry.title for entry in parse_entries(raw)]

    assert titles == ["Second", "Third"]


def test_parsing_is_idempotent():
    assert parse_entries(FEED) == parse_entries(FEED)


def test_iter_entries_is_lazy():
    entries = iter_entries(FEED)

    assert isinstance(entries, types.GeneratorType)
    assert next(entries).title == "年金のお知らせ"
