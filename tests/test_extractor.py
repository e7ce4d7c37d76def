"""Tests for feed document parsing."""

from datetime import datetime

import pytest

from feedwatch.exceptions import ParseError
from feedwatch.ingestion import extract_items, parse_rfc2822
from helpers import NOT_A_FEED, RSS_NO_GUID, RSS_THREE_ITEMS


ATOM_FEED = b"""<?xml version="1.0" encoding="utf-8"?>
<feed xmlns="http://www.w3.org/2005/Atom">
  <title>Atom Feed</title>
  <id>urn:uuid:feed</id>
  <updated>2024-09-05T12:00:00Z</updated>
  <entry>
    <title>Atom entry</title>
    <link href="https://atom.example.com/1"/>
    <id>urn:uuid:entry-1</id>
    <updated>2024-09-05T12:00:00Z</updated>
  </entry>
</feed>
"""


class TestParseRfc2822:
    def test_gmt_date(self):
        assert parse_rfc2822("Thu, 05 Sep 2024 12:00:00 GMT") == datetime(2024, 9, 5, 12, 0, 0)

    def test_offset_is_normalized_to_naive_utc(self):
        parsed = parse_rfc2822("Thu, 05 Sep 2024 14:30:00 +0200")
        assert parsed == datetime(2024, 9, 5, 12, 30, 0)
        assert parsed.tzinfo is None

    def test_unknown_offset_is_taken_as_utc(self):
        assert parse_rfc2822("Thu, 05 Sep 2024 12:00:00 -0000") == datetime(2024, 9, 5, 12, 0, 0)

    @pytest.mark.parametrize(
        "value",
        [
            None,
            "",
            "not a date",
            "2024-09-05T12:00:00Z",
            "Fri, 31 Dec 9999 23:00:00 -0500",
            "Mon, 01 Jan 0001 00:30:00 +0100",
        ],
    )
    def test_invalid_dates_are_absent(self, value):
        assert parse_rfc2822(value) is None


class TestExtractItems:
    def test_items_in_document_order(self):
        items = extract_items(RSS_THREE_ITEMS)

        assert [i.guid for i in items] == ["a-1", "a-2", "a-3"]
        assert [i.title for i in items] == ["First", "Second", "Third"]
        assert items[0].link == "https://a.example.com/1"

    def test_dates(self):
        items = extract_items(RSS_THREE_ITEMS)

        assert items[0].pub_date == datetime(2024, 9, 5, 12, 0, 0)
        assert items[1].pub_date == datetime(2024, 9, 5, 12, 30, 0)

    def test_bad_date_keeps_other_fields(self):
        third = extract_items(RSS_THREE_ITEMS)[2]

        assert third.pub_date is None
        assert third.title == "Third"
        assert third.guid == "a-3"

    def test_missing_guid(self):
        items = extract_items(RSS_NO_GUID)

        assert items[0].guid is None
        assert items[0].link == "https://b.example.com/post"
        assert items[0].has_dedup_key
        assert items[1].link is None
        assert not items[1].has_dedup_key

    def test_empty_channel(self):
        doc = b'<rss version="2.0"><channel><title>Empty</title></channel></rss>'
        assert extract_items(doc) == []

    def test_atom_feed(self):
        items = extract_items(ATOM_FEED)

        assert len(items) == 1
        assert items[0].guid == "urn:uuid:entry-1"
        assert items[0].link == "https://atom.example.com/1"

    def test_html_page_is_rejected(self):
        with pytest.raises(ParseError):
            extract_items(NOT_A_FEED)

    def test_garbage_is_rejected(self):
        with pytest.raises(ParseError):
            extract_items(b"\x00\x01 definitely not xml")

    def test_truncated_document_is_rejected(self):
        with pytest.raises(ParseError):
            extract_items(RSS_THREE_ITEMS[:300])

    def test_payload_is_not_read_as_a_path(self, tmp_path):
        secret = tmp_path / "secret.xml"
        secret.write_bytes(RSS_THREE_ITEMS)

        with pytest.raises(ParseError):
            extract_items(str(secret).encode())
