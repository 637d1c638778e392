"""Tests for feed parsing, headline cleanup and source extraction."""

from unittest.mock import patch

import feedparser
import pytest

from competitor_radar.news.feed_parser import clean_title, extract_source, parse_feed
from competitor_radar.schemas import ImpactLevel


def _rss(*items: str) -> str:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<rss version="2.0"><channel><title>Search</title>'
        + "".join(items)
        + "</channel></rss>"
    )


def _item(title="", link="", pub_date="", description="") -> str:
    return (
        f"<item><title>{title}</title><link>{link}</link>"
        f"<pubDate>{pub_date}</pubDate><description>{description}</description></item>"
    )


# ── clean_title / extract_source ─────────────────────────────────────────────

@pytest.mark.parametrize("title,headline,source", [
    ("Acme raises $20M - TechCrunch", "Acme raises $20M", "TechCrunch"),
    ("Acme opens Berlin office – Reuters", "Acme opens Berlin office", "Reuters"),
    ("Acme vs Globex: round two | The Verge", "Acme vs Globex: round two", "The Verge"),
    ("Acme - Globex deal - Star-Tribune", "Acme - Globex deal", "Star-Tribune"),
])
def test_attribution_suffix(title, headline, source):
    assert clean_title(title) == headline
    assert extract_source(title) == source


def test_title_without_suffix_is_untouched():
    assert clean_title("  Acme ships v2  ") == "Acme ships v2"
    assert extract_source("Acme ships v2") is None


def test_hyphenated_words_are_not_separators():
    title = "Acme's e-commerce push"
    assert clean_title(title) == title
    assert extract_source(title) is None


def test_overlong_suffix_is_kept_as_headline():
    title = "Acme update - " + "a very long clause that keeps going " * 3
    assert clean_title(title) == title.strip()
    assert extract_source(title) is None


def test_attribution_only_cleans_to_empty():
    assert clean_title("- Reuters") == ""
    assert extract_source("- Reuters") == "Reuters"


# ── parse_feed ────────────────────────────────────────────────────────────────

def test_parse_feed_normalizes_items():
    doc = _rss(
        _item("Acme announces partnership with Initech - Reuters",
              "https://example.com/a", "Mon, 01 Jan 2024 12:00:00 GMT",
              "&lt;p&gt;Big news&lt;/p&gt;"),
        _item("Acme pricing update", "https://example.com/b"),
    )
    items = parse_feed(doc, default_source="Google News", limit=5)

    assert [i.title for i in items] == ["Acme announces partnership with Initech", "Acme pricing update"]
    assert items[0].source == "Reuters"
    assert items[0].impact == ImpactLevel.HIGH
    assert items[0].url == "https://example.com/a"
    assert items[0].published_at is not None
    assert items[0].age_label.endswith("ago")

    assert items[1].source == "Google News"
    assert items[1].impact == ImpactLevel.MEDIUM
    assert items[1].age_label == "Recently"
    assert items[1].published_at is None


def test_parse_feed_drops_empty_titles():
    doc = _rss(
        _item("", "https://example.com/empty"),
        _item("- Reuters", "https://example.com/attribution-only"),
        _item("   ", "https://example.com/blank"),
        _item("Acme hires new CFO - Bloomberg", "https://example.com/real"),
    )
    items = parse_feed(doc)
    assert len(items) == 1
    assert items[0].title == "Acme hires new CFO"
    assert all(i.title.strip() for i in items)


def test_parse_feed_keeps_document_order_and_truncates():
    doc = _rss(*[_item(f"Story {n}", f"https://example.com/{n}") for n in range(10)])
    items = parse_feed(doc, limit=3)
    assert [i.title for i in items] == ["Story 0", "Story 1", "Story 2"]


def test_missing_fields_default_instead_of_failing():
    doc = _rss("<item><title>Acme only has a title</title></item>")
    items = parse_feed(doc)
    assert len(items) == 1
    assert items[0].url is None
    assert items[0].age_label == "Recently"


@pytest.mark.parametrize("document", [
    "",
    "   ",
    "<html><body>Proxy error</body></html>",
    _rss(),
])
def test_unusable_documents_yield_nothing(document):
    assert parse_feed(document) == []


def test_parse_feed_accepts_raw_bytes():
    doc = _rss(_item("Acme acquires Globex - Reuters", "https://example.com/a")).encode("utf-8")
    items = parse_feed(doc)
    assert [(i.title, i.source) for i in items] == [("Acme acquires Globex", "Reuters")]


def test_url_like_body_is_parsed_as_content_not_fetched():
    with patch("competitor_radar.news.feed_parser.feedparser.parse", wraps=feedparser.parse) as parse:
        assert parse_feed("https://news.example.com/rss/search?q=acme") == []

    document = parse.call_args.args[0]
    assert not isinstance(document, (str, bytes))
    assert document.getvalue() == b"https://news.example.com/rss/search?q=acme"
