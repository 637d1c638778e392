"""Tests for deterministic fallback synthesis."""

import pytest

from competitor_radar.schemas import CompetitorUpdate, ImpactLevel, IndustryNewsItem
from competitor_radar.tools.mock_digests import (
    FALLBACK_SOURCE, INDUSTRY_TEMPLATES, focus_phrase, industry_placeholders, synthesize_updates,
)


def test_fintech_fallback_shape():
    updates = synthesize_updates("Acme", "fintech", "mobile banking")

    assert len(updates) == 2
    assert all(isinstance(u, CompetitorUpdate) for u in updates)
    assert [u.impact for u in updates] == [ImpactLevel.HIGH, ImpactLevel.MEDIUM]
    assert [u.age_label for u in updates] == ["2h ago", "1d ago"]
    assert all(u.text.startswith("Acme") for u in updates)
    assert all(u.competitor == "Acme" for u in updates)
    assert all(u.source == FALLBACK_SOURCE and u.url is None for u in updates)


def test_focus_phrase_is_substituted():
    updates = synthesize_updates("Acme", "fintech", "mobile banking")
    assert "mobile experience" in updates[0].text


def test_unknown_focus_uses_industry_default():
    updates = synthesize_updates("Acme", "fintech", "branch network")
    default_focus = INDUSTRY_TEMPLATES["fintech"][0]
    assert default_focus in updates[0].text


@pytest.mark.parametrize("focus_area,expected", [
    ("AI copilots", "AI"),
    ("Payments infrastructure", "payments"),
    ("customer retention", "customer retention"),
    ("Security & compliance", "security"),
    ("retail stores", None),
    ("email campaigns", None),
    ("", None),
])
def test_focus_phrase_matches_whole_words(focus_area, expected):
    assert focus_phrase(focus_area) == expected


def test_unknown_industry_uses_generic_set():
    updates = synthesize_updates("Globex", "space mining", "")
    assert len(updates) == 2
    assert updates[0].text.startswith("Globex launched new platform capabilities")


def test_synthesis_is_deterministic():
    first = synthesize_updates("Acme", "saas", "analytics")
    second = synthesize_updates("Acme", "saas", "analytics")
    assert first == second


def test_longer_digests_follow_age_progression():
    updates = synthesize_updates("Acme", "edtech", "ai", count=5)
    assert [u.age_label for u in updates] == ["2h ago", "1d ago", "3d ago", "5d ago", "1w ago"]
    assert [u.impact for u in updates][1:] == [ImpactLevel.MEDIUM] * 4
    assert len({u.text for u in updates}) == 5


def test_industry_placeholders_never_empty():
    for industry, focus in [("fintech", "mobile banking"), ("", ""), ("underwater basket weaving", "")]:
        items = industry_placeholders(industry, focus)
        assert len(items) == 3
        assert all(isinstance(i, IndustryNewsItem) and i.title for i in items)
        assert items[0].impact == ImpactLevel.HIGH


def test_industry_placeholders_use_label_and_focus():
    items = industry_placeholders("fintech", "mobile banking")
    assert items[0].title == "Fintech & Financial Services Market Trends: Key Insights"
    assert items[2].title == "Innovation in mobile banking: What's Next"
