"""
Keyword-based impact classification for competitor news.

Three keyword tables are checked in strict precedence: high, then medium,
then low. The first table with any keyword occurring as a substring of the
case-folded title + description wins. Text that matches nothing is tagged
MEDIUM: unclassified competitor activity is surfaced as noteworthy rather
than buried as noise.

The tables are plain data. Extend them here, not in classify_impact.
"""

from typing import Sequence, Tuple

from ..schemas import ImpactLevel

IMPACT_KEYWORDS: Tuple[Tuple[ImpactLevel, Tuple[str, ...]], ...] = (
    (ImpactLevel.HIGH, (
        "launch", "release", "partnership", "acquisition", "acquire",
        "funding", "breakthrough", "major", "significant", "revolutionary",
        "announces", "merger", "ipo",
    )),
    (ImpactLevel.MEDIUM, (
        "update", "upgrade", "feature", "improvement", "expansion",
        "pricing", "plan", "strategy", "investment", "hiring", "integration",
    )),
    (ImpactLevel.LOW, (
        "minor", "maintenance", "blog", "webinar", "podcast", "interview",
        "recap", "tips", "opinion", "patch",
    )),
)

DEFAULT_IMPACT = ImpactLevel.MEDIUM


def match_keywords(text: str, keywords: Sequence[str]) -> bool:
    return any(kw in text for kw in keywords)


def classify_impact(title: str, description: str = "") -> ImpactLevel:
    """Tag a news item high / medium / low from its title and description."""
    text = f"{title or ''} {description or ''}".casefold()
    for level, keywords in IMPACT_KEYWORDS:
        if match_keywords(text, keywords):
            return level
    return DEFAULT_IMPACT
