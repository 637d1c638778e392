"""
Deterministic fallback digests, used when live retrieval is exhausted
(and for every call in mock_mode).

Competitor digests pick a template set by industry and drop a focus-area
phrase into it. The first line is tagged high impact, the rest medium, with
ages from a fixed progression. Output uses the same CompetitorUpdate /
IndustryNewsItem models as live results.
"""

import logging
import re
from typing import List, Optional

from ..config import industry_label
from ..schemas import CompetitorUpdate, ImpactLevel, IndustryNewsItem

logger = logging.getLogger(__name__)

FALLBACK_SOURCE = "Market Monitor"

AGE_PROGRESSION = ("2h ago", "1d ago", "3d ago", "5d ago", "1w ago")

# Checked in order; first whole-word hit wins ("ai" must not match "retail")
FOCUS_PHRASES = (
    ("mobile", "mobile experience"),
    ("security", "security"),
    ("ai", "AI"),
    ("analytics", "analytics"),
    ("payment", "payments"),
    ("onboarding", "onboarding"),
    ("retention", "customer retention"),
)

# industry -> (default focus phrase, template lines). {focus} is substituted.
INDUSTRY_TEMPLATES = {
    "fintech": ("digital banking", [
        "launched new {focus} capabilities for retail banking customers",
        "updated pricing with a new enterprise tier built around {focus}",
        "secured regulatory approval to expand {focus} services into new markets",
    ]),
    "healthcare": ("patient engagement", [
        "launched a {focus} module for clinics and hospital networks",
        "expanded {focus} integrations with major EHR vendors",
        "published clinical outcome data for its {focus} programme",
    ]),
    "ecommerce": ("checkout", [
        "launched a redesigned {focus} flow for marketplace sellers",
        "updated seller fees alongside new {focus} tooling",
        "expanded same-day delivery with {focus} improvements",
    ]),
    "saas": ("workflow automation", [
        "launched {focus} features in its flagship platform",
        "updated pricing strategy with a new enterprise tier for {focus}",
        "opened a public API beta focused on {focus}",
    ]),
    "edtech": ("personalized learning", [
        "launched {focus} tools for K-12 classrooms",
        "partnered with universities to pilot {focus} courses",
        "updated its teacher dashboard with {focus} insights",
    ]),
    "gaming": ("live operations", [
        "launched a new season with {focus} upgrades",
        "updated its creator programme around {focus}",
        "expanded cross-platform play with {focus} improvements",
    ]),
    "travel": ("booking", [
        "launched a {focus} assistant for corporate travellers",
        "updated loyalty tiers with {focus} perks",
        "partnered with regional airlines to extend {focus} coverage",
    ]),
    "logistics": ("shipment visibility", [
        "launched real-time {focus} for mid-market shippers",
        "expanded warehouse network with {focus} upgrades",
        "updated carrier pricing alongside new {focus} features",
    ]),
    "real-estate": ("property search", [
        "launched {focus} tools for agents and brokers",
        "expanded into three new metro markets with {focus} listings",
        "updated tenant portal with {focus} features",
    ]),
    "foodtech": ("delivery", [
        "launched {focus} partnerships with regional restaurant chains",
        "updated subscription plan with {focus} perks",
        "expanded dark kitchen network to support {focus}",
    ]),
    "automotive": ("connected vehicle", [
        "launched {focus} services for its new model line",
        "announced a battery supply deal tied to {focus} plans",
        "updated its fleet software with {focus} features",
    ]),
    "energy": ("grid storage", [
        "launched a {focus} product for commercial sites",
        "secured project financing for {focus} deployments",
        "expanded utility partnerships around {focus}",
    ]),
    "media": ("streaming", [
        "launched an ad-supported {focus} tier",
        "updated creator revenue share with {focus} tooling",
        "acquired a niche studio to strengthen {focus} content",
    ]),
    "social": ("community", [
        "launched {focus} features for group moderators",
        "updated its creator monetization programme around {focus}",
        "expanded {focus} safety controls for younger users",
    ]),
    "productivity": ("collaboration", [
        "launched {focus} features for distributed teams",
        "updated pricing strategy with a new business tier for {focus}",
        "integrated {focus} workflows with major chat platforms",
    ]),
}

GENERIC_TEMPLATE = ("platform", [
    "launched new {focus} capabilities for enterprise customers",
    "updated pricing strategy with a new enterprise tier",
    "released version 3.2 of its {focus} with enhanced UX",
    "announced a strategic partnership to extend its {focus}",
    "published new API documentation for {focus} developers",
])


def focus_phrase(focus_area: str) -> Optional[str]:
    """Known topic phrase for free-text focus area, or None."""
    text = (focus_area or "").lower()
    for keyword, phrase in FOCUS_PHRASES:
        if re.search(rf"\b{re.escape(keyword)}s?\b", text):
            return phrase
    return None


def _template_for(industry: str):
    return INDUSTRY_TEMPLATES.get((industry or "").strip().lower(), GENERIC_TEMPLATE)


def synthesize_updates(
    competitor: str,
    industry: str,
    focus_area: str,
    count: int = 2,
) -> List[CompetitorUpdate]:
    """Synthesized digest for one competitor. Same inputs, same output."""
    default_focus, lines = _template_for(industry)
    focus = focus_phrase(focus_area) or default_focus

    # Industry sets are short; pad from the generic set when more are asked for
    pool = list(lines) + [extra for extra in GENERIC_TEMPLATE[1] if extra not in lines]

    updates = []
    for i, line in enumerate(pool[:max(count, 0)]):
        updates.append(CompetitorUpdate(
            competitor=competitor,
            text=f"{competitor.strip()} {line.format(focus=focus)}",
            impact=ImpactLevel.HIGH if i == 0 else ImpactLevel.MEDIUM,
            age_label=AGE_PROGRESSION[min(i, len(AGE_PROGRESSION) - 1)],
            source=FALLBACK_SOURCE,
        ))

    logger.info(f"[FALLBACK] {competitor}: {len(updates)} synthesized updates ({industry or 'generic'})")
    return updates


def industry_placeholders(industry: str, focus_area: str) -> List[IndustryNewsItem]:
    """Fixed, never-empty industry headlines for when live news is unavailable."""
    label = industry_label(industry)
    focus = (focus_area or "").strip() or label
    return [
        IndustryNewsItem(
            title=f"{label} Market Trends: Key Insights",
            source="Industry Monitor",
            impact=ImpactLevel.HIGH,
        ),
        IndustryNewsItem(
            title=f"New Regulations Reshape {label}",
            source="Regulatory Watch",
            impact=ImpactLevel.MEDIUM,
        ),
        IndustryNewsItem(
            title=f"Innovation in {focus}: What's Next",
            source=FALLBACK_SOURCE,
            impact=ImpactLevel.MEDIUM,
        ),
    ]
