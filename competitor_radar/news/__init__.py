"""
News parsing and enrichment.

Modules:
- impact_classifier: keyword-table impact tagging (high / medium / low)
- time_buckets: relative-age labels and timestamp parsing
- feed_parser: RSS/Atom -> FeedItem, headline attribution cleanup
"""

from competitor_radar.news.impact_classifier import classify_impact, IMPACT_KEYWORDS
from competitor_radar.news.time_buckets import format_relative_time, parse_timestamp
from competitor_radar.news.feed_parser import parse_feed, clean_title, extract_source
