"""Competitor Radar: competitor and industry news digests."""

__version__ = "1.0.0"
