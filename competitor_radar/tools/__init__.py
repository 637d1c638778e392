# Tools module
from .endpoint_rotator import EndpointRotator
from .feed_fetcher import ResilientFetcher
from .newsapi_tool import NewsAPITool
from .mock_digests import synthesize_updates, industry_placeholders

__all__ = [
    # Retrieval
    "EndpointRotator",
    "ResilientFetcher",
    "NewsAPITool",
    # Fallback synthesis
    "synthesize_updates",
    "industry_placeholders",
]
