"""
News Client Module

HTTP client for the CryptoCompare public news API.
"""
from sentiment_feed.news_client.client import CryptoCompareNewsClient
from sentiment_feed.news_client.normalizer import normalize_batch, normalize_item

__all__ = [
    "CryptoCompareNewsClient",
    "normalize_batch",
    "normalize_item",
]
