from .document import DocumentNode
from .extractor import PageExtractorPort
from .fetcher import FetcherPort
from .resolver import LinkResolverPort
from .urls import UrlNormalizerPort

__all__ = [
    "DocumentNode",
    "FetcherPort",
    "LinkResolverPort",
    "PageExtractorPort",
    "UrlNormalizerPort",
]
