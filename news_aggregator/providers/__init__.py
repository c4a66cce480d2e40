"""
Content-search provider adapters.

Each adapter turns a topic into one provider-specific request, gated by
the shared quota tracker, and normalizes the response into Articles.
"""

from .base import ProviderAdapter
from .factory import available_providers, build_providers, create_provider
from .gnews import GNewsAdapter
from .guardian import GuardianAdapter
from .newsapi import NewsAPIAdapter
from .newsapi_ai import NewsAPIAIAdapter
from .newsdata import NewsDataAdapter
from .nyt import NYTAdapter

__all__ = [
    "ProviderAdapter",
    "available_providers",
    "build_providers",
    "create_provider",
    "GNewsAdapter",
    "GuardianAdapter",
    "NewsAPIAdapter",
    "NewsAPIAIAdapter",
    "NewsDataAdapter",
    "NYTAdapter",
]
