"""
News Aggregator - multi-source topic search with deduplication and ranking.

This package fans a topic query out to several news search APIs, merges
their results, removes duplicates, scores every article for relevance and
returns a bounded, ranked list with diagnostics.

Main entry point is the CLI via `news-aggregator search` command.

Example:
    $ news-aggregator search "carbon tax petrochemical"
"""

__all__ = [
    "__version__",
    "Aggregator",
    "AppConfig",
    "load_config",
    "run_aggregation",
]
__version__ = "0.1.0"

from .aggregator import Aggregator, run_aggregation
from .config import AppConfig, load_config
