"""
Model traversal engine package.

This package provides:
- Depth-bounded, cycle-safe crawling with per-type reference filtering
- Fixed-path navigation along named references
- YAML-backed named traversal profiles
"""

from .options import ConfigurationError, CrawlOptions, FollowOptions
from .engine import TraversalEngine, crawl, follow
from .profiles import ProfileError, TraversalProfiles

__all__ = [
    'ConfigurationError', 'CrawlOptions', 'FollowOptions',
    'TraversalEngine', 'crawl', 'follow',
    'ProfileError', 'TraversalProfiles',
]
