"""Traversal and query engine for in-memory typed model graphs."""

from .traversal import (
    ConfigurationError,
    CrawlOptions,
    FollowOptions,
    ProfileError,
    TraversalEngine,
    TraversalProfiles,
    crawl,
    follow,
)
from .queries import (
    all_instances_from_model,
    all_instances_from_object,
    filter_model_elements,
    get_objects_from_model,
    get_objects_from_object,
)

__version__ = "0.1.0"

__all__ = [
    'ConfigurationError', 'CrawlOptions', 'FollowOptions', 'ProfileError',
    'TraversalEngine', 'TraversalProfiles', 'crawl', 'follow',
    'all_instances_from_model', 'all_instances_from_object',
    'filter_model_elements', 'get_objects_from_model', 'get_objects_from_object',
]
