"""
Model Traversal Engine

Implements the depth-bounded, cycle-safe crawl and the fixed-path navigator
over an in-memory model graph.
Key feature: every object is tested at most once per call, so cyclic graphs
always terminate.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Union

from modelcrawl.metamodel.contract import (
    get_reference,
    is_model_object,
    normalize_entrypoint,
    type_name,
    type_of,
)
from .options import (
    ConfigurationError,
    CrawlOptions,
    FollowOptions,
    as_crawl_options,
    as_follow_options,
)

logger = logging.getLogger(__name__)


@dataclass
class CrawlState:
    """Call-scoped bookkeeping for a single crawl"""
    visited: Dict[int, int] = field(default_factory=dict)  # id(obj) -> smallest depth reached
    result: List[Any] = field(default_factory=list)
    expanded_edges: List[tuple] = field(default_factory=list)  # (source, reference, target)


class TraversalEngine:
    """
    Stateless traversal engine.

    The engine uses an explicit LIFO work stack of (object, depth) pairs,
    which reproduces the pre-order of a recursive depth-first walk without
    growing the call stack.
    """

    def __init__(self, record_edges: bool = False):
        """
        Initialize traversal engine.

        Args:
            record_edges: Keep every expanded (source, reference, target)
                triple in the crawl state. Used by graph export.
        """
        self.record_edges = record_edges

    def crawl(
        self,
        options: Union[CrawlOptions, Mapping[str, Any]],
        entrypoint: Any
    ) -> List[Any]:
        """
        Collect the objects reachable from the entrypoint(s) that satisfy the predicate.

        Args:
            options: CrawlOptions or mapping with predicate, depth, follow_if
            entrypoint: A model object, None, or an iterable of model objects

        Returns:
            Matching objects in discovery order, each at most once
        """
        return self.crawl_state(options, entrypoint).result

    def crawl_state(
        self,
        options: Union[CrawlOptions, Mapping[str, Any]],
        entrypoint: Any
    ) -> CrawlState:
        opts = as_crawl_options(options)
        starts = self._start_objects(entrypoint)
        state = CrawlState()

        # Reversed so the first entrypoint is popped first
        stack = [(start, 0) for start in reversed(starts)]

        while stack:
            current, depth = stack.pop()
            key = id(current)

            if key in state.visited:
                # Under a depth bound, a shorter route re-expands but never re-tests
                if opts.unbounded or depth >= state.visited[key]:
                    continue
                state.visited[key] = depth
            else:
                state.visited[key] = depth
                if opts.predicate(current):
                    state.result.append(current)

            if not opts.unbounded and depth >= opts.depth:
                continue

            children = []
            declared = list(type_of(current).declared_references())
            for ref_name in opts.references_for(type_name(current), declared):
                for target in get_reference(current, ref_name):
                    children.append((target, depth + 1))
                    if self.record_edges:
                        state.expanded_edges.append((current, ref_name, target))

            stack.extend(reversed(children))

        logger.debug(
            "crawl from %d entrypoint(s): visited=%d matched=%d depth=%d",
            len(starts), len(state.visited), len(state.result), opts.depth
        )
        return state

    def follow(
        self,
        options: Union[FollowOptions, Mapping[str, Any]],
        entrypoint: Any
    ) -> List[Any]:
        """
        Walk a fixed sequence of references from the entrypoint(s).

        Args:
            options: FollowOptions or mapping with path, target_only, predicate
            entrypoint: A model object, None, or an iterable of model objects

        Returns:
            The final frontier (target_only) or every object seen along the
            way, deduplicated by identity and post-filtered by the predicate
        """
        opts = as_follow_options(options)
        frontier = self._start_objects(entrypoint)

        collected: List[Any] = []
        seen = set()

        def accumulate(objects: List[Any]) -> None:
            for obj in objects:
                if id(obj) not in seen:
                    seen.add(id(obj))
                    collected.append(obj)

        if not opts.target_only:
            accumulate(frontier)

        for ref_name in opts.steps:
            frontier = self._step(frontier, ref_name)
            if not opts.target_only:
                accumulate(frontier)

        selected = frontier if opts.target_only else collected
        result = [obj for obj in selected if opts.predicate(obj)]

        logger.debug(
            "follow %s (target_only=%s): returned=%d",
            list(opts.steps), opts.target_only, len(result)
        )
        return result

    def _step(self, frontier: List[Any], ref_name: str) -> List[Any]:
        """Union of one reference's targets over a frontier, deduplicated by identity"""
        next_frontier = []
        seen = set()
        for obj in frontier:
            if ref_name not in type_of(obj).declared_references():
                continue
            for target in get_reference(obj, ref_name):
                if id(target) not in seen:
                    seen.add(id(target))
                    next_frontier.append(target)
        return next_frontier

    def _start_objects(self, entrypoint: Any) -> List[Any]:
        starts = list(normalize_entrypoint(entrypoint))
        for start in starts:
            if not is_model_object(start):
                raise ConfigurationError(
                    f"Entrypoint {start!r} does not implement type_of()/get_reference()"
                )
        return starts


_default_engine = TraversalEngine()


def crawl(options: Union[CrawlOptions, Mapping[str, Any]], entrypoint: Any) -> List[Any]:
    return _default_engine.crawl(options, entrypoint)


def follow(options: Union[FollowOptions, Mapping[str, Any]], entrypoint: Any) -> List[Any]:
    return _default_engine.follow(options, entrypoint)
