"""Export the reachable part of a model graph as a NetworkX graph."""

from typing import Any, Callable, Mapping, Optional

import networkx as nx

from modelcrawl.metamodel.contract import type_name
from modelcrawl.traversal.engine import TraversalEngine
from modelcrawl.traversal.options import CrawlOptions, accept_all


def default_label(obj: Any) -> str:
    name = getattr(obj, 'name', None)
    return str(name) if name is not None else repr(obj)


def reachable_graph(
    entrypoint: Any,
    depth: int = -1,
    follow_if: Optional[Mapping[str, Any]] = None,
    label: Optional[Callable[[Any], str]] = None
) -> nx.DiGraph:
    """
    Create a NetworkX graph of everything a crawl reaches.

    Args:
        entrypoint: A model object or an iterable of model objects
        depth: Maximum hop count (-1 = unbounded)
        follow_if: Reference filter map, as for crawl
        label: Node label function (defaults to the object's name)

    Returns:
        DiGraph keyed by id(obj); nodes carry obj/type/label, edges carry reference
    """
    if label is None:
        label = default_label

    engine = TraversalEngine(record_edges=True)
    options = CrawlOptions(predicate=accept_all, depth=depth, follow_if=follow_if)
    state = engine.crawl_state(options, entrypoint)

    G = nx.DiGraph()

    # Add nodes
    for obj in state.result:
        G.add_node(
            id(obj),
            obj=obj,
            type=type_name(obj),
            label=label(obj)
        )

    # Add edges
    for source, ref_name, target in state.expanded_edges:
        if id(target) in G:
            G.add_edge(id(source), id(target), reference=ref_name)

    return G
