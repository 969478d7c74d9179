"""
Model queries built on the traversal engine.

`*_from_object` functions crawl the graph reachable from an entrypoint.
`*_from_model` functions filter the already-flattened element list of a
model without any traversal.
"""

from typing import Any, Callable, List

from modelcrawl.metamodel.contract import is_model_object, type_of
from modelcrawl.traversal.engine import crawl
from modelcrawl.traversal.options import ConfigurationError, CrawlOptions


def _require_predicate(predicate: Any) -> None:
    if not callable(predicate):
        raise ConfigurationError("predicate must be callable")


def get_objects_from_object(predicate: Callable[[Any], bool], entrypoint: Any) -> List[Any]:
    """All objects reachable from the entrypoint that satisfy the predicate (unbounded depth)"""
    return crawl(CrawlOptions(predicate=predicate, depth=-1), entrypoint)


def all_instances_from_object(cls: Any, entrypoint: Any) -> List[Any]:
    """All reachable objects whose type is `cls` or inherits from it"""
    return get_objects_from_object(lambda x: type_of(x).is_a(cls), entrypoint)


def filter_model_elements(predicate: Callable[[Any], bool], model: Any) -> List[Any]:
    """Elements of the model satisfying the predicate, in the model's element order"""
    _require_predicate(predicate)
    return [element for element in model.elements() if predicate(element)]


# Name kept from the original query API
get_objects_from_model = filter_model_elements


def all_instances_from_model(cls: Any, model: Any) -> List[Any]:
    """
    Elements of the model that are instances of `cls`.

    With a reference model attached, subtypes of `cls` match as well.
    Without one, no inheritance information is assumed and only elements
    whose type is exactly `cls` match. Elements without a type (such as
    the classes of a metamodel) never match.
    """
    if getattr(model, 'reference_model', None) is not None:
        return filter_model_elements(lambda x: is_model_object(x) and type_of(x).is_a(cls), model)
    return filter_model_elements(lambda x: is_model_object(x) and type_of(x) is cls, model)
