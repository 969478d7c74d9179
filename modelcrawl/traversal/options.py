"""
Traversal Options

Configuration records for `crawl` and `follow`. Both accept either the
dataclass itself or a plain mapping (snake_case or camelCase keys) and are
validated before any traversal starts.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

Predicate = Callable[[Any], bool]


class ConfigurationError(ValueError):
    pass


def accept_all(_obj: Any) -> bool:
    return True


def _normalize_follow_if(follow_if: Any) -> Optional[Dict[str, Tuple[str, ...]]]:
    if follow_if is None:
        return None
    if not isinstance(follow_if, Mapping):
        raise ConfigurationError(f"follow_if must be a mapping of type name to reference names, got {follow_if!r}")

    normalized = {}
    for type_name, ref_names in follow_if.items():
        if isinstance(ref_names, str):
            ref_names = [ref_names]
        elif ref_names is None:
            ref_names = []
        try:
            normalized[type_name] = tuple(ref_names)
        except TypeError:
            raise ConfigurationError(f"follow_if[{type_name!r}] must be a list of reference names") from None
    return normalized


@dataclass
class CrawlOptions:
    """Options for a depth-first crawl"""
    predicate: Optional[Predicate] = None
    depth: int = -1  # -1 = unbounded, 0 = start objects only
    follow_if: Optional[Mapping[str, Any]] = None  # type name -> reference names to expand

    def __post_init__(self):
        if self.predicate is None or not callable(self.predicate):
            raise ConfigurationError("crawl requires a callable 'predicate'")
        if isinstance(self.depth, bool) or not isinstance(self.depth, int):
            raise ConfigurationError(f"depth must be an integer, got {self.depth!r}")
        if self.depth < -1:
            raise ConfigurationError(f"depth must be -1 (unbounded) or >= 0, got {self.depth}")
        self.follow_if = _normalize_follow_if(self.follow_if)

    @property
    def unbounded(self) -> bool:
        return self.depth == -1

    def references_for(self, type_name: Optional[str], declared: List[str]) -> List[str]:
        """
        Reference names to expand for an object of the given type.

        Declared order is kept; names in the filter map that the type does
        not declare are ignored.
        """
        if self.follow_if is None or type_name not in self.follow_if:
            return declared
        allowed = self.follow_if[type_name]
        return [name for name in declared if name in allowed]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "CrawlOptions":
        unknown = set(options) - {'predicate', 'depth', 'follow_if', 'followIf'}
        if unknown:
            raise ConfigurationError(f"Unknown crawl options: {sorted(unknown)}")
        return cls(
            predicate=options.get('predicate'),
            depth=options.get('depth', -1),
            follow_if=options.get('follow_if', options.get('followIf'))
        )


@dataclass
class FollowOptions:
    """Options for a fixed-path walk"""
    path: Optional[List[str]] = None
    target_only: bool = True
    predicate: Predicate = accept_all  # post-filter on the returned set only
    steps: Tuple[str, ...] = field(init=False, repr=False)

    def __post_init__(self):
        if self.path is None:
            raise ConfigurationError("follow requires a 'path' (use [] for an identity walk)")
        if isinstance(self.path, (str, bytes)):
            raise ConfigurationError(f"path must be a sequence of reference names, not a string: {self.path!r}")
        try:
            self.steps = tuple(self.path)
        except TypeError:
            raise ConfigurationError(f"path must be a sequence of reference names, got {self.path!r}") from None
        if not isinstance(self.target_only, bool):
            raise ConfigurationError(f"target_only must be a boolean, got {self.target_only!r}")
        if self.predicate is None:
            self.predicate = accept_all
        if not callable(self.predicate):
            raise ConfigurationError("follow 'predicate' must be callable")

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "FollowOptions":
        unknown = set(options) - {'path', 'target_only', 'targetOnly', 'predicate'}
        if unknown:
            raise ConfigurationError(f"Unknown follow options: {sorted(unknown)}")
        return cls(
            path=options.get('path'),
            target_only=options.get('target_only', options.get('targetOnly', True)),
            predicate=options.get('predicate') or accept_all
        )


def as_crawl_options(options: Union[CrawlOptions, Mapping[str, Any]]) -> CrawlOptions:
    if isinstance(options, CrawlOptions):
        return options
    if isinstance(options, Mapping):
        return CrawlOptions.from_mapping(options)
    raise ConfigurationError(f"crawl options must be CrawlOptions or a mapping, got {type(options).__name__}")


def as_follow_options(options: Union[FollowOptions, Mapping[str, Any]]) -> FollowOptions:
    if isinstance(options, FollowOptions):
        return options
    if isinstance(options, Mapping):
        return FollowOptions.from_mapping(options)
    raise ConfigurationError(f"follow options must be FollowOptions or a mapping, got {type(options).__name__}")
