"""
Model Object Contract

The capability interface the traversal engine consumes from its hosting
modelling framework. Any object handed to the engine must implement
`ModelObject`; its type must implement `TypeDescriptor`.
"""

from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable


@runtime_checkable
class TypeDescriptor(Protocol):
    """A class in an inheritance hierarchy"""

    name: str

    def is_a(self, other: Any) -> bool:
        """True if this type equals `other` or inherits from it"""
        ...

    def declared_references(self) -> List[str]:
        """Reference names declared on this type, inherited ones included"""
        ...


@runtime_checkable
class ModelObject(Protocol):
    """A node of the in-memory object graph"""

    def type_of(self) -> TypeDescriptor:
        ...

    def get_reference(self, name: str) -> Any:
        """Raw slot value: None, a single object, or a sequence of objects"""
        ...


def type_of(obj: ModelObject) -> TypeDescriptor:
    """Return the declared type of a model object"""
    return obj.type_of()


def get_reference(obj: ModelObject, name: str) -> List[ModelObject]:
    """
    Read a reference slot as a uniform list of targets.

    Single-valued slots become a one-element list, empty slots an empty list.
    Values that are not model objects (None included) are dropped.

    Args:
        obj: Owning model object
        name: Reference name

    Returns:
        List of target objects (possibly empty)
    """
    value = obj.get_reference(name)
    if value is None or isinstance(value, (str, bytes)):
        return []
    if isinstance(value, ModelObject):
        return [value]
    try:
        targets = list(value)
    except TypeError:
        return []
    return [target for target in targets if isinstance(target, ModelObject)]


def type_name(obj: ModelObject) -> Optional[str]:
    """Name of an object's type, used as the key of reference filter maps"""
    return getattr(type_of(obj), 'name', None)


def is_model_object(value: Any) -> bool:
    return isinstance(value, ModelObject)


def normalize_entrypoint(entrypoint: Any) -> Sequence[Any]:
    """
    Normalize an entrypoint to a list of start objects.

    Accepts a single model object, None, or an iterable of model objects.
    """
    if entrypoint is None:
        return []
    if isinstance(entrypoint, ModelObject):
        return [entrypoint]
    if isinstance(entrypoint, (str, bytes)):
        return [entrypoint]
    try:
        return [start for start in entrypoint if start is not None]
    except TypeError:
        return [entrypoint]
