"""In-memory host framework implementing the model object contract (classes, elements, models)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union


class ModelError(ValueError):
    pass


class Cardinality(str, Enum):
    """Reference cardinality"""
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class Reference:
    name: str
    target: "ModelClass"
    cardinality: Cardinality = Cardinality.MANY


class ModelClass:
    """
    A class of model elements.

    Holds the ordered reference declarations of the class and its direct
    superclasses. Inherited references are resolved through the
    inheritance chain.
    """

    def __init__(
        self,
        name: str,
        superclasses: Optional[Iterable[ModelClass]] = None,
        references: Optional[Dict[str, Any]] = None
    ):
        self.name = name
        self.superclasses: List[ModelClass] = list(superclasses or [])
        self.references: Dict[str, Reference] = {}
        for ref_name, target in (references or {}).items():
            if isinstance(target, tuple):
                self.add_reference(ref_name, *target)
            else:
                self.add_reference(ref_name, target)

    def __repr__(self) -> str:
        return f"ModelClass({self.name!r})"

    def add_reference(
        self,
        name: str,
        target: Optional[ModelClass] = None,
        cardinality: Union[Cardinality, str] = Cardinality.MANY
    ) -> Reference:
        """Declare a reference on this class. `target=None` declares a self-reference."""
        reference = Reference(
            name=name,
            target=target if target is not None else self,
            cardinality=Cardinality(cardinality)
        )
        self.references[name] = reference
        return reference

    def inheritance_chain(self) -> List[ModelClass]:
        """
        Ancestors first, this class last, each class once.

        Diamond-shaped hierarchies keep the first occurrence of a shared
        ancestor.
        """
        chain: List[ModelClass] = []
        seen = set()

        def visit(cls: ModelClass) -> None:
            for parent in cls.superclasses:
                visit(parent)
            if id(cls) not in seen:
                seen.add(id(cls))
                chain.append(cls)

        visit(self)
        return chain

    def is_a(self, other: Any) -> bool:
        return any(cls is other for cls in self.inheritance_chain())

    def all_references(self) -> Dict[str, Reference]:
        """Reference declarations including inherited ones, later declarations overriding earlier"""
        merged: Dict[str, Reference] = {}
        for cls in self.inheritance_chain():
            merged.update(cls.references)
        return merged

    def declared_references(self) -> List[str]:
        return list(self.all_references().keys())

    def new_instance(self, name: Optional[str] = None, **slots: Any) -> ModelElement:
        element = ModelElement(self, name=name)
        for ref_name, value in slots.items():
            element.set_reference(ref_name, value)
        return element


class ModelElement:
    """An instance of a ModelClass holding per-object reference slots"""

    def __init__(self, conforms_to: ModelClass, name: Optional[str] = None):
        self.conforms_to = conforms_to
        self.name = name
        self._slots: Dict[str, List[ModelElement]] = {}

    def __repr__(self) -> str:
        label = self.name if self.name is not None else hex(id(self))
        return f"<{self.conforms_to.name} {label}>"

    def type_of(self) -> ModelClass:
        return self.conforms_to

    def get_reference(self, name: str) -> Any:
        """Slot value: the single target for ONE references, a list for MANY, None if unset"""
        reference = self.conforms_to.all_references().get(name)
        if reference is None or name not in self._slots:
            return None
        targets = self._slots[name]
        if reference.cardinality == Cardinality.ONE:
            return targets[0] if targets else None
        return list(targets)

    def _declared(self, name: str) -> Reference:
        reference = self.conforms_to.all_references().get(name)
        if reference is None:
            raise ModelError(f"{self.conforms_to.name} declares no reference {name!r}")
        return reference

    def _check_target(self, reference: Reference, target: Any) -> None:
        if target is None:
            return
        if not isinstance(target, ModelElement) or not target.conforms_to.is_a(reference.target):
            raise ModelError(
                f"Reference {self.conforms_to.name}.{reference.name} expects {reference.target.name}, got {target!r}"
            )

    def set_reference(self, name: str, value: Any) -> None:
        """Replace the content of a slot with None, one element, or an iterable of elements"""
        reference = self._declared(name)
        if value is None:
            targets: List[ModelElement] = []
        elif isinstance(value, ModelElement):
            targets = [value]
        else:
            targets = list(value)
        for target in targets:
            self._check_target(reference, target)
        if reference.cardinality == Cardinality.ONE and len(targets) > 1:
            raise ModelError(f"Reference {self.conforms_to.name}.{name} holds at most one element")
        self._slots[name] = targets

    def add_reference(self, name: str, target: ModelElement) -> None:
        """Append a target to a slot (replaces the target of ONE references)"""
        reference = self._declared(name)
        self._check_target(reference, target)
        if reference.cardinality == Cardinality.ONE:
            self._slots[name] = [target]
        else:
            self._slots.setdefault(name, []).append(target)


class Model:
    """
    A named collection of elements grouped by class name.

    `reference_model` is the model holding the classes the elements conform
    to; it may be absent.
    """

    def __init__(
        self,
        name: str,
        reference_model: Optional[Model] = None,
        elements: Optional[Iterable[Any]] = None
    ):
        self.name = name
        self.reference_model = reference_model
        self.modelling_elements: Dict[str, List[Any]] = {}
        for element in elements or []:
            self.add(element)

    def add(self, element: Any) -> None:
        if isinstance(element, ModelElement):
            key = element.conforms_to.name
        else:
            key = getattr(element, 'name', type(element).__name__)
        self.modelling_elements.setdefault(key, []).append(element)

    def elements(self) -> List[Any]:
        """Flattened element list, grouped by class name in insertion order"""
        return [element for group in self.modelling_elements.values() for element in group]
