"""Model object contract and the in-memory host framework."""

from .contract import ModelObject, TypeDescriptor, get_reference, type_of
from .elements import Cardinality, Model, ModelClass, ModelElement, ModelError, Reference

__all__ = [
    'ModelObject', 'TypeDescriptor', 'get_reference', 'type_of',
    'Cardinality', 'Model', 'ModelClass', 'ModelElement', 'ModelError', 'Reference',
]
