"""
Domain layer: the edge interface, shape descriptors and edge errors.

Nothing in this package imports NumPy.
"""

from ._edge import Edge
from ._errors import (
    ArityError,
    ContextError,
    DomainError,
    EdgeError,
    InputIndexError,
    NotDifferentiableError,
    ShapeError,
    UnsupportedOperationError,
)
from ._shape import Dim, Shape, numel

__all__ = [
    Edge.__name__,
    EdgeError.__name__,
    ShapeError.__name__,
    ArityError.__name__,
    InputIndexError.__name__,
    NotDifferentiableError.__name__,
    UnsupportedOperationError.__name__,
    ContextError.__name__,
    DomainError.__name__,
    Dim.__name__,
    "Shape",
    numel.__name__,
]
