"""
edgegrad: the operator layer of a reverse-mode automatic differentiation
engine.

Each operator ("edge") is a configured, immutable object that computes an
output from its inputs and, on request, the gradient contribution for one
input. Per-evaluation state lives in a `Context` returned by `forward`:

    >>> import numpy as np
    >>> from edgegrad import Tanh, forward, backward
    >>> x = np.array([[0.5], [-1.0]])
    >>> fx, ctx = forward(Tanh(), [x])
    >>> dx = backward(Tanh(), ctx, [x], fx, np.ones_like(fx), 0)

Exports
-------
- Edge, Context, forward, backward
- every catalog edge and the `AnyEdge` union
- the edge error hierarchy
- Dim
- gradcheck, GradcheckResult
"""

from .domain import (
    ArityError,
    ContextError,
    Dim,
    DomainError,
    Edge,
    EdgeError,
    InputIndexError,
    NotDifferentiableError,
    ShapeError,
    UnsupportedOperationError,
)
from .infrastructure import Context, backward, forward
from .infrastructure.edges import *
from .infrastructure.edges import __all__ as _edges_all
from .infrastructure.utils import GradcheckResult, gradcheck

__version__ = "0.1.0"

__all__ = [
    Edge.__name__,
    Context.__name__,
    forward.__name__,
    backward.__name__,
    Dim.__name__,
    EdgeError.__name__,
    ShapeError.__name__,
    ArityError.__name__,
    InputIndexError.__name__,
    NotDifferentiableError.__name__,
    UnsupportedOperationError.__name__,
    ContextError.__name__,
    DomainError.__name__,
    GradcheckResult.__name__,
    gradcheck.__name__,
    *_edges_all,
]
