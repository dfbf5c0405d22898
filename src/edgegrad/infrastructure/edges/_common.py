from __future__ import annotations

import operator
from typing import Sequence

import numpy as np

from ...domain._edge import Edge
from ...domain._shape import check_arity


class UnaryEdge(Edge):
    """Base for edges that take exactly one input and differentiate only it."""

    arity = 1

    def _input(self, xs: Sequence[np.ndarray]) -> np.ndarray:
        check_arity(self.name, xs, 1)
        return xs[0]


def config_int(edge: Edge, field: str) -> int:
    """
    Normalise integer configuration `field` of a frozen edge in place.

    Accepts anything with ``__index__`` (Python and NumPy integers) and
    raises `TypeError` for floats and other non-integral values.
    """
    value = getattr(edge, field)
    try:
        value = operator.index(value)
    except TypeError:
        raise TypeError(
            f"{edge.name} {field} must be an integer, got {type(value).__name__} {value!r}"
        ) from None
    object.__setattr__(edge, field, value)
    return value


def zeros_for(x: np.ndarray, dEdf: np.ndarray) -> np.ndarray:
    """Zero gradient buffer shaped like `x`, in the dtype `dEdf` promotes to."""
    return np.zeros(x.shape, dtype=np.result_type(x.dtype, dEdf.dtype))


def float_dtype(x: np.ndarray) -> np.dtype:
    return np.result_type(x.dtype, np.float32)


def scalar(value: float, dtype) -> np.ndarray:
    """Wrap a Python float as a ``(1, 1)`` array."""
    return np.full((1, 1), value, dtype=dtype)
