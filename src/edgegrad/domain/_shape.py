"""
Shape descriptors and shape-reasoning helpers.

Edges work on rank-2 tensors: column vectors are ``(n, 1)``, scalars are
``(1, 1)`` and matrices are ``(rows, cols)``. `Reshape` additionally accepts
arbitrary ranks through `Dim`.

These helpers contain no array math and only inspect ``.shape`` so that the
domain layer stays free of NumPy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from typing_extensions import TypeAlias

from ._errors import ArityError, ShapeError
from .types._numpy import NDArrayLike

Shape: TypeAlias = Tuple[int, ...]


def numel(shape: Sequence[int]) -> int:
    """Return the number of elements described by `shape`."""
    n = 1
    for d in shape:
        n *= int(d)
    return n


@dataclass(frozen=True)
class Dim:
    """
    Immutable shape descriptor.

    Parameters
    ----------
    sizes : tuple[int, ...]
        Axis sizes, outermost first. All entries must be non-negative.

    Notes
    -----
    `Dim` is used where an edge is configured with a shape rather than
    deriving one from its inputs (currently `Reshape`).
    """

    sizes: Shape

    def __post_init__(self) -> None:
        sizes = tuple(int(d) for d in self.sizes)
        if any(d < 0 for d in sizes):
            raise ValueError(f"Dim sizes must be non-negative, got {sizes}")
        object.__setattr__(self, "sizes", sizes)

    @classmethod
    def of(cls, *sizes: int) -> "Dim":
        return cls(tuple(sizes))

    def numel(self) -> int:
        return numel(self.sizes)

    def as_shape(self) -> Shape:
        return self.sizes


def rows(x: NDArrayLike) -> int:
    return int(x.shape[0])


def cols(x: NDArrayLike) -> int:
    return int(x.shape[1])


def check_arity(op: str, xs: Sequence[NDArrayLike], n: int) -> None:
    """Raise `ArityError` unless exactly `n` inputs were supplied."""
    if len(xs) != n:
        raise ArityError(op, expected=str(n), got=len(xs))


def check_matrix(op: str, x: NDArrayLike) -> None:
    """Raise `ShapeError` unless `x` is rank 2."""
    if len(x.shape) != 2:
        raise ShapeError(op, "expected a matrix", expected="rank 2", got=x.shape)


def check_column_vector(op: str, x: NDArrayLike) -> None:
    """Raise `ShapeError` unless `x` has shape ``(n, 1)``."""
    if len(x.shape) != 2 or x.shape[1] != 1:
        raise ShapeError(
            op, "expected a column vector", expected="(n, 1)", got=x.shape
        )


def check_scalar(op: str, x: NDArrayLike) -> None:
    """Raise `ShapeError` unless `x` has shape ``(1, 1)``."""
    if tuple(x.shape) != (1, 1):
        raise ShapeError(op, "expected a scalar", expected=(1, 1), got=x.shape)


def check_same_shape(op: str, a: NDArrayLike, b: NDArrayLike) -> None:
    """Raise `ShapeError` unless `a` and `b` have identical shapes."""
    if tuple(a.shape) != tuple(b.shape):
        raise ShapeError(
            op, "operands must have the same shape", expected=a.shape, got=b.shape
        )
