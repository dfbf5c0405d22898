"""
Pairwise and composite algebraic edges.

Gradient formulas
-----------------
MatrixMultiply              y = L @ R
    dL = dEdf @ R.T         dR = L.T @ dEdf
CwiseMultiply               y = a * b
    da = dEdf * b           db = dEdf * a
Multilinear                 y = b + sum_k A_k x_k
    db = dEdf
    dA_k = dEdf @ x_k.T     (dEdf * x_k when A_k is diagonal)
    dx_k = A_k.T @ dEdf     (A_k * dEdf when A_k is diagonal)
SquaredEuclideanDistance    y = ||a - b||^2
    da = 2 dEdf (a - b)     db = -da

Diagonal shorthand
------------------
In `Multilinear`, an operand pair ``(A_k, x_k)`` where `A_k` is a column
vector with the same shape as `x_k` stands for ``diag(A_k) @ x_k`` and is
evaluated as an elementwise product.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...domain._edge import Edge
from ...domain._errors import ArityError, ShapeError, UnsupportedOperationError
from ...domain._shape import (
    check_arity,
    check_matrix,
    check_same_shape,
    check_scalar,
)
from ._common import scalar


def _check_matmul(op: str, a: np.ndarray, b: np.ndarray) -> None:
    check_matrix(op, a)
    check_matrix(op, b)
    if a.shape[1] != b.shape[0]:
        raise ShapeError(
            op,
            "inner dimensions do not match",
            expected=f"({a.shape[1]}, *)",
            got=b.shape,
        )


@dataclass(frozen=True)
class MatrixMultiply(Edge):
    """Matrix product of exactly two rank-2 inputs."""

    arity = 2

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        check_arity(self.name, xs, 2)
        _check_matmul(self.name, xs[0], xs[1])
        return xs[0] @ xs[1]

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        if i == 0:
            return dEdf @ xs[1].T
        return xs[0].T @ dEdf


@dataclass(frozen=True)
class CwiseMultiply(Edge):
    """Elementwise (Hadamard) product of two equal-shaped inputs."""

    arity = 2

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        check_arity(self.name, xs, 2)
        check_same_shape(self.name, xs[0], xs[1])
        return xs[0] * xs[1]

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return dEdf * xs[1 - i]


def _is_diagonal(a: np.ndarray, x: np.ndarray) -> bool:
    return a.ndim == 2 and a.shape[1] == 1 and tuple(a.shape) == tuple(x.shape)


@dataclass(frozen=True)
class Multilinear(Edge):
    """
    Affine combination ``b + A1 x1 + A2 x2 + ...``.

    Inputs are given as the flat, odd-length sequence ``(b, A1, x1, A2, x2,
    ...)``. Each product term must have the shape of `b`.

    Notes
    -----
    A column-vector `A_k` paired with an equally shaped `x_k` is an implicit
    diagonal matrix; its term is ``A_k * x_k``.
    """

    arity = None

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        if len(xs) % 2 != 1:
            raise ArityError(self.name, expected="odd number >= 1", got=len(xs))
        fx = xs[0].copy()
        for k in range(1, len(xs), 2):
            a, x = xs[k], xs[k + 1]
            if _is_diagonal(a, x):
                term = a * x
            else:
                _check_matmul(self.name, a, x)
                term = a @ x
            if tuple(term.shape) != tuple(fx.shape):
                raise ShapeError(
                    self.name,
                    f"term {k // 2} does not match the bias shape",
                    expected=fx.shape,
                    got=term.shape,
                )
            fx = fx + term
        return fx

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        if i == 0:
            return dEdf.copy()
        if i % 2 == 1:
            a, x = xs[i], xs[i + 1]
            if _is_diagonal(a, x):
                return dEdf * x
            return dEdf @ x.T
        a, x = xs[i - 1], xs[i]
        if _is_diagonal(a, x):
            return a * dEdf
        return a.T @ dEdf


@dataclass(frozen=True)
class SquaredEuclideanDistance(Edge):
    """``||a - b||^2`` of two equal-shaped inputs, as a ``(1, 1)`` scalar."""

    arity = 2

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        check_arity(self.name, xs, 2)
        check_same_shape(self.name, xs[0], xs[1])
        d = xs[0] - xs[1]
        return scalar(np.sum(d * d), d.dtype)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        check_scalar(self.name, dEdf)
        scale = 2.0 * dEdf[0, 0]
        if i == 1:
            scale = -scale
        return scale * (xs[0] - xs[1])


@dataclass(frozen=True)
class InnerProduct3D_1D(Edge):
    """
    Contraction of a rank-3 tensor with a vector.

    Kept in the catalog so executors can name it, but the contraction axes
    are not defined; both passes raise `UnsupportedOperationError`.
    """

    arity = 2

    def differentiable(self, i: int) -> bool:
        return False

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        raise UnsupportedOperationError(self.name)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        raise UnsupportedOperationError(self.name)
