"""
Reduction edges: row sums, n-ary sums and sliding column-window sums.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...domain._errors import ArityError, ShapeError
from ...domain._shape import check_matrix, check_same_shape, cols, rows
from ...domain._edge import Edge
from ._common import UnaryEdge, config_int, zeros_for


@dataclass(frozen=True)
class SumColumns(UnaryEdge):
    """
    Sum a matrix across its columns.

    Forward:
        (rows, cols) -> (rows, 1), y[r] = sum_c x[r, c]

    Backward:
        The column-vector gradient is replicated into every original column.
    """

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_matrix(self.name, x)
        return np.sum(x, axis=1, keepdims=True)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return np.broadcast_to(dEdf, xs[0].shape).copy()


@dataclass(frozen=True)
class Sum(Edge):
    """
    Elementwise sum of one or more same-shaped inputs.

    The derivative of a sum with respect to each addend is 1, so backward
    returns (a copy of) the downstream gradient for every input index.
    """

    arity = None

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        if len(xs) == 0:
            raise ArityError(self.name, expected=">= 1", got=0)
        out = xs[0].copy()
        for x in xs[1:]:
            check_same_shape(self.name, xs[0], x)
            out = out + x
        return out

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return dEdf.copy()


@dataclass(frozen=True)
class KMHNGram(UnaryEdge):
    """
    Sliding-window column sums ("n-gram" pooling over columns).

    For a window width `n`, output column j is the sum of input columns
    ``j .. j+n-1``:

        (rows, cols) -> (rows, cols - n + 1)

    Parameters
    ----------
    n : int
        Window width; must be at least 1 and at most the input column count.

    Notes
    -----
    Windows overlap, so each input column receives the gradient of every
    window it belongs to; backward accumulates these contributions.
    """

    n: int

    def __post_init__(self) -> None:
        if config_int(self, "n") < 1:
            raise ValueError(f"KMHNGram window width must be >= 1, got {self.n}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_matrix(self.name, x)
        new_cols = cols(x) - self.n + 1
        if new_cols <= 0:
            raise ShapeError(
                self.name,
                "window width exceeds the number of columns",
                expected=f"cols >= {self.n}",
                got=x.shape,
            )
        res = np.zeros((rows(x), new_cols), dtype=x.dtype)
        for k in range(self.n):
            res += x[:, k : k + new_cols]
        return res

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        c = cols(dEdf)
        dEdx = zeros_for(xs[0], dEdf)
        for k in range(self.n):
            dEdx[:, k : k + c] += dEdf
        return dEdx
