"""
Probability-simplex edges over column vectors.

- `Softmax`               stable softmax; backward is the softmax JVP.
- `LogSoftmax`            log(softmax(x)); backward recovers probabilities from
                          its own output with ``exp(fx)``.
- `RestrictedLogSoftmax`  log-softmax normalised over a subset of rows; the
                          remaining rows have probability zero (``-inf``).
- `PickNegLogSoftmax`     -log softmax(x)[index], the cross-entropy of a single
                          target class. The softmax vector is cached in the
                          context for backward.

`Softmax` and `LogSoftmax` normalise each column independently, so a matrix
input is treated as a batch of column vectors. The other two require a single
column.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from ...domain._errors import ShapeError
from ...domain._shape import check_column_vector, check_matrix, check_scalar, rows
from ..ops.softmax_cpu import (
    log_softmax_backward_cpu,
    log_softmax_forward_cpu,
    logsumexp_subset_cpu,
    softmax_backward_cpu,
    softmax_forward_cpu,
)
from ._common import UnaryEdge, config_int, float_dtype, scalar, zeros_for


@dataclass(frozen=True)
class Softmax(UnaryEdge):
    """Column-wise softmax, computed with max subtraction."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_matrix(self.name, x)
        return softmax_forward_cpu(x, axis=0)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return softmax_backward_cpu(dEdf, fx, axis=0)


@dataclass(frozen=True)
class LogSoftmax(UnaryEdge):
    """
    Column-wise log(softmax(x)).

    Forward evaluates ``x - logsumexp(x)``, which equals ``log(softmax(x))``
    and never takes the log of an underflowed probability. Backward recovers
    ``softmax(x) = exp(fx)`` from the output instead of recomputing it from x.
    """

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_matrix(self.name, x)
        return log_softmax_forward_cpu(x, axis=0)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return log_softmax_backward_cpu(dEdf, fx, axis=0)


@dataclass(frozen=True)
class RestrictedLogSoftmax(UnaryEdge):
    """
    Log-softmax normalised over a fixed subset of rows.

    Parameters
    ----------
    denom : tuple[int, ...]
        Non-empty set of distinct row indices forming the normaliser.

    Forward
    -------
    For i in `denom`: ``y[i] = x[i] - logsumexp(x[denom])``; every other row
    is ``-inf`` (zero probability). A single-row `denom` yields exactly 0 at
    that row (log of probability 1) regardless of the input value.

    Backward
    --------
    For i in `denom`: ``dEdf[i] - exp(fx[i]) * sum_{j in denom} dEdf[j]``;
    zero for every other row.
    """

    denom: Tuple[int, ...]

    def __post_init__(self) -> None:
        try:
            denom = tuple(operator.index(d) for d in self.denom)
        except TypeError:
            raise TypeError(
                f"RestrictedLogSoftmax denom must contain integers, got {self.denom!r}"
            ) from None
        if not denom:
            raise ValueError("RestrictedLogSoftmax requires a non-empty denom")
        if min(denom) < 0:
            raise ValueError(f"RestrictedLogSoftmax denom must be >= 0, got {denom}")
        if len(set(denom)) != len(denom):
            raise ValueError(f"RestrictedLogSoftmax denom has duplicates: {denom}")
        object.__setattr__(self, "denom", denom)

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_column_vector(self.name, x)
        if max(self.denom) >= rows(x):
            raise ShapeError(
                self.name,
                "denom index out of range",
                expected=f"< {rows(x)}",
                got=max(self.denom),
            )
        idx = list(self.denom)
        fx = np.full(x.shape, -np.inf, dtype=float_dtype(x))
        if len(idx) == 1:
            fx[idx[0], 0] = 0.0
            return fx
        logz = logsumexp_subset_cpu(x, idx)
        fx[idx, 0] = x[idx, 0] - logz
        return fx

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        idx = list(self.denom)
        z = np.sum(dEdf[idx, 0])
        dEdx = zeros_for(xs[0], dEdf)
        dEdx[idx, 0] = dEdf[idx, 0] - np.exp(fx[idx, 0]) * z
        return dEdx


@dataclass(frozen=True)
class PickNegLogSoftmax(UnaryEdge):
    """
    Negative log-probability of one class under softmax(x).

    Parameters
    ----------
    index : int
        Target row.

    Forward
    -------
    ``y = -log softmax(x)[index]`` as a ``(1, 1)`` scalar, evaluated as
    ``logsumexp(x) - x[index]``.

    Saved context
    -------------
    - `saved_tensors[0]`: the softmax vector p.

    Backward
    --------
    The cross-entropy gradient ``(p - onehot(index)) * dEdf``.
    """

    index: int

    def __post_init__(self) -> None:
        if config_int(self, "index") < 0:
            raise ValueError(f"PickNegLogSoftmax index must be >= 0, got {self.index}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_column_vector(self.name, x)
        if self.index >= rows(x):
            raise ShapeError(
                self.name,
                "index out of range",
                expected=f"< {rows(x)}",
                got=self.index,
            )
        logp = log_softmax_forward_cpu(x, axis=0)
        ctx.save_for_backward(np.exp(logp))
        return scalar(-logp[self.index, 0], logp.dtype)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        check_scalar(self.name, dEdf)
        (p,) = ctx.saved(1)
        g = p.copy()
        g[self.index, 0] -= 1.0
        return g * dEdf[0, 0]
