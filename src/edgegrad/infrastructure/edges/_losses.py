"""
Scalar loss edges.

Both edges return a ``(1, 1)`` scalar and expect a ``(1, 1)`` downstream
gradient, which is applied as a Python-level scale factor.

- `BinaryLogLoss` drops every term whose coefficient is exactly zero, so a
  hard target never evaluates ``0 * log(0)``.
- `Hinge` caches the set of strictly positive margin terms in the context
  and short-circuits to a zero gradient when the forward total is zero.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...domain._errors import DomainError, ShapeError
from ...domain._shape import check_column_vector, check_scalar, rows
from ._common import UnaryEdge, config_int, float_dtype, scalar, zeros_for


@dataclass(frozen=True)
class BinaryLogLoss(UnaryEdge):
    """
    Binary cross entropy of one predicted probability against a fixed target.

        y = -[t * log(p) + (1 - t) * log(1 - p)]

    Parameters
    ----------
    target : float
        Target probability t in ``[0, 1]``.

    Notes
    -----
    - The input must be a ``(1, 1)`` prediction p in ``[0, 1]``; anything else
      raises `DomainError`.
    - Backward is ``dEdf * (-t / p + (1 - t) / (1 - p))`` with the same
      zero-coefficient terms dropped. A prediction on the boundary of an
      active term gives an infinite gradient and emits a RuntimeWarning.
    """

    target: float

    def __post_init__(self) -> None:
        if not 0.0 <= float(self.target) <= 1.0:
            raise ValueError(f"BinaryLogLoss target must be in [0, 1], got {self.target}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_scalar(self.name, x)
        p = np.float64(x[0, 0])
        if not 0.0 <= p <= 1.0:
            raise DomainError(self.name, "prediction must be in [0, 1]", float(p))

        t = float(self.target)
        res = np.float64(0.0)
        with np.errstate(divide="ignore"):
            if t > 0.0:
                res -= t * np.log(p)
            if 1.0 - t > 0.0:
                res -= (1.0 - t) * np.log1p(-p)
        return scalar(res, float_dtype(x))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        check_scalar(self.name, dEdf)
        p = np.float64(xs[0][0, 0])
        t = float(self.target)

        if (t > 0.0 and p == 0.0) or (1.0 - t > 0.0 and p == 1.0):
            warnings.warn(
                f"BinaryLogLoss gradient is infinite at prediction p={float(p)} "
                f"with target t={t}.",
                RuntimeWarning,
                stacklevel=2,
            )

        scale = np.float64(0.0)
        with np.errstate(divide="ignore"):
            if t > 0.0:
                scale -= t / p
            if 1.0 - t > 0.0:
                scale += (1.0 - t) / (1.0 - p)
        return dEdf * float(scale)


@dataclass(frozen=True)
class Hinge(UnaryEdge):
    """
    Multi-class hinge loss for one correct class.

        y = sum_{i != index} max(0, margin - x[index] + x[i])

    Parameters
    ----------
    index : int
        Row of the correct class.
    margin : float, optional
        Required score gap. Defaults to 1.0.

    Saved context
    -------------
    - `saved_tensors[0]`: boolean ``(n, 1)`` mask of strictly positive terms.

    Backward gives ``+dEdf`` to every active row and ``-dEdf * count`` to
    `index`; the whole gradient is zero when the forward total is zero.
    """

    index: int
    margin: float = 1.0

    def __post_init__(self) -> None:
        if config_int(self, "index") < 0:
            raise ValueError(f"Hinge index must be >= 0, got {self.index}")

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
        terms = np.maximum(0.0, self.margin - x[self.index, 0] + x)
        terms[self.index, 0] = 0.0
        ctx.save_for_backward(terms > 0)
        return scalar(np.sum(terms), float_dtype(x))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        check_scalar(self.name, dEdf)
        dEdx = zeros_for(xs[0], dEdf)
        if fx[0, 0] == 0:
            return dEdx
        (active,) = ctx.saved(1)
        diff = dEdf[0, 0]
        dEdx[active] = diff
        dEdx[self.index, 0] = -diff * int(np.count_nonzero(active))
        return dEdx
