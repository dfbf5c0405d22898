"""
Indexing edges that select part of a column vector.

Both edges are configured with fixed row positions and materialise a dense
gradient that is zero outside the selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ...domain._errors import ShapeError
from ...domain._shape import check_column_vector, check_scalar, rows
from ._common import UnaryEdge, config_int, zeros_for


@dataclass(frozen=True)
class PickElement(UnaryEdge):
    """
    y = x[index], returned as a ``(1, 1)`` scalar.

    Parameters
    ----------
    index : int
        Row to pick from the input column vector.
    """

    index: int

    def __post_init__(self) -> None:
        if config_int(self, "index") < 0:
            raise ValueError(f"PickElement index must be >= 0, got {self.index}")

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
        return x[self.index : self.index + 1, :].copy()

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        check_scalar(self.name, dEdf)
        dEdx = zeros_for(xs[0], dEdf)
        dEdx[self.index, 0] = dEdf[0, 0]
        return dEdx


@dataclass(frozen=True)
class PickRange(UnaryEdge):
    """
    y = x[start:end], the half-open row range of a column vector.

    Parameters
    ----------
    start : int
        First row (inclusive), ``>= 0``.
    end : int
        Last row (exclusive), ``> start`` and at most the input row count.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        start, end = config_int(self, "start"), config_int(self, "end")
        if not 0 <= start < end:
            raise ValueError(
                f"PickRange requires 0 <= start < end, got [{self.start}, {self.end})"
            )

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_column_vector(self.name, x)
        if self.end > rows(x):
            raise ShapeError(
                self.name,
                "range end exceeds the number of rows",
                expected=f"<= {rows(x)}",
                got=self.end,
            )
        return x[self.start : self.end].copy()

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        width = self.end - self.start
        if tuple(dEdf.shape) != (width, 1):
            raise ShapeError(
                self.name,
                "downstream gradient does not match the range",
                expected=(width, 1),
                got=dEdf.shape,
            )
        dEdx = zeros_for(xs[0], dEdf)
        dEdx[self.start : self.end] = dEdf
        return dEdx
