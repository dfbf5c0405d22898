"""
Structural edges: concatenation, reshaping and 1-D max pooling.

These edges move values around without arithmetic. Two of them need state
from forward in backward:

- `Concatenate` records the starting row of every input in
  ``ctx.saved_meta["offsets"]``.
- `MaxPooling1D` records the winning row of every window in
  ``ctx.saved_meta["argmax"]``.

`ConcatenateColumns` and `Reshape` recover everything they need from the
input index and the inputs themselves.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np

from ...domain._edge import Edge
from ...domain._errors import ArityError, InputIndexError, ShapeError
from ...domain._shape import Dim, Shape, check_column_vector, rows
from ._common import UnaryEdge, config_int, zeros_for


@dataclass(frozen=True)
class Concatenate(Edge):
    """
    Stack column vectors vertically into a single column vector.

    Forward:
        (r0, 1), (r1, 1), ... -> (r0 + r1 + ..., 1)

    Saved context
    -------------
    - `saved_meta["offsets"]`: tuple of starting rows, one per input.

    Backward for input i slices rows ``offsets[i] : offsets[i] + r_i`` out of
    the downstream gradient.
    """

    arity = None

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        if len(xs) == 0:
            raise ArityError(self.name, expected=">= 1", got=0)
        offsets = []
        start = 0
        for x in xs:
            check_column_vector(self.name, x)
            offsets.append(start)
            start += rows(x)
        ctx.saved_meta["offsets"] = tuple(offsets)
        return np.concatenate(xs, axis=0)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        offsets = ctx.meta("offsets")
        if not 0 <= i < len(offsets):
            raise InputIndexError(self.name, i, len(offsets))
        begin = offsets[i]
        n = rows(xs[i])
        if begin + n > rows(dEdf):
            raise ShapeError(
                self.name,
                "downstream gradient is shorter than the recorded segment",
                expected=f">= {begin + n} rows",
                got=dEdf.shape,
            )
        return dEdf[begin : begin + n].copy()


@dataclass(frozen=True)
class ConcatenateColumns(Edge):
    """
    Place equal-length column vectors side by side.

    Forward:
        k inputs of shape (r, 1) -> (r, k)

    Backward for input i is column i of the downstream gradient; no context
    is needed.
    """

    arity = None

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        if len(xs) == 0:
            raise ArityError(self.name, expected=">= 1", got=0)
        r = rows(xs[0])
        for x in xs:
            check_column_vector(self.name, x)
            if rows(x) != r:
                raise ShapeError(
                    self.name, "inputs must have equal rows", expected=r, got=rows(x)
                )
        return np.concatenate(xs, axis=1)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        if i >= dEdf.shape[1]:
            raise InputIndexError(self.name, i, dEdf.shape[1])
        return dEdf[:, i : i + 1].copy()


def _as_dim(d: Union[Dim, Shape, Sequence[int]]) -> Dim:
    return d if isinstance(d, Dim) else Dim(tuple(d))


@dataclass(frozen=True)
class Reshape(UnaryEdge):
    """
    Reinterpret the input buffer under a new shape.

    Parameters
    ----------
    from_dim : Dim | tuple[int, ...]
        Declared source shape. Only its element count is enforced, so a
        column vector may be declared as ``(n,)``.
    to_dim : Dim | tuple[int, ...]
        Target shape. Must have the same element count as `from_dim`.

    Notes
    -----
    Elements are laid out row-major (C order) in both directions. Backward
    reshapes the gradient back to the actual input shape.
    """

    from_dim: Dim
    to_dim: Dim

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_dim", _as_dim(self.from_dim))
        object.__setattr__(self, "to_dim", _as_dim(self.to_dim))
        if self.from_dim.numel() != self.to_dim.numel():
            raise ValueError(
                f"Reshape element counts differ: {self.from_dim.sizes} "
                f"has {self.from_dim.numel()}, {self.to_dim.sizes} has "
                f"{self.to_dim.numel()}"
            )

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        if x.size != self.from_dim.numel():
            raise ShapeError(
                self.name,
                "input element count does not match the source shape",
                expected=self.from_dim.numel(),
                got=x.size,
            )
        return x.reshape(self.to_dim.as_shape()).copy()

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return dEdf.reshape(xs[0].shape).copy()


@dataclass(frozen=True)
class MaxPooling1D(UnaryEdge):
    """
    Non-overlapping max pooling down a column vector.

    The input is split into consecutive windows of `width` rows; the last
    window is shorter when the row count is not a multiple of `width`.

    Forward:
        (n, 1) -> (ceil(n / width), 1)

    Saved context
    -------------
    - `saved_meta["argmax"]`: tuple with the winning input row per window.
      Ties go to the first (lowest) row.

    Backward routes each window's gradient to its winning row only.
    """

    width: int

    def __post_init__(self) -> None:
        if config_int(self, "width") < 1:
            raise ValueError(f"MaxPooling1D width must be >= 1, got {self.width}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        check_column_vector(self.name, x)
        n = rows(x)
        n_out = -(-n // self.width)

        fx = np.zeros((n_out, 1), dtype=x.dtype)
        argmax = []
        for k in range(n_out):
            lo = k * self.width
            hi = min(lo + self.width, n)
            best = lo + int(np.argmax(x[lo:hi, 0]))
            argmax.append(best)
            fx[k, 0] = x[best, 0]

        ctx.saved_meta["argmax"] = tuple(argmax)
        return fx

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        argmax = ctx.meta("argmax")
        if len(argmax) != rows(dEdf):
            raise ShapeError(
                self.name,
                "downstream gradient does not match the pooled length",
                expected=len(argmax),
                got=dEdf.shape,
            )
        dEdx = zeros_for(xs[0], dEdf)
        dEdx[list(argmax), 0] = dEdf[:, 0]
        return dEdx
