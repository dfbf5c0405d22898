"""
Stochastic regularisation edges.

Randomness comes from `ops.random_cpu`, which draws from NumPy's global
random state; seed it with ``np.random.seed`` for reproducible passes.

- `GaussianNoise` adds fresh zero-mean noise on every forward call. Additive
  noise has unit derivative, so backward is the identity and nothing is
  cached.
- `Dropout` draws a fresh Bernoulli keep-mask on every forward call and
  stores it in the context. Backward reuses that exact mask, so every
  backward call of one evaluation scales consistently, and the next forward
  call gets an independent mask.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..ops.random_cpu import bernoulli_cpu, normal_cpu
from ._common import UnaryEdge


@dataclass(frozen=True)
class GaussianNoise(UnaryEdge):
    """
    y = x + N(0, stddev^2), elementwise and i.i.d.

    Parameters
    ----------
    stddev : float
        Noise standard deviation; must be non-negative.
    """

    stddev: float

    def __post_init__(self) -> None:
        if float(self.stddev) < 0.0:
            raise ValueError(f"GaussianNoise stddev must be >= 0, got {self.stddev}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        return x + normal_cpu(x.shape, stddev=float(self.stddev), dtype=x.dtype)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return dEdf.copy()


@dataclass(frozen=True)
class Dropout(UnaryEdge):
    """
    Multiply the input by a random Bernoulli keep-mask.

    Parameters
    ----------
    p : float
        Probability that an element is *kept*, in ``(0, 1]``.
    inverted : bool, optional
        When True the mask is scaled by ``1 / p`` (inverted dropout), which
        keeps the expected activation equal to the input. Defaults to False.

    Saved context
    -------------
    - `saved_tensors[0]`: the (possibly scaled) mask applied in forward.
    """

    p: float
    inverted: bool = False

    def __post_init__(self) -> None:
        if not 0.0 < float(self.p) <= 1.0:
            raise ValueError(f"Dropout keep probability p must be in (0, 1], got {self.p}")

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        mask = bernoulli_cpu(x.shape, p=float(self.p), dtype=x.dtype)
        if self.inverted:
            mask = mask / float(self.p)
        ctx.save_for_backward(mask)
        return x * mask

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        (mask,) = ctx.saved(1)
        return dEdf * mask
