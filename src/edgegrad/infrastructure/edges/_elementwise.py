"""
Stateless elementwise and activation edges.

Every edge here takes exactly one input, is differentiable only with respect
to input 0, and saves nothing in its context: each backward pass is expressed
through the downstream gradient, the forward output `fx` and the input `x`.

Algebraic edges (`Negate`, `OneMinusX`, `Square`) use plain NumPy arithmetic.
Activations (`Tanh`, `LogisticSigmoid`, `Rectify`) and `Exp`/`Log` delegate to
the kernels in `ops.elementwise_cpu`, which pick the cheapest stable form of
each derivative:

    Tanh             dEdf * (1 - fx^2)
    LogisticSigmoid  dEdf * fx * (1 - fx)
    Rectify          dEdf * [x > 0]
    Exp              dEdf * fx
    Log              dEdf / x
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from ..ops.elementwise_cpu import (
    exp_backward_cpu,
    exp_forward_cpu,
    log_backward_cpu,
    log_forward_cpu,
    relu_backward_cpu,
    relu_forward_cpu,
    sigmoid_backward_cpu,
    sigmoid_forward_cpu,
    tanh_backward_cpu,
    tanh_forward_cpu,
)
from ._common import UnaryEdge


@dataclass(frozen=True)
class Identity(UnaryEdge):
    """y = x. The output is a copy, never the borrowed input."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return self._input(xs).copy()

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return dEdf.copy()


@dataclass(frozen=True)
class Negate(UnaryEdge):
    """y = -x."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return -self._input(xs)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return -dEdf


@dataclass(frozen=True)
class OneMinusX(UnaryEdge):
    """
    y = c - x, elementwise.

    Parameters
    ----------
    c : float, optional
        The constant the input is subtracted from. Defaults to 1.0.
    """

    c: float = 1.0

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return self.c - self._input(xs)

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return -dEdf


@dataclass(frozen=True)
class Square(UnaryEdge):
    """y = x^2, with dy/dx = 2x."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        x = self._input(xs)
        return x * x

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return 2 * (dEdf * xs[0])


@dataclass(frozen=True)
class Exp(UnaryEdge):
    """y = exp(x). Backward reuses the output since d/dx exp(x) = exp(x)."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return exp_forward_cpu(self._input(xs))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return exp_backward_cpu(dEdf, fx, xs[0])


@dataclass(frozen=True)
class Log(UnaryEdge):
    """
    y = ln(x).

    Zero inputs produce ``-inf`` without a floating-point warning; negative
    inputs produce NaN as in NumPy.
    """

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return log_forward_cpu(self._input(xs))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return log_backward_cpu(dEdf, fx, xs[0])


@dataclass(frozen=True)
class Tanh(UnaryEdge):
    """Hyperbolic tangent; backward uses 1 - fx^2."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return tanh_forward_cpu(self._input(xs))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return tanh_backward_cpu(dEdf, fx, xs[0])


@dataclass(frozen=True)
class LogisticSigmoid(UnaryEdge):
    """Logistic sigmoid 1 / (1 + exp(-x)); backward uses fx * (1 - fx)."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return sigmoid_forward_cpu(self._input(xs))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return sigmoid_backward_cpu(dEdf, fx, xs[0])


@dataclass(frozen=True)
class Rectify(UnaryEdge):
    """ReLU: max(0, x). The gradient at exactly x = 0 is 0."""

    def forward(self, ctx, xs: Sequence[np.ndarray]) -> np.ndarray:
        return relu_forward_cpu(self._input(xs))

    def backward(self, ctx, xs, fx, dEdf, i) -> np.ndarray:
        self._check_input_index(xs, i)
        return relu_backward_cpu(dEdf, fx, xs[0])
