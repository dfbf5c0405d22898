"""
CPU reference kernels for elementwise activations (NumPy backend).

Each activation has a forward kernel and a backward kernel. Backward kernels
share one signature, ``(dEdf, fx, x)``: the downstream gradient, the forward
output and the forward input. Each kernel reads whichever of `fx` / `x`
expresses its derivative most cheaply and stably:

- tanh:     1 - fx^2          (output)
- sigmoid:  fx * (1 - fx)     (output)
- relu:     [x > 0]           (input)
- exp:      fx                (output)
- log:      1 / x             (input)

Design notes
------------
- Kernels never modify their arguments and always return new arrays.
- The sigmoid forward splits on sign so ``exp`` is only evaluated on
  non-positive arguments and cannot overflow.
- The dtype of `x` is preserved.
"""

from __future__ import annotations

import numpy as np


def tanh_forward_cpu(x: np.ndarray) -> np.ndarray:
    return np.tanh(x)


def tanh_backward_cpu(dEdf: np.ndarray, fx: np.ndarray, x: np.ndarray) -> np.ndarray:
    return dEdf * (1.0 - fx * fx)


def sigmoid_forward_cpu(x: np.ndarray) -> np.ndarray:
    """
    Numerically stable logistic sigmoid.

    For ``x >= 0`` computes ``1 / (1 + exp(-x))``; for ``x < 0`` computes
    ``exp(x) / (1 + exp(x))``. Both branches only exponentiate non-positive
    values.
    """
    x = np.asarray(x)
    out = np.empty(x.shape, dtype=np.result_type(x.dtype, np.float32))
    pos = x >= 0
    neg = ~pos
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    e = np.exp(x[neg])
    out[neg] = e / (1.0 + e)
    return out


def sigmoid_backward_cpu(
    dEdf: np.ndarray, fx: np.ndarray, x: np.ndarray
) -> np.ndarray:
    return dEdf * fx * (1.0 - fx)


def relu_forward_cpu(x: np.ndarray) -> np.ndarray:
    return np.maximum(x, 0).astype(x.dtype, copy=False)


def relu_backward_cpu(dEdf: np.ndarray, fx: np.ndarray, x: np.ndarray) -> np.ndarray:
    # x == 0 gets zero gradient
    return dEdf * (x > 0)


def exp_forward_cpu(x: np.ndarray) -> np.ndarray:
    return np.exp(x)


def exp_backward_cpu(dEdf: np.ndarray, fx: np.ndarray, x: np.ndarray) -> np.ndarray:
    return dEdf * fx


def log_forward_cpu(x: np.ndarray) -> np.ndarray:
    # log(0) -> -inf
    with np.errstate(divide="ignore"):
        return np.log(x)


def log_backward_cpu(dEdf: np.ndarray, fx: np.ndarray, x: np.ndarray) -> np.ndarray:
    return dEdf / x
