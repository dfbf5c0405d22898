"""
CPU reference kernels for softmax-family operations (NumPy backend).

Kernels
-------
- `softmax_forward_cpu` / `softmax_backward_cpu`
    Stable softmax along an axis and its Jacobian-vector product.
- `logsumexp_cpu`
    Max-subtracted log-sum-exp along an axis.
- `log_softmax_forward_cpu` / `log_softmax_backward_cpu`
    ``x - logsumexp(x)``, equal to ``log(softmax(x))`` without the underflow
    of taking the log of a tiny probability, and its gradient
    ``g - exp(y) * sum(g, axis)``.
- `logsumexp_subset_cpu`
    Log-sum-exp of a column vector restricted to a set of row indices.

All kernels default to ``axis=0``: edges operate on column vectors, so the
distribution runs down the rows of each column.

Design notes
------------
- Every exponentiation happens after subtracting the maximum along the
  reduction axis, so the largest exponent is ``exp(0) = 1``.
- The softmax backward is the Jacobian-vector product

      dx = y * (g - sum(g * y, axis))

  which never materialises the Jacobian and sums to zero along `axis`.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np


def softmax_forward_cpu(x: np.ndarray, axis: int = 0) -> np.ndarray:
    x_shift = x - np.max(x, axis=axis, keepdims=True)
    exp_x = np.exp(x_shift)
    return exp_x / np.sum(exp_x, axis=axis, keepdims=True)


def softmax_backward_cpu(dEdf: np.ndarray, fx: np.ndarray, axis: int = 0) -> np.ndarray:
    """
    Softmax Jacobian-vector product.

    Parameters
    ----------
    dEdf : np.ndarray
        Gradient with respect to the softmax output.
    fx : np.ndarray
        The softmax output.
    axis : int, optional
        Axis the softmax was taken along.

    Returns
    -------
    np.ndarray
        Gradient with respect to the softmax input.
    """
    dot = np.sum(dEdf * fx, axis=axis, keepdims=True)
    return fx * (dEdf - dot)


def logsumexp_cpu(x: np.ndarray, axis: int = 0) -> np.ndarray:
    m = np.max(x, axis=axis, keepdims=True)
    return m + np.log(np.sum(np.exp(x - m), axis=axis, keepdims=True))


def log_softmax_forward_cpu(x: np.ndarray, axis: int = 0) -> np.ndarray:
    return x - logsumexp_cpu(x, axis=axis)


def log_softmax_backward_cpu(
    dEdf: np.ndarray, fx: np.ndarray, axis: int = 0
) -> np.ndarray:
    """
    Backward of log-softmax from its own output.

    Recovers the probabilities ``u = exp(fx)`` and applies the softmax JVP to
    the rescaled gradient ``dEdf / u``. The division cancels analytically:

        u * (dEdf / u - sum(dEdf / u * u)) = dEdf - u * sum(dEdf)

    so the cancelled form is evaluated, which stays finite when ``u``
    underflows to zero.
    """
    u = np.exp(fx)
    return dEdf - u * np.sum(dEdf, axis=axis, keepdims=True)


def logsumexp_subset_cpu(x: np.ndarray, rows: Sequence[int]) -> float:
    """
    Compute ``log(sum_{i in rows} exp(x[i, 0]))`` for a column vector.

    Parameters
    ----------
    x : np.ndarray
        Column vector of shape (n, 1).
    rows : Sequence[int]
        Non-empty set of row indices to normalise over.

    Returns
    -------
    float
        The restricted log-sum-exp.
    """
    v = x[list(rows), 0]
    m = float(np.max(v))
    return m + float(np.log(np.sum(np.exp(v - m))))
