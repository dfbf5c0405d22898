"""
Public entry points for evaluating a single edge.

`forward` and `backward` are the functional wrappers a graph executor calls.
They are responsible for:

- validating that the edge is an `Edge` and that inputs are arrays,
- enforcing the arity the edge declares,
- constructing the per-call `Context` and returning it next to the output,
- validating downstream-gradient and returned-gradient shapes.

Edges themselves only implement the math (`Edge.forward`/`Edge.backward`).
"""

from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from ..domain._edge import Edge
from ..domain._errors import ArityError, InputIndexError, ShapeError
from ._config import shape_checks_enabled
from ._context import Context


def _as_arrays(xs: Sequence[np.ndarray]) -> Tuple[np.ndarray, ...]:
    out = []
    for x in xs:
        if not isinstance(x, np.ndarray):
            raise TypeError(f"edge inputs must be numpy arrays, got {type(x).__name__}")
        out.append(x)
    return tuple(out)


def forward(edge: Edge, xs: Sequence[np.ndarray]) -> Tuple[np.ndarray, Context]:
    """
    Evaluate `edge` on `xs`.

    Parameters
    ----------
    edge : Edge
        A configured catalog edge.
    xs : Sequence[np.ndarray]
        Input arrays, borrowed read-only.

    Returns
    -------
    tuple[np.ndarray, Context]
        The output array and the context to pass to every `backward` call of
        this evaluation.

    Raises
    ------
    TypeError
        If `edge` is not an `Edge` or an input is not an array.
    ArityError
        If the number of inputs does not match `edge.arity`.
    """
    if not isinstance(edge, Edge):
        raise TypeError(f"forward expects an Edge, got {type(edge).__name__}")
    xs = _as_arrays(xs)
    if edge.arity is not None and len(xs) != edge.arity:
        raise ArityError(edge.name, expected=str(edge.arity), got=len(xs))

    ctx = Context(op=edge.name)
    fx = edge.forward(ctx, xs)
    return fx, ctx


def backward(
    edge: Edge,
    ctx: Context,
    xs: Sequence[np.ndarray],
    fx: np.ndarray,
    dEdf: np.ndarray,
    i: int,
) -> np.ndarray:
    """
    Compute the gradient contribution of `edge` with respect to input `i`.

    Parameters
    ----------
    edge : Edge
        The edge that produced `fx`.
    ctx : Context
        The context returned by the matching `forward` call.
    xs : Sequence[np.ndarray]
        The inputs of that forward call.
    fx : np.ndarray
        The output of that forward call.
    dEdf : np.ndarray
        Downstream gradient, shaped like `fx`.
    i : int
        Input index.

    Returns
    -------
    np.ndarray
        Gradient shaped like ``xs[i]``.

    Raises
    ------
    ShapeError
        If `dEdf` is not shaped like `fx`, or (with shape checks enabled) the
        edge returns a gradient of the wrong shape.
    InputIndexError
        If `i` is out of range.
    """
    if not isinstance(edge, Edge):
        raise TypeError(f"backward expects an Edge, got {type(edge).__name__}")
    xs = _as_arrays(xs)
    if tuple(dEdf.shape) != tuple(fx.shape):
        raise ShapeError(
            edge.name,
            "downstream gradient must match the output shape",
            expected=fx.shape,
            got=dEdf.shape,
        )
    if not 0 <= i < len(xs):
        raise InputIndexError(edge.name, i, len(xs))

    dEdx = edge.backward(ctx, xs, fx, dEdf, i)

    if shape_checks_enabled() and tuple(dEdx.shape) != tuple(xs[i].shape):
        raise ShapeError(
            edge.name,
            f"gradient for input {i} has the wrong shape",
            expected=xs[i].shape,
            got=dEdx.shape,
        )
    return dEdx
