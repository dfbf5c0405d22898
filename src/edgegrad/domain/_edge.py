"""
Edge interface definitions.

This module defines the abstract base class implemented by every operator in
the edge catalog. An edge is one unit of a computation graph: it computes an
output tensor from its inputs (forward pass) and, for a chosen input, that
input's contribution to the gradient given the gradient flowing back from the
edge's consumers (backward pass).

Differences from a function-level autograd API
----------------------------------------------
- Edges are *configured* objects: window widths, margins, target indices,
  slice bounds and similar parameters are fixed at construction and never
  change afterwards (concrete edges are frozen dataclasses).
- State that backward needs from forward (dropout masks, argmax indices,
  concatenation offsets, softmax intermediates) is written into a per-call
  `Context` rather than onto the edge. The executor keeps that context next to
  the forward output and hands it back to every backward call of the same
  evaluation.
- Backward computes one input's gradient per call, selected by index, so the
  executor only pays for the gradients it needs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ._errors import InputIndexError, NotDifferentiableError
from .types._numpy import NDArrayLike


class Edge(ABC):
    """
    Abstract base class for differentiable graph operators.

    Subclasses implement:
    - `forward(ctx, xs)`, validating arity and shapes and returning a newly
      allocated output tensor;
    - `backward(ctx, xs, fx, dEdf, i)`, returning a newly allocated tensor
      shaped like ``xs[i]``.

    Class attributes
    ----------------
    arity : int | None
        Exact number of inputs accepted, or None when the edge is variadic
        (and validates its inputs itself).
    """

    arity: Optional[int] = 1

    @property
    def name(self) -> str:
        return type(self).__name__

    @abstractmethod
    def forward(self, ctx: Any, xs: Sequence[NDArrayLike]) -> NDArrayLike:
        """
        Perform the forward computation.

        Parameters
        ----------
        ctx : Context
            A fresh per-call context. Values needed by backward must be saved
            here (`ctx.save_for_backward`, `ctx.saved_meta`).
        xs : Sequence[ndarray]
            Borrowed input tensors. They must not be modified.

        Returns
        -------
        ndarray
            A newly allocated output tensor.

        Raises
        ------
        ArityError
            If the number of inputs is wrong.
        ShapeError
            If an input violates the edge's shape constraints.
        """
        ...

    @abstractmethod
    def backward(
        self,
        ctx: Any,
        xs: Sequence[NDArrayLike],
        fx: NDArrayLike,
        dEdf: NDArrayLike,
        i: int,
    ) -> NDArrayLike:
        """
        Compute the gradient contribution for input `i`.

        Parameters
        ----------
        ctx : Context
            The context populated by the forward call of the same evaluation.
        xs : Sequence[ndarray]
            The inputs given to that forward call.
        fx : ndarray
            The output that forward call produced.
        dEdf : ndarray
            Gradient of the objective with respect to `fx` (same shape).
        i : int
            Index of the input whose gradient is requested.

        Returns
        -------
        ndarray
            A newly allocated gradient with the shape of ``xs[i]``.

        Raises
        ------
        InputIndexError
            If `i` does not name an input.
        NotDifferentiableError
            If the edge has no gradient with respect to input `i`.
        ContextError
            If `ctx` lacks the state cached by forward.
        """
        ...

    def differentiable(self, i: int) -> bool:
        """Return True when `backward` is defined for input index `i`."""
        return self.arity is None or 0 <= i < self.arity

    def _check_input_index(self, xs: Sequence[NDArrayLike], i: int) -> None:
        if not 0 <= i < len(xs):
            raise InputIndexError(self.name, i, len(xs))
        if not self.differentiable(i):
            raise NotDifferentiableError(self.name, i)
