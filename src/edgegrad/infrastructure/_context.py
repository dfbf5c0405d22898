from typing import Any
from dataclasses import dataclass, field

from ..domain._errors import ContextError
from ..domain.types._numpy import NDArrayLike


@dataclass
class Context:
    """
    Per-evaluation record of state an edge saves for its backward pass.

    A fresh `Context` is created for every forward call and returned next to
    the output. The executor hands the same context to every backward call
    belonging to that evaluation, so edges themselves never hold mutable
    state and overlapping evaluations of one edge cannot interfere.

    Attributes
    ----------
    op : str
        Name of the edge that owns this context (used in error messages).
    saved_tensors : list[NDArrayLike]
        Arrays saved during forward: masks, cached probabilities, active sets.
    saved_meta : dict[str, Any]
        Non-array metadata: offsets, argmax indices, original shapes.

    Notes
    -----
    `saved_tensors` and `saved_meta` are shared by the whole catalog; each
    edge documents what it stores under "Saved context".
    """

    op: str = ""
    saved_tensors: list[NDArrayLike] = field(default_factory=list)
    saved_meta: dict[str, Any] = field(default_factory=dict)

    def save_for_backward(self, *tensors: NDArrayLike) -> None:
        """
        Save arrays for use during the backward computation.

        Parameters
        ----------
        *tensors : ndarray
            Any number of arrays to append to `saved_tensors`.
        """
        self.saved_tensors.extend(tensors)

    def saved(self, n: int) -> tuple:
        """
        Return the first `n` saved tensors.

        Raises
        ------
        ContextError
            If fewer than `n` tensors were saved (typically because the
            context did not come from this edge's forward call).
        """
        if len(self.saved_tensors) < n:
            raise ContextError(self.op, "saved_tensors")
        return tuple(self.saved_tensors[:n])

    def meta(self, key: str) -> Any:
        """
        Return cached metadata `key`.

        Raises
        ------
        ContextError
            If forward never stored `key` in this context.
        """
        try:
            return self.saved_meta[key]
        except KeyError:
            raise ContextError(self.op, key) from None
