"""
Domain-level structural typing for NumPy-like n-dimensional arrays.

This module defines :class:`NDArrayLike`, a **backend-agnostic Protocol**
describing the subset of ``ndarray`` behaviour the edge interface relies on,
without introducing a NumPy dependency in the domain layer.

Design intent
-------------
- The domain layer (edge interface, shape helpers, errors) never imports
  NumPy; it talks about tensors through this protocol.
- Concrete edges in the infrastructure layer receive and return
  ``numpy.ndarray`` instances, which satisfy the protocol structurally.
- The surface is limited to what shape reasoning needs: shape, rank, size,
  dtype, reshape, transpose and indexing.
"""

from __future__ import annotations
from typing import Protocol, Tuple, Any, overload, runtime_checkable


@runtime_checkable
class NDArrayLike(Protocol):
    """
    Structural interface for objects that behave like NumPy ndarrays.

    Notes
    -----
    - This is a *Protocol*, not a concrete base class.
    - View-vs-copy semantics are backend-defined. Edges always allocate
      fresh outputs, so they never depend on them.
    """

    @property
    def shape(self) -> Tuple[int, ...]:
        """Size of each dimension."""
        ...

    @property
    def ndim(self) -> int:
        """Number of dimensions (rank)."""
        ...

    @property
    def size(self) -> int:
        """Total number of elements; the product of :pyattr:`shape`."""
        ...

    @property
    def dtype(self) -> Any:
        """Backend-defined element type descriptor."""
        ...

    @property
    def T(self) -> NDArrayLike:
        """Transposed view of the array."""
        ...

    def reshape(self, *shape: int) -> NDArrayLike:
        """
        Return an array with a new shape and the same element count.

        Parameters
        ----------
        *shape : int
            New shape dimensions.

        Returns
        -------
        NDArrayLike
            Reshaped array-like object.
        """
        ...

    def copy(self) -> NDArrayLike:
        """Return an independent copy of the array."""
        ...

    @overload
    def __getitem__(self, key: int) -> Any: ...

    @overload
    def __getitem__(self, key: slice | Tuple[Any, ...]) -> NDArrayLike: ...

    def __getitem__(self, key: Any) -> Any:
        """Basic NumPy-style indexing and slicing."""
        ...

    def __setitem__(self, key: Any, value: Any) -> None:
        """In-place element or slice assignment."""
        ...
