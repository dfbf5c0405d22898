"""
Edge-level exceptions for edgegrad.

Every failure raised by an edge is a programmer error: a graph was wired
with the wrong arity or shapes, a backward pass was requested for an input
that has no gradient, or a backward call was handed a context that never
went through the matching forward pass. There is no degraded mode, so these
exceptions are raised immediately and carry enough attributes to identify
the offending edge.

Hierarchy
---------
- EdgeError (RuntimeError)
    - ShapeError (also ValueError)
        - ArityError
    - InputIndexError (also IndexError)
    - NotDifferentiableError (also NotImplementedError)
        - UnsupportedOperationError
    - ContextError
    - DomainError (also ValueError)

The mixed-in builtin bases let callers catch these with the builtin they
would naturally expect (e.g. ``except ValueError``).
"""

from typing import Any, Optional


class EdgeError(RuntimeError):
    """
    Base class for all failures raised while evaluating an edge.

    Attributes
    ----------
    op : str
        Name of the edge (operator) that raised the error.
    """

    def __init__(self, op: str, message: str) -> None:
        super().__init__(f"{op}: {message}")
        self.op = op


class ShapeError(EdgeError, ValueError):
    """
    Raised when input shapes violate an edge's constraints.

    Examples include unequal rows/columns where they must match, element-count
    mismatches on reshape, and out-of-range pick or slice indices.

    Attributes
    ----------
    op : str
        Name of the edge.
    expected : Any
        Description of the expected shape (or range), if available.
    got : Any
        The offending shape (or value), if available.
    """

    def __init__(
        self,
        op: str,
        message: str,
        *,
        expected: Optional[Any] = None,
        got: Optional[Any] = None,
    ) -> None:
        details = message
        if expected is not None or got is not None:
            details = f"{message} (expected {expected}, got {got})"
        super().__init__(op, details)
        self.expected = expected
        self.got = got


class ArityError(ShapeError):
    """
    Raised when an edge receives the wrong number of inputs.

    Attributes
    ----------
    expected : str
        Human-readable description of the accepted arity.
    got : int
        Number of inputs actually supplied.
    """

    def __init__(self, op: str, expected: str, got: int) -> None:
        super().__init__(op, "wrong number of inputs", expected=expected, got=got)


class InputIndexError(EdgeError, IndexError):
    """
    Raised when backward is requested for an input index that does not exist.

    Attributes
    ----------
    index : int
        The requested input index.
    num_inputs : int
        Number of inputs the edge was evaluated with.
    """

    def __init__(self, op: str, index: int, num_inputs: int) -> None:
        super().__init__(
            op, f"input index {index} out of range for {num_inputs} input(s)"
        )
        self.index = index
        self.num_inputs = num_inputs


class NotDifferentiableError(EdgeError, NotImplementedError):
    """
    Raised when a gradient is requested along a path that has none.

    An edge never answers such a request with a silent zero gradient.

    Attributes
    ----------
    index : int | None
        The input index whose gradient was requested, if applicable.
    """

    def __init__(self, op: str, index: Optional[int] = None) -> None:
        where = "" if index is None else f" with respect to input {index}"
        super().__init__(op, f"backward is not defined{where}")
        self.index = index


class UnsupportedOperationError(NotDifferentiableError):
    """
    Raised by catalog entries whose semantics are deliberately not implemented.
    """

    def __init__(self, op: str) -> None:
        EdgeError.__init__(self, op, "operation is not supported")
        self.index = None


class ContextError(EdgeError):
    """
    Raised when backward receives a context lacking forward-cached state.

    Attributes
    ----------
    key : str
        Name of the missing cached entry.
    """

    def __init__(self, op: str, key: str) -> None:
        super().__init__(
            op,
            f"context has no cached '{key}'; "
            "pass the context produced by this edge's forward call",
        )
        self.key = key


class DomainError(EdgeError, ValueError):
    """
    Raised when an input value lies outside an edge's mathematical domain.

    Attributes
    ----------
    value : float
        The offending value.
    """

    def __init__(self, op: str, message: str, value: float) -> None:
        super().__init__(op, f"{message} (got {value!r})")
        self.value = value
