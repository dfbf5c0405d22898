"""
Edge catalog public API.

This package aggregates every concrete operator. The catalog is closed:
`AnyEdge` is the union of all catalog classes, so an executor can dispatch
over it with an exhaustive ``match`` on the class.

Categories
----------
- Elementwise / activation:
    Identity, Negate, OneMinusX, Square, Exp, Log, Tanh, LogisticSigmoid,
    Rectify
- Reduction:
    SumColumns, Sum, KMHNGram
- Structural:
    Concatenate, ConcatenateColumns, Reshape, MaxPooling1D
- Indexing / probability simplex:
    PickElement, PickRange, Softmax, LogSoftmax, RestrictedLogSoftmax,
    PickNegLogSoftmax
- Algebraic:
    MatrixMultiply, CwiseMultiply, Multilinear, SquaredEuclideanDistance,
    InnerProduct3D_1D (not supported)
- Losses:
    BinaryLogLoss, Hinge
- Stochastic:
    GaussianNoise, Dropout
"""

from typing import Union

from ._elementwise import (
    Exp,
    Identity,
    Log,
    LogisticSigmoid,
    Negate,
    OneMinusX,
    Rectify,
    Square,
    Tanh,
)
from ._reductions import KMHNGram, Sum, SumColumns
from ._structural import Concatenate, ConcatenateColumns, MaxPooling1D, Reshape
from ._selection import PickElement, PickRange
from ._softmax import LogSoftmax, PickNegLogSoftmax, RestrictedLogSoftmax, Softmax
from ._algebra import (
    CwiseMultiply,
    InnerProduct3D_1D,
    MatrixMultiply,
    Multilinear,
    SquaredEuclideanDistance,
)
from ._losses import BinaryLogLoss, Hinge
from ._stochastic import Dropout, GaussianNoise

AnyEdge = Union[
    Identity,
    Negate,
    OneMinusX,
    Square,
    Exp,
    Log,
    Tanh,
    LogisticSigmoid,
    Rectify,
    SumColumns,
    Sum,
    KMHNGram,
    Concatenate,
    ConcatenateColumns,
    Reshape,
    MaxPooling1D,
    PickElement,
    PickRange,
    Softmax,
    LogSoftmax,
    RestrictedLogSoftmax,
    PickNegLogSoftmax,
    MatrixMultiply,
    CwiseMultiply,
    Multilinear,
    SquaredEuclideanDistance,
    InnerProduct3D_1D,
    BinaryLogLoss,
    Hinge,
    GaussianNoise,
    Dropout,
]

__all__ = [
    "AnyEdge",
    Identity.__name__,
    Negate.__name__,
    OneMinusX.__name__,
    Square.__name__,
    Exp.__name__,
    Log.__name__,
    Tanh.__name__,
    LogisticSigmoid.__name__,
    Rectify.__name__,
    SumColumns.__name__,
    Sum.__name__,
    KMHNGram.__name__,
    Concatenate.__name__,
    ConcatenateColumns.__name__,
    Reshape.__name__,
    MaxPooling1D.__name__,
    PickElement.__name__,
    PickRange.__name__,
    Softmax.__name__,
    LogSoftmax.__name__,
    RestrictedLogSoftmax.__name__,
    PickNegLogSoftmax.__name__,
    MatrixMultiply.__name__,
    CwiseMultiply.__name__,
    Multilinear.__name__,
    SquaredEuclideanDistance.__name__,
    InnerProduct3D_1D.__name__,
    BinaryLogLoss.__name__,
    Hinge.__name__,
    GaussianNoise.__name__,
    Dropout.__name__,
]
