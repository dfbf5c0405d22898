"""
CPU random-array helpers for stochastic edges.

Random generation is isolated here so the edges that consume noise
(`GaussianNoise`, `Dropout`) contain no RNG calls of their own. Both helpers
draw from NumPy's global random state, so seeding with ``np.random.seed``
makes stochastic edges reproducible.
"""

from __future__ import annotations

from typing import Any, Tuple

import numpy as np


def _float_dtype(dtype: Any) -> np.dtype:
    dt = np.dtype(dtype)
    return dt if np.issubdtype(dt, np.floating) else np.dtype(np.float64)


def normal_cpu(shape: Tuple[int, ...], *, stddev: float, dtype: Any) -> np.ndarray:
    """
    Draw i.i.d. zero-mean Gaussian samples.

    Parameters
    ----------
    shape : tuple[int, ...]
        Output shape.
    stddev : float
        Standard deviation (non-negative).
    dtype : Any
        Requested dtype; non-floating dtypes fall back to float64.
    """
    arr = np.asarray(np.random.normal(loc=0.0, scale=stddev, size=shape))
    return arr.astype(_float_dtype(dtype), copy=False)


def bernoulli_cpu(shape: Tuple[int, ...], *, p: float, dtype: Any) -> np.ndarray:
    """
    Draw an i.i.d. Bernoulli mask with ``P(1) = p``.

    Parameters
    ----------
    shape : tuple[int, ...]
        Output shape.
    p : float
        Probability of drawing 1, in ``[0, 1]``.
    dtype : Any
        Requested dtype; non-floating dtypes fall back to float64.

    Returns
    -------
    np.ndarray
        Array of 0s and 1s.
    """
    r = np.asarray(np.random.random_sample(size=shape))
    return (r < p).astype(_float_dtype(dtype))
