"""
Finite-difference gradient checking for edges.

`gradcheck` compares an edge's analytic backward pass with a centered
finite-difference estimate. It reduces the edge output to a scalar with a
random linear probe

    L(xs) = sum(w * forward(xs))

so the analytic gradient is ``backward(..., dEdf=w, i)`` and the numeric one
is ``(L(x + eps e_k) - L(x - eps e_k)) / (2 eps)`` for every element k of
input i.

Notes
-----
- Inputs are promoted to float64; float32 round-off swamps centered
  differences at useful step sizes.
- Output entries that are not finite (e.g. the ``-inf`` rows of
  `RestrictedLogSoftmax`) are constant and excluded from the probe.
- Stochastic edges can be checked by passing `reseed`: the global NumPy
  random state is reseeded before every forward call so each evaluation sees
  the same noise.
- Inputs must stay away from kinks (ReLU at 0, max-pooling ties, hinge
  boundaries) for the estimate to be meaningful.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ...domain._edge import Edge
from .._config import gradcheck_eps
from .._evaluate import backward, forward


@dataclass(frozen=True)
class GradcheckResult:
    """
    Outcome of one gradient check.

    Attributes
    ----------
    analytic : np.ndarray
        Gradient returned by the edge's backward pass.
    numeric : np.ndarray
        Centered finite-difference estimate, same shape.
    max_abs_error : float
        ``max |analytic - numeric|``.
    max_rel_error : float
        ``max |analytic - numeric| / max(|numeric|, 1)``.
    """

    analytic: np.ndarray
    numeric: np.ndarray
    max_abs_error: float
    max_rel_error: float

    def passed(self, rtol: float = 1e-4, atol: float = 1e-6) -> bool:
        return bool(np.allclose(self.analytic, self.numeric, rtol=rtol, atol=atol))


def gradcheck(
    edge: Edge,
    xs: Sequence[np.ndarray],
    i: int,
    *,
    eps: Optional[float] = None,
    probe: Optional[np.ndarray] = None,
    reseed: Optional[int] = None,
) -> GradcheckResult:
    """
    Check the gradient of `edge` with respect to input `i`.

    Parameters
    ----------
    edge : Edge
        Edge under test.
    xs : Sequence[np.ndarray]
        Inputs; copied and promoted to float64.
    i : int
        Input index to check.
    eps : float, optional
        Finite-difference step. Defaults to ``EDGEGRAD_GRADCHECK_EPS`` (1e-6).
    probe : np.ndarray, optional
        Probe weights `w`, shaped like the output. Drawn from a standard
        normal distribution when omitted.
    reseed : int, optional
        Seed applied to ``np.random`` before every forward call.

    Returns
    -------
    GradcheckResult
    """
    step = gradcheck_eps() if eps is None else float(eps)
    inputs: List[np.ndarray] = [np.array(x, dtype=np.float64) for x in xs]

    def run(args: Sequence[np.ndarray]):
        if reseed is not None:
            np.random.seed(reseed)
        return forward(edge, args)

    fx, ctx = run(inputs)
    finite = np.isfinite(fx)
    w = np.random.randn(*fx.shape) if probe is None else np.array(probe, dtype=np.float64)
    w = np.where(finite, w, 0.0)

    def objective(args: Sequence[np.ndarray]) -> float:
        y, _ = run(args)
        return float(np.sum(w * np.where(finite, y, 0.0)))

    analytic = np.asarray(backward(edge, ctx, inputs, fx, w, i), dtype=np.float64)

    numeric = np.zeros_like(inputs[i])
    for idx in np.ndindex(*inputs[i].shape):
        orig = inputs[i][idx]
        inputs[i][idx] = orig + step
        plus = objective(inputs)
        inputs[i][idx] = orig - step
        minus = objective(inputs)
        inputs[i][idx] = orig
        numeric[idx] = (plus - minus) / (2.0 * step)

    err = np.abs(analytic - numeric)
    max_abs = float(np.max(err)) if err.size else 0.0
    max_rel = (
        float(np.max(err / np.maximum(np.abs(numeric), 1.0))) if err.size else 0.0
    )
    return GradcheckResult(
        analytic=analytic,
        numeric=numeric,
        max_abs_error=max_abs,
        max_rel_error=max_rel,
    )
