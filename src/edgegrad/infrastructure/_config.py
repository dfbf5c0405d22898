"""
Environment-driven runtime options.

Options are read on every call rather than cached at import, so tests and
long-running processes can toggle them through ``os.environ``.

Variables
---------
EDGEGRAD_CHECK_SHAPES
    When enabled (default), `edgegrad.infrastructure._evaluate.backward`
    verifies that every returned gradient has the shape of its input.
EDGEGRAD_GRADCHECK_EPS
    Default finite-difference step used by `gradcheck` (default ``1e-6``).
"""

from __future__ import annotations

import os

_FALSY = ("0", "", "false", "off", "no")


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() not in _FALSY


def shape_checks_enabled() -> bool:
    return _env_flag("EDGEGRAD_CHECK_SHAPES", "1")


def gradcheck_eps() -> float:
    raw = os.environ.get("EDGEGRAD_GRADCHECK_EPS", "")
    if not raw.strip():
        return 1e-6
    try:
        eps = float(raw)
    except ValueError:
        raise ValueError(
            f"EDGEGRAD_GRADCHECK_EPS must be a positive float, got {raw!r}"
        ) from None
    if eps <= 0.0:
        raise ValueError(f"EDGEGRAD_GRADCHECK_EPS must be positive, got {eps}")
    return eps
