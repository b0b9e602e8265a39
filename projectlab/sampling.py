from __future__ import annotations

"""Exact triangular sampling by inverse transform.

The triangular CDF is piecewise quadratic, so its inverse has a closed form:

    u <  Fc:  x = a + sqrt(u (b - a)(c - a))
    u >= Fc:  x = b - sqrt((1 - u)(b - a)(b - c))

with Fc = (c - a) / (b - a). Every draw costs one uniform and one sqrt; there
is no rejection loop and no table search.
"""

from typing import Protocol

import numpy as np

from projectlab.model import TriangleParams
from projectlab.validate import (
    InvalidArgument,
    validate_run_count,
    validate_seed,
    validate_triangle,
)


class UniformSource(Protocol):
    """Anything that can fill an array with uniforms on [0, 1).

    `numpy.random.Generator` satisfies this protocol.
    """

    def random(self, size: int) -> np.ndarray:
        raise NotImplementedError


def _check_uniforms(u: np.ndarray) -> None:
    # NaN fails both comparisons, so test the accepted range instead.
    ok = (u >= 0.0) & (u <= 1.0)
    if not bool(np.all(ok)):
        bad = u[~ok][0]
        raise InvalidArgument(
            f"uniform draws must lie in [0, 1] (got {bad})", parameter="u"
        )


def triangular_inverse_cdf(u: object, params: TriangleParams) -> np.ndarray:
    """Map uniforms to triangular samples, element-wise and order-preserving.

    u == 0 lands on the lower branch and yields `params.min`; u == 1 lands on
    the upper branch and yields `params.max`.
    """

    u = np.asarray(u, dtype=np.float64)
    _check_uniforms(u)

    a, c, b = params.min, params.mode, params.max
    span = b - a
    # Split the root so the three-way product cannot overflow for wide ranges.
    lower = a + np.sqrt(u * span) * np.sqrt(c - a)
    upper = b - np.sqrt((1.0 - u) * span) * np.sqrt(b - c)
    return np.where(u < params.mode_cdf, lower, upper)


def sample_triangular(
    n: int,
    a: float,
    b: float,
    c: float,
    *,
    rng: UniformSource | None = None,
    seed: int | np.random.SeedSequence | None = None,
) -> np.ndarray:
    """Draw `n` i.i.d. samples from Triangular(min=a, mode=c, max=b).

    Args:
        n: Number of samples, a positive integer.
        a: Minimum.
        b: Maximum.
        c: Mode, with a < c < b.
        rng: Uniform source to draw from. Takes precedence over `seed`.
        seed: Seed for a fresh `numpy.random.default_rng` when no `rng` is given.

    Returns:
        1-D float64 array of length `n`; element i is the transform of uniform i.

    Raises:
        InvalidArgument: `n` is not a positive integer, `seed` is negative, or the
            source yields values outside [0, 1].
        InvalidParameters: the triangle does not satisfy a < c < b.
    """

    n = validate_run_count(n)
    params = TriangleParams(min=float(a), mode=float(c), max=float(b))
    validate_triangle(params)
    validate_seed(seed)

    if rng is None:
        rng = np.random.default_rng(seed)
    u = np.asarray(rng.random(n), dtype=np.float64)
    if u.shape != (n,):
        raise InvalidArgument(
            f"uniform source returned shape {u.shape}, expected ({n},)",
            parameter="rng",
        )
    return triangular_inverse_cdf(u, params)


def sample_task(
    params: TriangleParams, n: int, rng: UniformSource, *, task_id: str | None = None
) -> np.ndarray:
    """Sample one task's duration batch; errors name the task."""

    validate_triangle(params, task_id=task_id)
    return sample_triangular(n, params.min, params.max, params.mode, rng=rng)
