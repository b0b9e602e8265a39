from __future__ import annotations

"""Table-based inverse-CDF lookup (validation oracle).

FROZEN.

Not a production sampling path. The CDF is tabulated on a uniform grid over
[min, max] and each uniform is mapped to the first grid point whose CDF value
reaches it. The answer is therefore never below the exact inverse and at most
one grid step above it.

Policy:
- Used by tests to cross-check `projectlab.sampling.triangular_inverse_cdf`.
- No new features; changes only for bug fixes.
"""

import numpy as np

from projectlab.config import ORACLE_TABLE_RESOLUTION
from projectlab.model import TriangleParams
from projectlab.sampling import _check_uniforms
from projectlab.validate import InvalidArgument, validate_triangle


def cdf_table(
    params: TriangleParams, *, resolution: int = ORACLE_TABLE_RESOLUTION
) -> tuple[np.ndarray, np.ndarray]:
    if resolution < 2:
        raise InvalidArgument(
            f"table resolution must be >= 2 (got {resolution})",
            parameter="resolution",
        )
    validate_triangle(params)
    grid = np.linspace(params.min, params.max, resolution)
    return grid, params.cdf(grid)


def grid_step(params: TriangleParams, *, resolution: int = ORACLE_TABLE_RESOLUTION) -> float:
    return (params.max - params.min) / (resolution - 1)


def table_inverse_cdf(
    u: object,
    params: TriangleParams,
    *,
    resolution: int = ORACLE_TABLE_RESOLUTION,
) -> np.ndarray:
    u = np.asarray(u, dtype=np.float64)
    _check_uniforms(u)
    grid, table = cdf_table(params, resolution=resolution)

    # Sorted table: searchsorted is the search for the first entry >= u.
    idx = np.searchsorted(table, u, side="left")
    idx = np.minimum(idx, resolution - 1)
    return grid[idx]
