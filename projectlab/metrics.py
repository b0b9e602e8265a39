from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Sequence

import numpy as np

from projectlab.config import DEFAULT_PERCENTILES, TOP_CRITICAL_PATHS
from projectlab.types import SimulationResult


@dataclass(frozen=True)
class HistogramBin:
    lo: float
    hi: float
    count: int


def _pkey(p: float) -> str:
    return f"p{p:g}"


def _finite(values: Any) -> np.ndarray:
    xs = np.asarray(values, dtype=np.float64).ravel()
    return xs[np.isfinite(xs)]


def describe(values: Any, ps: Sequence[float] = DEFAULT_PERCENTILES) -> dict[str, float]:
    xs = _finite(values)
    if xs.size == 0:
        out = {k: math.nan for k in ("mean", "std", "min", "max")}
        out.update({_pkey(p): math.nan for p in ps})
        return out

    # Linear interpolation between closest ranks (numpy's default method).
    pct = np.percentile(xs, list(ps)) if ps else []
    out = {
        "mean": float(xs.mean()),
        "std": float(xs.std(ddof=1)) if xs.size > 1 else 0.0,
        "min": float(xs.min()),
        "max": float(xs.max()),
    }
    out.update({_pkey(p): float(v) for p, v in zip(ps, pct)})
    return out


def probability_within(values: Any, limit: float) -> float:
    """Fraction of draws that finish at or below `limit`."""

    xs = np.asarray(values, dtype=np.float64)
    if xs.size == 0:
        return math.nan
    return float(np.count_nonzero(xs <= limit) / xs.size)


def critical_path_counts(result: SimulationResult) -> dict[str, int]:
    """Count draws per distinct critical path, e.g. {"T1>T3>T4": 61234}."""

    n_tasks = len(result.task_ids)
    if result.runs == 0 or n_tasks == 0:
        return {}

    # One row of packed flags per draw; identical rows are identical paths.
    packed = np.packbits(result.critical, axis=0).T
    rows, counts = np.unique(packed, axis=0, return_counts=True)

    out: dict[str, int] = {}
    for packed_row, count in zip(rows, counts):
        flags = np.unpackbits(packed_row, count=n_tasks).astype(bool)
        path = ">".join(tid for tid, on in zip(result.task_ids, flags) if on)
        out[path] = int(count)
    return out


def task_criticality(result: SimulationResult) -> dict[str, float]:
    if result.runs == 0:
        return {tid: math.nan for tid in result.task_ids}
    frac = result.critical.mean(axis=1)
    return {tid: float(f) for tid, f in zip(result.task_ids, frac)}


def summarize(
    result: SimulationResult,
    *,
    percentiles: Sequence[float] = DEFAULT_PERCENTILES,
    top_n: int = TOP_CRITICAL_PATHS,
) -> dict[str, Any]:
    counts = critical_path_counts(result)
    return {
        "runs": result.runs,
        "seed": result.seed,
        "tasks": list(result.task_ids),
        "duration_days": describe(result.duration, percentiles),
        "cost": describe(result.cost, percentiles),
        "critical_path": {
            "top_paths": [
                {"tasks": path, "count": counts[path]}
                for path in sorted(counts, key=lambda p: (-counts[p], p))[:top_n]
            ],
            "task_criticality": task_criticality(result),
        },
    }


def freedman_diaconis_bins(values: Any) -> list[HistogramBin]:
    """Histogram bins with Freedman-Diaconis width.

    A single [min, max] bin is returned when no positive width can be derived
    (constant input or zero IQR).
    """

    xs = _finite(values)
    if xs.size == 0:
        return []
    lo = float(xs.min())
    hi = float(xs.max())
    span = hi - lo
    if xs.size == 1 or span <= 0:
        return [HistogramBin(lo=lo, hi=hi, count=int(xs.size))]

    q1, q3 = np.percentile(xs, [25.0, 75.0])
    iqr = float(q3 - q1)
    if iqr <= 0:
        return [HistogramBin(lo=lo, hi=hi, count=int(xs.size))]

    width = (2.0 * iqr) / (xs.size ** (1.0 / 3.0))
    bin_count = max(1, int(math.ceil(span / width)))
    # Recompute width so the last edge lands exactly on the max.
    width = span / bin_count

    idx = np.clip(((xs - lo) / width).astype(np.int64), 0, bin_count - 1)
    counts = np.bincount(idx, minlength=bin_count)
    return [
        HistogramBin(lo=lo + i * width, hi=lo + (i + 1) * width, count=int(c))
        for i, c in enumerate(counts)
    ]
