"""Monte Carlo estimation of project duration and cost.

Task durations are triangular random variables; they are propagated through a
precedence graph vector-wise, one column per simulated project.

Run from source:

    python -m projectlab simulate --model examples/four_task_project.json \
        --runs 100000 --seed 1 --out-summary out/summary.json
"""

from __future__ import annotations

from projectlab.model import ProjectModel, TaskDef, TriangleParams
from projectlab.sampling import sample_triangular
from projectlab.sim import simulate_project
from projectlab.types import SimulationResult
from projectlab.validate import (
    GraphError,
    InvalidArgument,
    InvalidParameters,
    ModelValidationError,
)

__all__ = [
    "GraphError",
    "InvalidArgument",
    "InvalidParameters",
    "ModelValidationError",
    "ProjectModel",
    "SimulationResult",
    "TaskDef",
    "TriangleParams",
    "__version__",
    "sample_triangular",
    "simulate_project",
]

__version__ = "0.1.0"
