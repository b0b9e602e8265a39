from __future__ import annotations

import math
import numbers
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:  # pragma: no cover
    from projectlab.model import ProjectModel, TriangleParams


class ModelValidationError(ValueError):
    def __init__(
        self,
        message: str,
        *,
        task_id: str | None = None,
        parameter: str | None = None,
    ) -> None:
        super().__init__(message)
        self.task_id = task_id
        self.parameter = parameter


class InvalidParameters(ModelValidationError):
    """Triangle parameters that do not satisfy min < mode < max."""


class InvalidArgument(ModelValidationError):
    """Bad run argument such as a sample count, seed, cost rate or uniform value."""


class GraphError(ModelValidationError):
    """Cycle, dangling reference or empty task graph."""


SUPPORTED_VERSIONS = (1,)


def _where(task_id: str | None) -> str:
    return f"task '{task_id}'" if task_id is not None else "triangle"


def validate_run_count(n: object) -> int:
    # bool is an int subclass; reject it explicitly.
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidArgument(
            f"sample count must be a positive integer (got {n!r})", parameter="n"
        )
    if n <= 0:
        raise InvalidArgument(
            f"sample count must be a positive integer (got {n})", parameter="n"
        )
    return int(n)


def validate_seed(seed: object) -> None:
    if seed is None or isinstance(seed, np.random.SeedSequence):
        return
    if isinstance(seed, bool) or not isinstance(seed, numbers.Integral) or seed < 0:
        raise InvalidArgument(
            f"seed must be a non-negative integer (got {seed!r})", parameter="seed"
        )


def validate_cost_rate(rate: float, *, task_id: str | None, parameter: str) -> None:
    if not math.isfinite(rate) or rate < 0:
        owner = f"task '{task_id}'" if task_id is not None else "project"
        raise InvalidArgument(
            f"{owner} {parameter} must be a finite number >= 0 (got {rate})",
            task_id=task_id,
            parameter=parameter,
        )


def validate_triangle(params: "TriangleParams", *, task_id: str | None = None) -> None:
    a, c, b = params.min, params.mode, params.max
    for name, v in (("min", a), ("mode", c), ("max", b)):
        if not math.isfinite(v):
            raise InvalidParameters(
                f"{_where(task_id)} duration {name} must be finite (got {v})",
                task_id=task_id,
                parameter=name,
            )
    if not math.isfinite(b - a):
        raise InvalidParameters(
            f"{_where(task_id)} duration range max - min overflows (got min={a}, max={b})",
            task_id=task_id,
            parameter="max",
        )
    if not a < c < b:
        raise InvalidParameters(
            (
                f"{_where(task_id)} duration must satisfy min < mode < max "
                f"(got min={a}, mode={c}, max={b})"
            ),
            task_id=task_id,
            parameter="mode" if a < b else "max",
        )


def validate_model(model: "ProjectModel") -> None:
    from projectlab.graph import topological_order

    if model.version not in SUPPORTED_VERSIONS:
        raise ModelValidationError(
            f"Unsupported model version: {model.version} (expected 1)"
        )

    if not model.tasks:
        raise GraphError("model must define at least one task")

    validate_cost_rate(
        model.overhead_cost_per_day, task_id=None, parameter="overhead_cost_per_day"
    )

    for task_id, task in model.tasks.items():
        if task.id != task_id:
            raise GraphError(
                f"task '{task_id}' is registered under a different id '{task.id}'",
                task_id=task_id,
            )
        validate_triangle(task.duration, task_id=task_id)
        validate_cost_rate(task.cost_per_day, task_id=task_id, parameter="cost_per_day")

        for pred in task.predecessors:
            if pred not in model.tasks:
                raise GraphError(
                    f"task '{task_id}' depends on unknown task '{pred}'",
                    task_id=task_id,
                    parameter="after",
                )
            if pred == task_id:
                raise GraphError(
                    f"cycle detected: task '{task_id}' depends on itself",
                    task_id=task_id,
                    parameter="after",
                )

    for term in model.terminal_tasks:
        if term not in model.tasks:
            raise GraphError(
                f"terminal_tasks references unknown task '{term}'",
                task_id=term,
                parameter="terminal_tasks",
            )

    # Raises GraphError on cycles.
    topological_order(model)
