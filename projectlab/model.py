from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np


@dataclass(frozen=True)
class TriangleParams:
    min: float
    mode: float
    max: float

    @property
    def mean(self) -> float:
        return (self.min + self.mode + self.max) / 3.0

    @property
    def mode_cdf(self) -> float:
        """CDF value at the mode, Fc = (c - a) / (b - a)."""

        return (self.mode - self.min) / (self.max - self.min)

    def cdf(self, x: Any) -> np.ndarray:
        """Closed-form triangular CDF, evaluated element-wise."""

        a, c, b = self.min, self.mode, self.max
        x = np.asarray(x, dtype=np.float64)
        lower = (x - a) ** 2 / ((b - a) * (c - a))
        upper = 1.0 - (b - x) ** 2 / ((b - a) * (b - c))
        out = np.where(x <= c, lower, upper)
        out = np.where(x <= a, 0.0, out)
        return np.where(x >= b, 1.0, out)

    @staticmethod
    def from_json(obj: Any) -> "TriangleParams":
        if not isinstance(obj, dict):
            raise TypeError("duration_days must be an object with min/mode/max")
        if "mode" in obj:
            mode = obj["mode"]
        elif "likely" in obj:
            mode = obj["likely"]
        else:
            raise KeyError("duration_days requires 'mode' (or 'likely')")
        return TriangleParams(
            min=float(obj["min"]),
            mode=float(mode),
            max=float(obj["max"]),
        )


@dataclass(frozen=True)
class TaskDef:
    id: str
    duration: TriangleParams
    cost_per_day: float = 0.0
    predecessors: tuple[str, ...] = ()


_VERSION_KEYS = ("schema_version", "version", "model_version")


def _parse_version(obj: dict[str, Any]) -> int:
    for key in _VERSION_KEYS:
        if key in obj:
            return int(obj[key])
    raise ValueError(
        "model is missing 'schema_version' "
        "(also accepted: 'version', 'model_version')"
    )


@dataclass(frozen=True)
class ProjectModel:
    tasks: dict[str, TaskDef]
    overhead_cost_per_day: float = 0.0
    # Empty means: every sink task is terminal.
    terminal_tasks: tuple[str, ...] = ()
    version: int = 1
    name: str | None = field(default=None, compare=False)

    @property
    def task_ids(self) -> tuple[str, ...]:
        return tuple(self.tasks)

    def successors(self) -> dict[str, tuple[str, ...]]:
        succ: dict[str, list[str]] = {tid: [] for tid in self.tasks}
        for tid, task in self.tasks.items():
            for pred in task.predecessors:
                if pred in succ:
                    succ[pred].append(tid)
        return {tid: tuple(v) for tid, v in succ.items()}

    def resolved_terminals(self) -> tuple[str, ...]:
        if self.terminal_tasks:
            return self.terminal_tasks
        succ = self.successors()
        return tuple(tid for tid in self.tasks if not succ[tid])

    @staticmethod
    def from_json(obj: dict[str, Any]) -> "ProjectModel":
        version = _parse_version(obj)

        raw_tasks = obj.get("tasks", {})
        if not isinstance(raw_tasks, dict):
            raise TypeError("tasks must be an object keyed by task id")

        tasks: dict[str, TaskDef] = {}
        for name, t in raw_tasks.items():
            tid = str(name)
            if not isinstance(t, dict):
                raise TypeError(f"task '{tid}' must be an object")
            after = t.get("after", [])
            if isinstance(after, str) or not isinstance(after, (list, tuple)):
                raise TypeError(f"task '{tid}' 'after' must be a list of task ids")
            tasks[tid] = TaskDef(
                id=tid,
                duration=TriangleParams.from_json(t["duration_days"]),
                cost_per_day=float(t.get("cost_per_day", 0.0)),
                predecessors=tuple(str(p) for p in after),
            )

        terminals = obj.get("terminal_tasks", [])
        if isinstance(terminals, str):
            terminals = [terminals]

        name = obj.get("name")
        return ProjectModel(
            tasks=tasks,
            overhead_cost_per_day=float(obj.get("overhead_cost_per_day", 0.0)),
            terminal_tasks=tuple(str(x) for x in terminals),
            version=version,
            name=str(name) if name is not None else None,
        )
