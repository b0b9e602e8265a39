from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class SimulationResult:
    duration: np.ndarray  # project duration per draw
    cost: np.ndarray  # project cost per draw
    task_ids: tuple[str, ...]  # topological evaluation order
    task_durations: np.ndarray  # (tasks, runs), rows aligned with task_ids
    finish_times: np.ndarray  # (tasks, runs)
    critical: np.ndarray  # (tasks, runs) bool, task on the draw's critical path
    runs: int
    seed: int | None

    def _row(self, task_id: str) -> int:
        try:
            return self.task_ids.index(task_id)
        except ValueError:
            raise KeyError(f"unknown task '{task_id}'") from None

    def task_batch(self, task_id: str) -> np.ndarray:
        return self.task_durations[self._row(task_id)]

    def finish_batch(self, task_id: str) -> np.ndarray:
        return self.finish_times[self._row(task_id)]
