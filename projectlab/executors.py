from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Protocol, Sequence

import numpy as np

from projectlab.config import PARALLEL_TASK_THRESHOLD
from projectlab.model import ProjectModel, TaskDef
from projectlab.sampling import sample_task


class BatchExecutor(Protocol):
    def sample_batches(
        self,
        *,
        tasks: Sequence[TaskDef],
        runs: int,
        streams: Sequence[np.random.SeedSequence],
    ) -> list[np.ndarray]:
        raise NotImplementedError


def _sample_one(task: TaskDef, runs: int, stream: np.random.SeedSequence) -> np.ndarray:
    rng = np.random.default_rng(stream)
    return sample_task(task.duration, runs, rng, task_id=task.id)


@dataclass(frozen=True)
class SerialExecutor:
    def sample_batches(
        self,
        *,
        tasks: Sequence[TaskDef],
        runs: int,
        streams: Sequence[np.random.SeedSequence],
    ) -> list[np.ndarray]:
        return [_sample_one(t, runs, s) for t, s in zip(tasks, streams, strict=True)]


@dataclass(frozen=True)
class ThreadedExecutor:
    # Each task owns its stream and output array, so workers share nothing.
    max_workers: int | None = None

    def sample_batches(
        self,
        *,
        tasks: Sequence[TaskDef],
        runs: int,
        streams: Sequence[np.random.SeedSequence],
    ) -> list[np.ndarray]:
        if len(tasks) != len(streams):
            raise ValueError("tasks and streams must have the same length")
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            futures = [
                pool.submit(_sample_one, t, runs, s) for t, s in zip(tasks, streams)
            ]
            return [f.result() for f in futures]


def default_executor_for_model(model: ProjectModel) -> BatchExecutor:
    if len(model.tasks) >= PARALLEL_TASK_THRESHOLD:
        return ThreadedExecutor()
    return SerialExecutor()
