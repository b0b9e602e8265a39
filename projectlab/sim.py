from __future__ import annotations

# Public simulation entrypoint.
#
# Every array below has one column per simulated draw; column k of every row
# belongs to the same simulated project. Rows are filled in topological order
# so a task's predecessors are always complete before it is evaluated.

import logging
import time

import numpy as np

from projectlab.executors import BatchExecutor, default_executor_for_model
from projectlab.graph import topological_order
from projectlab.model import ProjectModel
from projectlab.types import SimulationResult
from projectlab.validate import (
    validate_cost_rate,
    validate_model,
    validate_run_count,
    validate_seed,
)

logger = logging.getLogger(__name__)


def _unique_predecessors(model: ProjectModel, task_id: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(model.tasks[task_id].predecessors))


def _task_streams(
    model: ProjectModel, seed: int | None
) -> tuple[np.random.SeedSequence, list[np.random.SeedSequence]]:
    # One child stream per task, keyed by declaration order.
    root = np.random.SeedSequence(seed)
    return root, root.spawn(len(model.tasks))


def _mark_critical(
    *,
    model: ProjectModel,
    order: tuple[str, ...],
    row: dict[str, int],
    drivers: dict[str, np.ndarray | None],
    critical: np.ndarray,
) -> None:
    # Reverse topological order: a task's mask is complete before it is
    # pushed onto its driving predecessor.
    for tid in reversed(order):
        preds = _unique_predecessors(model, tid)
        if not preds:
            continue
        mask = critical[row[tid]]
        idx = drivers[tid]
        if idx is None:
            critical[row[preds[0]]] |= mask
            continue
        for j, pred in enumerate(preds):
            critical[row[pred]] |= mask & (idx == j)


def simulate_project(
    model: ProjectModel,
    runs: int,
    *,
    seed: int | None = None,
    overhead_cost_per_day: float | None = None,
    executor: BatchExecutor | None = None,
) -> SimulationResult:
    """Simulate `runs` independent realisations of the project.

    Args:
        model: Task graph with triangle parameters and cost rates.
        runs: Number of draws (the length of every output batch).
        seed: Root seed. The same seed and model give bit-identical output.
        overhead_cost_per_day: Overrides `model.overhead_cost_per_day`.
        executor: Strategy for sampling the per-task batches.

    Raises:
        InvalidArgument: bad `runs`, a negative seed or a negative cost rate.
        InvalidParameters: a task's triangle is not min < mode < max.
        GraphError: cycle, unknown predecessor or unknown terminal task.
    """

    runs = validate_run_count(runs)
    validate_seed(seed)
    validate_model(model)
    overhead = (
        model.overhead_cost_per_day
        if overhead_cost_per_day is None
        else float(overhead_cost_per_day)
    )
    validate_cost_rate(overhead, task_id=None, parameter="overhead_cost_per_day")

    order = topological_order(model)
    row = {tid: i for i, tid in enumerate(order)}
    terminals = model.resolved_terminals()
    if executor is None:
        executor = default_executor_for_model(model)

    root, streams = _task_streams(model, seed)
    logger.debug(
        "simulating %d tasks x %d runs (terminals=%s, executor=%s)",
        len(order),
        runs,
        ",".join(terminals),
        type(executor).__name__,
    )
    t0 = time.perf_counter()

    batches = executor.sample_batches(
        tasks=list(model.tasks.values()), runs=runs, streams=streams
    )
    by_id = dict(zip(model.tasks, batches))

    n_tasks = len(order)
    durations = np.empty((n_tasks, runs), dtype=np.float64)
    finish = np.empty((n_tasks, runs), dtype=np.float64)
    drivers: dict[str, np.ndarray | None] = {}

    for tid in order:
        r = row[tid]
        dur = by_id[tid]
        durations[r] = dur
        preds = _unique_predecessors(model, tid)
        drivers[tid] = None
        if not preds:
            finish[r] = dur
        elif len(preds) == 1:
            finish[r] = finish[row[preds[0]]] + dur
        else:
            stacked = finish[[row[p] for p in preds]]
            idx = np.argmax(stacked, axis=0)
            start = np.take_along_axis(stacked, idx[np.newaxis, :], axis=0)[0]
            finish[r] = start + dur
            drivers[tid] = idx

    critical = np.zeros((n_tasks, runs), dtype=bool)
    if len(terminals) == 1:
        duration = finish[row[terminals[0]]].copy()
        critical[row[terminals[0]]] = True
    else:
        stacked = finish[[row[t] for t in terminals]]
        term_idx = np.argmax(stacked, axis=0)
        duration = np.take_along_axis(stacked, term_idx[np.newaxis, :], axis=0)[0]
        for j, term in enumerate(terminals):
            critical[row[term]] |= term_idx == j

    _mark_critical(
        model=model, order=order, row=row, drivers=drivers, critical=critical
    )

    # Declaration order, then overhead on elapsed time.
    cost = np.zeros(runs, dtype=np.float64)
    for tid, task in model.tasks.items():
        cost += by_id[tid] * task.cost_per_day
    cost += duration * overhead

    for arr in (duration, cost, durations, finish, critical):
        arr.setflags(write=False)

    logger.info(
        "simulated %d runs of %d tasks in %.3fs",
        runs,
        n_tasks,
        time.perf_counter() - t0,
    )

    return SimulationResult(
        duration=duration,
        cost=cost,
        task_ids=order,
        task_durations=durations,
        finish_times=finish,
        critical=critical,
        runs=runs,
        seed=seed if seed is not None else int(root.entropy),
    )
