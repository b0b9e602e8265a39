from __future__ import annotations

from pathlib import Path

import numpy as np

from projectlab.executors import ThreadedExecutor
from projectlab.io import load_model
from projectlab.sim import simulate_project
from projectlab.validate import validate_model

EXAMPLE = Path(__file__).resolve().parents[1] / "examples" / "four_task_project.json"


def test_simulation_is_deterministic_for_seed() -> None:
    model = load_model(EXAMPLE)
    validate_model(model)

    r1 = simulate_project(model, 10_000, seed=123)
    r2 = simulate_project(model, 10_000, seed=123)

    assert r1.task_ids == r2.task_ids
    assert np.array_equal(r1.task_durations, r2.task_durations)
    assert np.array_equal(r1.duration, r2.duration)
    assert np.array_equal(r1.cost, r2.cost)


def test_example_results_do_not_depend_on_the_executor() -> None:
    model = load_model(EXAMPLE)
    default = simulate_project(model, 5_000, seed=77)
    threaded = simulate_project(model, 5_000, seed=77, executor=ThreadedExecutor())
    assert np.array_equal(default.duration, threaded.duration)
    assert np.array_equal(default.cost, threaded.cost)
