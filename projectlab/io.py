from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any

from projectlab.model import ProjectModel
from projectlab.types import SimulationResult


def load_model(path: Path) -> ProjectModel:
    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return ProjectModel.from_json(raw)


def write_summary_json(path: Path, summary: dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")


def write_samples_csv(path: Path, result: SimulationResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["draw", "duration_days", "cost"])
        for i, (d, c) in enumerate(zip(result.duration.tolist(), result.cost.tolist())):
            w.writerow([i, repr(d), repr(c)])


def write_tasks_csv(path: Path, result: SimulationResult) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["draw", *result.task_ids])
        columns = result.task_durations.T.tolist()
        for i, row in enumerate(columns):
            w.writerow([i, *(repr(x) for x in row)])
