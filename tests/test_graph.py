from __future__ import annotations

import pytest

from projectlab.graph import topological_order
from projectlab.model import ProjectModel, TaskDef, TriangleParams
from projectlab.validate import GraphError

_TRI = TriangleParams(min=1.0, mode=2.0, max=4.0)


def _model(edges: dict[str, tuple[str, ...]], **kw: object) -> ProjectModel:
    tasks = {
        tid: TaskDef(id=tid, duration=_TRI, cost_per_day=1.0, predecessors=preds)
        for tid, preds in edges.items()
    }
    return ProjectModel(tasks=tasks, **kw)  # type: ignore[arg-type]


def test_topological_order_respects_edges_and_declaration_order() -> None:
    # Declared successors-first; sources come out in declaration order.
    m = _model(
        {
            "T4": ("T3",),
            "T3": ("T1", "T2"),
            "T2": (),
            "T1": (),
        }
    )
    assert topological_order(m) == ("T2", "T1", "T3", "T4")


def test_duplicate_predecessors_do_not_block_release() -> None:
    m = _model({"a": (), "b": ("a", "a")})
    assert topological_order(m) == ("a", "b")


def test_two_task_cycle_reports_members() -> None:
    m = _model({"T1": ("T2",), "T2": ("T1",)})
    with pytest.raises(GraphError, match="cycle detected") as exc:
        topological_order(m)
    msg = str(exc.value)
    assert "T1" in msg and "T2" in msg
    assert exc.value.task_id in ("T1", "T2")


def test_cycle_behind_acyclic_prefix_is_found() -> None:
    m = _model({"start": (), "x": ("start", "z"), "y": ("x",), "z": ("y",)})
    with pytest.raises(GraphError) as exc:
        topological_order(m)
    msg = str(exc.value)
    assert "start" not in msg
    for tid in ("x", "y", "z"):
        assert tid in msg


def test_resolved_terminals_default_to_sinks() -> None:
    m = _model({"a": (), "b": ("a",), "c": ("a",)})
    assert m.resolved_terminals() == ("b", "c")
    m2 = _model({"a": (), "b": ("a",), "c": ("a",)}, terminal_tasks=("b",))
    assert m2.resolved_terminals() == ("b",)
