from __future__ import annotations

import heapq

from projectlab.model import ProjectModel
from projectlab.validate import GraphError


def _find_cycle(model: ProjectModel, remaining: set[str]) -> list[str]:
    # Every remaining task still has a remaining predecessor, so walking
    # predecessors must revisit a task.
    start = next(tid for tid in model.tasks if tid in remaining)
    seen: dict[str, int] = {}
    path: list[str] = []
    cur = start
    while cur not in seen:
        seen[cur] = len(path)
        path.append(cur)
        cur = next(p for p in model.tasks[cur].predecessors if p in remaining)
    cycle = path[seen[cur] :]
    cycle.reverse()
    return cycle


def topological_order(model: ProjectModel) -> tuple[str, ...]:
    """Kahn's algorithm; ready tasks are released in declaration order."""

    index = {tid: i for i, tid in enumerate(model.tasks)}
    indegree = {
        tid: sum(1 for p in task.predecessors if p in index)
        for tid, task in model.tasks.items()
    }
    succ = model.successors()

    ready = [index[tid] for tid, d in indegree.items() if d == 0]
    heapq.heapify(ready)
    order: list[str] = []
    ids = list(model.tasks)
    while ready:
        tid = ids[heapq.heappop(ready)]
        order.append(tid)
        for s in succ[tid]:
            indegree[s] -= 1
            if indegree[s] == 0:
                heapq.heappush(ready, index[s])

    if len(order) != len(model.tasks):
        remaining = set(model.tasks) - set(order)
        cycle = _find_cycle(model, remaining)
        raise GraphError(
            "cycle detected: " + " -> ".join([*cycle, cycle[0]]),
            task_id=cycle[0],
            parameter="after",
        )
    return tuple(order)
