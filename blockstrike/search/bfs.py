from __future__ import annotations
from collections import deque
from time import perf_counter
from typing import Dict, List, NamedTuple, Optional, Sequence, Set, Tuple

import structlog

from blockstrike.domains.units import Units
from blockstrike.search.graph import TransitionGraph

log = structlog.get_logger()


class Step(NamedTuple):
    units: Units
    hit: int  # move taken leaving `units`; 0 on the last step


def _result(path, expanded, generated, t0, termination, algorithm="BFS"):
    log.debug("search finished", algorithm=algorithm, termination=termination,
              expanded=expanded, generated=generated)
    return {"path": path, "g": len(path) - 1 if path else None,
            "expanded": expanded, "generated": generated,
            "time": perf_counter() - t0, "algorithm": algorithm, "termination": termination}


def find_path(graph: TransitionGraph, begin: Units, ends: Sequence[Units],
              timeout_sec: float | None = None):
    """Shortest strike sequence from begin to any of ends.

    Successors are expanded in ascending move id, so among equally short
    paths the one with the earliest moves wins.
    """
    t0 = perf_counter()
    expanded = generated = 0
    start = graph.index_of(begin)
    if start is None:
        return _result(None, expanded, generated, t0, "begin_not_enumerated")

    goals: Set[Units] = set(ends)
    parent: Dict[int, Optional[Tuple[int, int]]] = {start: None}
    q = deque([start])
    while q:
        if timeout_sec is not None and (perf_counter() - t0) >= timeout_sec:
            return _result(None, expanded, generated, t0, "timeout")
        i = q.popleft()
        if graph.units_at(i) in goals:
            return _result(reconstruct_path(graph, parent, i), expanded, generated, t0, "ok")
        expanded += 1
        for j, move in graph.neighbors(i):
            generated += 1
            if j in parent:
                continue
            parent[j] = (i, move)
            q.append(j)
    return _result(None, expanded, generated, t0, "exhausted")


def reconstruct_path(graph: TransitionGraph,
                     parent: Dict[int, Optional[Tuple[int, int]]], goal: int) -> List[Step]:
    path: List[Step] = [Step(graph.units_at(goal), 0)]
    link = parent[goal]
    while link is not None:
        i, move = link
        path.append(Step(graph.units_at(i), move))
        link = parent[i]
    path.reverse()
    return path
