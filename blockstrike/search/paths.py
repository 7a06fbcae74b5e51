from __future__ import annotations
from time import perf_counter
from typing import List, Sequence, Tuple

from blockstrike.domains.units import Units
from blockstrike.search.bfs import Step, _result
from blockstrike.search.graph import TransitionGraph


def path_search(graph: TransitionGraph, begin: Units, ends: Sequence[Units],
                timeout_sec: float | None = None):
    """
    Generation-by-generation search that carries whole paths.
    Cycle avoidance is per path: a path never revisits its own nodes, but
    different paths may share nodes. Memory grows with branching ** depth;
    use find_path for anything but cross-checking on small graphs.
    """
    t0 = perf_counter()
    expanded = generated = 0
    start = graph.index_of(begin)
    if start is None:
        return _result(None, expanded, generated, t0, "begin_not_enumerated", "PATHS")

    goals = set(ends)
    # each path is a list of [node, move-taken-leaving-node]
    paths: List[List[Tuple[int, int]]] = [[(start, 0)]]
    while paths:
        next_paths: List[List[Tuple[int, int]]] = []
        for path in paths:
            if timeout_sec is not None and (perf_counter() - t0) >= timeout_sec:
                return _result(None, expanded, generated, t0, "timeout", "PATHS")
            last, _ = path[-1]
            if graph.units_at(last) in goals:
                steps = [Step(graph.units_at(i), hit) for i, hit in path]
                return _result(steps, expanded, generated, t0, "ok", "PATHS")
            expanded += 1
            on_path = {i for i, _ in path}
            for j, move in graph.neighbors(last):
                if j in on_path:
                    continue
                generated += 1
                next_paths.append(path[:-1] + [(last, move), (j, 0)])
        paths = next_paths
    return _result(None, expanded, generated, t0, "exhausted", "PATHS")
