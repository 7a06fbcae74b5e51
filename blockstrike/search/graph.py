from __future__ import annotations
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, List, Optional, Tuple

import structlog

from blockstrike.domains.rules import MoveRules
from blockstrike.domains.units import Units
from blockstrike.errors import AmbiguousMoveRule, EnumerationBoundExceeded, GraphNotLinked

log = structlog.get_logger()


@dataclass
class Node:
    idx: int
    next_idx: List[Optional[int]] = field(default_factory=list)

    def set_next(self, move: int, idx: int) -> None:
        current = self.next_idx[move]
        if current is not None and current != idx:
            raise AmbiguousMoveRule(
                f"move {move} from node {self.idx} leads to both node {current} and node {idx}")
        self.next_idx[move] = idx


def enumerate_units(begin: Units, end: Units, max_steps: Optional[int] = None) -> List[Units]:
    """Every configuration from begin to end (inclusive) in odometer order.

    max_steps defaults to max_state ** N, the size of the whole space; not
    reaching `end` within it raises EnumerationBoundExceeded.
    """
    if len(begin) != len(end) or begin.max_state != end.max_state:
        raise ValueError(f"bounds differ in shape: {begin!r} vs {end!r}")
    if max_steps is None:
        max_steps = begin.max_state ** len(begin)
    out: List[Units] = []
    units = begin
    while True:
        out.append(units)
        if units == end:
            return out
        if len(out) >= max_steps:
            raise EnumerationBoundExceeded(
                f"{list(end.states)} not reached from {list(begin.states)} in {max_steps} steps")
        units = units.successor()


class TransitionGraph:
    """Move-labelled graph over a contiguous run of the canonical order.

    Linking compares every ordered pair of nodes, so building costs
    O(K^2 * N) for K nodes; keep max_state ** N small (a few thousand).
    """
    def __init__(self, begin: Units, end: Units, max_steps: Optional[int] = None):
        t0 = perf_counter()
        self.units_queue: List[Units] = enumerate_units(begin, end, max_steps)
        self._index: Dict[Units, int] = {u: i for i, u in enumerate(self.units_queue)}
        self.graphics: List[Node] = []
        self.enumerate_time = perf_counter() - t0
        self.link_time = 0.0
        log.debug("enumerated", nodes=len(self.units_queue), time=self.enumerate_time)

    @classmethod
    def build(cls, begin: Units, end: Units, rules: MoveRules,
              max_steps: Optional[int] = None) -> "TransitionGraph":
        g = cls(begin, end, max_steps)
        g.link_all(rules)
        return g

    @classmethod
    def full(cls, number: int, max_state: int, rules: MoveRules) -> "TransitionGraph":
        """Graph over the whole space: all-zero up to all-(max_state - 1)."""
        zero = Units.zeros(number, max_state)
        top = Units.from_states([max_state - 1] * number, max_state)
        return cls.build(zero, top, rules)

    # ---------- linking ----------
    def link_all(self, rules: MoveRules) -> None:
        t0 = perf_counter()
        moves = len(self.units_queue[0])
        self.graphics = [Node(idx, [None] * moves) for idx in range(len(self.units_queue))]
        count = len(self.graphics)
        for i in range(count):
            i_units = self.units_queue[i]
            for j in range(count):
                if j == i:
                    continue
                hit = i_units.find_attack_index(self.units_queue[j], rules)
                if hit is not None:
                    self.graphics[i].set_next(hit, j)
        self.link_time = perf_counter() - t0
        log.debug("linked", nodes=count, edges=self.edge_count, time=self.link_time)

    # ---------- queries ----------
    def __len__(self) -> int:
        return len(self.units_queue)

    def index_of(self, units: Units) -> Optional[int]:
        return self._index.get(units)

    def units_at(self, index: int) -> Units:
        return self.units_queue[index]

    def neighbors(self, index: int) -> List[Tuple[int, int]]:
        """Return list of (next_index, move) in ascending move id."""
        if not self.graphics:
            raise GraphNotLinked("call link_all(rules) before searching the graph")
        return [(j, m) for m, j in enumerate(self.graphics[index].next_idx) if j is not None]

    def edges(self) -> List[Tuple[int, int, int]]:
        return [(node.idx, m, j) for node in self.graphics
                for m, j in enumerate(node.next_idx) if j is not None]

    @property
    def edge_count(self) -> int:
        return sum(1 for node in self.graphics for j in node.next_idx if j is not None)

    def describe(self) -> str:
        lines = []
        for node in self.graphics:
            links = list(node.next_idx)
            lines.append(f"NODE[{node.idx}] = {list(self.units_queue[node.idx].states)} --> link to {links}")
        return "\n".join(lines)
