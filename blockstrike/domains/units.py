from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from blockstrike.domains.rules import MoveRules
from blockstrike.errors import IndexOutOfRange, StateOutOfRange

State = Tuple[int, ...]


@dataclass(frozen=True)
class Units:
    """A row of N blocks, each showing a state in [0, max_state).

    Values are immutable: every operation that changes a state returns a new
    Units sharing the same max_state.
    """
    states: State
    max_state: int

    def __post_init__(self):
        if self.max_state < 1:
            raise StateOutOfRange(f"max_state must be positive, got {self.max_state}")
        for idx, s in enumerate(self.states):
            if isinstance(s, bool) or not isinstance(s, int):
                raise StateOutOfRange(f"state {s!r} of unit {idx} is not an integer")
            if not 0 <= s < self.max_state:
                raise StateOutOfRange(
                    f"state {s} of unit {idx} is not in [0, {self.max_state})")

    # ---------- construction ----------
    @classmethod
    def zeros(cls, count: int, max_state: int) -> "Units":
        return cls((0,) * count, max_state)

    @classmethod
    def from_states(cls, values: Iterable[int], max_state: int) -> "Units":
        return cls(tuple(values), max_state)

    def __len__(self) -> int:
        return len(self.states)

    def __repr__(self) -> str:
        return f"Units({list(self.states)}, max_state={self.max_state})"

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.states):
            raise IndexOutOfRange(f"unit index {index} is not in [0, {len(self.states)})")

    # ---------- accessors ----------
    def get_state(self, index: int) -> int:
        self._check_index(index)
        return self.states[index]

    def set_state(self, index: int, state: int) -> "Units":
        self._check_index(index)
        if not 0 <= state < self.max_state:
            raise StateOutOfRange(f"state {state} is not in [0, {self.max_state})")
        lst = list(self.states)
        lst[index] = state
        return Units(tuple(lst), self.max_state)

    # ---------- canonical order ----------
    def successor(self) -> "Units":
        """Next configuration in odometer order, unit 0 least significant.

        The last unit wraps without carrying, so the successor of the
        all-(max_state - 1) vector is the all-zero vector.
        """
        lst = list(self.states)
        if not lst:
            return self
        lst[0] += 1
        count = len(lst)
        for i in range(count):
            if lst[i] >= self.max_state:
                lst[i] = 0
                if i + 1 < count:
                    lst[i + 1] += 1
        return Units(tuple(lst), self.max_state)

    # ---------- moves ----------
    def attack(self, indices: Iterable[int]) -> "Units":
        """Strike the given units: each state goes up by one, wrapping at max_state."""
        lst = list(self.states)
        for i in indices:
            self._check_index(i)
            lst[i] = (lst[i] + 1) % self.max_state
        return Units(tuple(lst), self.max_state)

    def find_attack_index(self, other: "Units", rules: MoveRules) -> Optional[int]:
        """Lowest move id that turns self into other in one strike, or None."""
        if len(other) != len(self) or other.max_state != self.max_state:
            return None
        struck: List[int] = []
        for i, (a, b) in enumerate(zip(self.states, other.states)):
            d = (b - a) % self.max_state
            if d == 1:
                struck.append(i)
            elif d != 0:
                return None
        return rules.move_for(frozenset(struck), len(self))
