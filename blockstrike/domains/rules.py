from __future__ import annotations
from typing import Dict, FrozenSet, Iterable, Iterator, Mapping, Optional

from blockstrike.errors import IndexOutOfRange, MissingMoveRule


class MoveRules:
    """Which units each move strikes.

    Move ids and unit indices both live in [0, number). The table is checked
    when it is built: every move id needs an entry (an empty one is fine) and
    every struck index must name a unit.
    """
    def __init__(self, number: int, table: Mapping[int, Iterable[int]]):
        if number < 1:
            raise ValueError(f"unit count must be positive, got {number}")
        self.number = number
        extra = sorted(k for k in table if not 0 <= k < number)
        if extra:
            raise IndexOutOfRange(f"move ids {extra} are not in [0, {number})")
        missing = [m for m in range(number) if m not in table]
        if missing:
            raise MissingMoveRule(f"no rule for move ids {missing}")

        self._table: Dict[int, FrozenSet[int]] = {}
        for m in range(number):
            struck = frozenset(table[m])
            bad = sorted(i for i in struck if not 0 <= i < number)
            if bad:
                raise IndexOutOfRange(
                    f"move {m} strikes units {bad}, not in [0, {number})")
            self._table[m] = struck

        # lowest id wins when two moves strike the same units
        self._by_struck: Dict[FrozenSet[int], int] = {}
        for m in range(number):
            self._by_struck.setdefault(self._table[m], m)

    def __getitem__(self, move: int) -> FrozenSet[int]:
        try:
            return self._table[move]
        except KeyError:
            raise MissingMoveRule(f"no rule for move id {move}") from None

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.number))

    def __len__(self) -> int:
        return self.number

    def __eq__(self, other) -> bool:
        if not isinstance(other, MoveRules):
            return NotImplemented
        return self._table == other._table

    def __repr__(self) -> str:
        body = ", ".join(f"{m}: {sorted(s)}" for m, s in self._table.items())
        return f"MoveRules({{{body}}})"

    def move_for(self, struck: FrozenSet[int], number: Optional[int] = None) -> Optional[int]:
        """Lowest move id striking exactly `struck`, or None.

        `number` is the vector length asking; every id below it must have a
        rule.
        """
        if number is not None and number > self.number:
            raise MissingMoveRule(f"no rule for move ids {list(range(self.number, number))}")
        if number is None or number == self.number:
            return self._by_struck.get(struck)
        return next((m for m in range(number) if self._table[m] == struck), None)
