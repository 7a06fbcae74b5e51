class PuzzleError(RuntimeError):
    pass


class StateOutOfRange(PuzzleError, ValueError):
    """A unit state is not an integer in [0, max_state)."""


class MissingMoveRule(PuzzleError, KeyError):
    """The move-rule table has no entry for a move id in [0, N)."""

    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ""


class IndexOutOfRange(PuzzleError, IndexError):
    """A unit index is not in [0, N)."""


class EnumerationBoundExceeded(PuzzleError):
    """Stepping from the begin bound never reached the end bound."""


class AmbiguousMoveRule(PuzzleError):
    """One move leads from the same configuration to two different ones."""


class GraphNotLinked(PuzzleError):
    """The graph was searched before link_all ran."""
