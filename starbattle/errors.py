"""
Errors raised while loading, modelling and solving a Star Battle puzzle.
"""


class StarBattleError(Exception):
    """Base class for every failure the solver reports."""


class PuzzleSourceError(StarBattleError):
    """The puzzle description could not be read or fetched."""


class MalformedPuzzleError(StarBattleError, ValueError):
    """
    The puzzle description is structurally invalid: the cell count is not a
    perfect square, an encoding could not be decoded, or the walls do not
    partition the grid into exactly one region per row.
    """


class SolveError(StarBattleError):
    """The constraint engine did not produce a solution."""


class UnsatisfiablePuzzleError(SolveError):
    """No star placement satisfies the puzzle's rules."""

    def __init__(self, size, stars):
        super().__init__(f"No valid placement of {stars} star(s) per row, column and region exists for this {size}x{size} puzzle.")
        self.size = size
        self.stars = stars


class IndeterminateSolveError(SolveError):
    """The engine gave up without deciding (e.g. it ran out of time)."""

    def __init__(self, reason):
        super().__init__(f"Solver could not decide the puzzle: {reason}")
        self.reason = reason
