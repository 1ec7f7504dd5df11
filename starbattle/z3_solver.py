"""**********************************************************************************
 * Title: z3_solver.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Translates the rules of Star Battle into constraints for the Z3 theorem
 * prover and reads the placement back out. One Boolean variable is declared
 * per cell; stars may not touch (pairwise Not-And over each adjacent pair,
 * looking only backwards in row-major order so each pair is asserted once),
 * and every row, column and region must hold exactly K stars (PbEq). The
 * star quota K depends only on the grid size.
 **********************************************************************************"""

# --- IMPORTS ---
import time
import logging

from z3 import Solver, Bool, PbEq, And, Not, is_true, sat, unsat

from starbattle.constants import STAR_QUOTA_THRESHOLDS, MAX_STAR_QUOTA
from starbattle.errors import MalformedPuzzleError, UnsatisfiablePuzzleError, IndeterminateSolveError


# --- HELPER FUNCTIONS ---
def format_duration(seconds):
    """
    Formats a time duration in seconds into a more human-readable string.

    :param float seconds: The duration in seconds to format.
    :returns: The formatted time string (e.g., "1.234 s", "5.67 ms", "1 min 30.00 s").
    :rtype: str
    """
    if seconds >= 60: return f"{int(seconds//60)} min {seconds%60:.2f} s"
    if seconds >= 1: return f"{seconds:.3f} s"
    return f"{seconds*1000:.2f} ms"


def star_quota(size):
    """
    Returns the number of stars required per row, column and region for a grid size.

    :param int size: The grid's side length.
    :rtype: int
    :raises MalformedPuzzleError: If ``size`` is not positive.
    """
    if size <= 0:
        raise MalformedPuzzleError(f"Grid size must be positive, got {size}.")
    for upper_bound, stars in STAR_QUOTA_THRESHOLDS:
        if size < upper_bound:
            return stars
    return MAX_STAR_QUOTA


def verify_solution(size, regions, solution, stars):
    """
    Checks a star placement against the puzzle rules without involving the solver.

    :param int size: The grid's side length.
    :param dict[int, list[int]] regions: Region cell indices, as from `build_regions`.
    :param list[list[bool]] solution: The placement to check.
    :param int stars: Required stars per row, column and region.
    :returns: A description of every violated rule; empty if the placement is valid.
    :rtype: list[str]
    """
    problems = []
    for r in range(size):
        count = sum(1 for c in range(size) if solution[r][c])
        if count != stars: problems.append(f"Row {r} has {count} star(s), expected {stars}.")
    for c in range(size):
        count = sum(1 for r in range(size) if solution[r][c])
        if count != stars: problems.append(f"Column {c} has {count} star(s), expected {stars}.")
    for region_id, cells in regions.items():
        count = sum(1 for idx in cells if solution[idx // size][idx % size])
        if count != stars: problems.append(f"Region {region_id} has {count} star(s), expected {stars}.")
    for r in range(size):
        for c in range(size):
            if not solution[r][c]: continue
            for nr, nc in ((r, c + 1), (r + 1, c - 1), (r + 1, c), (r + 1, c + 1)):
                if 0 <= nr < size and 0 <= nc < size and solution[nr][nc]:
                    problems.append(f"Stars at ({r}, {c}) and ({nr}, {nc}) are adjacent.")
    return problems


# --- MODEL CLASS ---
class StarBattleModel:
    """The full Star Battle rule set for one puzzle, expressed over a single Z3 solver."""
    def __init__(self, size, regions, timeout_ms=None):
        """
        Declares the cell variables and asserts every rule.

        :param int size: The grid's side length.
        :param dict[int, list[int]] regions: Region cell indices, as from `build_regions`.
        :param int | None timeout_ms: Optional time budget for each satisfiability check.
        """
        self.size = size
        self.regions = regions
        self.stars = star_quota(size)
        self.solver = Solver()
        if timeout_ms is not None:
            self.solver.set(timeout=timeout_ms)
        self.variables = [Bool(f"cell_{r}_{c}") for r in range(size) for c in range(size)]
        self.constraint_count = 0
        self._add_constraints()

    def cell_var(self, row, col):
        return self.variables[self.size * row + col]

    def adjacent_pairs(self):
        """
        Yields each pair of touching cells exactly once, as ``(idx, earlier_idx)``.

        Only neighbours earlier in row-major order are considered: above, left,
        above-left and above-right.
        """
        size = self.size
        for i in range(size):
            for j in range(size):
                idx = size * i + j
                if i > 0:
                    yield idx, size * (i - 1) + j
                if j > 0:
                    yield idx, idx - 1
                if i > 0 and j > 0:
                    yield idx, size * (i - 1) + j - 1
                if i > 0 and j < size - 1:
                    yield idx, size * (i - 1) + j + 1

    def _assert(self, constraint):
        self.solver.add(constraint)
        self.constraint_count += 1

    def _exactly(self, cell_vars):
        self._assert(PbEq([(var, 1) for var in cell_vars], self.stars))

    def _add_constraints(self):
        """Encodes the rules of Star Battle into Z3 constraints."""
        # Rule 1: Stars cannot touch, not even diagonally.
        for idx, other in self.adjacent_pairs():
            self._assert(Not(And(self.variables[idx], self.variables[other])))

        # Rule 2 & 3: Exactly K stars per row and per column.
        for i in range(self.size):
            self._exactly([self.cell_var(i, c) for c in range(self.size)])
            self._exactly([self.cell_var(r, i) for r in range(self.size)])

        # Rule 4: Exactly K stars per region.
        for cells in self.regions.values():
            self._exactly([self.variables[idx] for idx in cells])
        logging.debug(f"Asserted {self.constraint_count} constraints over {len(self.variables)} cells.")

    def solve(self):
        """
        Runs a single satisfiability check and reads back the star placement.

        :returns: ``size`` rows of booleans, True where a star is placed.
        :rtype: list[list[bool]]
        :raises UnsatisfiablePuzzleError: If no placement satisfies the rules.
        :raises IndeterminateSolveError: If Z3 could not decide (e.g. timeout).
        """
        logging.info(f"Solving {self.size}x{self.size} puzzle for {self.stars} star(s) per row, column and region...")
        start_time = time.monotonic()
        result = self.solver.check()
        logging.info(f"Z3 solve time: {format_duration(time.monotonic() - start_time)} ({result})")
        if result == unsat:
            raise UnsatisfiablePuzzleError(self.size, self.stars)
        if result != sat:
            raise IndeterminateSolveError(self.solver.reason_unknown())
        model = self.solver.model()
        return [
            [is_true(model.evaluate(self.cell_var(r, c), model_completion=True)) for c in range(self.size)]
            for r in range(self.size)
        ]

    def check_assignment(self, solution):
        """
        Asks Z3 whether a given placement satisfies every asserted rule.

        The placement is passed as assumptions, so the model itself is left unchanged.

        :param list[list[bool]] solution: The placement to check.
        :rtype: bool
        """
        assumptions = [
            self.cell_var(r, c) if solution[r][c] else Not(self.cell_var(r, c))
            for r in range(self.size) for c in range(self.size)
        ]
        return self.solver.check(*assumptions) == sat
