"""
Text rendering of solved grids and region layouts for the terminal.
"""
from starbattle.constants import (
    STAR_GLYPH, EMPTY_GLYPH, CELL_WIDTH, BOX_TOP, BOX_DIVIDER, BOX_BOTTOM,
    BOX_HORIZONTAL, BOX_VERTICAL, SBN_B64_ALPHABET
)


def _border(size, corners):
    left, junction, right = corners
    return left + junction.join([BOX_HORIZONTAL * CELL_WIDTH] * size) + right


def render_solution(solution):
    """
    Draws a solution as a box-drawn table, one 3-character cell per grid cell.

    :param list[list[bool]] solution: True where a star is placed.
    :returns: The table, one line per text row, without a trailing newline.
    :rtype: str
    """
    size = len(solution)
    lines = [_border(size, BOX_TOP)]
    for r, row in enumerate(solution):
        cells = [(STAR_GLYPH if cell else EMPTY_GLYPH).center(CELL_WIDTH) for cell in row]
        lines.append(BOX_VERTICAL + BOX_VERTICAL.join(cells) + BOX_VERTICAL)
        if r != size - 1:
            lines.append(_border(size, BOX_DIVIDER))
    lines.append(_border(size, BOX_BOTTOM))
    return "\n".join(lines)


def render_regions(grid):
    """Print-ready symbol grid of 1-based region numbers, one display character per region."""
    rows = []
    for row in grid:
        symbols = [SBN_B64_ALPHABET[(n - 1) % len(SBN_B64_ALPHABET)] for n in row]
        rows.append(" ".join(s.center(CELL_WIDTH) for s in symbols))
    return "\n".join(rows)
