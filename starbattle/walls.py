"""**********************************************************************************
 * Title: walls.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * The boundary between puzzle ingestion and the solver. Whatever the source of
 * a puzzle, it is reduced to one WallFlags pair per cell in row-major order:
 * whether a region border is drawn above the cell and whether one is drawn to
 * its left. This module defines that contract and the thin adapters that
 * produce it from a saved puzzle page, a 2D region grid, a comma-separated
 * web-task string, or an SBN (Star Battle Notation) string.
 **********************************************************************************"""

# --- IMPORTS ---
import math
import logging
from collections import namedtuple

from starbattle.constants import (
    CELL_MARKUP_PATTERN, WALL_TOP_CLASS, WALL_LEFT_CLASS,
    SBN_CHAR_TO_INT, SBN_CODE_TO_DIM_MAP, SBN_HEADER_LENGTH
)
from starbattle.errors import MalformedPuzzleError

WallFlags = namedtuple('WallFlags', ['blocked_above', 'blocked_left'])
WallFlags.__doc__ = "Borders drawn on the top and left edges of a single cell."


# --- CONTRACT ---
def grid_size(walls):
    """
    Returns the side length of the square grid described by a wall-flag sequence.

    :param list[WallFlags] walls: One entry per cell, in row-major order.
    :returns: The grid's side length.
    :rtype: int
    :raises MalformedPuzzleError: If the cell count is zero or not a perfect square.
    """
    count = len(walls)
    size = round(math.sqrt(count))
    if count == 0 or size * size != count:
        raise MalformedPuzzleError(f"Cell count ({count}) is not a perfect square.")
    return size


# --- ADAPTERS ---
def walls_from_markup(markup):
    """
    Extracts wall flags from the HTML of a saved puzzle page.

    Each cell is a ``<div class="cell selectable ... cell-off">`` element; the
    'bt' and 'bl' classes mark a border above and to the left of the cell.

    :param str markup: The page markup.
    :returns: The wall flags of every cell found, in document (row-major) order.
    :rtype: list[WallFlags]
    :raises MalformedPuzzleError: If no cells are found or their count is not a square.
    """
    walls = []
    for match in CELL_MARKUP_PATTERN.finditer(markup):
        classes = match.group(1).split()
        walls.append(WallFlags(WALL_TOP_CLASS in classes, WALL_LEFT_CLASS in classes))
    logging.info(f"Found {len(walls)} cells in puzzle markup.")
    grid_size(walls)
    return walls


def walls_from_region_grid(region_grid):
    """
    Derives wall flags from a 2D grid of region ids.

    A border exists wherever two orthogonal neighbours carry different ids.
    The outer edge of the grid is always walled.

    :param list[list[int]] region_grid: Square grid of region ids.
    :rtype: list[WallFlags]
    :raises MalformedPuzzleError: If the grid is empty or not square.
    """
    dim = len(region_grid)
    if dim == 0 or any(len(row) != dim for row in region_grid):
        raise MalformedPuzzleError("Region grid must be a non-empty square.")
    return [
        WallFlags(r == 0 or region_grid[r][c] != region_grid[r - 1][c],
                  c == 0 or region_grid[r][c] != region_grid[r][c - 1])
        for r in range(dim) for c in range(dim)
    ]


def walls_from_task(task_string):
    """
    Derives wall flags from a web-task string: comma-separated region ids in row-major order.

    :param str task_string: e.g. "1,1,2,1,2,2,3,3,3".
    :rtype: list[WallFlags]
    :raises MalformedPuzzleError: On non-integer entries or a non-square cell count.
    """
    try:
        numbers = [int(n) for n in task_string.strip().split(',')]
    except ValueError as e:
        raise MalformedPuzzleError(f"Task string contains a non-integer entry: {e}") from e
    dim = math.isqrt(len(numbers))
    if dim * dim != len(numbers):
        raise MalformedPuzzleError(f"Data length ({len(numbers)}) is not a perfect square.")
    return walls_from_region_grid([numbers[i * dim:(i + 1) * dim] for i in range(dim)])


def decode_sbn_header(sbn_string):
    """
    Reads the dimension and declared star count from an SBN string.

    :returns: ``(dim, stars)``
    :rtype: tuple[int, int]
    :raises MalformedPuzzleError: On an unknown size code or missing star digit.
    """
    if len(sbn_string) < SBN_HEADER_LENGTH:
        raise MalformedPuzzleError(f"SBN string '{sbn_string}' is too short.")
    dim = SBN_CODE_TO_DIM_MAP.get(sbn_string[0:2])
    if not dim:
        raise MalformedPuzzleError(f"Unknown SBN size code '{sbn_string[0:2]}'.")
    if sbn_string[2] not in "0123456789":
        raise MalformedPuzzleError(f"SBN star count '{sbn_string[2]}' is not a digit.")
    return dim, int(sbn_string[2])


def walls_from_sbn(sbn_string):
    """
    Derives wall flags from a Star Battle Notation string.

    After the 4-character header, the region data packs ``2*d*(d-1)`` border
    bits, six per character, left-padded with zeros. The first ``d*(d-1)`` bits
    are vertical borders stored row by row (bit ``r*(d-1)+c`` separates
    ``(r, c)`` from ``(r, c+1)``); the rest are horizontal borders stored
    column by column (bit ``c*(d-1)+r`` separates ``(r, c)`` from ``(r+1, c)``).
    Anything after the region data (player annotations) is ignored.

    :param str sbn_string: The SBN string.
    :returns: ``(walls, stars)`` where ``stars`` is the count declared in the header.
    :rtype: tuple[list[WallFlags], int]
    :raises MalformedPuzzleError: If the string cannot be decoded.
    """
    sbn_string = sbn_string.strip()
    dim, stars = decode_sbn_header(sbn_string)
    border_bits_needed = 2 * dim * (dim - 1)
    border_chars_needed = math.ceil(border_bits_needed / 6)
    region_data = sbn_string[SBN_HEADER_LENGTH:SBN_HEADER_LENGTH + border_chars_needed]
    if len(region_data) < border_chars_needed:
        raise MalformedPuzzleError(f"SBN region data is truncated: expected {border_chars_needed} characters, got {len(region_data)}.")
    try:
        bitfield = "".join(bin(SBN_CHAR_TO_INT[c])[2:].zfill(6) for c in region_data)[-border_bits_needed:]
    except KeyError as e:
        raise MalformedPuzzleError(f"Invalid SBN character {e}.") from e

    v_bits, h_bits = bitfield[:dim * (dim - 1)], bitfield[dim * (dim - 1):]
    walls = []
    for r in range(dim):
        for c in range(dim):
            above = r == 0 or h_bits[c * (dim - 1) + r - 1] == '1'
            left = c == 0 or v_bits[r * (dim - 1) + c - 1] == '1'
            walls.append(WallFlags(above, left))
    logging.info(f"SBN decoded to a {dim}x{dim} grid declaring {stars} star(s).")
    return walls, stars
