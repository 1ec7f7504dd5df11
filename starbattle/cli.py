"""**********************************************************************************
 * Title: cli.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Command-line entry point for the Star Battle solver. Loads a puzzle from a
 * saved puzzle page, a URL, an SBN string or a web-task string, reduces it to
 * per-cell wall flags, rebuilds the regions, solves the puzzle with Z3 and
 * prints the solution as a box-drawn grid. Diagnostics are logged to stderr;
 * only the solution goes to stdout.
 **********************************************************************************"""

# --- IMPORTS ---
import sys
import logging
import argparse

import requests

from starbattle import walls as wl
from starbattle.constants import (
    HTTP_TIMEOUT_SECONDS, HTTP_HEADERS,
    EXIT_OK, EXIT_MALFORMED, EXIT_UNSATISFIABLE, EXIT_INDETERMINATE
)
from starbattle.errors import (
    PuzzleSourceError, MalformedPuzzleError, UnsatisfiablePuzzleError, IndeterminateSolveError
)
from starbattle.regions import build_regions, validate_regions, region_grid
from starbattle.render import render_solution, render_regions
from starbattle.z3_solver import StarBattleModel, star_quota


# --- PUZZLE LOADING ---
def fetch_markup(url):
    """Downloads a puzzle page, raising PuzzleSourceError on any network failure."""
    logging.info(f"Fetching puzzle page from {url}...")
    try:
        response = requests.get(url, headers=HTTP_HEADERS, timeout=HTTP_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.RequestException as e:
        raise PuzzleSourceError(f"Could not fetch puzzle page: {e}") from e
    return response.text


def read_markup(path):
    """Reads a saved puzzle page from disk, or from stdin when ``path`` is '-'."""
    if path == '-':
        return sys.stdin.read()
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        raise PuzzleSourceError(f"Could not read puzzle file '{path}': {e}") from e


def load_walls(args):
    """Turns whichever puzzle source was given on the command line into wall flags."""
    if args.sbn:
        walls, declared_stars = wl.walls_from_sbn(args.sbn)
        expected = star_quota(wl.grid_size(walls))
        if declared_stars != expected:
            logging.warning(f"SBN declares {declared_stars} star(s) but a grid of this size uses {expected}; solving for {expected}.")
        return walls
    if args.task:
        return wl.walls_from_task(args.task)
    markup = fetch_markup(args.url) if args.url else read_markup(args.source)
    return wl.walls_from_markup(markup)


# --- PIPELINE ---
def solve_walls(walls, timeout_ms=None, regions=None):
    """
    Rebuilds the regions described by ``walls`` and solves the puzzle.

    :param list[WallFlags] walls: Row-major wall flags.
    :param int | None timeout_ms: Optional Z3 time budget.
    :param dict[int, list[int]] | None regions: Regions already built from ``walls``, if any.
    :returns: ``(solution, regions)``
    :rtype: tuple[list[list[bool]], dict[int, list[int]]]
    :raises MalformedPuzzleError: If the grid is not square or the region count is wrong.
    :raises SolveError: If Z3 finds no solution or cannot decide.
    """
    size = wl.grid_size(walls)
    if regions is None:
        regions = build_regions(size, walls)
    validate_regions(size, regions)
    logging.info(f"Rebuilt {len(regions)} regions for a {size}x{size} grid.")
    model = StarBattleModel(size, regions, timeout_ms=timeout_ms)
    return model.solve(), regions


def build_parser():
    parser = argparse.ArgumentParser(description="Solve a Star Battle puzzle with the Z3 SMT solver.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("source", nargs="?", help="Path to a saved puzzle page ('-' reads stdin).")
    group.add_argument("--sbn", type=str, help="A Star Battle Notation (SBN) string.")
    group.add_argument("--task", type=str, help="Comma-separated region ids in row-major order.")
    group.add_argument("--url", type=str, help="URL of a puzzle page to fetch.")
    parser.add_argument("--timeout-ms", type=int, default=None, help="Give up after this many milliseconds of solving.")
    parser.add_argument("--show-regions", action="store_true", help="Print the rebuilt region layout before solving.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')
    try:
        walls = load_walls(args)
        regions = None
        if args.show_regions:
            size = wl.grid_size(walls)
            regions = build_regions(size, walls)
            print(render_regions(region_grid(size, regions)))
            print()
        solution, _ = solve_walls(walls, timeout_ms=args.timeout_ms, regions=regions)
    except (PuzzleSourceError, MalformedPuzzleError) as e:
        logging.error(f"Failed to load a valid puzzle: {e}")
        return EXIT_MALFORMED
    except UnsatisfiablePuzzleError as e:
        logging.error(str(e))
        return EXIT_UNSATISFIABLE
    except IndeterminateSolveError as e:
        logging.error(str(e))
        return EXIT_INDETERMINATE
    print(render_solution(solution))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
