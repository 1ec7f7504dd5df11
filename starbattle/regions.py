"""**********************************************************************************
 * Title: regions.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Reconstructs the region layout of a puzzle from its wall flags. Every cell
 * starts in its own set of a flat, array-based disjoint-set structure; each
 * cell is merged with its upper and left neighbour whenever no wall separates
 * them. The resulting equivalence classes are the puzzle's regions.
 **********************************************************************************"""

# --- IMPORTS ---
import logging
from collections import defaultdict

from starbattle.errors import MalformedPuzzleError


# --- DISJOINT SET ---
class UnionFind:
    """Disjoint-set forest over the integers ``0..n-1`` with path halving and union by size."""
    def __init__(self, n):
        self.parent = list(range(n))
        self.size = [1] * n
        self.count = n

    def find(self, x):
        """Returns the representative of the set containing ``x``."""
        parent = self.parent
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(self, a, b):
        """
        Merges the sets containing ``a`` and ``b``.

        :returns: True if two distinct sets were merged, False if already joined.
        :rtype: bool
        """
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self.size[root_a] < self.size[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        self.size[root_a] += self.size[root_b]
        self.count -= 1
        return True


# --- REGION BUILDING ---
def build_regions(size, walls):
    """
    Groups the cells of a ``size`` x ``size`` grid into regions.

    A cell joins the region of the cell above it unless it is blocked above,
    and the region of the cell to its left unless it is blocked to the left.
    The number of regions is not checked here; see `validate_regions`.

    :param int size: The grid's side length.
    :param list[WallFlags] walls: Wall flags for every cell in row-major order.
    :returns: Mapping of region representative to the region's cell indices.
    :rtype: dict[int, list[int]]
    :raises MalformedPuzzleError: If ``walls`` does not hold ``size*size`` entries.
    """
    if len(walls) != size * size:
        raise MalformedPuzzleError(f"Expected {size * size} wall entries for a {size}x{size} grid, got {len(walls)}.")
    uf = UnionFind(size * size)
    for i in range(size):
        for j in range(size):
            idx = size * i + j
            w = walls[idx]
            if i > 0 and not w.blocked_above:
                uf.union(idx, size * (i - 1) + j)
            if j > 0 and not w.blocked_left:
                uf.union(idx, idx - 1)

    groups = defaultdict(list)
    for idx in range(size * size):
        groups[uf.find(idx)].append(idx)
    logging.debug(f"Union-find produced {uf.count} region(s) from {size * size} cells.")
    return dict(groups)


def validate_regions(size, regions):
    """Raises MalformedPuzzleError unless there is exactly one region per row."""
    if len(regions) != size:
        raise MalformedPuzzleError(f"Walls describe {len(regions)} region(s); a {size}x{size} puzzle needs exactly {size}.")


def region_grid(size, regions):
    """
    Builds a 2D grid of 1-based region numbers, numbered in order of each region's first cell.

    :rtype: list[list[int]]
    """
    grid = [[0] * size for _ in range(size)]
    ordered = sorted(regions.values(), key=min)
    for number, cells in enumerate(ordered, start=1):
        for idx in cells:
            grid[idx // size][idx % size] = number
    return grid
