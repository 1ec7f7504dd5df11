"""Star Battle puzzle solver: region reconstruction from wall flags and a Z3 constraint model."""
from starbattle.walls import WallFlags, grid_size
from starbattle.regions import build_regions, validate_regions
from starbattle.z3_solver import StarBattleModel, star_quota, verify_solution
from starbattle.render import render_solution

__version__ = "1.0.0"
