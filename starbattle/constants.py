"""**********************************************************************************
 * Title: constants.py
 *
 * @version 1.0.0
 * -------------------------------------------------------------------------------
 * Description:
 * Static data for the Star Battle solver: the star quota thresholds, the
 * glyphs and box-drawing characters used when printing a solution, the
 * alphabets and size codes of Star Battle Notation (SBN), and the markup
 * pattern used to pull cell walls out of a saved puzzle page.
 **********************************************************************************"""
import re

# --- STAR QUOTA ---
# (exclusive upper bound on grid size, stars per row/column/region), evaluated in order.
STAR_QUOTA_THRESHOLDS = [
    (10, 1),
    (14, 2),
    (17, 3),
    (21, 4),
    (25, 5),
]
MAX_STAR_QUOTA = 6

# --- RENDERING ---
STAR_GLYPH = '★'
EMPTY_GLYPH = ' '
CELL_WIDTH = 3
BOX_TOP = ('┌', '┬', '┐')
BOX_DIVIDER = ('├', '┼', '┤')
BOX_BOTTOM = ('└', '┴', '┘')
BOX_HORIZONTAL = '─'
BOX_VERTICAL = '│'

# --- SBN (STAR BATTLE NOTATION) CONSTANTS ---
SBN_B64_ALPHABET = '0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz-_'
SBN_CHAR_TO_INT = {c: i for i, c in enumerate(SBN_B64_ALPHABET)}
SBN_CODE_TO_DIM_MAP = {
    '55': 5,  '66': 6,  '77': 7,  '88': 8,  '99': 9, 'AA': 10, 'BB': 11, 'CC': 12, 'DD': 13,
    'EE': 14, 'FF': 15, 'GG': 16, 'HH': 17, 'II': 18, 'JJ': 19, 'KK': 20, 'LL': 21, 'MM': 22,
    'NN': 23, 'OO': 24, 'PP': 25
}
# Size code (2) + star digit (1) + flag (1).
SBN_HEADER_LENGTH = 4

# --- PUZZLE PAGE MARKUP ---
# Each cell of a saved puzzle page is a div whose class list carries 'bt' / 'bl'
# when a thick border is drawn above / to the left of it.
CELL_MARKUP_PATTERN = re.compile(r'<div tabindex="1" class="cell selectable([^"]*?)cell-off".*?</div>')
WALL_TOP_CLASS = 'bt'
WALL_LEFT_CLASS = 'bl'

# --- NETWORK ---
HTTP_TIMEOUT_SECONDS = 10
HTTP_HEADERS = {'User-Agent': 'Mozilla/5.0 (Windows NT 10.0; Win64; x64)'}

# --- EXIT CODES ---
EXIT_OK = 0
EXIT_MALFORMED = 1
EXIT_UNSATISFIABLE = 3
EXIT_INDETERMINATE = 4
