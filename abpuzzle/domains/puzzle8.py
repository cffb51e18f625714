from __future__ import annotations
from dataclasses import dataclass, field
from numbers import Integral
from typing import Dict, List, Optional, Sequence, Tuple
import math
import random

from abpuzzle.heuristics.manhattan import manhattan

Board = Tuple[int, ...]  # 9-length tuple, 0 is blank
GOAL: Board = (1,2,3,4,5,6,7,8,0)

# Enumeration order matters: it fixes the order children are searched in
MOVES: Tuple[str, ...] = ("up", "down", "left", "right")

_DELTA: Dict[str, Tuple[int, int]] = {
    "up": (-1, 0),
    "down": (1, 0),
    "left": (0, -1),
    "right": (0, 1),
}
_INVERSE = {"up": "down", "down": "up", "left": "right", "right": "left"}


class InvalidBoardError(ValueError):
    """Tile array is not a 9-element permutation of 0..8."""


class IllegalMoveError(ValueError):
    """Requested move would push the blank off the board."""


def check_board(tiles: Sequence[int]) -> Board:
    """Validate and copy a tile sequence; raise InvalidBoardError if it is not a 3x3 board."""
    try:
        board = tuple(tiles)
    except TypeError as e:
        raise InvalidBoardError(f"Board must be 9 integers 0..8, got {tiles!r}") from e
    # no coercion: 1.9 or "1" is not a tile
    if not all(isinstance(t, Integral) and not isinstance(t, bool) for t in board):
        raise InvalidBoardError(f"Board must be 9 integers 0..8, got {tiles!r}")
    board = tuple(int(t) for t in board)
    if len(board) != 9 or sorted(board) != list(range(9)):
        raise InvalidBoardError(f"Board must be a permutation of 0..8, got {list(board)}")
    return board


def legal_moves(blank: int) -> List[str]:
    """Directions the blank at cell index `blank` can slide, in MOVES order."""
    row, col = divmod(blank, 3)
    return [m for m in MOVES
            if 0 <= row + _DELTA[m][0] < 3 and 0 <= col + _DELTA[m][1] < 3]


def slide(s: Board, move: str) -> Board:
    """Board after the blank moves one cell in `move`."""
    if move not in _DELTA:
        raise IllegalMoveError(f"Unknown move {move!r}; expected one of {MOVES}")
    z = s.index(0)
    if move not in legal_moves(z):
        raise IllegalMoveError(f"Cannot move blank {move} from {divmod(z, 3)}")
    dr, dc = _DELTA[move]
    j = z + 3 * dr + dc
    lst = list(s)
    lst[z], lst[j] = lst[j], lst[z]
    return tuple(lst)


def is_solvable(s: Board) -> bool:
    """Reachable from GOAL iff the tiles (blank ignored) have an even inversion count."""
    arr = [x for x in s if x != 0]
    inv = sum(1 for i, a in enumerate(arr) for b in arr[i + 1:] if a > b)
    return inv % 2 == 0

def scramble(depth: int, seed: int) -> Board:
    """Walk the blank `depth` random steps from GOAL, never undoing the previous step."""
    rng = random.Random(seed)
    s = GOAL
    undo = None
    for _ in range(depth):
        cand = [m for m in legal_moves(s.index(0)) if m != undo]
        move = rng.choice(cand)
        s = slide(s, move)
        undo = _INVERSE[move]
    return s

def make_unsolvable_variant(s: Board) -> Board:
    """Swap the first two non-blank tiles, flipping inversion parity."""
    i, j = [k for k, v in enumerate(s) if v != 0][:2]
    lst = list(s)
    lst[i], lst[j] = lst[j], lst[i]
    return tuple(lst)

# ---------------- Search node ----------------

@dataclass(eq=False)
class PuzzleState:
    """
    One node of the alpha-beta search tree.

    tiles, parent, move and depth are fixed at construction, which also derives
    heuristic and empty_pos. alpha, beta, pruned and children are annotations
    the search engine writes when it visits the node.
    """
    tiles: Board
    parent: Optional["PuzzleState"] = field(default=None, repr=False)
    move: Optional[str] = None
    depth: int = 0
    heuristic: int = field(init=False)
    empty_pos: Tuple[int, int] = field(init=False)
    alpha: float = field(default=-math.inf, init=False)
    beta: float = field(default=math.inf, init=False)
    pruned: bool = field(default=False, init=False)
    children: List["PuzzleState"] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        self.tiles = check_board(self.tiles)
        self.heuristic = manhattan(self.tiles)
        self.empty_pos = divmod(self.tiles.index(0), 3)

    def possible_moves(self) -> List[str]:
        """Directions the blank can slide, in MOVES order."""
        row, col = self.empty_pos
        return legal_moves(row * 3 + col)

    def apply_move(self, move: str) -> "PuzzleState":
        """Slide the blank one cell in `move` and return the resulting child state."""
        return PuzzleState(slide(self.tiles, move), parent=self, move=move, depth=self.depth + 1)

    def is_goal(self) -> bool:
        return self.tiles == GOAL

    def equals(self, other: "PuzzleState") -> bool:
        """Positional tile equality; parent, move, depth and annotations are ignored."""
        return self.tiles == other.tiles

    def __eq__(self, other):
        if not isinstance(other, PuzzleState):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash(self.tiles)

    def clone(self) -> "PuzzleState":
        """Same board, parent, move and depth with fresh annotations."""
        return PuzzleState(tuple(self.tiles), parent=self.parent, move=self.move, depth=self.depth)

    def path(self) -> List["PuzzleState"]:
        """States from the root down to this one, following parent links."""
        path: List[PuzzleState] = []
        node: Optional[PuzzleState] = self
        while node is not None:
            path.append(node)
            node = node.parent
        path.reverse()
        return path

    def rows(self) -> List[Board]:
        return [self.tiles[3*r:3*r+3] for r in range(3)]
