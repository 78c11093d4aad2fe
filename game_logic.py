#!/usr/bin/env python3
"""
game_logic.py

Move-decision engine for the tic-tac-toe service.

The human always plays 'x' and the computer always plays 'o'.

Contents:
- Board: 9-cell grid with validated construction and non-mutating placement.
- Evaluation: is_winner / is_draw / evaluate -> Status.
- Search: full minimax (depth-weighted, alpha-beta pruned) and select_best_move.
- Heuristic: the older win / block / center / corner / side priority chain.
- decide(): the single entry point used by the HTTP service.

Run this file to try a simple command-line demo where you play vs the engine.
"""

from __future__ import annotations
import logging
import math
import random
from enum import Enum
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

HUMAN = "x"
COMPUTER = "o"
EMPTY = ""
PLAYERS = (HUMAN, COMPUTER)

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # columns
    (0, 4, 8), (2, 4, 6),             # diagonals
)

ALL_CELLS: Tuple[int, ...] = tuple(range(9))
CORNERS: Tuple[int, ...] = (0, 6, 2, 8)
SIDES: Tuple[int, ...] = (3, 7, 5, 1)
CENTER = 4

WIN_SCORE = 10

MODES = ("hard", "heuristic")


class Status(str, Enum):
    """Game status, valued with the names the client expects on the wire."""
    IN_PROGRESS = "InProgress"
    DRAW = "Draw"
    HUMAN_WINS = "XWins"
    COMPUTER_WINS = "OWins"


# -------------------------
# Board: low-level utilities
# -------------------------
class Board:
    def __init__(self, cells: Optional[Sequence[str]] = None):
        """Checks only the length; use from_list for untrusted cells."""
        # 'x', 'o', or '' for empty
        self.cells: List[str] = list(cells) if cells is not None else [EMPTY] * 9
        if len(self.cells) != 9:
            raise ValueError(f"board must have exactly 9 cells, got {len(self.cells)}")

    @classmethod
    def from_list(cls, cells: Sequence[str]) -> "Board":
        """Build a board from untrusted input, normalising and validating every cell."""
        normalised = []
        for i, v in enumerate(cells):
            if not isinstance(v, str):
                raise ValueError(f"cell {i} must be a string")
            v = v.strip().lower()
            if v not in (EMPTY, HUMAN, COMPUTER):
                raise ValueError(f"cell {i} has invalid value {v!r}")
            normalised.append(v)
        return cls(normalised)

    def copy(self) -> "Board":
        return Board(self.cells)

    def to_list(self) -> List[str]:
        return self.cells[:]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"Board({self.cells!r})"

    def __str__(self) -> str:
        def cell(i):
            v = self.cells[i]
            return v.upper() if v != EMPTY else str(i + 1)
        rows = [
            f" {cell(0)} | {cell(1)} | {cell(2)} ",
            "---+---+---",
            f" {cell(3)} | {cell(4)} | {cell(5)} ",
            "---+---+---",
            f" {cell(6)} | {cell(7)} | {cell(8)} ",
        ]
        return "\n".join(rows)


def _check_index(index: int) -> None:
    if not 0 <= index < 9:
        raise IndexError(f"cell index {index} out of range")


def is_occupied(board: Board, index: int) -> bool:
    _check_index(index)
    return board.cells[index] != EMPTY


def place(board: Board, index: int, side: str) -> Board:
    """Return a new board with `side` marked at `index`. The input board is untouched."""
    if side not in PLAYERS:
        raise ValueError(f"unknown side {side!r}")
    if is_occupied(board, index):
        raise ValueError(f"cell {index} is already occupied")
    new_board = board.copy()
    new_board.cells[index] = side
    return new_board


def possible_moves(board: Board, candidates: Sequence[int] = ALL_CELLS) -> List[int]:
    """Unoccupied cells among `candidates`, in the order given."""
    return [i for i in candidates if not is_occupied(board, i)]


# -------------------------
# Terminal-state evaluation
# -------------------------
def is_winner(board: Board, side: str) -> bool:
    if side not in PLAYERS:
        raise ValueError(f"unknown side {side!r}")
    cells = board.cells
    return any(cells[a] == cells[b] == cells[c] == side for a, b, c in WINNING_LINES)


def is_draw(board: Board) -> bool:
    return (not possible_moves(board)
            and not is_winner(board, HUMAN)
            and not is_winner(board, COMPUTER))


def evaluate(board: Board) -> Status:
    # A human win is reported first if a board somehow shows both.
    if is_winner(board, HUMAN):
        return Status.HUMAN_WINS
    if is_winner(board, COMPUTER):
        return Status.COMPUTER_WINS
    if is_draw(board):
        return Status.DRAW
    return Status.IN_PROGRESS


# -------------------------
# Minimax search
# -------------------------
def minimax(board: Board, depth: int, is_maximizing: bool,
            alpha: float = -math.inf, beta: float = math.inf) -> float:
    """
    Score `board` from the computer's point of view.

    Wins are worth 10 - depth, losses depth - 10 and draws 0, so a faster win
    and a slower loss are preferred. With the default full window the result
    is the exact minimax value; alpha-beta only skips branches that cannot
    change it.
    """
    if is_winner(board, COMPUTER):
        return WIN_SCORE - depth
    if is_winner(board, HUMAN):
        return depth - WIN_SCORE
    if is_draw(board):
        return 0

    if is_maximizing:
        value = -math.inf
        for m in possible_moves(board):
            value = max(value, minimax(place(board, m, COMPUTER), depth + 1, False, alpha, beta))
            alpha = max(alpha, value)
            if alpha >= beta:
                break
        return value
    else:
        value = math.inf
        for m in possible_moves(board):
            value = min(value, minimax(place(board, m, HUMAN), depth + 1, True, alpha, beta))
            beta = min(beta, value)
            if alpha >= beta:
                break
        return value


def select_best_move(board: Board) -> Optional[int]:
    """Best cell for the computer, lowest index on ties. None when the board is full."""
    best_score = -math.inf
    best_move = None
    for m in possible_moves(board):
        score = minimax(place(board, m, COMPUTER), 0, False)
        logger.debug("move %d scores %d", m, score)
        if score > best_score:
            best_score = score
            best_move = m
    if best_move is not None:
        logger.info("minimax picks %d (score %d)", best_move, best_score)
    return best_move


# -------------------------
# Heuristic priority chain
# -------------------------
def can_win(board: Board, side: str) -> Optional[int]:
    """First empty cell that completes a line for `side`, if any."""
    for m in possible_moves(board):
        if is_winner(place(board, m, side), side):
            logger.debug("%s will win with %d", side, m)
            return m
    return None


def choose_random_move(board: Board, candidates: Sequence[int],
                       rng: Optional[random.Random] = None) -> Optional[int]:
    moves = possible_moves(board, candidates)
    if not moves:
        return None
    rng = rng if rng is not None else random.Random()
    return rng.choice(moves)


def select_heuristic_move(board: Board, rng: Optional[random.Random] = None) -> Optional[int]:
    """
    Win, block, answer the opening, then corners, then sides.

    Randomness only ever comes from `rng`, so passing a seeded
    random.Random makes the choice reproducible.
    """
    move = can_win(board, COMPUTER)
    if move is not None:
        logger.info("taking the win at %d", move)
        return move

    move = can_win(board, HUMAN)
    if move is not None:
        logger.info("blocking the human at %d", move)
        return move

    if len(possible_moves(board)) == 8:
        if is_occupied(board, CENTER):
            logger.info("human opened in the center, playing a corner")
            return choose_random_move(board, CORNERS, rng)
        logger.info("playing the center")
        return CENTER

    move = choose_random_move(board, CORNERS, rng)
    if move is not None:
        logger.info("picking corner %d", move)
        return move

    move = choose_random_move(board, SIDES, rng)
    logger.info("picking side %s", move)
    return move


# -------------------------
# Entry point
# -------------------------
def decide(board: Board, mode: str = "hard",
           rng: Optional[random.Random] = None) -> Tuple[Board, Status]:
    """
    Play the computer's move on `board` and return (new_board, status).

    A terminal board is returned unchanged with its status. mode is 'hard'
    (full minimax, deterministic) or 'heuristic' (priority chain using rng).
    """
    if mode not in MODES:
        raise ValueError(f"mode must be one of {MODES}, got {mode!r}")

    status = evaluate(board)
    if status is not Status.IN_PROGRESS:
        logger.info("board is already terminal: %s", status.value)
        return board, status

    if mode == "heuristic":
        move = select_heuristic_move(board, rng)
    else:
        move = select_best_move(board)

    if move is not None:
        new_board = place(board, move, COMPUTER)
    else:
        logger.warning("no legal move on a board reported as in progress")
        new_board = board

    return new_board, evaluate(new_board)


# -------------------------
# Simple CLI demo / usage
# -------------------------
def human_vs_ai_cli(mode: str = "hard"):
    print("Tic-Tac-Toe CLI: you are X (enter 1-9).")
    board = Board()
    status = Status.IN_PROGRESS

    while status is Status.IN_PROGRESS:
        print(board)
        raw = input("Your move (1-9): ").strip()
        try:
            idx = int(raw) - 1
        except ValueError:
            print("Invalid input.")
            continue
        if idx not in range(9):
            print("Choose 1-9")
            continue
        if is_occupied(board, idx):
            print("That cell is taken.")
            continue
        board = place(board, idx, HUMAN)
        board, status = decide(board, mode=mode)

    # final board and result
    print(board)
    if status is Status.DRAW:
        print("Result: Draw")
    elif status is Status.HUMAN_WINS:
        print("Result: X wins")
    else:
        print("Result: O wins")
    return status


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    print("Running CLI demo. Press Ctrl+C to quit.")
    try:
        human_vs_ai_cli(mode="hard")
    except KeyboardInterrupt:
        print("\nExiting demo.")
