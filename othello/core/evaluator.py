"""
Evaluator Module
================

Static evaluation of Othello positions using precomputed positional masks.

A running game is scored by the weighted placement of disks (corners good,
cells next to corners bad) normalised by the number of disks on the board,
plus a mobility term from the size of the current legal-move set. A finished
game is scored by the exact disk differential.

All evaluators share one signature, ``evaluate(board, side) -> Score``, where
a greater score is better for ``side``.
"""

from typing import Iterable, List, Optional, Tuple

from othello.config import CONFIG, EvalConfig
from othello.core.bitboard import BitBoard, Point, Size
from othello.core.board import Board, Side
from othello.core.score import Score, ScoreKind

# Seed cells of each weight class inside the upper-left quadrant. Every seed is
# also applied transposed, then folded into the other three quadrants.
WEIGHT_SEEDS = {
    "corner": [(0, 0)],
    "edge_c": [(0, 1)],
    "edge_x": [(1, 1)],
    "inner_edge": [(1, 2), (1, 3)],
    "edge_b": [(0, 3), (2, 3), (3, 3)],
}


def _seed_mask(cells: Iterable[Tuple[int, int]], size: Size) -> BitBoard:
    """Mask of the seeds and their transposes that fit on the board."""
    mask = BitBoard.empty()
    for x, y in cells:
        for px, py in ((x, y), (y, x)):
            if px < size.width and py < size.height:
                mask = mask | BitBoard.from_point(Point(px, py), size)
    return mask


def weight_mask(mask: BitBoard, size: Size) -> BitBoard:
    """
    Mirror the cells of ``mask`` found in the upper-left quadrant into all four
    quadrants. On odd sizes the middle column/row is treated as part of the
    upper-left quadrant and mirrored onto itself.
    """
    out = BitBoard.empty()
    ul_w, ul_h = size.width // 2, size.height // 2
    dr_w, dr_h = size.width - ul_w, size.height - ul_h

    def mark(*points: Tuple[int, int]) -> BitBoard:
        return BitBoard.from_points([Point(x, y) for x, y in points], size)

    for x in range(dr_w):
        rx = size.width - x - 1
        for y in range(dr_h):
            ry = size.height - y - 1
            if mask.contains(Point(x, y), size):
                out = out | mark((x, y), (rx, y), (x, ry), (rx, ry))
    return out


class Evaluator:
    """
    Positional evaluator for one board size.

    The weight masks are computed once in the constructor; ``evaluate`` is a
    pure function of the board.
    """

    def __init__(self, size: Size, cfg: Optional[EvalConfig] = None) -> None:
        self.cfg = cfg or CONFIG.eval
        self.size = Size(*size)

        weights = self.cfg.positional_weights
        self.weights: List[Tuple[int, BitBoard]] = []
        for name in ("corner", "edge_b", "inner_edge", "edge_c", "edge_x"):
            mask = weight_mask(_seed_mask(WEIGHT_SEEDS[name], self.size), self.size)
            self.weights.append((weights.get(name, 0), mask))

    def evaluate(self, board: Board, side: Side) -> Score:
        coef = 1 if side is Side.BLACK else -1

        if board.turn() is None:
            diff = board.num_disk(Side.BLACK) - board.num_disk(Side.WHITE)
            return Score.ended(diff) * coef

        num_disk = (board.black_cells | board.white_cells).count()
        disk_score = self.eval_disk_place(board)
        cand_score = self.eval_move_candidates(board)
        black_score = disk_score / num_disk + self.cfg.mobility_weight * cand_score
        return Score.running(black_score) * coef

    def eval_disk_place(self, board: Board) -> int:
        """Weighted placement score, Black minus White."""
        black_cells = board.black_cells
        white_cells = board.white_cells
        black = 0
        white = 0
        for val, mask in self.weights:
            black += val * (mask & black_cells).count()
            white += val * (mask & white_cells).count()
        return black - white

    def eval_move_candidates(self, board: Board) -> int:
        num_cand = board.move_candidates().count()
        turn = board.turn()
        if turn is Side.BLACK:
            return num_cand
        if turn is Side.WHITE:
            return -num_cand
        return 0


class GiveawayEvaluator:
    """Scores every position from the opponent's point of view."""

    def __init__(self, size: Size, cfg: Optional[EvalConfig] = None) -> None:
        self.inner = Evaluator(size, cfg)
        self.size = self.inner.size

    def evaluate(self, board: Board, side: Side) -> Score:
        return self.inner.evaluate(board, side.flip())


class EvenEvaluator:
    """Prefers positions where neither side is ahead."""

    def __init__(self, size: Size, cfg: Optional[EvalConfig] = None) -> None:
        self.inner = Evaluator(size, cfg)
        self.size = self.inner.size

    def evaluate(self, board: Board, side: Side) -> Score:
        score = self.inner.evaluate(board, side)
        if score.kind is ScoreKind.RUNNING:
            return Score.running(-abs(score.value))
        if score.kind is ScoreKind.ENDED:
            return Score.ended(-abs(score.value))
        return score
