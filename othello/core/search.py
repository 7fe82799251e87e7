import logging
import random
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional, Tuple

from othello.config import CONFIG
from othello.core.bitboard import Point
from othello.core.board import Board, Side
from othello.core.evaluator import Evaluator
from othello.core.score import MAX_SCORE, MIN_SCORE, Score
from othello.core.utils import format_search_info

logger = logging.getLogger(__name__)


class SearchCancelled(Exception):
    """Raised out of a search after stop() was requested."""


class MoveSelector(ABC):
    """Chooses one legal point for ``side`` on a board where it is that side's turn."""

    def __init__(self, side: Side):
        self.side = side

    @abstractmethod
    def find_move(self, board: Board) -> Point:
        ...

    def stop(self):
        """Request that an in-flight find_move gives up. No-op by default."""

    def _check_turn(self, board: Board):
        if board.turn() is not self.side:
            turn = board.turn().value if board.turn() else "nobody"
            raise ValueError(f"{self.side.value} asked to move but it is {turn}'s turn")
        if board.move_candidates().is_empty():
            raise ValueError(f"{self.side.value} has no legal move")


class RandomSelector(MoveSelector):
    def __init__(self, side: Side, seed: Optional[int] = None):
        super().__init__(side)
        self.rng = random.Random(seed)

    def find_move(self, board: Board) -> Point:
        self._check_turn(board)
        return self.rng.choice(list(board.move_candidates().points(board.size)))


class AlphaBetaSelector(MoveSelector):
    """
    Alpha-beta search bounded by a number of evaluations instead of a depth.

    The budget of a node is split evenly between its children, so wide nodes
    are searched shallower than narrow ones. Max and min nodes are decided by
    whose turn it is on the board, which keeps forced passes correct.
    """

    def __init__(
        self,
        side: Side,
        budget: Optional[int] = None,
        evaluator=None,
        stop_check_interval: Optional[int] = None,
    ):
        super().__init__(side)
        self.budget = CONFIG.search.budget if budget is None else budget
        if self.budget < 1:
            raise ValueError(f"evaluation budget must be positive, got {self.budget}")
        self.evaluator = evaluator
        # a default evaluator is rebuilt whenever the board size changes
        self._own_evaluator = evaluator is None
        self.stop_check_interval = stop_check_interval or CONFIG.search.stop_check_interval

        self._stop_event = threading.Event()
        self.nodes = 0
        self.evaluations = 0

    def stop(self):
        self._stop_event.set()

    def find_move(self, board: Board) -> Point:
        return self.search(board)[0]

    def search(self, board: Board) -> Tuple[Point, Score]:
        self._check_turn(board)
        if self._stop_event.is_set():
            raise SearchCancelled()
        if self._own_evaluator and (self.evaluator is None or self.evaluator.size != board.size):
            self.evaluator = Evaluator(board.size)
        elif self.evaluator.size != board.size:
            raise ValueError(
                f"evaluator built for {tuple(self.evaluator.size)}, board is {tuple(board.size)}"
            )

        self.nodes = 0
        self.evaluations = 0
        start_time = time.perf_counter()

        cands = board.move_candidates()
        child_budget = self.budget / cands.count()

        best_move = None
        best_score = None
        for pt in cands.points(board.size):
            child = board.make_move(pt)
            score = self.alphabeta(child, child_budget, MIN_SCORE, MAX_SCORE)
            # strict comparison: the first candidate reaching the maximum wins
            if best_score is None or score > best_score:
                best_move, best_score = pt, score

        elapsed = time.perf_counter() - start_time
        logger.info(
            format_search_info(
                self.side, best_move, best_score, self.evaluations, self.nodes, elapsed
            )
        )
        return best_move, best_score

    def alphabeta(self, board: Board, budget: float, alpha: Score, beta: Score) -> Score:
        self.nodes += 1
        if self.nodes % self.stop_check_interval == 0 and self._stop_event.is_set():
            raise SearchCancelled()

        turn = board.turn()
        cands = board.move_candidates()
        if budget <= 1 or turn is None or cands.is_empty():
            self.evaluations += 1
            return self.evaluator.evaluate(board, self.side)

        child_budget = budget / cands.count()
        children = (board.make_move(pt) for pt in cands.points(board.size))

        if turn is self.side:
            for child in children:
                score = self.alphabeta(child, child_budget, alpha, beta)
                if score > alpha:
                    alpha = score
                if alpha >= beta:
                    return beta
            return alpha

        for child in children:
            score = self.alphabeta(child, child_budget, alpha, beta)
            if score < beta:
                beta = score
            if alpha >= beta:
                return alpha
        return beta
