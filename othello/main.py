from typing import Optional, Tuple

from othello.config import CONFIG
from othello.core.bitboard import Point, Size
from othello.core.board import Board
from othello.core.evaluator import Evaluator
from othello.core.score import Score
from othello.core.search import AlphaBetaSelector


class Engine:
    def __init__(self, size: Optional[Size] = None, budget: Optional[int] = None):
        self.size = Size(*size) if size else Size(CONFIG.game.cols, CONFIG.game.rows)
        self.budget = budget or CONFIG.search.budget
        self.evaluator = Evaluator(self.size)
        self.board = Board.new(self.size)
        self.move_history = []

    def reset(self):
        """Back to the opening position."""
        self.board = Board.new(self.size)
        self.move_history.clear()

    def get_best_move(self) -> Tuple[Point, Score]:
        """Search for the side to move. Raises ValueError once the game is over."""
        turn = self.board.turn()
        if turn is None:
            raise ValueError("game is over")
        search = AlphaBetaSelector(turn, self.budget, self.evaluator)
        return search.search(self.board)

    def make_move(self, point: Point) -> bool:
        """Play ``point`` for the side to move. Returns True if legal."""
        next_board = self.board.make_move(Point(*point))
        if next_board is None:
            return False
        self.board = next_board
        self.move_history.append(Point(*point))
        return True

    def print_board(self):
        print(self.board)
