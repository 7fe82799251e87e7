"""Core engine components: bit-sets, board, evaluators, score and move selection."""

from .bitboard import BitBoard, Point, Size, MIN_SIZE, MAX_SIZE
from .directions import Direction, DirectionalShiftTable, MultiDirectionMask, shift_table
from .board import Board, Side
from .score import Score, ScoreKind, MIN_SCORE, MAX_SCORE
from .evaluator import Evaluator, GiveawayEvaluator, EvenEvaluator
from .search import AlphaBetaSelector, MoveSelector, RandomSelector, SearchCancelled
