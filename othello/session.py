"""
Host-side game state: the authoritative board plus a worker per computer side.

Moves reach the session either from a human (``play``) or from the worker whose
turn it is (``poll``/``wait_ai``). Every applied move is forwarded to the
opponent's worker, in play order, so its mirror board never falls behind.
"""

import logging
from typing import Dict, Optional

from othello.config import CONFIG, Config
from othello.core.bitboard import Point, Size
from othello.core.board import Board, Side
from othello.player import AiPlayer, PlayerKind

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        size: Size,
        black: PlayerKind = PlayerKind.HUMAN,
        white: PlayerKind = PlayerKind.HUMAN,
        cfg: Optional[Config] = None,
    ):
        self.board = Board.new(size)
        self.kinds = {Side.BLACK: black, Side.WHITE: white}
        self.players: Dict[Side, Optional[AiPlayer]] = {
            side: AiPlayer.spawn(kind, self.board, side, cfg)
            for side, kind in self.kinds.items()
        }
        logger.info(
            "new %dx%d game: black=%s white=%s",
            self.board.size.width, self.board.size.height, black.label, white.label,
        )

    @classmethod
    def from_config(cls, cfg: Optional[Config] = None) -> "GameSession":
        cfg = cfg or CONFIG
        game = cfg.game
        return cls(
            Size(game.cols, game.rows),
            PlayerKind.from_name(game.black_player),
            PlayerKind.from_name(game.white_player),
            cfg,
        )

    def __enter__(self) -> "GameSession":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.finish()

    # --- Queries ---

    def turn(self) -> Optional[Side]:
        return self.board.turn()

    def get(self, point: Point) -> Optional[Side]:
        return self.board.get(point)

    def num_disk(self, side: Side) -> int:
        return self.board.num_disk(side)

    def can_play(self, point: Point) -> bool:
        return self.board.can_move(point)

    def has_player(self, side: Side) -> bool:
        return self.players[side] is not None

    def is_ai_turn(self) -> bool:
        turn = self.board.turn()
        return turn is not None and self.has_player(turn)

    def winner(self) -> Optional[Side]:
        """Side with more disks once the game is over; None while running or drawn."""
        if self.board.turn() is not None:
            return None
        black = self.num_disk(Side.BLACK)
        white = self.num_disk(Side.WHITE)
        if black == white:
            return None
        return Side.BLACK if black > white else Side.WHITE

    # --- Moves ---

    def play(self, point: Point) -> bool:
        """Human move for the side to play. False if illegal or a worker owns the turn."""
        if self.is_ai_turn():
            return False
        return self._apply(point)

    def poll(self) -> Optional[Point]:
        """Apply the current worker's move if it is ready."""
        turn = self.board.turn()
        if turn is None:
            self.finish()
            return None
        player = self.players[turn]
        if player is None:
            return None
        pt = player.listen()
        if pt is not None:
            self._apply_ai(pt)
        return pt

    def wait_ai(self, timeout: Optional[float] = None) -> Point:
        turn = self.board.turn()
        if turn is None or self.players[turn] is None:
            raise ValueError("no computer player is to move")
        pt = self.players[turn].wait_move(timeout)
        self._apply_ai(pt)
        return pt

    def _apply_ai(self, pt: Point):
        if not self._apply(pt):
            raise RuntimeError(f"worker played illegal move {tuple(pt)}")

    def _apply(self, point: Point) -> bool:
        turn = self.board.turn()
        if turn is None:
            return False
        next_board = self.board.make_move(point)
        if next_board is None:
            return False
        self.board = next_board
        logger.debug("%s plays %s", turn.value, tuple(point))

        opponent = self.players[turn.flip()]
        if opponent is not None:
            opponent.notify(turn, point)
        if self.board.turn() is None:
            logger.info(
                "game over: black %d, white %d",
                self.num_disk(Side.BLACK), self.num_disk(Side.WHITE),
            )
            self.finish()
        return True

    def finish(self):
        for side, player in self.players.items():
            if player is not None:
                player.finish()
                self.players[side] = None
