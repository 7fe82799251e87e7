"""
Computer players hosted on worker threads.

A worker owns a selector and a private mirror of the board. The host talks to
it only through two queues: ``MakeMove`` messages keep the mirror in step with
moves played elsewhere, ``Exit`` shuts it down, and the worker answers each of
its own turns with exactly one ``Point``.
"""

import logging
import queue
import threading
import time
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from othello.config import CONFIG, Config
from othello.core.bitboard import Point, Size
from othello.core.board import Board, Side
from othello.core.evaluator import EvenEvaluator, Evaluator, GiveawayEvaluator
from othello.core.search import (
    AlphaBetaSelector,
    MoveSelector,
    RandomSelector,
    SearchCancelled,
)

logger = logging.getLogger(__name__)


class ProtocolError(RuntimeError):
    """The worker received a message it cannot apply to its board."""


class WorkerCrashed(RuntimeError):
    """The worker thread stopped without being asked to."""


class MakeMove(BaseModel):
    model_config = ConfigDict(frozen=True)

    side: Side
    point: Point


class Exit(BaseModel):
    model_config = ConfigDict(frozen=True)


Message = Union[MakeMove, Exit]


class PlayerKind(Enum):
    HUMAN = "human"
    AI_RANDOM = "ai_random"
    AI_WEAK = "ai_weak"
    AI_MEDIUM = "ai_medium"
    AI_STRONG = "ai_strong"
    AI_EVEN = "ai_even"
    AI_GIVEAWAY = "ai_giveaway"

    @classmethod
    def from_name(cls, name: str) -> "PlayerKind":
        try:
            return cls(name.lower())
        except ValueError:
            options = ", ".join(k.value for k in cls)
            raise ValueError(f"unknown player kind {name!r} (expected one of: {options})") from None

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_ai(self) -> bool:
        return self is not PlayerKind.HUMAN

    def build_selector(self, side: Side, size: Size, cfg: Optional[Config] = None) -> Optional[MoveSelector]:
        cfg = cfg or CONFIG
        search = cfg.search

        if self is PlayerKind.HUMAN:
            return None
        if self is PlayerKind.AI_RANDOM:
            return RandomSelector(side, seed=search.random_seed)

        budgets = {
            PlayerKind.AI_WEAK: search.weak_budget,
            PlayerKind.AI_MEDIUM: search.medium_budget,
            PlayerKind.AI_STRONG: search.strong_budget,
            PlayerKind.AI_EVEN: search.medium_budget,
            PlayerKind.AI_GIVEAWAY: search.medium_budget,
        }
        if self is PlayerKind.AI_EVEN:
            evaluator = EvenEvaluator(size, cfg.eval)
        elif self is PlayerKind.AI_GIVEAWAY:
            evaluator = GiveawayEvaluator(size, cfg.eval)
        else:
            evaluator = Evaluator(size, cfg.eval)
        return AlphaBetaSelector(side, budgets[self], evaluator, search.stop_check_interval)


_LABELS = {
    PlayerKind.HUMAN: "Human",
    PlayerKind.AI_RANDOM: "AI Random",
    PlayerKind.AI_WEAK: "AI Weak",
    PlayerKind.AI_MEDIUM: "AI Medium",
    PlayerKind.AI_STRONG: "AI Strong",
    PlayerKind.AI_EVEN: "AI Even",
    PlayerKind.AI_GIVEAWAY: "AI Giveaway",
}


class AiPlayer:
    """Host-side handle of one worker thread."""

    def __init__(self, selector: MoveSelector, board: Board, side: Side):
        self.selector = selector
        self.side = side
        self._inbox: "queue.Queue[Message]" = queue.Queue()
        self._outbox: "queue.Queue[Point]" = queue.Queue()
        self._error: Optional[BaseException] = None
        self._thread = threading.Thread(
            target=self._run, args=(board,), name=f"othello-ai-{side.value}", daemon=True
        )
        self._thread.start()

    @classmethod
    def spawn(cls, kind: PlayerKind, board: Board, side: Side, cfg: Optional[Config] = None) -> Optional["AiPlayer"]:
        """Start a worker for ``kind``; humans get no worker."""
        selector = kind.build_selector(side, board.size, cfg)
        if selector is None:
            return None
        logger.info("starting %s worker for %s", kind.label, side.value)
        return cls(selector, board, side)

    # --- Host API ---

    def notify(self, side: Side, point: Point):
        """Tell the worker that ``side`` played ``point``."""
        self._inbox.put(MakeMove(side=side, point=point))

    def listen(self) -> Optional[Point]:
        """Return the worker's move if one is ready, without blocking."""
        try:
            return self._outbox.get_nowait()
        except queue.Empty:
            pass
        if not self._thread.is_alive():
            self._raise_dead()
        return None

    def wait_move(self, timeout: Optional[float] = None) -> Point:
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            try:
                return self._outbox.get(timeout=0.05)
            except queue.Empty:
                pass
            if not self._thread.is_alive():
                self._raise_dead()
            if deadline is not None and time.monotonic() >= deadline:
                raise TimeoutError(f"{self.side.value} worker did not move within {timeout}s")

    def finish(self, timeout: Optional[float] = None):
        self.selector.stop()
        self._inbox.put(Exit())
        self._thread.join(CONFIG.worker.join_timeout if timeout is None else timeout)
        if self._thread.is_alive():
            logger.warning("%s worker did not stop in time", self.side.value)

    def is_alive(self) -> bool:
        return self._thread.is_alive()

    def _raise_dead(self):
        if self._error is not None:
            raise WorkerCrashed(f"{self.side.value} worker crashed: {self._error}") from self._error
        raise WorkerCrashed(f"{self.side.value} worker has exited")

    # --- Worker thread ---

    def _run(self, board: Board):
        try:
            self._loop(board)
        except SearchCancelled:
            logger.debug("%s worker cancelled during search", self.side.value)
        except Exception as e:
            self._error = e
            logger.exception("%s worker crashed", self.side.value)

    def _loop(self, board: Board):
        while True:
            turn = board.turn()
            if turn is self.side:
                pt = self.selector.find_move(board)
                board = board.make_move(pt)
                self._outbox.put(pt)
                continue

            msg = self._inbox.get()
            if isinstance(msg, Exit):
                logger.debug("%s worker exiting", self.side.value)
                return
            if not isinstance(msg, MakeMove):
                raise ProtocolError(f"unexpected message: {msg!r}")
            if turn is None or msg.side is not turn:
                raise ProtocolError(f"{msg.side.value} cannot move now, turn is {turn}")

            next_board = board.make_move(msg.point)
            if next_board is None:
                raise ProtocolError(f"illegal move {tuple(msg.point)} for {msg.side.value}")
            board = next_board
