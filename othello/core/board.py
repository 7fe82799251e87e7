"""Immutable Othello board over two BitBoards with cached legal moves."""

from enum import Enum
from typing import Iterable, Optional, Union

from othello.core.bitboard import BitBoard, Point, Size
from othello.core.directions import (
    Direction,
    DirectionalShiftTable,
    MultiDirectionMask,
    shift_table,
)

Cells = Union[BitBoard, Iterable[Point]]


class Side(Enum):
    BLACK = "black"
    WHITE = "white"

    def flip(self) -> "Side":
        return Side.WHITE if self is Side.BLACK else Side.BLACK


class Board:
    """
    A snapshot of a game. Every transition builds a new Board, so a value can
    be shared between the host, workers and search branches without copying.
    """

    __slots__ = ("size", "_table", "_turn", "_black", "_white", "_candidates")

    def __init__(
        self,
        size: Size,
        black: BitBoard,
        white: BitBoard,
        turn: Optional[Side],
        table: Optional[DirectionalShiftTable] = None,
    ):
        self.size = size
        self._table = table or shift_table(size)
        self._black = black
        self._white = white
        self._turn = turn
        self._candidates = self._compute_candidates()

    @classmethod
    def new(cls, size: Size) -> "Board":
        """Standard opening: four disks around the centre, Black to move."""
        size = Size(*size).validate()
        origin = Point(size.width // 2 - 1, size.height // 2 - 1)
        white = BitBoard.from_points(
            [origin, Point(origin.x + 1, origin.y + 1)], size
        )
        black = BitBoard.from_points(
            [Point(origin.x, origin.y + 1), Point(origin.x + 1, origin.y)], size
        )
        return cls._advance(size, black, white, Side.BLACK, shift_table(size))

    @classmethod
    def from_cells(
        cls, size: Size, black: Cells, white: Cells, turn: Optional[Side] = Side.BLACK
    ) -> "Board":
        """Build an arbitrary position. The given turn is kept as is."""
        size = Size(*size).validate()
        if not isinstance(black, BitBoard):
            black = BitBoard.from_points(black, size)
        if not isinstance(white, BitBoard):
            white = BitBoard.from_points(white, size)
        region = BitBoard.all_filled(size)
        if (black - region) or (white - region):
            raise ValueError("disks outside the board")
        if black & white:
            raise ValueError("a cell cannot hold both a black and a white disk")
        return cls(size, black, white, turn)

    @classmethod
    def _advance(
        cls,
        size: Size,
        black: BitBoard,
        white: BitBoard,
        first: Side,
        table: DirectionalShiftTable,
    ) -> "Board":
        # A side without a legal move passes; the game ends when neither side can move.
        board = cls(size, black, white, first, table)
        if board._candidates:
            return board
        board = cls(size, black, white, first.flip(), table)
        if board._candidates:
            return board
        return cls(size, black, white, None, table)

    # --- Queries ---

    def turn(self) -> Optional[Side]:
        return self._turn

    @property
    def black_cells(self) -> BitBoard:
        return self._black

    @property
    def white_cells(self) -> BitBoard:
        return self._white

    def cells(self, side: Side) -> BitBoard:
        return self._black if side is Side.BLACK else self._white

    def get(self, point: Point) -> Optional[Side]:
        if self._black.contains(point, self.size):
            return Side.BLACK
        if self._white.contains(point, self.size):
            return Side.WHITE
        return None

    def num_disk(self, side: Side) -> int:
        return self.cells(side).count()

    def move_candidates(self) -> BitBoard:
        return self._candidates

    def can_move(self, point: Point) -> bool:
        return self._candidates.contains(point, self.size)

    def is_over(self) -> bool:
        return self._turn is None

    # --- Move generation ---

    def _compute_candidates(self) -> BitBoard:
        if self._turn is None:
            return BitBoard.empty()

        me = self.cells(self._turn)
        you = self.cells(self._turn.flip())
        empty = (me | you).complement(self.size)

        # Grow runs of opponent disks outward from the mover's disks; a run
        # followed by an empty cell makes that cell a legal move.
        you_mask = MultiDirectionMask.filled(you)
        run = MultiDirectionMask.filled(me).shift(self._table) & you_mask
        for _ in range(max(self.size.width, self.size.height) - 3):
            run = run | (run.shift(self._table) & you_mask)

        return (run.shift(self._table) & MultiDirectionMask.filled(empty)).or_all()

    def make_move(self, point: Point) -> Optional["Board"]:
        """Return the board after ``turn`` plays at ``point``, or None if illegal."""
        turn = self._turn
        if turn is None or not self._candidates.contains(point, self.size):
            return None

        me = self.cells(turn)
        you = self.cells(turn.flip())
        origin = BitBoard.from_point(point, self.size)

        flip = origin
        for direction in Direction:
            flip_candidate = BitBoard.empty()
            cur = self._table.shift(origin, direction)
            while cur and (cur & you):
                flip_candidate = flip_candidate | cur
                cur = self._table.shift(cur, direction)
            if flip_candidate and (cur & me):
                flip = flip | flip_candidate

        me = me | flip
        you = you - flip
        black, white = (me, you) if turn is Side.BLACK else (you, me)
        return self._advance(self.size, black, white, turn.flip(), self._table)

    # --- Value semantics ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.size, self._turn, self._black, self._white) == (
            other.size,
            other._turn,
            other._black,
            other._white,
        )

    def __hash__(self) -> int:
        return hash((self.size, self._turn, self._black, self._white))

    def __repr__(self) -> str:
        turn = self._turn.value if self._turn else None
        return (
            f"Board(size={tuple(self.size)}, turn={turn}, "
            f"black={self.num_disk(Side.BLACK)}, white={self.num_disk(Side.WHITE)})"
        )

    def __str__(self) -> str:
        symbols = {Side.BLACK: "X", Side.WHITE: "O"}
        lines = ["  " + " ".join(str(x) for x in range(self.size.width))]
        for y in range(self.size.height):
            row = []
            for x in range(self.size.width):
                pt = Point(x, y)
                side = self.get(pt)
                if side is not None:
                    row.append(symbols[side])
                elif self.can_move(pt):
                    row.append("*")
                else:
                    row.append(".")
            lines.append(f"{y} " + " ".join(row))
        return "\n".join(lines)
