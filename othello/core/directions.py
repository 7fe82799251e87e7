"""Per-size shift distances and wrap masks for the eight compass directions."""

from enum import IntEnum
from functools import lru_cache
from typing import Tuple

from othello.core.bitboard import BitBoard, Point, Size


class Direction(IntEnum):
    # The first four shift towards higher offsets, the last four mirror them.
    EAST = 0
    SOUTH = 1
    SOUTH_WEST = 2
    SOUTH_EAST = 3
    WEST = 4
    NORTH = 5
    NORTH_EAST = 6
    NORTH_WEST = 7


class DirectionalShiftTable:
    """
    Shift distances and edge masks for one board size.

    A cell is moved one step in a direction by masking out the boundary
    column/row it would wrap across and then shifting the bit-set by the
    distance for that direction.
    """

    __slots__ = ("size", "offsets", "masks")

    def __init__(self, size: Size, offsets: Tuple[int, ...], masks: Tuple[BitBoard, ...]):
        self.size = size
        self.offsets = offsets
        self.masks = masks

    @classmethod
    def from_size(cls, size: Size) -> "DirectionalShiftTable":
        return cls(size, cls._offsets(size), cls._masks(size))

    @staticmethod
    def _offsets(size: Size) -> Tuple[int, ...]:
        right = Point(1, 0).offset(size)
        down = Point(0, 1).offset(size)
        return (right, down, down - right, down + right)

    @staticmethod
    def _masks(size: Size) -> Tuple[BitBoard, ...]:
        all_mask = BitBoard.all_filled(size)

        r_mask = l_mask = all_mask
        for y in range(size.height):
            r_mask ^= BitBoard.from_point(Point(size.width - 1, y), size)
            l_mask ^= BitBoard.from_point(Point(0, y), size)

        d_mask = u_mask = all_mask
        for x in range(size.width):
            d_mask ^= BitBoard.from_point(Point(x, size.height - 1), size)
            u_mask ^= BitBoard.from_point(Point(x, 0), size)

        return (
            r_mask,
            d_mask,
            d_mask & l_mask,
            d_mask & r_mask,
            l_mask,
            u_mask,
            u_mask & r_mask,
            u_mask & l_mask,
        )

    def shift(self, board: BitBoard, direction: Direction) -> BitBoard:
        masked = board & self.masks[direction]
        if direction < 4:
            return masked.shift_left(self.offsets[direction])
        return masked.shift_right(self.offsets[direction - 4])


@lru_cache(maxsize=None)
def shift_table(size: Size) -> DirectionalShiftTable:
    """Memoized table per distinct size; boards of one size share it."""
    return DirectionalShiftTable.from_size(size)


class MultiDirectionMask:
    """One BitBoard per direction, stepped all together."""

    __slots__ = ("masks",)

    def __init__(self, masks: Tuple[BitBoard, ...]):
        self.masks = masks

    @classmethod
    def filled(cls, board: BitBoard) -> "MultiDirectionMask":
        return cls((board,) * len(Direction))

    def shift(self, table: DirectionalShiftTable) -> "MultiDirectionMask":
        return MultiDirectionMask(
            tuple(table.shift(mask, d) for d, mask in zip(Direction, self.masks))
        )

    def __and__(self, other: "MultiDirectionMask") -> "MultiDirectionMask":
        return MultiDirectionMask(tuple(a & b for a, b in zip(self.masks, other.masks)))

    def __or__(self, other: "MultiDirectionMask") -> "MultiDirectionMask":
        return MultiDirectionMask(tuple(a | b for a, b in zip(self.masks, other.masks)))

    def or_all(self) -> BitBoard:
        out = BitBoard.empty()
        for mask in self.masks:
            out = out | mask
        return out
