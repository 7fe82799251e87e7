"""
BitBoard Module
===============

A fixed-capacity bit-set over a rectangular grid of at most 64 cells.

Cells are linearised row-major: the point (x, y) on a board of width W lives
at bit ``x + W * y``. Every BitBoard built through this module keeps the bits
outside ``width * height`` cleared, so ``all_filled(size)`` is the valid
region for that size.
"""

from typing import Iterable, Iterator, NamedTuple

MIN_SIZE: int = 2
MAX_SIZE: int = 8
BIT_BOARD_BITS: int = 64
_FULL_MASK: int = (1 << BIT_BOARD_BITS) - 1


class Size(NamedTuple):
    width: int
    height: int

    @property
    def cells(self) -> int:
        return self.width * self.height

    def validate(self) -> "Size":
        """Raise ValueError unless both dimensions are in [MIN_SIZE, MAX_SIZE]."""
        for name, value in (("width", self.width), ("height", self.height)):
            if not MIN_SIZE <= value <= MAX_SIZE:
                raise ValueError(
                    f"board {name} must be in [{MIN_SIZE}, {MAX_SIZE}], got {value}"
                )
        return self


class Point(NamedTuple):
    x: int
    y: int

    def offset(self, size: Size) -> int:
        if not (0 <= self.x < size.width and 0 <= self.y < size.height):
            raise IndexError(f"point {tuple(self)} is outside a {size.width}x{size.height} board")
        return self.x + size.width * self.y

    @classmethod
    def from_offset(cls, off: int, size: Size) -> "Point":
        return cls(off % size.width, off // size.width)


class BitBoard:
    """Immutable set of cells backed by a single integer."""

    __slots__ = ("_bits",)

    def __init__(self, bits: int = 0):
        # only the low BIT_BOARD_BITS bits are kept
        self._bits = bits & _FULL_MASK

    # --- Constructors ---

    @classmethod
    def empty(cls) -> "BitBoard":
        return cls(0)

    @classmethod
    def all_filled(cls, size: Size) -> "BitBoard":
        return cls((1 << size.cells) - 1)

    @classmethod
    def from_point(cls, point: Point, size: Size) -> "BitBoard":
        return cls(1 << Point(*point).offset(size))

    @classmethod
    def from_points(cls, points: Iterable[Point], size: Size) -> "BitBoard":
        bits = 0
        for pt in points:
            bits |= 1 << Point(*pt).offset(size)
        return cls(bits)

    # --- Set algebra ---

    def __or__(self, other: "BitBoard") -> "BitBoard":
        return BitBoard(self._bits | other._bits)

    def __and__(self, other: "BitBoard") -> "BitBoard":
        return BitBoard(self._bits & other._bits)

    def __sub__(self, other: "BitBoard") -> "BitBoard":
        return BitBoard(self._bits & ~other._bits)

    def __xor__(self, other: "BitBoard") -> "BitBoard":
        return BitBoard(self._bits ^ other._bits)

    def complement(self, size: Size) -> "BitBoard":
        """Cells of the valid region for ``size`` that are not in this set."""
        return BitBoard(~self._bits & ((1 << size.cells) - 1))

    def shift_left(self, n: int) -> "BitBoard":
        return BitBoard(self._bits << n)

    def shift_right(self, n: int) -> "BitBoard":
        return BitBoard(self._bits >> n)

    # --- Queries ---

    def is_empty(self) -> bool:
        return self._bits == 0

    def __bool__(self) -> bool:
        return self._bits != 0

    def count(self) -> int:
        return self._bits.bit_count()

    def contains(self, point: Point, size: Size) -> bool:
        return (self._bits >> Point(*point).offset(size)) & 1 == 1

    def points(self, size: Size) -> Iterator[Point]:
        """Yield the set cells from the lowest offset to the highest."""
        bits = self._bits
        while bits:
            low = bits & -bits
            yield Point.from_offset(low.bit_length() - 1, size)
            bits ^= low

    def points_reversed(self, size: Size) -> Iterator[Point]:
        """Yield the set cells from the highest offset to the lowest."""
        bits = self._bits
        while bits:
            off = bits.bit_length() - 1
            yield Point.from_offset(off, size)
            bits ^= 1 << off

    # --- Value semantics ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitBoard):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"BitBoard(0x{self._bits:016x})"
