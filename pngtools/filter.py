"""Scanline filtering applied to PNG image rows before compression."""

from __future__ import annotations

import enum
from collections.abc import Sequence

__all__ = [
    "FilterType",
    "AdaptiveFilterType",
    "filter_paeth",
    "filter_scanline",
    "sum_buffer",
]

_VALID_BPP = frozenset({1, 2, 3, 4, 6, 8})


class FilterType(enum.IntEnum):
    """The byte level filter applied to a scanline.

    The filter works on the raw bytes of a scanline, not on pixels. The
    default filter used by the encoder is ``SUB``.
    """

    NO_FILTER = 0
    SUB = 1
    UP = 2
    AVG = 3
    PAETH = 4

    @classmethod
    def from_u8(cls, n: int) -> FilterType | None:
        """Return the filter type for the byte ``n``, or None if it names none."""
        try:
            return cls(n)
        except ValueError:
            return None


class AdaptiveFilterType(enum.Enum):
    """Whether a filter is chosen per scanline (``ADAPTIVE``) or fixed.

    ``NON_ADAPTIVE`` is the default.
    """

    ADAPTIVE = "adaptive"
    NON_ADAPTIVE = "non_adaptive"


def filter_paeth(a: int, b: int, c: int) -> int:
    """Return the Paeth predictor for left ``a``, above ``b`` and upper-left ``c``.

    Ties are broken in favour of ``a``, then ``b``, then ``c``.
    """
    pa = max(b, c) - min(b, c)
    pb = max(a, c) - min(a, c)
    if (a < c) == (c < b):
        pc = max(pa, pb) - min(pa, pb)
    else:
        # c lies outside [min(a, b), max(a, b)], so pc can never win.
        pc = 255

    if pa <= pb and pa <= pc:
        return a
    if pb <= pc:
        return b
    return c


def _filter_with(
    method: FilterType, bpp: int, previous: Sequence[int], current: Sequence[int]
) -> bytes:
    if method is FilterType.NO_FILTER:
        return bytes(current)

    if method is FilterType.SUB:
        head = current[:bpp]
        tail = (
            (cur - left) & 0xFF for cur, left in zip(current[bpp:], current)
        )
        return bytes(head) + bytes(tail)

    if method is FilterType.UP:
        return bytes((cur - up) & 0xFF for cur, up in zip(current, previous))

    if method is FilterType.AVG:
        head = ((cur - up // 2) & 0xFF for cur, up in zip(current[:bpp], previous))
        tail = (
            (cur - ((left + up) >> 1)) & 0xFF
            for cur, left, up in zip(current[bpp:], current, previous[bpp:])
        )
        return bytes(head) + bytes(tail)

    head = (
        (cur - filter_paeth(0, up, 0)) & 0xFF
        for cur, up in zip(current[:bpp], previous)
    )
    tail = (
        (cur - filter_paeth(left, up, upper_left)) & 0xFF
        for cur, left, up, upper_left in zip(
            current[bpp:], current, previous[bpp:], previous
        )
    )
    return bytes(head) + bytes(tail)


def filter_scanline(
    method: FilterType,
    adaptive: AdaptiveFilterType,
    bpp: int,
    previous: Sequence[int],
    current: Sequence[int],
) -> tuple[FilterType, bytes]:
    """Filter one scanline and return the filter used with the filtered bytes.

    ``previous`` is the unfiltered row above (all zeros for the first row) and
    must be as long as ``current``. ``bpp`` is the number of bytes per pixel
    used for prediction. In adaptive mode ``method`` is ignored and the filter
    giving the smallest :func:`sum_buffer` is chosen, later filters winning ties.
    """
    if bpp not in _VALID_BPP:
        raise ValueError(f"unsupported bytes per pixel: {bpp}")
    if len(previous) != len(current):
        raise ValueError(
            f"previous row has {len(previous)} bytes, current row has {len(current)}"
        )
    method = FilterType(method)
    previous = bytes(previous)
    current = bytes(current)

    if adaptive is AdaptiveFilterType.NON_ADAPTIVE:
        return method, _filter_with(method, bpp, previous, current)

    best_type = FilterType.NO_FILTER
    best_output = b""
    best_sum: int | None = None
    for candidate in (FilterType.SUB, FilterType.UP, FilterType.AVG, FilterType.PAETH):
        output = _filter_with(candidate, bpp, previous, current)
        total = sum_buffer(output)
        if best_sum is None or total <= best_sum:
            best_sum = total
            best_type = candidate
            best_output = output
    return best_type, best_output


def sum_buffer(buf: Sequence[int]) -> int:
    """Sum the absolute values of the bytes of ``buf`` read as signed 8-bit numbers."""
    return sum(b if b < 128 else 256 - b for b in buf)