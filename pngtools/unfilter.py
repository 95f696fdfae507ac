"""Reversal of PNG scanline filters applied before compression."""

from __future__ import annotations

from collections.abc import Sequence

from pngtools.filter import FilterType

__all__ = ["filter_paeth_decode", "unfilter_scanline"]

_VALID_BPP = frozenset({1, 2, 3, 4, 6, 8})


def filter_paeth_decode(a: int, b: int, c: int) -> int:
    """Return the Paeth predictor for left ``a``, above ``b`` and upper-left ``c``.

    Ties are broken in favour of ``a``, then ``b``, then ``c``.
    """
    pa = abs(b - c)
    pb = abs(a - c)
    pc = abs((a - c) + (b - c))

    out = a
    smallest = pa
    if pb < smallest:
        smallest = pb
        out = b
    if pc < smallest:
        out = c
    return out


def _unfilter_sub(row: bytes, bpp: int) -> bytearray:
    out = bytearray(row[:bpp])
    for value in row[bpp:]:
        out.append((value + out[-bpp]) & 0xFF)
    return out


def _unfilter_avg_first_row(row: bytes, bpp: int) -> bytearray:
    out = bytearray(row[:bpp])
    for value in row[bpp:]:
        out.append((value + out[-bpp] // 2) & 0xFF)
    return out


def _unfilter_avg(row: bytes, previous: bytes, bpp: int) -> bytearray:
    out = bytearray((value + up // 2) & 0xFF for value, up in zip(row[:bpp], previous))
    for value, up in zip(row[bpp:], previous[bpp:]):
        out.append((value + (out[-bpp] + up) // 2) & 0xFF)
    return out


def _unfilter_paeth(row: bytes, previous: bytes, bpp: int) -> bytearray:
    out = bytearray(
        (value + filter_paeth_decode(0, up, 0)) & 0xFF
        for value, up in zip(row[:bpp], previous)
    )
    for value, up, upper_left in zip(row[bpp:], previous[bpp:], previous):
        out.append((value + filter_paeth_decode(out[-bpp], up, upper_left)) & 0xFF)
    return out


def unfilter_scanline(
    filter_type: FilterType | int,
    bpp: int,
    previous: Sequence[int],
    current: Sequence[int],
) -> bytes:
    """Undo ``filter_type`` on one scanline and return the reconstructed bytes.

    ``previous`` is the reconstructed row above; an empty ``previous`` stands
    for a row of zeros. ``bpp`` is the number of bytes per pixel used for
    prediction. Trailing bytes that do not fill a whole pixel are returned
    unchanged, except by the ``UP`` filter and by ``SUB`` with one byte per
    pixel, which work byte by byte.
    """
    if bpp not in _VALID_BPP:
        raise ValueError(f"unsupported bytes per pixel: {bpp}")
    filter_type = FilterType(filter_type)
    previous = bytes(previous)
    current = bytes(current)
    if previous and len(previous) != len(current):
        raise ValueError(
            f"previous row has {len(previous)} bytes, current row has {len(current)}"
        )

    if not previous:
        if filter_type is FilterType.PAETH:
            filter_type = FilterType.SUB
        elif filter_type is FilterType.UP:
            filter_type = FilterType.NO_FILTER

    if filter_type is FilterType.NO_FILTER:
        return current

    if filter_type is FilterType.UP:
        return bytes((value + up) & 0xFF for value, up in zip(current, previous))

    whole = len(current) - len(current) % bpp
    body, rest = current[:whole], current[whole:]

    if filter_type is FilterType.SUB:
        result = _unfilter_sub(body, bpp)
    elif filter_type is FilterType.AVG:
        if previous:
            result = _unfilter_avg(body, previous, bpp)
        else:
            result = _unfilter_avg_first_row(body, bpp)
    else:
        result = _unfilter_paeth(body, previous, bpp)

    return bytes(result) + rest