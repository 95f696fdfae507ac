import pytest

from pngtools.filter import (
    AdaptiveFilterType,
    FilterType,
    filter_paeth,
    filter_scanline,
)
from pngtools.unfilter import filter_paeth_decode, unfilter_scanline

LEN = 240  # a multiple of 8, 6, 4, 3, 2 and 1
FILTERS = list(FilterType)
BPPS = [1, 2, 3, 4, 6, 8]


@pytest.mark.parametrize("kind", FILTERS)
@pytest.mark.parametrize("bpp", BPPS)
def test_roundtrip(kind, bpp):
    previous = bytes([1] * LEN)
    current = bytes(range(LEN))
    used, filtered = filter_scanline(
        kind, AdaptiveFilterType.NON_ADAPTIVE, bpp, previous, current
    )
    assert unfilter_scanline(used, bpp, previous, filtered) == current


@pytest.mark.parametrize("kind", FILTERS)
@pytest.mark.parametrize("bpp", BPPS)
def test_roundtrip_ascending_previous_line(kind, bpp):
    previous = bytes(range(LEN))
    current = bytes(range(LEN))
    used, filtered = filter_scanline(
        kind, AdaptiveFilterType.NON_ADAPTIVE, bpp, previous, current
    )
    assert unfilter_scanline(used, bpp, previous, filtered) == current


@pytest.mark.parametrize("bpp", BPPS)
def test_adaptive_roundtrip(bpp):
    previous = bytes((i * 7) % 256 for i in range(LEN))
    current = bytes((i * 13 + 5) % 256 for i in range(LEN))
    used, filtered = filter_scanline(
        FilterType.NO_FILTER, AdaptiveFilterType.ADAPTIVE, bpp, previous, current
    )
    assert unfilter_scanline(used, bpp, previous, filtered) == current


@pytest.mark.parametrize("kind", FILTERS)
@pytest.mark.parametrize("bpp", BPPS)
def test_empty_previous_matches_zero_row(kind, bpp):
    current = bytes((i * 31 + 3) % 256 for i in range(48))
    zeros = bytes(48)
    _, filtered = filter_scanline(
        kind, AdaptiveFilterType.NON_ADAPTIVE, bpp, zeros, current
    )
    assert unfilter_scanline(kind, bpp, b"", filtered) == current
    assert unfilter_scanline(kind, bpp, zeros, filtered) == current


def test_sub_single_byte_pixels():
    assert unfilter_scanline(FilterType.SUB, 1, b"", bytes([1, 1, 1])) == bytes([1, 2, 3])


def test_sub_wraps_around():
    assert unfilter_scanline(FilterType.SUB, 1, b"", bytes([200, 100])) == bytes([200, 44])


def test_up_adds_row_above():
    result = unfilter_scanline(FilterType.UP, 1, bytes([10, 250]), bytes([5, 10]))
    assert result == bytes([15, 4])


def test_up_without_previous_is_identity():
    assert unfilter_scanline(FilterType.UP, 1, b"", bytes([7, 8, 9])) == bytes([7, 8, 9])


def test_partial_pixel_left_unchanged():
    result = unfilter_scanline(FilterType.SUB, 2, b"", bytes([1, 1, 1, 1, 9]))
    assert result == bytes([1, 1, 2, 2, 9])


def test_accepts_integer_filter_type():
    assert unfilter_scanline(1, 1, b"", [1, 1]) == bytes([1, 2])


def test_paeth_decode_pinned_values():
    assert filter_paeth_decode(10, 20, 15) == 15
    assert filter_paeth_decode(0, 0, 0) == 0
    assert filter_paeth_decode(5, 0, 0) == 5
    assert filter_paeth_decode(0, 9, 0) == 9


def test_paeth_decode_agrees_with_encoder_predictor():
    values = range(0, 256, 5)
    mismatches = [
        (a, b, c)
        for a in values
        for b in values
        for c in values
        if filter_paeth_decode(a, b, c) != filter_paeth(a, b, c)
    ]
    assert mismatches == []


def test_invalid_bpp_rejected():
    with pytest.raises(ValueError):
        unfilter_scanline(FilterType.SUB, 5, b"", bytes(10))


def test_invalid_filter_type_rejected():
    with pytest.raises(ValueError):
        unfilter_scanline(7, 1, b"", bytes(4))


def test_mismatched_previous_length_rejected():
    with pytest.raises(ValueError):
        unfilter_scanline(FilterType.UP, 1, bytes(3), bytes(4))