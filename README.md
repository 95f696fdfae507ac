# pngtools

Building blocks for working with PNG data in pure Python, with no runtime
dependencies:

- `pngtools.filter`: apply the five PNG scanline filters
  (`FilterType.NO_FILTER`, `SUB`, `UP`, `AVG`, `PAETH`), either one fixed
  filter or adaptive selection of the filter whose output has the smallest
  `sum_buffer` value.
- `pngtools.unfilter`: undo those filters on a scanline.
- `pngtools.byteio`: read big-endian `u8`, `u16` and `u32` values, write
  `u32` values, and write complete PNG chunks (length, type, data, CRC-32).
- `pngtools.text_metadata`: `tEXt`, `zTXt` and `iTXt` chunks, with Latin-1
  and UTF-8 handling, keyword length checks and zlib compression.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Filtering scanlines

```python
from pngtools.filter import FilterType, AdaptiveFilterType, filter_scanline
from pngtools.unfilter import unfilter_scanline

previous = bytes(12)          # the row above; zeros for the first row
current = bytes(range(12))

used, filtered = filter_scanline(
    FilterType.PAETH, AdaptiveFilterType.NON_ADAPTIVE, 3, previous, current
)
restored = unfilter_scanline(used, 3, previous, filtered)
assert restored == current
```

`filter_scanline` returns a tuple of the filter used and the filtered bytes.
The bytes-per-pixel value must be 1, 2, 3, 4, 6 or 8, and `previous` must be
as long as `current`; otherwise `ValueError` is raised.

With `AdaptiveFilterType.ADAPTIVE` the `method` argument is ignored:
`SUB`, `UP`, `AVG` and `PAETH` are tried in that order and the one with the
smallest `sum_buffer` wins, a later filter winning a tie.

`unfilter_scanline` accepts an empty `previous`, which stands for a row of
zeros. `FilterType.from_u8(n)` maps a filter byte to its type, or returns
`None` for an unknown value. `filter_paeth` and `filter_paeth_decode` expose
the Paeth predictor.

## Reading and writing chunks

```python
import io
from pngtools.byteio import write_chunk, read_u32

out = io.BytesIO()
write_chunk(out, b"IEND", b"")
out.seek(0)
assert read_u32(out) == 0
```

The read functions raise `EOFError` when the stream runs short.
`write_u32` and `write_chunk` raise `ValueError` for out-of-range values or
chunk types that are not four bytes long.

## Text metadata

```python
import io
from pngtools.text_metadata import TEXtChunk, ZTXtChunk, ITXtChunk

out = io.BytesIO()
TEXtChunk("Title", "A picture").encode(out)
ZTXtChunk("Comment", "Compressed text").encode(out)

chunk = ITXtChunk("Author", "unicode text ✓")
chunk.compressed = True
chunk.language_tag = "en"
chunk.encode(out)
```

You can rebuild chunks from their raw fields with `TEXtChunk.decode`,
`ZTXtChunk.decode` and `ITXtChunk.decode`. Compressed text stays compressed
until you ask for it. `get_text()` returns it, and `decompress_text(limit)`
expands it in place. The limit defaults to `DECOMPRESSION_LIMIT` (2 MiB).
`compress_text()` compresses the held text in place.

Encoding problems raise `TextEncodeError` and decoding problems raise
`TextDecodeError`. Both are subclasses of `ValueError`. Each has a `kind`
attribute holding a `TextEncodingError` or `TextDecodingError` member that
names the cause.

## What this package does not do

This package does not read or write whole PNG images. It has no image
header, palette or frame handling and no IDAT compression pipeline. It has
no animation support and no command-line tool. It gives you the scanline
filters, the chunk framing and the text chunks to build those with.