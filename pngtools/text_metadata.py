"""Text chunks (tEXt, zTXt and iTXt) of PNG files.

tEXt and zTXt hold ISO 8859-1 text, the latter compressed; iTXt holds UTF-8
text that may be compressed.
"""

from __future__ import annotations

import enum
import zlib
from dataclasses import dataclass, field
from typing import BinaryIO

from pngtools.byteio import write_chunk

__all__ = [
    "DECOMPRESSION_LIMIT",
    "TextEncodingError",
    "TextEncodeError",
    "TextDecodingError",
    "TextDecodeError",
    "TEXtChunk",
    "ZTXtChunk",
    "ITXtChunk",
]

DECOMPRESSION_LIMIT = 2097152
"""Default limit, in bytes, for decompressed text (2 MiB)."""

_MAX_KEYWORD = 79


class TextEncodingError(enum.Enum):
    """Reasons a text chunk cannot be encoded."""

    UNREPRESENTABLE = "The text metadata cannot be encoded into valid ISO 8859-1"
    INVALID_KEYWORD_SIZE = "Invalid keyword size"
    COMPRESSION_ERROR = "Unable to compress text metadata"


class TextEncodeError(ValueError):
    """Raised when a text chunk cannot be encoded."""

    def __init__(self, kind: TextEncodingError) -> None:
        super().__init__(kind.value)
        self.kind = kind


class TextDecodingError(enum.Enum):
    """Reasons a text chunk cannot be decoded."""

    UNREPRESENTABLE = "unrepresentable characters in text"
    INVALID_KEYWORD_SIZE = "keyword must be 1 to 79 bytes long"
    MISSING_NULL_SEPARATOR = "missing null separator"
    INFLATION_ERROR = "compressed text cannot be decompressed"
    OUT_OF_DECOMPRESSION_SPACE = "decompressed text exceeds the limit"
    INVALID_COMPRESSION_METHOD = "invalid compression method"
    INVALID_COMPRESSION_FLAG = "invalid compression flag"
    MISSING_COMPRESSION_FLAG = "missing compression flag"


class TextDecodeError(ValueError):
    """Raised when a text chunk cannot be decoded."""

    def __init__(self, kind: TextDecodingError) -> None:
        super().__init__(kind.value)
        self.kind = kind


def _encode_latin1(text: str) -> bytes:
    try:
        return text.encode("latin-1")
    except UnicodeEncodeError:
        raise TextEncodeError(TextEncodingError.UNREPRESENTABLE) from None


def _encode_keyword(keyword: str) -> bytes:
    data = _encode_latin1(keyword)
    if not 1 <= len(data) <= _MAX_KEYWORD:
        raise TextEncodeError(TextEncodingError.INVALID_KEYWORD_SIZE)
    return data


def _check_keyword(keyword: bytes) -> str:
    if not 1 <= len(keyword) <= _MAX_KEYWORD:
        raise TextDecodeError(TextDecodingError.INVALID_KEYWORD_SIZE)
    return bytes(keyword).decode("latin-1")


def _decode_utf8(data: bytes) -> str:
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError:
        raise TextDecodeError(TextDecodingError.UNREPRESENTABLE) from None


def _compress(raw: bytes) -> bytes:
    try:
        return zlib.compress(raw, 1)
    except zlib.error:
        raise TextEncodeError(TextEncodingError.COMPRESSION_ERROR) from None


def _inflate(data: bytes, limit: int | None = None) -> bytes:
    """Decompress a zlib stream, optionally bounded to ``limit`` output bytes."""
    decompressor = zlib.decompressobj()
    try:
        if limit is None:
            out = decompressor.decompress(data)
        else:
            out = decompressor.decompress(data, limit + 1)
            if len(out) > limit:
                raise TextDecodeError(TextDecodingError.OUT_OF_DECOMPRESSION_SPACE)
    except zlib.error:
        raise TextDecodeError(TextDecodingError.INFLATION_ERROR) from None
    if not decompressor.eof:
        raise TextDecodeError(TextDecodingError.INFLATION_ERROR)
    return out


@dataclass
class TEXtChunk:
    """An uncompressed ISO 8859-1 text chunk."""

    keyword: str
    text: str

    @classmethod
    def decode(cls, keyword: bytes, text: bytes) -> TEXtChunk:
        """Build a chunk from the raw keyword and text bytes."""
        return cls(_check_keyword(keyword), bytes(text).decode("latin-1"))

    def encode(self, stream: BinaryIO) -> None:
        """Write this chunk to ``stream`` as a tEXt chunk."""
        data = _encode_keyword(self.keyword) + b"\x00" + _encode_latin1(self.text)
        write_chunk(stream, b"tEXt", data)


@dataclass(init=False)
class ZTXtChunk:
    """A compressed ISO 8859-1 text chunk.

    The text is held either as a string or as its compressed bytes.
    """

    keyword: str
    _text: str | bytes = field(repr=False)

    def __init__(self, keyword: str, text: str) -> None:
        self.keyword = keyword
        self._text = text

    @property
    def is_compressed(self) -> bool:
        """Whether the text is currently held compressed."""
        return isinstance(self._text, bytes)

    @classmethod
    def decode(cls, keyword: bytes, compression_method: int, text: bytes) -> ZTXtChunk:
        """Build a chunk from raw fields; the text stays compressed."""
        name = _check_keyword(keyword)
        if compression_method != 0:
            raise TextDecodeError(TextDecodingError.INVALID_COMPRESSION_METHOD)
        chunk = cls(name, "")
        chunk._text = bytes(text)
        return chunk

    def decompress_text(self, limit: int = DECOMPRESSION_LIMIT) -> None:
        """Decompress the held text in place, allowing at most ``limit`` bytes."""
        if isinstance(self._text, bytes):
            self._text = _inflate(self._text, limit).decode("latin-1")

    def get_text(self) -> str:
        """Return the text, decompressing it without a limit if needed."""
        if isinstance(self._text, bytes):
            return _inflate(self._text).decode("latin-1")
        return self._text

    def compress_text(self) -> None:
        """Compress the held text in place."""
        if isinstance(self._text, str):
            self._text = _compress(_encode_latin1(self._text))

    def encode(self, stream: BinaryIO) -> None:
        """Write this chunk to ``stream`` as a zTXt chunk."""
        data = _encode_keyword(self.keyword) + b"\x00\x00"
        if isinstance(self._text, bytes):
            data += self._text
        else:
            data += _compress(_encode_latin1(self._text))
        write_chunk(stream, b"zTXt", data)


@dataclass(init=False)
class ITXtChunk:
    """An international (UTF-8) text chunk, optionally compressed."""

    keyword: str
    compressed: bool
    language_tag: str
    translated_keyword: str
    _text: str | bytes = field(repr=False)

    def __init__(self, keyword: str, text: str) -> None:
        self.keyword = keyword
        self.compressed = False
        self.language_tag = ""
        self.translated_keyword = ""
        self._text = text

    @classmethod
    def decode(
        cls,
        keyword: bytes,
        compression_flag: int,
        compression_method: int,
        language_tag: bytes,
        translated_keyword: bytes,
        text: bytes,
    ) -> ITXtChunk:
        """Build a chunk from raw fields; compressed text stays compressed."""
        name = _check_keyword(keyword)
        if compression_flag == 0:
            compressed = False
        elif compression_flag == 1:
            compressed = True
        else:
            raise TextDecodeError(TextDecodingError.INVALID_COMPRESSION_FLAG)
        if compressed and compression_method != 0:
            raise TextDecodeError(TextDecodingError.INVALID_COMPRESSION_METHOD)

        tag = bytes(language_tag)
        if not tag.isascii():
            raise TextDecodeError(TextDecodingError.UNREPRESENTABLE)
        translated = _decode_utf8(translated_keyword)

        chunk = cls(name, "")
        chunk.compressed = compressed
        chunk.language_tag = tag.decode("ascii")
        chunk.translated_keyword = translated
        chunk._text = bytes(text) if compressed else _decode_utf8(text)
        return chunk

    def decompress_text(self, limit: int = DECOMPRESSION_LIMIT) -> None:
        """Decompress the held text in place, allowing at most ``limit`` bytes."""
        if isinstance(self._text, bytes):
            self._text = _decode_utf8(_inflate(self._text, limit))

    def get_text(self) -> str:
        """Return the text, decompressing it without a limit if needed."""
        if isinstance(self._text, bytes):
            return _decode_utf8(_inflate(self._text))
        return self._text

    def compress_text(self) -> None:
        """Compress the held text in place."""
        if isinstance(self._text, str):
            self._text = _compress(self._text.encode("utf-8"))

    def encode(self, stream: BinaryIO) -> None:
        """Write this chunk to ``stream`` as an iTXt chunk."""
        data = bytearray(_encode_keyword(self.keyword))
        data.append(0)
        data.append(1 if self.compressed else 0)
        data.append(0)
        if not self.language_tag.isascii():
            raise TextEncodeError(TextEncodingError.UNREPRESENTABLE)
        data += self.language_tag.encode("ascii")
        data.append(0)
        data += self.translated_keyword.encode("utf-8")
        data.append(0)

        if self.compressed:
            if isinstance(self._text, bytes):
                data += self._text
            else:
                data += _compress(self._text.encode("utf-8"))
        elif isinstance(self._text, bytes):
            try:
                data += _inflate(self._text)
            except TextDecodeError:
                raise TextEncodeError(TextEncodingError.COMPRESSION_ERROR) from None
        else:
            data += self._text.encode("utf-8")

        write_chunk(stream, b"iTXt", bytes(data))