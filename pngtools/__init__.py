"""PNG scanline filters and their reversal, big-endian chunk I/O and text metadata chunks."""

__version__ = "0.1.0"
__all__ = ["byteio", "filter", "text_metadata", "unfilter"]