"""CSV table reading and writing."""

from .codec import CsvCodec

__all__ = ["CsvCodec"]
