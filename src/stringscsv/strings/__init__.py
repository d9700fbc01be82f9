"""Strings file parsing and writing."""

from .parser import StringsParser

__all__ = ["StringsParser"]
