"""Merging entries collected from many files."""

from .merger import CommentConflict, Merger

__all__ = ["CommentConflict", "Merger"]
