"""Folds entries from many .strings files into one table keyed by string key."""

import logging
from dataclasses import dataclass
from typing import Iterable

from ..models import Entry

logger = logging.getLogger(__name__)


@dataclass
class CommentConflict:
    """Two different comments found for the same key.

    Attributes:
        key: The string key.
        kept: Comment already in the table, which is kept.
        ignored: Incoming comment, which is dropped.
        source_path: File the ignored comment came from.
    """
    key: str
    kept: str
    ignored: str
    source_path: str


class Merger:
    """Merges entries into a table keyed by string key.

    The first entry seen for a key becomes the canonical record; later
    entries contribute their translations to it, one language at a time.
    Whichever entry is merged last for a language decides its value, so
    the result depends on the order files are fed in.
    """

    def merge(
        self,
        destination: dict[str, Entry],
        entries: Iterable[Entry]
    ) -> list[CommentConflict]:
        """Merge entries into `destination` in place.

        Args:
            destination: Table mapping keys to canonical entries.
            entries: Entries to fold in, in processing order.

        Returns:
            Comment conflicts found while merging. Each one is also logged.
        """
        conflicts = []

        for incoming in entries:
            existing = destination.get(incoming.key)
            if existing is None:
                destination[incoming.key] = incoming
                continue

            if existing.comment and incoming.comment and existing.comment != incoming.comment:
                logger.warning(
                    'different comments found: key = %s, "%s" - "%s"',
                    incoming.key, existing.comment, incoming.comment
                )
                conflicts.append(CommentConflict(
                    key=incoming.key,
                    kept=existing.comment,
                    ignored=incoming.comment,
                    source_path=incoming.source_path
                ))
            if not existing.comment:
                existing.comment = incoming.comment

            existing.translations.update(incoming.translations)

        return conflicts
