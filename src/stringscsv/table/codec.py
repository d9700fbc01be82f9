"""CSV codec for localization tables."""

import csv
from typing import Iterable, TextIO

from ..errors import ParseError
from ..models import Entry

FILE_COLUMN = "file"
KEY_COLUMN = "key"
COMMENT_COLUMN = "comment"

UTF8_BOM = "\ufeff"


class CsvCodec:
    """Reads and writes the flat CSV table.

    The table has one row per entry and the columns
    `file, key, comment` followed by one column per language.
    """

    def __init__(self, languages: list[str]):
        """Initialize the codec.

        Args:
            languages: Language codes, in column order.
        """
        self.languages = list(languages)

    @property
    def header(self) -> list[str]:
        """Header row of the table."""
        return [FILE_COLUMN, KEY_COLUMN, COMMENT_COLUMN] + self.languages

    def read(self, stream: TextIO, name: str = "<csv>") -> list[Entry]:
        """Read entries from a CSV stream.

        Open files with `newline=""` so quoted line breaks survive.

        Args:
            stream: Text stream positioned at the header row.
            name: Name used in error messages.

        Returns:
            One Entry per data row, in row order.

        Raises:
            ParseError: If the header or any row is malformed.
        """
        reader = csv.reader(stream, strict=True)
        header = self.header
        entries = []

        try:
            first = next(reader, None)
            if first is None:
                raise ParseError("missing header row", path=name)
            if first and first[0].startswith(UTF8_BOM):
                # Spreadsheet "CSV UTF-8" exports start with a BOM
                first[0] = first[0][1:]
            if first != header:
                raise ParseError(
                    f"unexpected header {','.join(first)!r}, "
                    f"expected {','.join(header)!r}",
                    path=name,
                    line=reader.line_num
                )

            for row in reader:
                if not row:
                    continue
                if len(row) != len(header):
                    raise ParseError(
                        f"expected {len(header)} fields, found {len(row)}",
                        path=name,
                        line=reader.line_num
                    )
                source_path, key, comment, *values = row
                if not key:
                    raise ParseError("empty key", path=name, line=reader.line_num)
                entries.append(Entry(
                    source_path=source_path,
                    key=key,
                    comment=comment,
                    translations=dict(zip(self.languages, values))
                ))
        except csv.Error as e:
            raise ParseError(str(e), path=name, line=reader.line_num) from e

        return entries

    def write(self, entries: Iterable[Entry], stream: TextIO) -> None:
        """Write the header and one row per entry, in the given order.

        Args:
            entries: Entries to write.
            stream: Text stream opened with `newline=""`.
        """
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(self.header)
        for entry in entries:
            writer.writerow(
                [entry.source_path, entry.key, entry.comment]
                + [entry.value_for(lang) for lang in self.languages]
            )
