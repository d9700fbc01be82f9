"""Main conversion service orchestration."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, TextIO

from ..config import LocalizationConfig
from ..merge import CommentConflict, Merger
from ..models import Entry
from ..strings import StringsParser
from ..table import CsvCodec

logger = logging.getLogger(__name__)


@dataclass
class ExportReport:
    """Report of a .strings to CSV export.

    Attributes:
        files: Files that were decoded and merged.
        rows: Number of rows written.
        conflicts: Comment conflicts found while merging.
    """
    files: list[Path] = field(default_factory=list)
    rows: int = 0
    conflicts: list[CommentConflict] = field(default_factory=list)


@dataclass
class ImportReport:
    """Report of a CSV to .strings import.

    Attributes:
        rows: Number of rows read from the CSV.
        files_written: Paths of the .strings files written.
    """
    rows: int = 0
    files_written: list[Path] = field(default_factory=list)


class LocalizationService:
    """Service that orchestrates the export and import workflows."""

    def __init__(self, config: Optional[LocalizationConfig] = None):
        """Initialize the service.

        Args:
            config: Conversion configuration.
        """
        self.config = config or LocalizationConfig()
        self.parser = StringsParser()
        self.codec = CsvCodec(self.config.languages)
        self.merger = Merger()

    def find_files(self) -> list[Path]:
        """Find every .strings file under the configured root."""
        return self.config.find_strings()

    def load_files(self) -> list[tuple[Path, list[Entry]]]:
        """Decode every discovered file whose language can be determined.

        Returns:
            List of (path, entries) tuples in discovery order.

        Raises:
            ParseError: If any file is malformed.
        """
        loaded = []
        for path in self.find_files():
            language = self.config.language_for_path(path)
            if language is None:
                logger.warning("skipping %s: not a file of a configured language", path)
                continue

            entries = self.parser.parse_file(
                path,
                language,
                source_path=self.config.relative_source(path),
                encoding=self.config.encoding
            )
            logger.debug("loaded %d entries (%s) from %s", len(entries), language, path)
            loaded.append((path, entries))
        return loaded

    def describe_files(self) -> Iterator[str]:
        """Yield a flat description of each decoded entry, file by file.

        A blank string follows the entries of each file.
        """
        for _, entries in self.load_files():
            for entry in entries:
                yield entry.describe(self.config.languages)
            yield ""

    def build_table(self) -> tuple[dict[str, Entry], ExportReport]:
        """Merge the entries of every discovered file into one table.

        Returns:
            Tuple of (table keyed by string key, report without row count).
        """
        table: dict[str, Entry] = {}
        report = ExportReport()
        for path, entries in self.load_files():
            report.conflicts.extend(self.merger.merge(table, entries))
            report.files.append(path)
        return table, report

    def export_csv(self, stream: TextIO) -> ExportReport:
        """Export every discovered .strings file to a single CSV table.

        Args:
            stream: Text stream the CSV is written to.

        Returns:
            ExportReport with results.
        """
        table, report = self.build_table()
        self.write_table(table, report, stream)
        return report

    def write_table(self, table: dict[str, Entry], report: ExportReport, stream: TextIO) -> None:
        """Write a merged table as CSV and record the row count."""
        rows = list(table.values())
        self.codec.write(rows, stream)
        report.rows = len(rows)

    def import_csv(self, stream: TextIO, name: str = "<stdin>") -> ImportReport:
        """Write one .strings file per language from a CSV table.

        Entries are grouped by the target path derived from their source
        path, keeping row order within each file.

        Args:
            stream: Text stream the CSV is read from.
            name: Name of the input, used in error messages.

        Returns:
            ImportReport listing the files written.

        Raises:
            ParseError: If the CSV is malformed.
        """
        entries = self.codec.read(stream, name=name)
        report = ImportReport(rows=len(entries))

        for language in self.config.languages:
            # Group entries by the output file for this language
            groups: dict[Path, list[Entry]] = {}
            for entry in entries:
                target = self.config.path_for_language(entry.source_path, language)
                groups.setdefault(target, []).append(entry)

            for target, group in groups.items():
                self.parser.write(group, target, language, encoding=self.config.encoding)
                logger.debug("wrote %d entries to %s", len(group), target)
                report.files_written.append(target)

        return report
