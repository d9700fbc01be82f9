"""Parser for Apple .strings files."""

import logging
from pathlib import Path
from typing import Optional

from ..errors import ParseError
from ..models import Entry

logger = logging.getLogger(__name__)

UTF8_BOM = "\ufeff"


class _Scanner:
    """Cursor over .strings content that tracks the current line."""

    def __init__(self, content: str, path: str):
        self.content = content
        self.path = path
        self.pos = 0
        self.line = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.content)

    def peek(self, size: int = 1) -> str:
        return self.content[self.pos:self.pos + size]

    def advance(self, size: int = 1) -> str:
        chunk = self.content[self.pos:self.pos + size]
        self.line += chunk.count("\n")
        self.pos += len(chunk)
        return chunk

    def error(self, reason: str, line: Optional[int] = None) -> ParseError:
        return ParseError(reason, path=self.path, line=line or self.line)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.peek().isspace():
            self.advance()

    def read_block_comment(self) -> str:
        start = self.line
        self.advance(2)
        end = self.content.find("*/", self.pos)
        if end < 0:
            raise self.error("unterminated comment", start)
        text = self.advance(end - self.pos)
        self.advance(2)
        return text

    def read_line_comment(self) -> str:
        self.advance(2)
        end = self.content.find("\n", self.pos)
        if end < 0:
            end = len(self.content)
        return self.advance(end - self.pos)

    def read_quoted(self, what: str) -> str:
        if self.peek() != '"':
            raise self.error(f"expected quoted {what}")
        start = self.line
        self.advance()
        raw = []
        while True:
            if self.at_end():
                raise self.error(f"unterminated quoted {what}", start)
            char = self.advance()
            if char == "\\":
                if self.at_end():
                    raise self.error(f"unterminated quoted {what}", start)
                raw.append(char + self.advance())
            elif char == '"':
                return Entry._unescape("".join(raw))
            else:
                raw.append(char)

    def expect(self, token: str) -> None:
        self.skip_whitespace()
        if self.peek() != token:
            found = self.peek() or "end of file"
            raise self.error(f"expected '{token}', found {found!r}")
        self.advance()


class StringsParser:
    """Parser for Apple .strings files.

    Reads `"key" = "value";` definitions, attaching the closest preceding
    comment to each one. Any malformed definition fails the whole decode.
    """

    def parse(
        self,
        content: str,
        language: str,
        source_path: str = ""
    ) -> list[Entry]:
        """Parse .strings content into Entry objects.

        Args:
            content: The content of a .strings file.
            language: Language the file holds; values are stored under it.
            source_path: Path recorded on every entry.

        Returns:
            List of Entry objects in file order, one per key.

        Raises:
            ParseError: If the content is malformed.
        """
        if content.startswith(UTF8_BOM):
            content = content[1:]

        scanner = _Scanner(content, source_path or "<input>")
        entries: dict[str, Entry] = {}
        current_comment = ""

        while True:
            scanner.skip_whitespace()
            if scanner.at_end():
                break

            if scanner.peek(2) == "/*":
                current_comment = self._clean_comment(scanner.read_block_comment())
                continue
            if scanner.peek(2) == "//":
                current_comment = self._clean_comment(scanner.read_line_comment())
                continue

            line = scanner.line
            key = scanner.read_quoted("key")
            scanner.expect("=")
            scanner.skip_whitespace()
            value = scanner.read_quoted("value")
            scanner.expect(";")

            if not key:
                raise scanner.error("empty key", line)

            if key in entries:
                logger.warning(
                    "%s:%d: duplicate key %r, keeping the last definition",
                    scanner.path, line, key
                )
                entries[key].translations[language] = value
                entries[key].comment = current_comment or entries[key].comment
            else:
                entries[key] = Entry(
                    source_path=source_path,
                    key=key,
                    comment=current_comment,
                    translations={language: value}
                )
            current_comment = ""

        return list(entries.values())

    def parse_file(
        self,
        path: Path,
        language: str,
        source_path: Optional[str] = None,
        encoding: str = "utf-8"
    ) -> list[Entry]:
        """Parse a .strings file.

        Args:
            path: Path to the .strings file.
            language: Language the file holds.
            source_path: Path recorded on entries. Defaults to `path`.
            encoding: File encoding.

        Returns:
            List of Entry objects.
        """
        content = path.read_text(encoding=encoding)
        return self.parse(content, language, source_path or path.as_posix())

    def format(self, entries: list[Entry], language: str) -> str:
        """Format Entry objects as .strings content for one language.

        Args:
            entries: List of Entry objects, written in the given order.
            language: Language whose values are written.

        Returns:
            Formatted .strings content.
        """
        lines = []
        for entry in entries:
            lines.append(entry.to_strings_format(language))
            lines.append('')  # Empty line between entries

        return '\n'.join(lines).rstrip() + '\n'

    def write(
        self,
        entries: list[Entry],
        path: Path,
        language: str,
        encoding: str = "utf-8"
    ) -> None:
        """Write Entry objects to a .strings file.

        Args:
            entries: List of Entry objects to write.
            path: Path to the output file.
            language: Language whose values are written.
            encoding: File encoding.
        """
        content = self.format(entries, language)

        # Ensure parent directory exists
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding=encoding)

    @staticmethod
    def _clean_comment(text: str) -> str:
        """Drop the single padding space on each side of a comment."""
        if text.startswith(" "):
            text = text[1:]
        if text.endswith(" "):
            text = text[:-1]
        return text
