"""Data models for localization entries."""

import re
from dataclasses import dataclass, field

ESCAPE_TABLE = str.maketrans({
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
})

UNESCAPES = {"n": "\n", "r": "\r", "t": "\t", '"': '"', "'": "'", "\\": "\\"}

# \n-style escapes, or \U/\u followed by four hex digits
ESCAPE_PATTERN = re.compile(r"\\(?:([Uu])([0-9A-Fa-f]{4})|(.))", re.DOTALL)


@dataclass
class Entry:
    """A single localized string.

    Attributes:
        source_path: Path of the file that defined the entry, relative to
            the discovery root.
        key: The string key/identifier.
        comment: Comment associated with the entry ("" if none).
        translations: Dictionary mapping language codes to values.
    """
    source_path: str
    key: str
    comment: str = ""
    translations: dict[str, str] = field(default_factory=dict)

    def value_for(self, language: str) -> str:
        """Return the value for a language, or "" when it is missing."""
        return self.translations.get(language, "")

    def to_strings_format(self, language: str) -> str:
        """Convert entry to .strings file format for one language.

        A `*/` inside the comment is written as `* /` so the comment
        block stays closed.

        Returns:
            Formatted string entry with optional comment.
        """
        lines = []
        if self.comment:
            lines.append(f"/* {self.comment.replace('*/', '* /')} */")

        escaped_key = self._escape(self.key)
        escaped_value = self._escape(self.value_for(language))
        lines.append(f'"{escaped_key}" = "{escaped_value}";')

        return "\n".join(lines)

    def describe(self, languages: list[str]) -> str:
        """Flat human-readable form: file, key, comment, then one line per language."""
        lines = [self.source_path, self.key, self.comment]
        for lang in languages:
            lines.append(f"{lang} = {self.value_for(lang)}")
        return "\n".join(lines)

    @staticmethod
    def _escape(s: str) -> str:
        """Escape special characters for .strings format."""
        return s.translate(ESCAPE_TABLE)

    @staticmethod
    def _unescape(s: str) -> str:
        """Unescape .strings escape sequences.

        Unknown escapes are kept as written. `\\U` escapes are UTF-16 code
        units, so surrogate pairs combine into one character.
        """
        def replace(match: re.Match) -> str:
            if match.group(1):
                return chr(int(match.group(2), 16))
            char = match.group(3)
            return UNESCAPES.get(char, "\\" + char)

        result = ESCAPE_PATTERN.sub(replace, s)
        if any("\ud800" <= c <= "\udfff" for c in result):
            result = result.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "replace")
        return result
