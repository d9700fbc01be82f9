"""Configuration for the conversion service."""

from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional, Union

from .errors import LocalizationError


DEFAULT_LANGUAGES = ["ja", "en", "th", "es", "fr", "vi", "zh-Hant"]

LPROJ_SUFFIX = ".lproj"


@dataclass
class LocalizationConfig:
    """Configuration for the conversion service.

    Attributes:
        languages: Supported language codes, in CSV column order.
        root: Directory searched for .strings files.
        output_dir: Root directory for .strings files written on import.
        extension: Extension of localization files.
        encoding: Text encoding of every file read or written.
        verbose: If True, log per-file details.
    """
    languages: list[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    root: Path = Path(".")
    output_dir: Path = Path(".")
    extension: str = ".strings"
    encoding: str = "utf-8"
    verbose: bool = False

    def language_for_path(self, path: Union[str, Path]) -> Optional[str]:
        """Determine which language a .strings file holds.

        `xx.lproj/Name.strings` belongs to `xx`; a file named after a
        language (`ja.strings`) belongs to that language.

        Args:
            path: Path to the .strings file.

        Returns:
            The language code, or None if it is not a configured language.
        """
        path = PurePosixPath(Path(path).as_posix())
        if path.parent.name.endswith(LPROJ_SUFFIX):
            lang = path.parent.name[:-len(LPROJ_SUFFIX)]
            if lang in self.languages:
                return lang
        if path.stem in self.languages:
            return path.stem
        return None

    def path_for_language(self, source_path: str, language: str) -> Path:
        """Get the output path of a language's file for an entry's source path.

        Args:
            source_path: Relative source path recorded on the entry.
            language: Target language code.

        Returns:
            Path under `output_dir`.
        """
        source = PurePosixPath(source_path)
        if not source.name or source.is_absolute() or ".." in source.parts:
            raise LocalizationError(f"invalid source path: {source_path!r}")

        if source.parent.name.endswith(LPROJ_SUFFIX):
            relative = source.parent.parent / f"{language}{LPROJ_SUFFIX}" / source.name
        elif source.stem in self.languages:
            relative = source.parent / f"{language}{source.suffix}"
        else:
            relative = source.parent / f"{language}{LPROJ_SUFFIX}" / source.name

        return self.output_dir / Path(*relative.parts)

    def find_strings(self) -> list[Path]:
        """Find every localization file under `root`, sorted by path."""
        found = [p for p in self.root.rglob(f"*{self.extension}") if p.is_file()]
        return sorted(found, key=lambda p: p.as_posix())

    def relative_source(self, path: Path) -> str:
        """Posix path of a discovered file relative to `root`."""
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()
