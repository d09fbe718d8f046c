"""Reads eligible files and applies the line-level content policy."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .config import ExclusionRules
from .logging import get_logger
from .models import RunStatistics

# Characters that make a line blank: space separators, BOM and line terminators.
# Unlike str.strip(), \x1c-\x1f and \x85 count as content and \ufeff does not.
_TRIM_CHARS = (
    "\t\n\x0b\x0c\r \xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006"
    "\u2007\u2008\u2009\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
)


class ContentNormalizer:
    """Turns a file into normalised text, or ``None`` when the file is rejected."""

    encoding = "utf-8"

    def __init__(self, rules: ExclusionRules, stats: RunStatistics) -> None:
        self.rules = rules
        self.stats = stats
        self.logger = get_logger("normalizer")

    def normalize(self, path: Path) -> Optional[str]:
        try:
            text = path.read_bytes().decode(self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            self.stats.record_error(path, str(exc))
            self.logger.warning("Could not read %s: %s", path, exc)
            return None

        return self.normalize_text(text, source=path)

    def normalize_text(self, text: str, *, source: Path | None = None) -> Optional[str]:
        # Only "\n" separates lines; a trailing "\r" stays part of its line.
        lines = text.split("\n")
        if len(lines) > self.rules.max_file_lines:
            self.logger.debug(
                "Rejecting %s: %d lines exceeds limit of %d",
                source or "<text>",
                len(lines),
                self.rules.max_file_lines,
            )
            return None

        kept: List[str] = [line for line in lines if self._keep(line)]
        return "\n".join(kept)

    def _keep(self, line: str) -> bool:
        return bool(line.strip(_TRIM_CHARS)) and len(line) <= self.rules.max_line_length


__all__ = ["ContentNormalizer"]
