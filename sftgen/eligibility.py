"""Per-file eligibility checks applied during the tree walk."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from .classifier import is_binary
from .config import ExclusionRules
from .logging import get_logger
from .models import RunStatistics


class SkipReason(str, Enum):
    """Why a file was left out of the corpus, in check order."""

    EXCLUDED_PATH = "excluded path"
    HIDDEN = "hidden entry"
    BINARY = "binary content"
    UNSUPPORTED_EXTENSION = "unsupported extension"
    UNSUPPORTED_FILE = "unsupported file"
    TOO_LARGE = "exceeds size limit"


class EligibilityFilter:
    """Decides which files are read and converted, updating run statistics.

    Checks run in a fixed order and stop at the first rejection, so a skipped
    file is counted exactly once.
    """

    def __init__(
        self,
        repo_root: Path,
        rules: ExclusionRules,
        stats: RunStatistics,
        *,
        binary_check: Callable[[Path], bool] = is_binary,
    ) -> None:
        self.repo_root = repo_root
        self.rules = rules
        self.stats = stats
        self._binary_check = binary_check
        self._hidden = rules.hidden_regex
        self.logger = get_logger("eligibility")

    def is_eligible(self, path: Path, size: int) -> bool:
        reason = self.rejection_reason(path, size)
        if reason is not None:
            self.stats.skipped_files += 1
            self.logger.debug("Skipping %s (%s)", path, reason.value)
            return False
        self.stats.processed_files += 1
        return True

    def rejection_reason(self, path: Path, size: int) -> Optional[SkipReason]:
        """Return the first failing check for ``path``, without touching statistics."""
        relative = self._relative(path)

        # Plain substring match on the whole relative path, not per component.
        if any(fragment in relative for fragment in self.rules.excluded_directories):
            return SkipReason.EXCLUDED_PATH
        if self.rules.exclude_hidden and any(
            self._hidden.search(part) for part in relative.split("/")
        ):
            return SkipReason.HIDDEN
        if self._binary_check(path):
            return SkipReason.BINARY
        if path.suffix in self.rules.unsupported_extensions:
            return SkipReason.UNSUPPORTED_EXTENSION
        if path.name in self.rules.unsupported_files:
            return SkipReason.UNSUPPORTED_FILE
        if size > self.rules.max_file_size_bytes:
            return SkipReason.TOO_LARGE
        return None

    def _relative(self, path: Path) -> str:
        return Path(os.path.relpath(path, self.repo_root)).as_posix()


__all__ = ["EligibilityFilter", "SkipReason"]
