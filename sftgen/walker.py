"""Recursive repository walk producing the list of eligible files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from .eligibility import EligibilityFilter
from .logging import get_logger
from .models import EntryKind, FileCandidate, RunStatistics


class TreeWalker:
    """Depth-first walk that asks the eligibility filter about every file.

    Directories are always entered; only files are filtered. Entries are
    visited in name order so the same tree always yields the same list.
    Listing or ``stat`` failures propagate to the caller.
    """

    def __init__(
        self,
        eligibility: EligibilityFilter,
        stats: RunStatistics,
        *,
        ignore: Optional[Iterable[Path]] = None,
    ) -> None:
        self.eligibility = eligibility
        self.stats = stats
        self.ignore = frozenset(ignore or ())
        self.logger = get_logger("walker")

    def walk(self, root: Path) -> List[Path]:
        files: List[Path] = []
        for candidate in self._candidates(root):
            if self.eligibility.is_eligible(candidate.path, candidate.size):
                files.append(candidate.path)
                self.stats.total_size += candidate.size
        self.logger.debug("Walk of %s found %d eligible files", root, len(files))
        return files

    def _candidates(self, directory: Path) -> Iterator[FileCandidate]:
        with os.scandir(directory) as iterator:
            entries = sorted(iterator, key=lambda entry: entry.name)

        for entry in entries:
            path = directory / entry.name
            # Symlinks are neither followed nor treated as files.
            if entry.is_dir(follow_symlinks=False):
                yield from self._candidates(path)
            elif entry.is_file(follow_symlinks=False):
                if path in self.ignore:
                    continue
                yield FileCandidate(path=path, size=path.stat().st_size, kind=EntryKind.FILE)


__all__ = ["TreeWalker"]
