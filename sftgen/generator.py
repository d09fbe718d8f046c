"""Corpus generation pipeline: walk, normalise, build and write."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from .classifier import is_binary
from .config import RunConfiguration
from .eligibility import EligibilityFilter
from .logging import get_logger
from .models import RunStatistics
from .normalizer import ContentNormalizer
from .records import build_conversation
from .walker import TreeWalker
from .writer import CorpusWriter


class DatasetGenerator:
    """One corpus generation run over a single repository.

    Each instance owns its own :class:`RunStatistics`; stages receive it by
    reference and are the only things that mutate it.
    """

    def __init__(
        self,
        config: RunConfiguration,
        *,
        binary_check: Callable[[Path], bool] = is_binary,
    ) -> None:
        self.config = config
        self.repo_root = config.repo_path.expanduser().resolve()
        self.stats = RunStatistics()
        self.eligibility = EligibilityFilter(
            self.repo_root, config.rules, self.stats, binary_check=binary_check
        )
        self.writer = CorpusWriter(config.output_file)
        # The output and config files may live inside the repository; never feed them back in.
        ignore = {config.output_file.expanduser().resolve()}
        if config.config_file is not None:
            ignore.add(config.config_file.expanduser().resolve())
        self.walker = TreeWalker(self.eligibility, self.stats, ignore=ignore)
        self.normalizer = ContentNormalizer(config.rules, self.stats)
        self.logger = get_logger("generator")

    def generate(self) -> RunStatistics:
        """Run the pipeline and return the statistics gathered along the way."""
        if not self.repo_root.exists():
            raise FileNotFoundError(f"Repository path not found: {self.config.repo_path}")
        if not self.repo_root.is_dir():
            raise NotADirectoryError(f"Repository path is not a directory: {self.config.repo_path}")

        self.logger.info("Starting dataset generation from: %s", self.repo_root)
        self.writer.prepare()

        files = self.walker.walk(self.repo_root)
        self.logger.info("Found %d eligible files", len(files))

        for path in files:
            self._emit(path)

        self.report()
        return self.stats

    def _emit(self, path: Path) -> None:
        content = self.normalizer.normalize(path)
        if content is None:
            return
        record = build_conversation(self.repo_root, path, content, self.config.system_prompt)
        self.writer.append(record)
        self.stats.records_written += 1

    def report(self) -> None:
        stats = self.stats
        self.logger.info("Total Processed Files: %d", stats.processed_files)
        self.logger.info("Total Skipped Files: %d", stats.skipped_files)
        self.logger.info("Records Written: %d", stats.records_written)
        self.logger.info("Total Size: %.2f MB", stats.total_size_mb)
        self.logger.info("Output: %s", self.writer.output_file)

        if stats.errors:
            self.logger.warning("Errors encountered:")
            for error in stats.errors:
                self.logger.warning("- %s: %s", error.path, error.message)


__all__ = ["DatasetGenerator"]
