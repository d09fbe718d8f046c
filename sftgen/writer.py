"""Append-only JSON Lines output for conversation records."""

from __future__ import annotations

import json
from pathlib import Path

from .logging import get_logger
from .models import ConversationRecord


class CorpusWriter:
    """Streams records to ``output_file`` one JSON object per line.

    I/O errors are not caught here; a run that cannot write its output fails.
    """

    def __init__(self, output_file: Path) -> None:
        self.output_file = output_file
        self.logger = get_logger("writer")

    def prepare(self) -> None:
        """Create the output directory if needed and truncate the output file."""
        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        self.output_file.write_bytes(b"")
        self.logger.debug("Truncated %s", self.output_file)

    def append(self, record: ConversationRecord) -> None:
        line = json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))
        with self.output_file.open("a", encoding="utf-8", newline="\n") as handle:
            handle.write(line + "\n")


__all__ = ["CorpusWriter"]
