"""Core data models shared across sftgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List


class EntryKind(str, Enum):
    """Filesystem entry kinds the walker distinguishes."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class FileCandidate:
    """A filesystem entry found by the walker, before eligibility is decided."""

    path: Path
    size: int
    kind: EntryKind = EntryKind.FILE


@dataclass(frozen=True)
class FileError:
    """A per-file failure recorded during normalisation."""

    path: str
    message: str


@dataclass
class RunStatistics:
    """Counters and error log owned by a single generation run.

    ``processed_files`` counts files accepted by the eligibility filter, so it
    can exceed ``records_written`` when the normaliser later rejects a file.
    """

    processed_files: int = 0
    skipped_files: int = 0
    total_size: int = 0
    records_written: int = 0
    errors: List[FileError] = field(default_factory=list)

    def record_error(self, path: Path | str, message: str) -> None:
        self.errors.append(FileError(path=str(path), message=message))

    @property
    def total_size_mb(self) -> float:
        return self.total_size / 1024 / 1024


@dataclass(frozen=True)
class Message:
    role: str
    content: str


@dataclass(frozen=True)
class ConversationRecord:
    """Three-turn training example built from one source file."""

    system: str
    user: str
    assistant: str

    @property
    def messages(self) -> List[Message]:
        return [
            Message(role="system", content=self.system),
            Message(role="user", content=self.user),
            Message(role="assistant", content=self.assistant),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "messages": [
                {"role": message.role, "content": message.content}
                for message in self.messages
            ]
        }
