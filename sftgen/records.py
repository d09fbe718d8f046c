"""Builds conversation records from normalised file content."""

from __future__ import annotations

import os
from pathlib import Path

from .models import ConversationRecord

USER_PROMPT_TEMPLATE = "Please write the code of this {file_type} file: {relative_path}"


def relative_posix_path(repo_root: Path, path: Path) -> str:
    """Return ``path`` relative to ``repo_root`` using forward slashes on every platform."""
    return os.path.relpath(path, repo_root).replace("\\", "/")


def file_type(path: Path) -> str:
    """Extension without its leading dot; empty for extensionless files."""
    return path.suffix[1:]


def build_conversation(
    repo_root: Path, path: Path, content: str, system_prompt: str
) -> ConversationRecord:
    user = USER_PROMPT_TEMPLATE.format(
        file_type=file_type(path),
        relative_path=relative_posix_path(repo_root, path),
    )
    return ConversationRecord(system=system_prompt, user=user, assistant=content)


__all__ = ["USER_PROMPT_TEMPLATE", "build_conversation", "file_type", "relative_posix_path"]
