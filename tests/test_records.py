"""Tests for sftgen.records."""

from __future__ import annotations

from pathlib import Path

from sftgen.records import build_conversation, file_type, relative_posix_path


def test_build_conversation_turns(tmp_path: Path) -> None:
    record = build_conversation(tmp_path, tmp_path / "src" / "app.tsx", "code", "Be helpful.")

    assert record.to_dict() == {
        "messages": [
            {"role": "system", "content": "Be helpful."},
            {
                "role": "user",
                "content": "Please write the code of this tsx file: src/app.tsx",
            },
            {"role": "assistant", "content": "code"},
        ]
    }


def test_assistant_content_is_verbatim(tmp_path: Path) -> None:
    content = 'const s = "\\n";\n\t<tag attr="x">'
    record = build_conversation(tmp_path, tmp_path / "a.js", content, "sys")
    assert record.assistant == content


def test_extensionless_file_type_is_empty(tmp_path: Path) -> None:
    assert file_type(tmp_path / "Dockerfile") == ""
    assert file_type(tmp_path / "archive.tar.gz") == "gz"


def test_relative_path_uses_forward_slashes(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b" / "c.py"
    assert relative_posix_path(tmp_path, nested) == "a/b/c.py"
