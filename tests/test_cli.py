"""CLI behaviour tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sftgen.cli import _build_parser, main


def test_cli_defaults() -> None:
    args = _build_parser().parse_args([])
    assert args.path == "."
    assert args.output_dir is None
    assert args.exclude_hidden is None
    assert args.verbose is False


def test_cli_hidden_flags() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--exclude-hidden"]).exclude_hidden is True
    assert parser.parse_args(["--include-hidden"]).exclude_hidden is False


def test_cli_rejects_conflicting_verbosity() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["--verbose", "--quiet"])


def test_main_writes_corpus(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write({"src/app.py": "print('hi')\n", ".env": "SECRET=1\n"})
    output_dir = tmp_path / "corpus"

    main(
        [
            str(repo_builder.path()),
            "--output-dir",
            str(output_dir),
            "--file-name",
            "app",
            "--system-prompt",
            "Be terse.",
            "--exclude-hidden",
        ]
    )

    lines = (output_dir / "app.jsonl").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    assert [record["messages"][1]["content"] for record in records] == [
        "Please write the code of this py file: src/app.py"
    ]
    assert records[0]["messages"][0]["content"] == "Be terse."
    assert "Wrote 1 records" in capsys.readouterr().out


def test_main_cli_overrides_config_file(repo_builder, tmp_path: Path) -> None:
    repo_builder.write(
        {
            ".sftgen.yml": "file_name: from-config\nsystem_prompt: config prompt\n",
            "main.go": "package main\n",
        }
    )
    prompt_file = tmp_path / "prompt.txt"
    prompt_file.write_text("file prompt\n", encoding="utf-8")
    output_dir = tmp_path / "out"

    main(
        [
            str(repo_builder.path()),
            "-o",
            str(output_dir),
            "--system-prompt-file",
            str(prompt_file),
        ]
    )

    records = [
        json.loads(line)
        for line in (output_dir / "from-config.jsonl").read_text(encoding="utf-8").splitlines()
    ]
    users = [record["messages"][1]["content"] for record in records]
    assert users == ["Please write the code of this go file: main.go"]
    assert all(record["messages"][0]["content"] == "file prompt" for record in records)


def test_main_exits_for_missing_repository(tmp_path: Path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / "missing"), "-o", str(tmp_path / "out")])

    assert excinfo.value.code == 1
    assert "Repository path not found" in capsys.readouterr().err


def test_main_exits_for_invalid_config(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write({".sftgen.yml": "limits: nope\n"})

    with pytest.raises(SystemExit) as excinfo:
        main([str(repo_builder.path()), "-o", str(tmp_path / "out")])

    assert excinfo.value.code == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_main_exits_for_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path), "--config", str(tmp_path / "absent.yml")])
    assert excinfo.value.code == 1


def test_main_rejects_file_given_as_repository(tmp_path: Path, capsys) -> None:
    compose = tmp_path / "compose.yml"
    compose.write_text("limits: 5\nservices: {}\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(compose), "-o", str(tmp_path / "out")])

    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert "not a directory" in err
    assert "invalid configuration" not in err


def test_main_exits_when_output_cannot_be_created(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write({"main.py": "x = 1\n"})
    blocker = tmp_path / "occupied"
    blocker.write_text("regular file\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        main([str(repo_builder.path()), "-o", str(blocker)])

    assert excinfo.value.code == 1
    assert "Error generating dataset" in capsys.readouterr().err
    assert blocker.read_text(encoding="utf-8") == "regular file\n"


def test_main_quiet_still_prints_summary(repo_builder, tmp_path: Path, capsys) -> None:
    repo_builder.write({"main.py": "x = 1\n", "package-lock.json": "{}\n"})

    main([str(repo_builder.path()), "-o", str(tmp_path / "out"), "--quiet"])

    out = capsys.readouterr().out
    assert "Wrote 1 records" in out
    assert "processed: 1, skipped: 1" in out
