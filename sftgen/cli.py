"""CLI entrypoint for building a fine-tuning corpus from a repository."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .config import ConfigError, RunConfiguration, load_config
from .generator import DatasetGenerator
from .logging import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sftgen",
        description="Convert a source repository into a JSONL fine-tuning corpus.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Path to the repository root (defaults to current directory).",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        type=Path,
        default=None,
        help="Directory that receives the corpus file (default: ./dataset).",
    )
    parser.add_argument(
        "-n",
        "--file-name",
        default=None,
        help="Base name of the corpus file, without extension (default: dataset).",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        default=None,
        help="Extension of the corpus file (default: jsonl).",
    )
    prompt_group = parser.add_mutually_exclusive_group()
    prompt_group.add_argument(
        "--system-prompt",
        default=None,
        help="System turn placed at the start of every conversation.",
    )
    prompt_group.add_argument(
        "--system-prompt-file",
        type=Path,
        default=None,
        help="Read the system prompt from a UTF-8 text file.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .sftgen.yml file (defaults to the one in the repository root).",
    )
    hidden_group = parser.add_mutually_exclusive_group()
    hidden_group.add_argument(
        "--exclude-hidden",
        dest="exclude_hidden",
        action="store_true",
        default=None,
        help="Skip files and directories whose names start with a dot.",
    )
    hidden_group.add_argument(
        "--include-hidden",
        dest="exclude_hidden",
        action="store_false",
        help="Keep dot-prefixed entries (the default).",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log output to this file.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity, including per-file skip reasons.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=False,
        help="Only log warnings and errors; the final summary line is still printed.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for sftgen."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet, log_file=args.log_file)

    repo_path = Path(args.path)
    if args.config is not None and not args.config.exists():
        parser.exit(1, f"Config file not found: {args.config}\n")
    try:
        config_source = args.config
        if config_source is None and repo_path.is_dir():
            config_source = repo_path
        if config_source is None:
            # Not a directory: defaults only, the generator reports the bad path.
            config = RunConfiguration(repo_path=repo_path)
        else:
            config = load_config(config_source, repo_path=repo_path)
        system_prompt = args.system_prompt
        if args.system_prompt_file is not None:
            system_prompt = args.system_prompt_file.read_text(encoding="utf-8").strip()
        config = config.with_overrides(
            output_dir=args.output_dir,
            file_name=args.file_name,
            output_format=args.output_format,
            system_prompt=system_prompt,
        )
        if args.exclude_hidden is not None:
            config = config.with_overrides(
                rules=replace(config.rules, exclude_hidden=args.exclude_hidden)
            )
    except (ConfigError, OSError) as exc:
        parser.exit(1, f"sftgen: invalid configuration: {exc}\n")

    try:
        stats = DatasetGenerator(config).generate()
    except (FileNotFoundError, NotADirectoryError) as exc:
        parser.exit(1, f"{exc}\n")
    except OSError as exc:
        parser.exit(1, f"Error generating dataset: {exc}\nRun with --verbose for more details.\n")

    print(
        f"Wrote {stats.records_written} records to {_relativize(config.output_file)} "
        f"(processed: {stats.processed_files}, skipped: {stats.skipped_files})"
    )


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
