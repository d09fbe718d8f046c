"""Run configuration and exclusion rules, optionally loaded from .sftgen.yml."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Mapping, Optional, Sequence

import yaml

CONFIG_FILENAME = ".sftgen.yml"

DEFAULT_SYSTEM_PROMPT = "You are a helpful coding assistant."
DEFAULT_OUTPUT_DIR = Path("./dataset")
DEFAULT_FILE_NAME = "dataset"
DEFAULT_OUTPUT_FORMAT = "jsonl"

_DEFAULT_EXCLUDED_DIRECTORIES = (
    "node_modules",
    ".git",
    ".next",
    "dist",
    "build",
    ".cache",
    ".vscode",
    "coverage",
)
_DEFAULT_UNSUPPORTED_EXTENSIONS = (".yaml", ".svg", ".ttf")
_DEFAULT_UNSUPPORTED_FILES = ("package-lock.json",)
_DEFAULT_HIDDEN_PATTERN = r"^\."


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class ExclusionRules:
    """Denylists and size limits applied to every candidate file."""

    excluded_directories: FrozenSet[str] = frozenset(_DEFAULT_EXCLUDED_DIRECTORIES)
    unsupported_extensions: FrozenSet[str] = frozenset(_DEFAULT_UNSUPPORTED_EXTENSIONS)
    unsupported_files: FrozenSet[str] = frozenset(_DEFAULT_UNSUPPORTED_FILES)
    hidden_pattern: str = _DEFAULT_HIDDEN_PATTERN
    exclude_hidden: bool = False
    max_file_size_bytes: int = 1_000_000
    max_line_length: int = 500
    max_file_lines: int = 1000

    def __post_init__(self) -> None:
        for name in ("max_file_size_bytes", "max_line_length", "max_file_lines"):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name} must not be negative")
        try:
            re.compile(self.hidden_pattern)
        except re.error as exc:
            raise ConfigError(f"Invalid hidden pattern {self.hidden_pattern!r}: {exc}") from exc

    @property
    def hidden_regex(self) -> "re.Pattern[str]":
        return re.compile(self.hidden_pattern)


@dataclass(frozen=True)
class RunConfiguration:
    """Everything a generation run needs, fixed at construction time."""

    repo_path: Path = field(default_factory=Path.cwd)
    output_dir: Path = DEFAULT_OUTPUT_DIR
    file_name: str = DEFAULT_FILE_NAME
    output_format: str = DEFAULT_OUTPUT_FORMAT
    system_prompt: str = DEFAULT_SYSTEM_PROMPT
    rules: ExclusionRules = field(default_factory=ExclusionRules)
    config_file: Optional[Path] = None

    @property
    def output_file(self) -> Path:
        return self.output_dir / f"{self.file_name}.{self.output_format}"

    def with_overrides(self, **overrides: Any) -> "RunConfiguration":
        """Return a copy with every non-``None`` override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self


def load_config(config_path: Path, *, repo_path: Optional[Path] = None) -> RunConfiguration:
    """Load a run configuration from disk.

    ``config_path`` may point at the file itself or at the directory holding
    ``.sftgen.yml``. A missing file yields the defaults. Relative
    ``output_dir`` values resolve against the directory of the config file.
    """
    config_file = _resolve_config_path(config_path)
    base = config_file.parent
    repo = (repo_path or base).expanduser().resolve()

    if not config_file.exists():
        return RunConfiguration(repo_path=repo)

    data = _read_config(config_file)

    exclude = _as_dict(data.get("exclude"), "exclude")
    limits = _as_dict(data.get("limits"), "limits")
    defaults = ExclusionRules()

    rules = ExclusionRules(
        excluded_directories=_as_str_set(
            exclude.get("directories"), defaults.excluded_directories, "exclude.directories"
        ),
        unsupported_extensions=_as_str_set(
            exclude.get("extensions"), defaults.unsupported_extensions, "exclude.extensions"
        ),
        unsupported_files=_as_str_set(
            exclude.get("files"), defaults.unsupported_files, "exclude.files"
        ),
        hidden_pattern=_as_str(exclude.get("hidden_pattern"), "exclude.hidden_pattern")
        or defaults.hidden_pattern,
        exclude_hidden=_as_bool(exclude.get("hidden"), "exclude.hidden", defaults.exclude_hidden),
        max_file_size_bytes=_as_int(
            limits.get("max_file_size_bytes"), "limits.max_file_size_bytes", defaults.max_file_size_bytes
        ),
        max_line_length=_as_int(
            limits.get("max_line_length"), "limits.max_line_length", defaults.max_line_length
        ),
        max_file_lines=_as_int(
            limits.get("max_file_lines"), "limits.max_file_lines", defaults.max_file_lines
        ),
    )

    output_dir_str = _as_str(data.get("output_dir"), "output_dir")
    output_dir = base / output_dir_str if output_dir_str else DEFAULT_OUTPUT_DIR

    return RunConfiguration(
        repo_path=repo,
        output_dir=output_dir,
        file_name=_as_str(data.get("file_name"), "file_name") or DEFAULT_FILE_NAME,
        output_format=_as_str(data.get("output_format"), "output_format") or DEFAULT_OUTPUT_FORMAT,
        system_prompt=_as_str(data.get("system_prompt"), "system_prompt") or DEFAULT_SYSTEM_PROMPT,
        rules=rules,
        config_file=config_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _as_dict(value: Any, key: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping")
    return value


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigError(f"{key} must be a string")
    return str(value)


def _as_int(value: Any, key: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.replace("_", ""))
        except ValueError:
            pass
    raise ConfigError(f"{key} must be an integer")


def _as_bool(value: Any, key: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    raise ConfigError(f"{key} must be a boolean")


def _as_str_set(value: Any, default: FrozenSet[str], key: str) -> FrozenSet[str]:
    if value is None:
        return default
    if isinstance(value, str):
        return frozenset({value})
    if isinstance(value, Sequence):
        return frozenset(str(item) for item in value if isinstance(item, (str, int, float)))
    raise ConfigError(f"{key} must be a list of strings")


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_SYSTEM_PROMPT",
    "ExclusionRules",
    "RunConfiguration",
    "load_config",
]
