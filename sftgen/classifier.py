"""Binary/text classification for candidate files."""

from __future__ import annotations

import codecs
from pathlib import Path

import chardet

from .logging import get_logger

_SNIFF_BYTES = 8192
_CONTROL_RATIO_LIMIT = 0.30
# Bytes that commonly appear in text: BEL, BS, TAB, LF, FF, CR, ESC and printable ASCII.
_TEXT_BYTES = bytes({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x7F)) | set(range(0x80, 0x100)))

_BINARY_EXTENSIONS = frozenset(
    {
        ".7z", ".a", ".avi", ".bin", ".bmp", ".bz2", ".class", ".dat", ".db",
        ".dll", ".dylib", ".eot", ".exe", ".flac", ".gif", ".gz", ".ico", ".jar",
        ".jpeg", ".jpg", ".lib", ".mkv", ".mov", ".mp3", ".mp4", ".npy", ".npz",
        ".o", ".obj", ".ogg", ".otf", ".pdf", ".pkl", ".png", ".pyc", ".pyd",
        ".pyo", ".rar", ".so", ".sqlite", ".sqlite3", ".tar", ".tgz", ".tiff",
        ".wasm", ".wav", ".webm", ".webp", ".woff", ".woff2", ".xz", ".zip",
    }
)
_TEXT_EXTENSIONS = frozenset(
    {
        ".c", ".cc", ".cfg", ".cpp", ".cs", ".css", ".go", ".h", ".hpp", ".html",
        ".ini", ".java", ".js", ".json", ".jsx", ".kt", ".md", ".mjs", ".php",
        ".py", ".rb", ".rs", ".scss", ".sh", ".sql", ".svg", ".swift", ".toml",
        ".ts", ".tsx", ".txt", ".vue", ".xml", ".yaml", ".yml",
    }
)

logger = get_logger("classifier")


def is_binary(path: Path, sample: bytes | None = None) -> bool:
    """Return ``True`` when ``path`` should be treated as a binary file.

    Known extensions decide without touching the disk. Anything else is
    sniffed from ``sample`` or from the first few KiB of the file. A file
    that cannot be read counts as binary so the caller simply skips it.
    """
    suffix = path.suffix.lower()
    if suffix in _BINARY_EXTENSIONS:
        return True
    if suffix in _TEXT_EXTENSIONS:
        return False

    if sample is None:
        try:
            sample = _read_sample(path)
        except OSError as exc:
            logger.debug("Treating %s as binary, sniff failed: %s", path, exc)
            return True
    return looks_binary(sample)


def looks_binary(sample: bytes) -> bool:
    """Content-only heuristic used when the extension is inconclusive."""
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    if _decodes_as_utf8(sample):
        return False

    guess = chardet.detect(sample)
    if not guess.get("encoding"):
        return True
    nontext = len(sample.translate(None, _TEXT_BYTES))
    return nontext / len(sample) > _CONTROL_RATIO_LIMIT


def _read_sample(path: Path) -> bytes:
    with path.open("rb") as handle:
        return handle.read(_SNIFF_BYTES)


def _decodes_as_utf8(sample: bytes) -> bool:
    # The sample may end inside a multi-byte sequence; an incremental decoder
    # leaves that tail pending instead of failing.
    decoder = codecs.getincrementaldecoder("utf-8")()
    try:
        decoder.decode(sample, final=False)
    except UnicodeDecodeError:
        return False
    return True


__all__ = ["is_binary", "looks_binary"]
