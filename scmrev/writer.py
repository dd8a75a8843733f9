"""Render the version record and write it only when it changed."""

from __future__ import annotations

from pathlib import Path

from .logging import get_logger
from .models import VersionRecord, WriteOutcome

logger = get_logger("writer")


def render_header(record: VersionRecord) -> str:
    """Return the five ``#define`` lines consumed by the C++ build."""
    lines = [
        f'#define SCM_REV_STR "{_c_string(record.revision)}"',
        f'#define SCM_DESC_STR "{_c_string(record.count)}({_c_string(record.description)})"',
        f'#define SCM_BRANCH_STR "{_c_string(record.branch)}"',
        f'#define SCM_CACHE_STR "{_c_string(record.fingerprint.value)}"',
        f"#define SCM_IS_MASTER {int(record.is_stable)}",
    ]
    return "\n".join(lines) + "\n"


def write_header(path: Path, record: VersionRecord) -> WriteOutcome:
    """Write the rendered header to ``path`` unless it already matches.

    Leaving the file alone keeps its timestamp, so nothing that includes it
    gets rebuilt.
    """
    contents = render_header(record)
    if _read_existing(path) == contents:
        return WriteOutcome.UNCHANGED

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as handle:
        handle.write(contents)
    logger.debug("wrote %d bytes to %s", len(contents), path)
    return WriteOutcome.UPDATED


def _read_existing(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("treating unreadable %s as empty: %s", path, exc)
        return ""


def _c_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


__all__ = ["render_header", "write_header"]
