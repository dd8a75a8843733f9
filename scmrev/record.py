"""Assemble the version record from oracle facts."""

from __future__ import annotations

import re
from typing import Sequence

from .config import STABLE_BRANCHES, TRACKED_FILES
from .fingerprint import compute_fingerprint
from .git.oracle import Oracle
from .logging import get_logger
from .models import VersionRecord

logger = get_logger("record")

# `-<distance>-<shorthash>` at the end, optionally followed by `-dirty`.
_DESCRIBE_SUFFIX = re.compile(r"-\d+-[^-]+(-dirty)?$")


def normalize_describe(describe: str) -> str:
    """Strip the distance and hash from a ``git describe --long`` string.

    >>> normalize_describe("v5.0-0-g89abcde-dirty")
    'v5.0-dirty'
    """
    return _DESCRIBE_SUFFIX.sub(lambda match: match.group(1) or "", describe)


def is_stable_branch(branch: str, stable_branches: Sequence[str] = STABLE_BRANCHES) -> bool:
    return branch in stable_branches


def build_record(
    oracle: Oracle, tracked_files: Sequence[str] = TRACKED_FILES
) -> VersionRecord:
    """Query ``oracle`` and return the normalized record.

    Oracle failures for the mandatory facts propagate to the caller.
    """
    facts = oracle.facts()
    fingerprint = compute_fingerprint(tracked_files, oracle)
    description = normalize_describe(facts.describe)
    logger.debug("describe %s normalized to %s", facts.describe, description)
    return VersionRecord(
        revision=facts.revision,
        count=facts.count,
        description=description,
        branch=facts.branch,
        fingerprint=fingerprint,
        is_stable=is_stable_branch(facts.branch),
    )


__all__ = ["build_record", "is_stable_branch", "normalize_describe"]
