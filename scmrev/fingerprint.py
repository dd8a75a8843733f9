"""Shader cache fingerprint derived from the history of tracked files."""

from __future__ import annotations

import math
from typing import Sequence

from .git.oracle import Oracle
from .logging import get_logger
from .models import Fingerprint

FINGERPRINT_LENGTH = 40

logger = get_logger("fingerprint")


def fragment_length(file_count: int, budget: int = FINGERPRINT_LENGTH) -> int:
    """Return how many characters each tracked file contributes."""
    if file_count < 1:
        raise ValueError("at least one tracked file is required")
    length = max(1, math.ceil(budget / file_count))
    while length * file_count < budget:
        length += 1
    return length


def compute_fingerprint(tracked_files: Sequence[str], oracle: Oracle) -> Fingerprint:
    """Concatenate commit prefixes of ``tracked_files`` into a 40 character key.

    Query failures never propagate. The key degrades to the truncated failure
    text and the build keeps going; such a key is a marker, not a history.
    """
    length = fragment_length(len(tracked_files))
    try:
        fragments = [oracle.last_commit(path)[:length] for path in tracked_files]
    except Exception as exc:
        message = str(exc) or type(exc).__name__
        logger.warning("Shader cache fingerprint degraded: %s", message)
        return Fingerprint(
            value=message[:FINGERPRINT_LENGTH], degraded=True, error=message
        )
    # Rounding may overshoot the budget; the trailing files lose characters.
    return Fingerprint(value="".join(fragments)[:FINGERPRINT_LENGTH])


__all__ = ["FINGERPRINT_LENGTH", "compute_fingerprint", "fragment_length"]
