"""Core data models shared across scmrev components."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class RepoFacts:
    """The four mandatory facts reported by the repository oracle."""

    revision: str
    count: str
    describe: str
    branch: str


@dataclass(frozen=True)
class Fingerprint:
    """Cache key derived from the history of the tracked files.

    A degraded fingerprint carries the first 40 characters of the failure text
    in ``value``. That marker is stable across runs but does not follow commits
    to the tracked files; ``error`` holds the full message.
    """

    value: str
    degraded: bool = False
    error: Optional[str] = None


@dataclass(frozen=True)
class VersionRecord:
    """Normalized build identity rendered into the header."""

    revision: str
    count: str
    description: str
    branch: str
    fingerprint: Fingerprint
    is_stable: bool


class WriteOutcome(str, Enum):
    """Result of an idempotent header write."""

    UNCHANGED = "unchanged"
    UPDATED = "updated"
