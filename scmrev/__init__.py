"""Generate scmrev.h build identity headers from a git checkout."""

from .models import Fingerprint, RepoFacts, VersionRecord, WriteOutcome
from .record import build_record, normalize_describe
from .writer import render_header, write_header

__all__ = [
    "Fingerprint",
    "RepoFacts",
    "VersionRecord",
    "WriteOutcome",
    "build_record",
    "normalize_describe",
    "render_header",
    "write_header",
]
