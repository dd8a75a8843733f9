"""Git-backed repository oracle."""

from __future__ import annotations

import os
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, Iterable, Mapping, Sequence

from ..config import DEFAULT_BASELINE
from ..logging import get_logger
from ..models import RepoFacts

logger = get_logger("git")

GIT_CANDIDATES: Sequence[str] = ("git", "git.cmd", "git.bat")
ENV_GIT_KEY = "SCMREV_GIT"


class OracleUnavailable(RuntimeError):
    """Raised when no usable git executable can be found."""


class OracleQueryFailed(RuntimeError):
    """Raised when a repository query cannot be executed or returns nothing."""


class Oracle(ABC):
    """Contract for the version-control queries the generator depends on."""

    @abstractmethod
    def revision(self) -> str:
        """Return the current revision id."""

    @abstractmethod
    def count(self) -> str:
        """Return the number of commits since the baseline ancestor."""

    @abstractmethod
    def describe(self) -> str:
        """Return the ``<tag>-<distance>-<hash>[-dirty]`` descriptor."""

    @abstractmethod
    def branch(self) -> str:
        """Return the current branch name."""

    @abstractmethod
    def last_commit(self, path: str) -> str:
        """Return the one-line summary of the latest commit touching ``path``."""

    def facts(self) -> RepoFacts:
        return RepoFacts(
            revision=self.revision(),
            count=self.count(),
            describe=self.describe(),
            branch=self.branch(),
        )


Runner = Callable[..., str]


class GitOracle(Oracle):
    """Answers oracle queries by running git inside the repository."""

    def __init__(
        self,
        repo_path: Path | str,
        *,
        executable: str = "git",
        baseline: str | None = DEFAULT_BASELINE,
        runner: Runner | None = None,
    ) -> None:
        self.repo = Path(repo_path)
        self.executable = executable
        self.baseline = baseline
        self._runner = runner or _default_runner

    def revision(self) -> str:
        return self._first_line(["rev-parse", "HEAD"])

    def count(self) -> str:
        args = ["rev-list", "--count", "HEAD"]
        if self.baseline:
            args.append(f"^{self.baseline}")
        return self._first_line(args)

    def describe(self) -> str:
        return self._first_line(["describe", "--always", "--long", "--dirty"])

    def branch(self) -> str:
        return self._first_line(["rev-parse", "--abbrev-ref", "HEAD"])

    def last_commit(self, path: str) -> str:
        # :(top) anchors the pathspec at the work tree root, not at the cwd.
        return self._first_line(
            ["log", "--pretty=oneline", "-n", "1", "--", f":(top){path}"]
        )

    # ------------------------------------------------------------------
    # Internals

    def _first_line(self, args: Sequence[str]) -> str:
        command = [self.executable, *args]
        try:
            output = self._runner(command, cwd=self.repo, capture_output=True)
        except subprocess.CalledProcessError as exc:
            raise OracleQueryFailed(
                f"`{' '.join(command)}` exited with status {exc.returncode}"
            ) from exc
        except OSError as exc:
            raise OracleQueryFailed(f"Failed to exec `{' '.join(command)}`: {exc}") from exc
        lines = output.splitlines()
        if not lines or not lines[0].strip():
            raise OracleQueryFailed(f"`{' '.join(command)}` produced no output")
        first = lines[0].strip()
        logger.debug("%s -> %s", " ".join(command), first)
        return first


def find_git(
    explicit: str | None = None,
    *,
    runner: Runner | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Return the first git executable that answers ``--version``."""
    run = runner or _default_runner
    environ = os.environ if env is None else env

    for candidate in _candidates(explicit, environ):
        try:
            run([candidate, "--version"], cwd=Path.cwd(), capture_output=True)
        except (OSError, subprocess.CalledProcessError):
            logger.debug("git candidate %s is not usable", candidate)
            continue
        logger.debug("using git executable %s", candidate)
        return candidate

    raise OracleUnavailable(
        "Cannot find git or git.cmd, check your PATH:\n" + environ.get("PATH", "")
    )


def _candidates(explicit: str | None, environ: Mapping[str, str]) -> Iterable[str]:
    if explicit:
        yield explicit
    configured = environ.get(ENV_GIT_KEY)
    if configured:
        yield configured
    search_path = environ.get("PATH")
    for name in GIT_CANDIDATES:
        resolved = shutil.which(name, path=search_path)
        if resolved:
            yield resolved


def _default_runner(
    args: Iterable[str],
    *,
    cwd: Path,
    capture_output: bool = False,
) -> str:
    completed = subprocess.run(
        list(args),
        cwd=str(cwd),
        check=True,
        text=True,
        encoding="utf-8",
        errors="replace",
        capture_output=capture_output,
    )
    return completed.stdout if capture_output else ""


__all__ = [
    "GIT_CANDIDATES",
    "GitOracle",
    "Oracle",
    "OracleQueryFailed",
    "OracleUnavailable",
    "find_git",
]
