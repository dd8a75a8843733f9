"""CLI behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from scmrev import cli
from scmrev.config import TRACKED_FILES
from scmrev.git.oracle import OracleUnavailable
from tests._fixtures.fake_oracle import FakeOracle, commit_lines


def test_cli_parser_defaults() -> None:
    args = cli._build_parser().parse_args([])

    assert args.path == "."
    assert args.verbose is False
    assert args.output is None
    assert args.git is None
    assert args.dry_run is False


def test_cli_parser_accepts_options() -> None:
    args = cli._build_parser().parse_args(
        ["--verbose", "--output", "out/scmrev.h", "--git", "git.cmd", "--dry-run", "repo"]
    )

    assert args.verbose is True
    assert args.output == Path("out/scmrev.h")
    assert args.git == "git.cmd"
    assert args.dry_run is True
    assert args.path == "repo"


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch) -> FakeOracle:
    oracle = FakeOracle(commits=commit_lines(TRACKED_FILES))
    created = {}

    def fake_oracle(root, *, executable, baseline):  # type: ignore[no-untyped-def]
        created.update(root=root, executable=executable, baseline=baseline)
        return oracle

    monkeypatch.setattr(cli, "find_git", lambda explicit=None: explicit or "git")
    monkeypatch.setattr(cli, "GitOracle", fake_oracle)
    oracle.created = created  # type: ignore[attr-defined]
    return oracle


def test_cli_writes_then_reports_current(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "scmrev.h"

    cli.main(["--output", str(output), str(tmp_path)])
    first = capsys.readouterr().out
    cli.main(["--output", str(output), str(tmp_path)])
    second = capsys.readouterr().out

    assert first.strip() == "scmrev.h updated to v1.2"
    assert second.strip() == "scmrev.h current at v1.2"
    assert output.read_text(encoding="utf-8").splitlines()[1] == (
        '#define SCM_DESC_STR "42(v1.2)"'
    )
    assert fake_git.created["root"] == tmp_path.resolve()  # type: ignore[attr-defined]


def test_cli_uses_configured_output_and_git(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".scmrev.yml").write_text(
        "output: include/scmrev.h\ngit: git.bat\nbaseline: null\n", encoding="utf-8"
    )

    cli.main([str(tmp_path)])

    assert (tmp_path / "include" / "scmrev.h").exists()
    assert fake_git.created["executable"] == "git.bat"  # type: ignore[attr-defined]
    assert fake_git.created["baseline"] is None  # type: ignore[attr-defined]
    assert "updated to v1.2" in capsys.readouterr().out


def test_cli_dry_run_prints_header_without_writing(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    output = tmp_path / "scmrev.h"

    cli.main(["--dry-run", "--output", str(output), str(tmp_path)])

    out = capsys.readouterr().out
    assert out.startswith('#define SCM_REV_STR "abc123"\n')
    assert out.endswith("#define SCM_IS_MASTER 1\n")
    assert not output.exists()


def test_cli_exits_nonzero_without_git(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    def missing(explicit=None):  # type: ignore[no-untyped-def]
        raise OracleUnavailable("Cannot find git or git.cmd, check your PATH:\n")

    monkeypatch.setattr(cli, "find_git", missing)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--output", str(tmp_path / "scmrev.h"), str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Cannot find git" in capsys.readouterr().err
    assert not (tmp_path / "scmrev.h").exists()


def test_cli_exits_nonzero_when_mandatory_query_fails(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    fake_git.fail("branch")

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--output", str(tmp_path / "scmrev.h"), str(tmp_path)])

    assert excinfo.value.code == 1
    assert "branch query failed" in capsys.readouterr().err
    assert not (tmp_path / "scmrev.h").exists()


def test_cli_exits_nonzero_on_bad_config(
    tmp_path: Path,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    (tmp_path / ".scmrev.yml").write_text("- not a mapping\n", encoding="utf-8")

    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(tmp_path)])

    assert excinfo.value.code == 1
    assert "mapping" in capsys.readouterr().err


def test_cli_from_subdirectory_roots_oracle_and_output_at_repository(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    fake_git: FakeOracle,
) -> None:
    (tmp_path / ".git").mkdir()
    nested = tmp_path / "Source" / "Core" / "Common"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    cli.main([])

    assert fake_git.created["root"] == tmp_path.resolve()  # type: ignore[attr-defined]
    assert (nested / "scmrev.h").exists()
    assert not (nested / "Source").exists()
    assert capsys.readouterr().out.strip() == "scmrev.h updated to v1.2"
