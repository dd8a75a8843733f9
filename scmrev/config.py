"""Configuration for scmrev: built-in constants plus the optional .scmrev.yml."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml

CONFIG_FILENAME = ".scmrev.yml"

# Shader generator sources; a change to any of them invalidates shader caches.
TRACKED_FILES: Sequence[str] = (
    "Source/Core/VideoCommon/PixelShaderGen.cpp",
    "Source/Core/VideoCommon/VertexShaderGen.cpp",
    "Source/Core/VideoCommon/LightingShaderGen.h",
    "Source/Core/VideoCommon/PixelShaderGen.h",
    "Source/Core/VideoCommon/ShaderGenCommon.h",
    "Source/Core/VideoCommon/VertexShaderGen.h",
    "Source/Core/VideoCommon/GeometryShaderGen.cpp",
    "Source/Core/VideoCommon/GeometryShaderGen.h",
    "Source/Core/VideoCommon/TessellationShaderGen.cpp",
    "Source/Core/VideoCommon/TessellationShaderGen.h",
)

STABLE_BRANCHES: Sequence[str] = ("master", "stable")

DEFAULT_BASELINE = "e1656af8191700f32c18b06d18b9a099d281b95b"
DEFAULT_OUTPUT = "Source/Core/Common/scmrev.h"

_UNSET = object()


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ScmRevConfig:
    """Represents the settings defined in .scmrev.yml."""

    root: Path
    output: Path
    git: Optional[str] = None
    baseline: Optional[str] = DEFAULT_BASELINE


def load_config(repo_path: Path) -> ScmRevConfig:
    """Load configuration for the repository containing ``repo_path``."""
    config_file = _resolve_config_path(repo_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ScmRevConfig(root=root, output=root / DEFAULT_OUTPUT)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    output_str = _as_str(data.get("output")) or DEFAULT_OUTPUT
    baseline_raw = data.get("baseline", _UNSET)
    if baseline_raw is _UNSET:
        baseline: Optional[str] = DEFAULT_BASELINE
    else:
        baseline = _as_str(baseline_raw)

    return ScmRevConfig(
        root=root,
        output=root / output_str,
        git=_as_str(data.get("git")),
        baseline=baseline,
    )


def find_repo_root(start: Path) -> Path:
    """Return the closest directory at or above ``start`` holding a ``.git`` entry."""
    start = start.expanduser().resolve()
    for candidate in (start, *start.parents):
        # Worktrees and submodules use a .git file rather than a directory.
        if (candidate / ".git").exists():
            return candidate
    return start


def _resolve_config_path(repo_path: Path) -> Path:
    repo_path = repo_path.expanduser()
    if repo_path.name == CONFIG_FILENAME and repo_path.is_file():
        return repo_path.resolve()
    start = repo_path if repo_path.is_dir() else repo_path.parent
    return find_repo_root(start) / CONFIG_FILENAME


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_BASELINE",
    "DEFAULT_OUTPUT",
    "STABLE_BRANCHES",
    "ScmRevConfig",
    "TRACKED_FILES",
    "find_repo_root",
    "load_config",
]
