from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional


class BuildInfo(NamedTuple):
    commit: Optional[str]
    dirty: bool


def get_version() -> str:
    """Installed package version, or "unknown" when running from a checkout."""
    try:
        return importlib.metadata.version("rowedit")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=cwd or os.getcwd(), stderr=subprocess.DEVNULL
        )
        return out.decode().strip() or None
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None


def get_build_info() -> BuildInfo:
    # Only meaningful for a source checkout
    here = str(Path(__file__).resolve().parent)
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    if commit is None:
        return BuildInfo(commit=None, dirty=False)
    status = _run_git(["status", "--porcelain"], cwd=here)
    return BuildInfo(commit=commit, dirty=bool(status))


def get_version_string() -> str:
    info = get_build_info()
    version = get_version()
    if info.commit is None:
        return version
    dirty_suffix = "-dirty" if info.dirty else ""
    # Short (7-character) git hashes
    return f"{version} ({info.commit[:7]}{dirty_suffix})"
