"""Version string built from git commit information."""

from __future__ import annotations

import importlib.metadata
import json
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

DIST_NAME = "peruse"


class BuildInfo(NamedTuple):
    commit: Optional[str]
    date: Optional[str]
    dirty: bool


def _git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL)
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        return None
    return out.decode().strip() or None


def _from_git_checkout() -> Optional[BuildInfo]:
    here = Path(__file__).resolve().parent
    if _git(["rev-parse", "--show-toplevel"], here) is None:
        return None
    commit = _git(["rev-parse", "HEAD"], here)
    date = _git(["show", "-s", "--format=%cI", "HEAD"], here)
    dirty = bool(_git(["status", "--porcelain"], here))
    return BuildInfo(commit=commit, date=date, dirty=dirty)


def _from_build_hook() -> Optional[BuildInfo]:
    # Written by hatch_build.py when a wheel or sdist is built
    try:
        from . import _build_info  # type: ignore
    except ImportError:
        return None
    commit = getattr(_build_info, "COMMIT", None)
    date = getattr(_build_info, "DATE", None)
    return BuildInfo(commit=commit, date=date, dirty=False)


def _from_direct_url() -> Optional[BuildInfo]:
    # PEP 610 direct_url.json carries the commit for VCS installs
    try:
        dist = importlib.metadata.distribution(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return None
    text = dist.read_text("direct_url.json")
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    commit = (data.get("vcs_info") or {}).get("commit_id")
    return BuildInfo(commit=commit, date=None, dirty=False) if commit else None


def get_build_info() -> BuildInfo:
    # Priority: live git checkout -> build hook file -> direct_url.json
    for getter in (_from_git_checkout, _from_build_hook, _from_direct_url):
        info = getter()
        if info and (info.commit or info.date):
            return info
    return BuildInfo(commit=None, date=None, dirty=False)


def get_version_string() -> str:
    info = get_build_info()
    commit = info.commit[:7] if info.commit else "unknown"
    dirty_suffix = "-dirty" if info.dirty else ""
    date = info.date or "unknown"
    return f"{DIST_NAME} {commit}{dirty_suffix} {date}"
