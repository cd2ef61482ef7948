"""Locating and running the npm executable."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

import structlog

from npm_bridge.exceptions import NpmCommandError
from npm_bridge.models.project import Project, npm_root

log = structlog.get_logger("npm_bridge.process")

# Overridable via env var, e.g. NPM_BRIDGE_NPM=pnpm
DEFAULT_NPM = os.environ.get("NPM_BRIDGE_NPM", "npm")


def is_windows() -> bool:
    return sys.platform.startswith("win")


def locate_npm(executable: str = DEFAULT_NPM) -> str | None:
    """Full path of *executable* on PATH, or None. Honors PATHEXT on Windows."""
    return shutil.which(executable)


def run_npm(root: Path, args: list[str], executable: str = DEFAULT_NPM) -> int:
    """Run npm in *root* with inherited stdio; blocks until it exits."""
    resolved = locate_npm(executable) or executable
    cmd = [resolved, *args]
    log.info("npm.invoke", cwd=str(root), args=args)
    result = subprocess.run(cmd, cwd=root)
    log.debug("npm.exited", returncode=result.returncode)
    return result.returncode


def invoke(project: Project, *args: str, executable: str = DEFAULT_NPM) -> None:
    """Run npm for *project*, raising NpmCommandError on a nonzero exit."""
    returncode = run_npm(npm_root(project), list(args), executable)
    if returncode != 0:
        raise NpmCommandError(returncode, list(args))
