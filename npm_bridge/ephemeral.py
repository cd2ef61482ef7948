"""Scoped package.json lifecycle.

The manifest is written right before npm runs and removed right after, on
both normal and exceptional exit, unless the project asks to persist it.
"""

from __future__ import annotations

import atexit
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, TypeVar

import structlog

from npm_bridge.manifest import package_file, project_to_package, render_package
from npm_bridge.models.project import Project, persist_package_json

log = structlog.get_logger("npm_bridge.ephemeral")

T = TypeVar("T")

# Paths still to be removed if the interpreter exits before normal cleanup runs.
_DELETE_ON_EXIT: set[Path] = set()


def _delete_pending() -> None:
    for path in list(_DELETE_ON_EXIT):
        _remove(path)


atexit.register(_delete_pending)


def _remove(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
        _DELETE_ON_EXIT.discard(path)
    except OSError as e:
        log.warning("ephemeral.delete_failed", path=str(path), error=str(e))


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_ephemeral_file(path: Path, content: str) -> Path:
    """Write *path* and mark it for deletion at interpreter exit."""
    _DELETE_ON_EXIT.add(path)
    write_file(path, content)
    log.debug("ephemeral.written", path=str(path))
    return path


@contextmanager
def ephemeral_file(path: Path, content: str) -> Iterator[Path]:
    """Context manager: *path* exists with *content* only inside the block."""
    try:
        yield write_ephemeral_file(path, content)
    finally:
        _remove(path)
        log.debug("ephemeral.removed", path=str(path))


def with_manifest(
    path: Path,
    content: str,
    operation: Callable[[], T],
    persist: bool = False,
) -> T:
    """Run *operation* with *content* written to *path*.

    With *persist* the file is left in place afterwards; otherwise it is
    removed whatever way *operation* exits, and any exception propagates.
    """
    if persist:
        write_file(path, content)
        log.info("manifest.persisted", path=str(path))
        return operation()
    with ephemeral_file(path, content):
        return operation()


def with_package_json(project: Project, operation: Callable[[], T]) -> T:
    """Run *operation* with the project's synthesized package.json on disk."""
    path = package_file(project)
    content = render_package(project_to_package(project))
    return with_manifest(path, content, operation, persist=persist_package_json(project))
