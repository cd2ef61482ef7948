"""Host build tool's dependency-resolution step.

Stands in for the host's own ``deps`` task; :func:`npm_bridge.hooks.install_hooks`
wraps :func:`resolve_deps` so npm install runs alongside it.
"""

from __future__ import annotations

from typing import Any

import structlog

from npm_bridge.deps import transform_deps
from npm_bridge.models.project import Project

log = structlog.get_logger("npm_bridge.host")


def resolve_deps(project: Project) -> list[tuple[str, Any]]:
    """Return the project's host-level ``dependencies`` as ordered pairs."""
    deps = transform_deps(project.get("dependencies"))
    log.info("host.deps", project=project.name, count=len(deps))
    return deps
