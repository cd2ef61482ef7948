"""npm tasks: environment checks, passthrough commands, install."""

from __future__ import annotations

import structlog

from npm_bridge.deprecations import deprecation_warnings
from npm_bridge.ephemeral import with_package_json
from npm_bridge.exceptions import NpmNotFoundError, PreexistingManifestError, UsageError
from npm_bridge.manifest import package_file
from npm_bridge.models.project import Project, persist_package_json
from npm_bridge.process import DEFAULT_NPM, invoke, locate_npm

log = structlog.get_logger("npm_bridge.tasks")


def environmental_consistency(project: Project, executable: str = DEFAULT_NPM) -> None:
    """Fail before anything is written if the environment cannot support a run."""
    path = package_file(project)
    if not persist_package_json(project) and path.exists():
        raise PreexistingManifestError(path)
    if locate_npm(executable) is None:
        raise NpmNotFoundError(executable)


def warn_about_deprecation(project: Project) -> None:
    for message in deprecation_warnings(project):
        log.warning("project.deprecated_key", message=message)


def npm_debug(project: Project) -> str:
    """The generated package.json, as read back from disk inside its lifecycle."""
    path = package_file(project)
    return with_package_json(project, lambda: path.read_text(encoding="utf-8"))


def npm(project: Project, *args: str, executable: str = DEFAULT_NPM) -> str | None:
    """Run ``npm <args>`` against the synthesized package.json.

    ``pprint`` as the sole argument returns the manifest text instead.
    """
    if not args:
        raise UsageError("npm requires at least one argument, e.g. 'install'")
    environmental_consistency(project, executable)
    warn_about_deprecation(project)
    if list(args) == ["pprint"]:
        return npm_debug(project)
    with_package_json(project, lambda: invoke(project, *args, executable=executable))
    return None


def install_deps(project: Project, executable: str = DEFAULT_NPM) -> None:
    environmental_consistency(project, executable)
    warn_about_deprecation(project)
    log.info("npm.install_deps", project=project.name)
    with_package_json(project, lambda: invoke(project, "install", executable=executable))
