"""package.json synthesis from host project data."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import structlog

from npm_bridge.deps import merge_dependencies, resolve_node_deps
from npm_bridge.models.project import Project, npm_root, package_overrides

log = structlog.get_logger("npm_bridge.manifest")

PACKAGE_FILE_NAME = "package.json"


def package_file(project: Project) -> Path:
    return npm_root(project) / PACKAGE_FILE_NAME


def read_package(path: Path) -> dict[str, Any] | None:
    """Load an existing package.json.

    Returns None when the file is absent, is not valid JSON, or does not hold
    a JSON object. A parse failure is logged, never raised.
    """
    if not path.exists():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        log.warning("manifest.parse_failed", path=str(path), error=str(e))
        return None
    if not isinstance(data, dict):
        log.warning("manifest.not_an_object", path=str(path), type=type(data).__name__)
        return None
    return data


def synthesize(
    meta: Mapping[str, Any],
    existing: Mapping[str, Any] | None,
    dependencies: Mapping[str, Any],
    extra: Mapping[str, Any] | None = None,
    main: str | None = None,
) -> dict[str, Any]:
    """Build the manifest document.

    Layers, later ones replacing top-level keys of earlier ones:

    1. the existing package.json, if any
    2. ``private: true`` (keeps npm quiet about repository and README)
    3. ``name``, ``description``, ``version`` from *meta*
    4. ``dependencies``
    5. ``scripts.start`` when a main entry point is configured
    6. *extra* fields from host configuration
    """
    document: dict[str, Any] = dict(existing or {})
    document["private"] = True
    document["name"] = meta.get("name")
    document["description"] = meta.get("description")
    document["version"] = meta.get("version")
    document["dependencies"] = dict(dependencies)
    if main:
        document["scripts"] = {"start": "run " + main}
    if extra:
        document.update(extra)
    return document


def project_to_package(project: Project) -> dict[str, Any]:
    """Synthesize the manifest for *project*, merging any on-disk package.json."""
    existing = read_package(package_file(project))
    manifest_deps = (existing or {}).get("dependencies")
    if not isinstance(manifest_deps, Mapping):
        manifest_deps = None
    dependencies = merge_dependencies(resolve_node_deps(project), manifest_deps)
    return synthesize(
        {
            "name": project.name,
            "description": project.description,
            "version": project.version,
        },
        existing,
        dependencies,
        extra=package_overrides(project),
        main=project.main,
    )


def render_package(document: Mapping[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False) + "\n"
