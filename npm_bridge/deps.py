"""Dependency merging: host-declared npm dependencies + an existing package.json.

Host entries always come first, so on a name collision the host version wins.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from npm_bridge.exceptions import ProjectConfigError
from npm_bridge.models.project import Project

DependencyPair = tuple[str, Any]


def normalize_name(name: Any) -> str:
    """Canonical key form for a package name."""
    return str(name).strip()


def transform_deps(deps: Iterable[Any] | Mapping[str, Any] | None) -> list[DependencyPair]:
    """Turn a host dependency declaration into ordered ``(name, version)`` pairs.

    Accepts a sequence of two-element pairs or a name -> version mapping.
    """
    if not deps:
        return []
    if isinstance(deps, Mapping):
        return [(normalize_name(name), version) for name, version in deps.items()]

    pairs: list[DependencyPair] = []
    for entry in deps:
        if isinstance(entry, (str, bytes)) or not isinstance(entry, (list, tuple)) or len(entry) != 2:
            raise ProjectConfigError(
                f"npm dependency must be a [name, version] pair, got {entry!r}"
            )
        name, version = entry
        pairs.append((normalize_name(name), version))
    return pairs


def resolve_node_deps(project: Project) -> list[DependencyPair]:
    """The project's declared npm dependencies, in declaration order."""
    return transform_deps(project.get_in(["npm", "dependencies"]))


def unique_dependencies(pairs: Iterable[DependencyPair]) -> list[DependencyPair]:
    """Drop exact ``(name, version)`` duplicates, keeping first occurrence order."""
    unique: list[DependencyPair] = []
    for pair in pairs:
        # list membership: versions from package.json may be unhashable
        if pair not in unique:
            unique.append(pair)
    return unique


def merge_dependencies(
    host_deps: Iterable[Any] | Mapping[str, Any] | None,
    manifest_deps: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge host and manifest dependencies into one name -> version map.

    The first occurrence of a name wins and host entries precede manifest
    entries, so ``merge_dependencies([("a", "1.0")], {"a": "2.0"}) == {"a": "1.0"}``.
    Conflicting versions are not an error.
    """
    combined = transform_deps(host_deps)
    if manifest_deps:
        combined += [(normalize_name(name), version) for name, version in manifest_deps.items()]

    merged: dict[str, Any] = {}
    for name, version in unique_dependencies(combined):
        merged.setdefault(name, version)
    return merged
