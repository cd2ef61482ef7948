"""Deprecated top-level project keys that moved into the [npm] table."""

from __future__ import annotations

from npm_bridge.models.project import Project

# old top-level key -> new key inside [npm]
KEY_DEPRECATIONS: dict[str, str] = {
    "nodejs": "package",
    "node-dependencies": "dependencies",
    "npm-root": "root",
}

DEPRECATED_KEYS = frozenset(KEY_DEPRECATIONS)


def select_deprecated_keys(project: Project) -> set[str]:
    """Deprecated keys present in *project*."""
    return set(DEPRECATED_KEYS & project.keys())


def deprecation_warning(used_key: str) -> str:
    return (
        f"{used_key} is deprecated. Use {KEY_DEPRECATIONS[used_key]} "
        "in an [npm] table instead."
    )


def deprecation_warnings(project: Project) -> list[str]:
    return [deprecation_warning(k) for k in sorted(select_deprecated_keys(project))]
