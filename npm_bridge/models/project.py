"""Host project model: the build tool's configuration as seen by the bridge."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from npm_bridge.exceptions import ProjectConfigError

DEFAULT_PROJECT_FILE = "project.toml"

# Prefix marking npm.root as a reference to another project key, e.g. ":target-path"
_KEY_REF_PREFIX = ":"

_MISSING = object()


@dataclass
class Project:
    """Host project configuration.

    ``data`` holds the raw host keys (``name``, ``version``, ``description``,
    ``main``, ``npm``, ...). ``root`` is the directory the project file lives in.
    """

    root: Path
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str | None:
        return self.data.get("name")

    @property
    def version(self) -> str | None:
        return self.data.get("version")

    @property
    def description(self) -> str | None:
        return self.data.get("description")

    @property
    def main(self) -> str | None:
        return self.data.get("main")

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def get_in(self, keys: list[str] | tuple[str, ...], default: Any = None) -> Any:
        """Walk nested tables, returning *default* when any step is missing."""
        node: Any = self.data
        for key in keys:
            if not isinstance(node, dict):
                return default
            node = node.get(key, _MISSING)
            if node is _MISSING:
                return default
        return node

    def keys(self) -> set[str]:
        return set(self.data)


def load_project(path: str | Path) -> Project:
    """Load a host project from a TOML project file."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ProjectConfigError(f"Project file not found: {path}") from None
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ProjectConfigError(f"Invalid TOML in {path}: {e}") from e

    npm = data.get("npm", {})
    if not isinstance(npm, dict):
        raise ProjectConfigError(f"'npm' must be a table in {path}")
    return Project(root=path.resolve().parent, data=data)


def npm_root(project: Project) -> Path:
    """Directory npm runs in and package.json is written to.

    ``npm.root`` may name a directory (relative to the project root) or, with a
    leading colon, another project key holding the directory.
    """
    root = project.get_in(["npm", "root"])
    if root is None:
        return project.root
    root = str(root)
    if root.startswith(_KEY_REF_PREFIX):
        key = root[len(_KEY_REF_PREFIX) :]
        value = project.get(key)
        if value is None:
            raise ProjectConfigError(f"npm.root refers to missing project key '{key}'")
        root = str(value)
    return project.root / root


def persist_package_json(project: Project) -> bool:
    return bool(project.get_in(["npm", "persist"], False))


def package_overrides(project: Project) -> dict[str, Any]:
    """Extra manifest fields from ``[npm.package]``; these have the final say."""
    package = project.get_in(["npm", "package"]) or {}
    if not isinstance(package, dict):
        raise ProjectConfigError("npm.package must be a table")
    return package
