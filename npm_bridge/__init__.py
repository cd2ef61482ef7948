"""npm-bridge: synthesize package.json from a host project and run npm against it."""

__version__ = "0.1.0"

from npm_bridge.deps import merge_dependencies, resolve_node_deps
from npm_bridge.ephemeral import with_manifest, with_package_json
from npm_bridge.exceptions import (
    NpmBridgeError,
    NpmCommandError,
    NpmNotFoundError,
    PreexistingManifestError,
    ProjectConfigError,
    UsageError,
)
from npm_bridge.hooks import DepsGuard, InstallLock, LockState, install_hooks
from npm_bridge.manifest import project_to_package, read_package, render_package, synthesize
from npm_bridge.models.project import Project, load_project
from npm_bridge.tasks import install_deps, npm

__all__ = [
    "DepsGuard",
    "InstallLock",
    "LockState",
    "NpmBridgeError",
    "NpmCommandError",
    "NpmNotFoundError",
    "PreexistingManifestError",
    "Project",
    "ProjectConfigError",
    "UsageError",
    "install_deps",
    "install_hooks",
    "load_project",
    "merge_dependencies",
    "npm",
    "project_to_package",
    "read_package",
    "render_package",
    "resolve_node_deps",
    "synthesize",
    "with_manifest",
    "with_package_json",
]
