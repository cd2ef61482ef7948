"""Custom exceptions for npm-bridge."""


class NpmBridgeError(Exception):
    """Base exception for all npm-bridge errors."""


class ProjectConfigError(NpmBridgeError):
    """Raised when the host project file is missing or malformed."""


class UsageError(NpmBridgeError):
    """Raised when a task is invoked without the arguments it needs."""


class PreexistingManifestError(NpmBridgeError):
    """Raised when a package.json already exists and persistence is off."""

    def __init__(self, path):
        self.path = path
        super().__init__(
            f"Your project already has a {path.name} file ({path}). Please remove it."
        )


class NpmNotFoundError(NpmBridgeError):
    """Raised when the npm executable cannot be found on PATH."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"Unable to find {executable} on your path. Please install it.")


class NpmCommandError(NpmBridgeError):
    """Raised when npm exits with a nonzero status."""

    def __init__(self, returncode: int, args: list[str]):
        self.returncode = returncode
        self.args_list = args
        super().__init__(f"npm {' '.join(args)} failed (exit {returncode})")
