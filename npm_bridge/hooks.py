"""Hooking npm install into the host's dependency-resolution step.

The host may call its deps step several times (including recursively) within
one logical ``deps`` run. The guard makes ``npm install`` fire exactly once per
outermost call.
"""

from __future__ import annotations

import enum
import functools
import inspect
import threading
from typing import Any, Callable

import structlog

log = structlog.get_logger("npm_bridge.hooks")


class LockState(enum.Enum):
    UNLOCKED = "unlocked"
    LOCKED = "locked"


class InstallLock:
    """Two-state lock; transitions are serialized so concurrent entry stays exact."""

    def __init__(self) -> None:
        self._state = LockState.UNLOCKED
        self._mutex = threading.Lock()

    @property
    def state(self) -> LockState:
        return self._state

    @property
    def locked(self) -> bool:
        return self._state is LockState.LOCKED

    def acquire(self) -> bool:
        """Move to LOCKED. Returns False if it was already LOCKED."""
        with self._mutex:
            if self._state is LockState.LOCKED:
                return False
            self._state = LockState.LOCKED
            return True

    def release(self) -> None:
        with self._mutex:
            self._state = LockState.UNLOCKED


class DepsGuard:
    """Wrap a host hook so *install* runs once per outer invocation.

    *install* receives the hook's first argument (the project), whether it was
    passed positionally or by keyword.
    """

    def __init__(self, install: Callable[[Any], Any], lock: InstallLock | None = None) -> None:
        self.install = install
        self.lock = lock or InstallLock()

    def __call__(self, inner: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        if not self.lock.acquire():
            return inner(*args, **kwargs)
        try:
            context = _first_argument(inner, args, kwargs)
            result = inner(*args, **kwargs)
            self.install(context)
        finally:
            self.lock.release()
        return result


def _first_argument(inner: Callable[..., Any], args: tuple, kwargs: dict[str, Any]) -> Any:
    """The hook's first argument, looked up by parameter name when passed by keyword."""
    if args:
        return args[0]
    try:
        params = list(inspect.signature(inner).parameters)
    except (TypeError, ValueError):
        params = []
    if params and params[0] in kwargs:
        return kwargs[params[0]]
    if kwargs:
        return next(iter(kwargs.values()))
    raise TypeError("guarded hook called without a project argument")


def add_hook(target: Any, attr: str, wrapper: Callable[..., Any]) -> Callable[..., Any]:
    """Replace ``target.attr`` with a function calling ``wrapper(original, *args)``.

    Returns the original function.
    """
    original = getattr(target, attr)

    @functools.wraps(original)
    def hooked(*args: Any, **kwargs: Any) -> Any:
        return wrapper(original, *args, **kwargs)

    hooked.__npm_bridge_original__ = original  # type: ignore[attr-defined]
    hooked.__npm_bridge_wrapper__ = wrapper  # type: ignore[attr-defined]
    setattr(target, attr, hooked)
    log.debug("hooks.installed", target=getattr(target, "__name__", repr(target)), attr=attr)
    return original


def remove_hook(target: Any, attr: str) -> None:
    """Undo :func:`add_hook` if ``target.attr`` is hooked."""
    original = getattr(getattr(target, attr), "__npm_bridge_original__", None)
    if original is not None:
        setattr(target, attr, original)


def install_hooks(
    target: Any = None,
    attr: str = "resolve_deps",
    guard: DepsGuard | None = None,
) -> DepsGuard:
    """Guard the host deps step so it also runs ``npm install``.

    If the target is already hooked it is left alone and the installed guard
    is returned.
    """
    if target is None:
        from npm_bridge import host as target
    installed = getattr(getattr(target, attr), "__npm_bridge_wrapper__", None)
    if installed is not None:
        return installed
    if guard is None:
        from npm_bridge.tasks import install_deps

        guard = DepsGuard(install_deps)
    add_hook(target, attr, guard)
    return guard
