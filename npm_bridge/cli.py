"""CLI entry point: npm-bridge.

Subcommands:
    npm-bridge run install             # npm install against a synthesized package.json
    npm-bridge run -- test --silent    # any npm command
    npm-bridge pprint                  # print the package.json that would be generated
    npm-bridge install                 # npm install
    npm-bridge deps                    # host deps step, with npm install hooked in
"""

from __future__ import annotations

import sys
from typing import Any, Callable

import click

from npm_bridge.core.logging import setup_logging
from npm_bridge.exceptions import NpmBridgeError, NpmCommandError
from npm_bridge.models.project import DEFAULT_PROJECT_FILE, Project, load_project


def _run_task(func: Callable[..., Any], *args: Any) -> Any:
    """Call a task, turning bridge errors into exit codes."""
    try:
        return func(*args)
    except NpmCommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.returncode)
    except NpmBridgeError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _project(ctx: click.Context) -> Project:
    return _run_task(load_project, ctx.obj["project_file"])


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option(
    "-p",
    "--project",
    "project_file",
    default=DEFAULT_PROJECT_FILE,
    show_default=True,
    help="Host project file",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, project_file: str) -> None:
    """npm-bridge: run npm against a package.json generated from your project."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["project_file"] = project_file


@main.command("run", context_settings={"ignore_unknown_options": True})
@click.argument("npm_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def run(ctx: click.Context, npm_args: tuple[str, ...]) -> None:
    """Invoke npm with NPM_ARGS."""
    from npm_bridge.tasks import npm

    if not npm_args:
        click.echo(ctx.get_help())
        sys.exit(1)
    output = _run_task(npm, _project(ctx), *npm_args)
    if output is not None:
        _echo_manifest(output)


@main.command("pprint")
@click.pass_context
def pprint(ctx: click.Context) -> None:
    """Print the generated package.json."""
    from npm_bridge.tasks import npm

    _echo_manifest(_run_task(npm, _project(ctx), "pprint"))


@main.command("install")
@click.pass_context
def install(ctx: click.Context) -> None:
    """Run npm install."""
    from npm_bridge.tasks import install_deps

    _run_task(install_deps, _project(ctx))


@main.command("deps")
@click.pass_context
def deps(ctx: click.Context) -> None:
    """Resolve host dependencies, then npm install (once)."""
    from npm_bridge import host
    from npm_bridge.hooks import install_hooks

    install_hooks(host)
    resolved = _run_task(host.resolve_deps, _project(ctx))
    for name, version in resolved:
        click.echo(f"  {name} {version}")


def _echo_manifest(text: str) -> None:
    click.echo("npm-bridge generated package.json:\n")
    click.echo(text, nl=False)


if __name__ == "__main__":
    main()
