"""Command-line entry point for resolve-local-dependencies."""

from __future__ import annotations

import typer

from resolve_local_deps.cli.ui import LogLevel, configure_debug_logging, log
from resolve_local_deps.materializer import MaterializeOptions, materialize

SUCCESS_MESSAGE = "Local dependencies unlinked successfully."

app = typer.Typer(
    name="resolve-local-dependencies",
    help="Replace symlinked file: dependencies in node_modules with real copies.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.command()
def resolve(
    silent: bool = typer.Option(
        False,
        "--silent",
        help="Suppress all output, including errors",
    ),
    no_install: bool = typer.Option(
        False,
        "--no-install",
        help="Skip npm install after unlinking",
    ),
    dev: bool = typer.Option(
        False,
        "--dev",
        help="Use development mode (include devDependencies)",
    ),
) -> None:
    """Copy each symlinked local package into node_modules, then install its dependencies."""
    options = MaterializeOptions(
        suppress_output=silent,
        skip_install=no_install,
        include_dev=dev,
    )
    try:
        materialize(options)
    except Exception as e:
        log(f"Error unlinking local dependencies: {e}", LogLevel.ERROR, silent)
        raise typer.Exit(1)

    log(SUCCESS_MESSAGE, LogLevel.INFO, silent)


def main():
    configure_debug_logging()
    app()


if __name__ == "__main__":
    main()
