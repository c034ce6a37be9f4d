"""Main CLI entry point for inventorize."""

import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from typer.core import TyperGroup

from inventorize import __version__
from inventorize.cli import build_command, update_command, verify_command
from inventorize.core.config import get_settings
from inventorize.core.logging_config import setup_logging, verbosity_to_level
from inventorize.state import Options, global_state

logger = logging.getLogger(__name__)

# Exit code click uses for bad options and arguments.
USAGE_ERROR_EXIT_CODE = 2


class InventorizeGroup(TyperGroup):
    """A command group that exits with code 1 on usage errors, like on any other error."""

    def main(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().main(*args, **kwargs)
        except SystemExit as e:
            if e.code == USAGE_ERROR_EXIT_CODE:
                raise SystemExit(1) from e
            raise


app = typer.Typer(
    cls=InventorizeGroup,
    name="inventorize",
    help="Builds and maintains an inventory of files in a repository directory.",
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="markdown",
)

app.command(name="build")(build_command)
app.command(name="verify")(verify_command)
app.command(name="update")(update_command)


def canonicalize_inventory_path(inventory: Path) -> Path:
    """
    Canonicalize the inventory file path.

    The inventory file itself does not have to exist (`build` creates it),
    so only its parent directory is resolved. That directory must exist; an
    empty parent means the current working directory.
    """
    if inventory.name in ("", ".", ".."):
        raise ValueError("inventory filename not specified")

    parent = inventory.parent
    try:
        resolved = parent.resolve(strict=True)
    except OSError as e:
        raise ValueError("inventory directory is inaccessible or does not exist") from e
    if not resolved.is_dir():
        raise ValueError("inventory directory is inaccessible or does not exist")
    return resolved / inventory.name


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"inventorize {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    inventory: Annotated[
        Path,
        typer.Option(
            "--inventory",
            help="Path to the inventory file (must be outside of the repository).",
        ),
    ],
    repository: Annotated[
        Path,
        typer.Option(
            "--repository",
            help="Path to the repository.",
            exists=True,
            file_okay=False,
            dir_okay=True,
            resolve_path=True,
        ),
    ] = Path("."),
    verbose: Annotated[
        int,
        typer.Option("--verbose", "-v", count=True, help="Verbose output. Repeat for more detail."),
    ] = 0,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = False,
):
    """Initialize logging and validate the inventory and repository paths."""
    settings = get_settings()
    if verbose == 0 and settings.log_level:
        setup_logging(settings.log_level)
    else:
        setup_logging(verbosity_to_level(verbose))

    try:
        inventory_path = canonicalize_inventory_path(inventory)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--inventory") from e

    if inventory_path.is_relative_to(repository):
        typer.secho("Error: inventory must be located outside of the repository", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    logger.debug("Inventory: %s, repository: %s", inventory_path, repository)
    global_state.options = Options(inventory=inventory_path, repository=repository)


def run_cli_directly():
    """Run the CLI application."""
    app()


if __name__ == "__main__":
    run_cli_directly()
