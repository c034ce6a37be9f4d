"""Defines the CLI command for verifying a repository against its inventory."""

from __future__ import annotations

import logging
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from inventorize.core.config import get_settings
from inventorize.core.exceptions import InventorizeError, VerificationFailedError
from inventorize.functions.inventory_functions import check_inventory
from inventorize.functions.storage_functions import load_inventory
from inventorize.models.report import Report
from inventorize.state import Options, get_options
from inventorize.utils.hash_utils import CHUNK_SIZE

logger = logging.getLogger(__name__)


def verify_logic(options: Options, quick: bool, chunk_size: int = CHUNK_SIZE) -> Report:
    """Load the inventory and check the repository against it."""
    inventory = load_inventory(options.inventory)
    return check_inventory(inventory, options.repository, check_hashes=not quick, chunk_size=chunk_size)


def _log_failures(report: Report) -> None:
    for kind in report.failures():
        for path in report.by_failure(kind):
            logger.error("%s: %s", kind.description, path)


def _summary_table(report: Report) -> Table:
    table = Table(title="Verification Summary")
    table.add_column("Failure", style="red")
    table.add_column("Files", justify="right")
    for kind in report.failures():
        table.add_row(kind.description, str(len(report.by_failure(kind))))
    return table


def verify_command(
    quick: Annotated[
        bool,
        typer.Option("--quick", help="Quick verification: only file presence and sizes are checked."),
    ] = False,
):
    """Verify the repository against the inventory."""
    options = get_options()
    settings = get_settings()

    try:
        report = verify_logic(options, quick, chunk_size=settings.chunk_size)
        if not report.is_empty():
            _log_failures(report)
            Console().print(_summary_table(report))
            raise VerificationFailedError(len(report))
    except InventorizeError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e

    logger.info("No issues found.")
