"""Defines the CLI command for building an inventory."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from inventorize.core.config import get_settings
from inventorize.core.exceptions import InventorizeError, InventoryExistsError, ParseHashAlgorithmError
from inventorize.functions.inventory_functions import build_inventory
from inventorize.functions.storage_functions import save_inventory
from inventorize.models.inventory import Configuration
from inventorize.state import Options, get_options
from inventorize.utils.hash_utils import CHUNK_SIZE, HashAlgorithm

logger = logging.getLogger(__name__)


def _parse_hash_algorithms(names: list[str] | None, default: HashAlgorithm) -> list[HashAlgorithm]:
    if not names:
        return [default]
    try:
        return [HashAlgorithm.parse(name) for name in names]
    except ParseHashAlgorithmError as e:
        raise typer.BadParameter(str(e), param_hint="--hash-algorithm") from e


def build_logic(options: Options, configuration: Configuration, overwrite: bool, chunk_size: int = CHUNK_SIZE) -> int:
    """Build the inventory and write it to the inventory file. Returns the number of files."""
    # Fail before hashing, which can take quite a while.
    if options.inventory.exists() and not overwrite:
        raise InventoryExistsError(options.inventory)

    inventory = build_inventory(configuration, options.repository, chunk_size=chunk_size)
    save_inventory(inventory, options.inventory, overwrite=overwrite)
    return len(inventory)


def build_command(
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Overwrite the inventory file if it exists."),
    ] = False,
    skip_hidden: Annotated[
        bool,
        typer.Option("--skip-hidden", help="Skip hidden files and directories."),
    ] = False,
    hash_algorithm: Annotated[
        list[str] | None,
        typer.Option(
            "--hash-algorithm",
            help="Hash algorithm to use (md5 or sha1). Can be given several times.",
        ),
    ] = None,
):
    """Build the inventory."""
    options = get_options()
    settings = get_settings()

    configuration = Configuration().set_skip_hidden(skip_hidden)
    configuration.set_hash_algorithms(_parse_hash_algorithms(hash_algorithm, settings.default_hash_algorithm))

    try:
        count = build_logic(options, configuration, overwrite, chunk_size=settings.chunk_size)
    except InventorizeError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e

    logger.info("Inventory of %d file(s) built successfully.", count)
