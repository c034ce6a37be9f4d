"""Defines the CLI command for updating an inventory."""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from inventorize.core.config import get_settings
from inventorize.core.exceptions import InventorizeError
from inventorize.functions.inventory_functions import update_inventory
from inventorize.functions.storage_functions import load_inventory, save_inventory
from inventorize.state import Options, get_options
from inventorize.utils.hash_utils import CHUNK_SIZE

logger = logging.getLogger(__name__)


def update_logic(options: Options, remove_missing: bool, chunk_size: int = CHUNK_SIZE) -> None:
    """Update the inventory file in place with files added to or removed from the repository."""
    inventory = load_inventory(options.inventory)
    update_inventory(inventory, options.repository, remove_missing=remove_missing, chunk_size=chunk_size)
    save_inventory(inventory, options.inventory, overwrite=True)


def update_command(
    remove_missing: Annotated[
        bool,
        typer.Option("--remove-missing", help="Remove files missing from the repository from the inventory."),
    ] = False,
):
    """Update the inventory with new files (and optionally drop missing ones)."""
    options = get_options()
    settings = get_settings()

    try:
        update_logic(options, remove_missing, chunk_size=settings.chunk_size)
    except InventorizeError as e:
        logger.error("%s", e)
        raise typer.Exit(code=1) from e

    logger.info("Inventory updated successfully.")
