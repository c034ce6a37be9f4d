"""Functions for reading and writing inventory files."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from inventorize.core.exceptions import FileIoError, InventoryExistsError, InventoryFormatError
from inventorize.models.inventory import Inventory

logger = logging.getLogger(__name__)


def load_inventory(path: Path) -> Inventory:
    """
    Load an inventory from a JSON file.

    Raises:
        FileIoError: If the file cannot be read.
        InventoryFormatError: If the document is not a valid inventory, e.g.
            malformed JSON, an unknown hash algorithm or a bad hex string.

    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise FileIoError(path, e) from e

    try:
        inventory = Inventory.model_validate_json(data)
    except ValidationError as e:
        raise InventoryFormatError(path, str(e)) from e

    logger.debug("Loaded inventory of %d file(s) from %s", len(inventory), path)
    return inventory


def save_inventory(inventory: Inventory, path: Path, overwrite: bool = True) -> None:
    """
    Write an inventory to a JSON file.

    Args:
        inventory: The inventory to write.
        path: Destination file.
        overwrite: Replace an existing file. If false, the file is created
            exclusively and an existing file raises `InventoryExistsError`.

    """
    document = inventory.model_dump_json(indent=2)
    mode = "w" if overwrite else "x"
    try:
        with open(path, mode, encoding="utf-8") as f:
            f.write(document)
            f.write("\n")
    except FileExistsError as e:
        raise InventoryExistsError(path) from e
    except OSError as e:
        raise FileIoError(path, e) from e

    logger.debug("Saved inventory of %d file(s) to %s", len(inventory), path)
