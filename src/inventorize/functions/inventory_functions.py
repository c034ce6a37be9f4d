"""
Functions to build, check and update an inventory against a repository.

All three operations scan the repository with a `DirectoryIterator` and
hash files with a single `Hasher` reused across files. Any I/O error aborts
the operation with a `FileIoError`; no partially built inventory is ever
returned, and `update_inventory` leaves the inventory untouched on failure.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from inventorize.core.exceptions import FileIoError, InvalidPathError
from inventorize.models.inventory import Configuration, Inventory, Record
from inventorize.models.report import FailureKind, Report
from inventorize.utils.dir_utils import DirectoryIterator
from inventorize.utils.hash_utils import CHUNK_SIZE, HashAlgorithm, HashValue, Hasher

logger = logging.getLogger(__name__)


def record_key(rel_path: Path) -> str:
    """
    Return the inventory key of a repository-relative path.

    Keys use `/` as the separator and must be valid UTF-8. File names with
    undecodable bytes come back from the OS as surrogate escapes, which
    cannot be written to a JSON document faithfully.

    Raises:
        InvalidPathError: If the path is not valid UTF-8.

    """
    key = rel_path.as_posix()
    try:
        key.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidPathError(rel_path, "not valid UTF-8") from e
    return key


def scan_repository(repository: Path, skip_hidden: bool) -> set[str]:
    """Return the inventory keys of all files in the repository."""
    with DirectoryIterator(repository, skip_hidden) as files:
        return {record_key(path) for path in files.relative_paths()}


def _file_size(path: Path) -> int:
    try:
        return os.stat(path).st_size
    except OSError as e:
        raise FileIoError(path, e) from e


def _hash_file(path: Path, hasher: Hasher) -> list[tuple[HashAlgorithm, HashValue]]:
    try:
        with open(path, "rb") as f:
            return hasher.compute(f)
    except OSError as e:
        raise FileIoError(path, e) from e


def make_record(repository: Path, rel_path: str, hasher: Hasher) -> Record:
    """Produce the record (size and hashes) for one repository file."""
    logger.debug("Adding file %s", rel_path)
    abs_path = repository / rel_path
    size = _file_size(abs_path)
    return Record.from_hashes(size, _hash_file(abs_path, hasher))


def build_inventory(
    configuration: Configuration,
    repository: Path,
    chunk_size: int = CHUNK_SIZE,
) -> Inventory:
    """
    Build an inventory of every file in the repository.

    Args:
        configuration: Inventory configuration. A copy is stored in the inventory.
        repository: Path to the repository directory.
        chunk_size: Size of the read buffer used for hashing.

    Returns:
        The new inventory.

    Raises:
        FileIoError: On the first directory, metadata or read failure.
        InvalidPathError: If a file name is not valid UTF-8.
        ValueError: If the configuration names no hash algorithm.

    """
    hasher = Hasher(configuration.hash_algorithms, chunk_size=chunk_size)
    inventory = Inventory(configuration=configuration.model_copy(deep=True))
    logger.debug("Hashing with %s", ", ".join(hasher.algorithms))

    with DirectoryIterator(repository, configuration.skip_hidden) as files:
        for rel_path in files.relative_paths():
            path = record_key(rel_path)
            inventory.records[path] = make_record(repository, path, hasher)

    logger.info("Built inventory of %d file(s) in %s", len(inventory), repository)
    return inventory


def check_inventory(
    inventory: Inventory,
    repository: Path,
    check_hashes: bool = True,
    chunk_size: int = CHUNK_SIZE,
) -> Report:
    """
    Check the repository against the inventory and produce a report.

    Presence is decided from a snapshot of the repository taken before any
    file is examined. For files present on both sides the size is compared
    first and the hashes only if the sizes match. When `check_hashes` is
    false (quick mode) a modification that keeps the file size is not
    detected.

    The inventory is never modified.

    Raises:
        FileIoError: If scanning fails, or a file found by the scan cannot be
            examined. Such a file is never reported as missing.
        InvalidPathError: If a repository file name is not valid UTF-8.

    """
    configuration = inventory.configuration
    hasher = Hasher(configuration.hash_algorithms, chunk_size=chunk_size) if check_hashes else None

    repository_files = scan_repository(repository, configuration.skip_hidden)
    inventory_files = inventory.paths()

    report = Report()

    for path in repository_files - inventory_files:
        report.add_failure(path, FailureKind.MISSING_FROM_INVENTORY)

    for path in inventory_files - repository_files:
        report.add_failure(path, FailureKind.MISSING_FROM_REPOSITORY)

    common = sorted(repository_files & inventory_files)
    for path in common:
        logger.debug("Verifying file %s", path)
        record = inventory.records[path]
        abs_path = repository / path

        # Hashes are only worth computing when the sizes match.
        if _file_size(abs_path) != record.size:
            report.add_failure(path, FailureKind.SIZE_MISMATCH)
        elif hasher is not None:
            hashes = dict(_hash_file(abs_path, hasher))
            if hashes != record.hashes:
                report.add_failure(path, FailureKind.HASH_MISMATCH)

    logger.info("Verified %d file(s), %d issue(s) found", len(common), len(report))
    return report


def update_inventory(
    inventory: Inventory,
    repository: Path,
    remove_missing: bool = False,
    chunk_size: int = CHUNK_SIZE,
) -> None:
    """
    Add new repository files to the inventory and optionally drop missing ones.

    Files that are already tracked are not examined again, so changes to
    their contents go unnoticed; use `check_inventory` for that.

    Raises:
        FileIoError: On the first I/O failure. The inventory is left unchanged.
        InvalidPathError: If a repository file name is not valid UTF-8.

    """
    configuration = inventory.configuration
    hasher = Hasher(configuration.hash_algorithms, chunk_size=chunk_size)

    repository_files = scan_repository(repository, configuration.skip_hidden)
    inventory_files = inventory.paths()

    added = {path: make_record(repository, path, hasher) for path in sorted(repository_files - inventory_files)}
    missing = sorted(inventory_files - repository_files)

    inventory.records.update(added)
    if remove_missing:
        for path in missing:
            logger.debug("Removing file %s", path)
            del inventory.records[path]

    logger.info(
        "Added %d file(s), removed %d file(s)",
        len(added),
        len(missing) if remove_missing else 0,
    )
