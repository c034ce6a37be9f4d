"""Custom exceptions for inventorize."""

from __future__ import annotations

import os
from pathlib import Path


class InventorizeError(Exception):
    """Base class for exceptions raised by inventorize."""

    pass


class FileIoError(InventorizeError):
    """Raised when a filesystem operation fails for a specific path."""

    def __init__(self, path: str | os.PathLike[str], io_error: OSError) -> None:
        super().__init__(f"File I/O error: '{os.fspath(path)}': {io_error}")
        self.path = Path(path)
        self.io_error = io_error


class ParseHashAlgorithmError(InventorizeError, ValueError):
    """Raised when a hash algorithm name cannot be parsed."""

    def __init__(self, name: object) -> None:
        super().__init__(f"Invalid algorithm name: {name!r}")
        self.name = name


class ParseHashValueError(InventorizeError, ValueError):
    """Raised when a hash value hex string cannot be parsed."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid hash value hex string: {value!r}")
        self.value = value


class InventoryFormatError(InventorizeError):
    """Raised when an inventory document cannot be decoded."""

    def __init__(self, path: str | os.PathLike[str], detail: str) -> None:
        super().__init__(f"Invalid inventory file '{os.fspath(path)}': {detail}")
        self.path = Path(path)
        self.detail = detail


class InventoryExistsError(InventorizeError):
    """Raised when building would overwrite an existing inventory file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        super().__init__(f"Inventory file exists: '{os.fspath(path)}'")
        self.path = Path(path)


class VerificationFailedError(InventorizeError):
    """Raised when the verification report is not empty."""

    def __init__(self, failure_count: int) -> None:
        super().__init__(f"Verification failed ({failure_count} issue(s) found)")
        self.failure_count = failure_count


class InvalidPathError(InventorizeError):
    """Raised when a file name cannot be stored in an inventory."""

    def __init__(self, path: str | os.PathLike[str], detail: str) -> None:
        # repr() keeps undecodable bytes visible as surrogate escapes.
        super().__init__(f"Invalid file name {os.fspath(path)!r}: {detail}")
        self.path = Path(path)
        self.detail = detail
