"""Pydantic models for the inventory document."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath
from typing import Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_validator,
)

from inventorize import __version__
from inventorize.utils.hash_utils import HashAlgorithm, HashValue

MAX_FILE_SIZE = 2**64 - 1


class Configuration(BaseModel):
    """
    Build-time parameters baked into an inventory.

    Use the setters (or keyword arguments) before building; `build_inventory`
    stores its own copy, so changing this object afterwards has no effect on
    an inventory built from it.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    version: str = __version__
    """Version of the tool used to build the inventory."""

    skip_hidden: bool = False
    """Skip hidden files and directories while scanning the repository."""

    hash_algorithms: set[HashAlgorithm] = Field(default_factory=set)
    """Hash algorithms computed for every file."""

    @field_validator("hash_algorithms", mode="before")
    @classmethod
    def parse_hash_algorithms(cls, value: Any) -> set[HashAlgorithm]:
        """Parse algorithm names, rejecting unknown ones."""
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise ValueError("hash_algorithms must be a list of algorithm names")
        return {HashAlgorithm.parse(name) for name in value}

    @field_serializer("hash_algorithms")
    def serialize_hash_algorithms(self, value: set[HashAlgorithm]) -> list[str]:
        """Serialize the algorithms as a sorted list of names."""
        return [algorithm.value for algorithm in sorted(value)]

    def set_skip_hidden(self, skip_hidden: bool) -> Self:
        """Set the `skip_hidden` mode."""
        self.skip_hidden = skip_hidden
        return self

    def set_hash_algorithms(self, algorithms: Iterable[HashAlgorithm | str]) -> Self:
        """Replace the hash algorithms to use."""
        self.hash_algorithms = set(algorithms)
        return self


class Record(BaseModel):
    """Size and hashes of one tracked file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hashes: dict[HashAlgorithm, HashValue]
    size: int = Field(ge=0, le=MAX_FILE_SIZE)

    @field_validator("hashes", mode="before")
    @classmethod
    def parse_hash_keys(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return {HashAlgorithm.parse(name): hash_value for name, hash_value in value.items()}
        return value

    @field_validator("hashes")
    @classmethod
    def check_and_sort_hashes(cls, value: dict[HashAlgorithm, HashValue]) -> dict[HashAlgorithm, HashValue]:
        for algorithm, hash_value in value.items():
            digits = len(hash_value.value) * 2
            expected = algorithm.digest_size * 2
            if digits != expected:
                raise ValueError(f"Invalid {algorithm} hash value length: expected {expected} hex digits, got {digits}")
        return dict(sorted(value.items()))

    @classmethod
    def from_hashes(cls, size: int, hashes: Iterable[tuple[HashAlgorithm, HashValue]]) -> Record:
        """Create a record from the output of `Hasher.compute`."""
        return cls(size=size, hashes=dict(hashes))


class Inventory(BaseModel):
    """
    The manifest of tracked files: a configuration plus one record per file.

    Record keys are repository-relative paths using `/` as the separator.
    Every record carries exactly the hash algorithms of the configuration.
    """

    model_config = ConfigDict(extra="forbid")

    configuration: Configuration
    records: dict[str, Record] = Field(default_factory=dict)

    @field_validator("records")
    @classmethod
    def check_relative_paths(cls, value: dict[str, Record]) -> dict[str, Record]:
        for path in value:
            pure = PurePosixPath(path)
            if not pure.parts or pure.is_absolute() or ".." in pure.parts:
                raise ValueError(f"Record path must be relative to the repository: {path!r}")
            if pure.as_posix() != path:
                raise ValueError(f"Record path must be normalized: {path!r}")
            try:
                path.encode("utf-8")
            except UnicodeEncodeError as e:
                raise ValueError(f"Record path must be valid UTF-8: {path!r}") from e
        return value

    @model_validator(mode="after")
    def check_record_hashes(self) -> Self:
        expected = self.configuration.hash_algorithms
        if not expected:
            raise ValueError("Inventory configuration must name at least one hash algorithm")
        for path, record in self.records.items():
            if set(record.hashes) != expected:
                found = ", ".join(sorted(record.hashes)) or "none"
                wanted = ", ".join(sorted(expected))
                raise ValueError(f"Record {path!r} has hashes for [{found}], expected [{wanted}]")
        return self

    @field_serializer("records", mode="wrap")
    def serialize_records(self, value: dict[str, Record], handler: SerializerFunctionWrapHandler) -> Any:
        """Serialize the records ordered by path."""
        return handler(dict(sorted(value.items())))

    def paths(self) -> set[str]:
        """Return the set of tracked paths."""
        return set(self.records)

    def __len__(self) -> int:
        return len(self.records)
