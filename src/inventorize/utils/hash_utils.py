"""Hash algorithm identifiers, hash values and the multi-digest hasher."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Iterable
from enum import Enum
from typing import Any, BinaryIO, Protocol, runtime_checkable

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from inventorize.core.exceptions import ParseHashAlgorithmError, ParseHashValueError
from inventorize.utils.hex_utils import bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)

CHUNK_SIZE = 128 * 1024


@runtime_checkable
class Digest(Protocol):
    """A protocol for hash-like objects."""

    def update(self, __data: bytes) -> Any:
        """Update the hash object with the bytes-like object."""
        ...

    def digest(self) -> bytes:
        """Return the digest of the data passed to the update() method so far."""
        ...


class HashAlgorithm(str, Enum):
    """
    An enumeration of supported hash algorithms.

    Values are the canonical lowercase names. Members sort by that name,
    which is also the order used for iteration and serialization.
    """

    MD5 = "md5"
    SHA1 = "sha1"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, name: object) -> HashAlgorithm:
        """Return the algorithm with the given canonical name."""
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            raise ParseHashAlgorithmError(name) from None

    @property
    def digest_size(self) -> int:
        """Length of the digest produced by the algorithm, in bytes."""
        return hashlib.new(self.value).digest_size

    def new_digest(self) -> Digest:
        """Return a fresh digest object for the algorithm."""
        return hashlib.new(self.value)


class HashValue:
    """An immutable hash value produced by a hash algorithm."""

    __slots__ = ("_value",)

    def __init__(self, value: bytes) -> None:
        object.__setattr__(self, "_value", bytes(value))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("HashValue is immutable")

    @classmethod
    def from_hex(cls, text: str) -> HashValue:
        """Parse a hex string (any case) into a hash value."""
        if not isinstance(text, str):
            raise ParseHashValueError(text)
        value = hex_to_bytes(text)
        if value is None:
            raise ParseHashValueError(text)
        return cls(value)

    @property
    def value(self) -> bytes:
        return self._value

    def hex(self) -> str:
        return bytes_to_hex(self._value)

    def __bytes__(self) -> bytes:
        return self._value

    def __str__(self) -> str:
        return self.hex()

    def __repr__(self) -> str:
        return f"HashValue('{self.hex()}')"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HashValue):
            return self._value == other._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    def __reduce__(self) -> tuple[type[HashValue], tuple[bytes]]:
        # Copying and pickling go through the constructor; attributes are read-only.
        return (HashValue, (self._value,))

    @classmethod
    def _validate(cls, value: Any) -> HashValue:
        if isinstance(value, HashValue):
            return value
        return cls.from_hex(value)

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.hex(), info_arg=False, return_schema=core_schema.str_schema()
            ),
        )


class _ResettableDigest:
    """Running digest state for one algorithm that can be finalized and restarted."""

    def __init__(self, factory: Callable[[], Digest]) -> None:
        self._factory = factory
        self._digest = factory()

    def consume(self, data: bytes) -> None:
        self._digest.update(data)

    def finalize_reset(self) -> bytes:
        result = self._digest.digest()
        self._digest = self._factory()
        return result

    def reset(self) -> None:
        self._digest = self._factory()


class Hasher:
    """
    Computes several hashes of a stream in a single pass.

    The same instance is meant to be reused for many files. Every digest
    state is restarted after each computation, including a computation that
    failed half-way, so a read error never leaks partial input into the
    hashes of the next stream.
    """

    def __init__(self, algorithms: Iterable[HashAlgorithm], chunk_size: int = CHUNK_SIZE) -> None:
        ordered = sorted(set(algorithms))
        if not ordered:
            raise ValueError("A hasher requires at least one hash algorithm.")
        if chunk_size <= 0:
            raise ValueError(f"Chunk size must be positive, got {chunk_size}.")
        self.chunk_size = chunk_size
        self._digests: list[tuple[HashAlgorithm, _ResettableDigest]] = [
            (algorithm, _ResettableDigest(algorithm.new_digest)) for algorithm in ordered
        ]

    @property
    def algorithms(self) -> list[HashAlgorithm]:
        return [algorithm for algorithm, _ in self._digests]

    def _update(self, data: bytes) -> None:
        for _, digest in self._digests:
            digest.consume(data)

    def _finalize_reset(self) -> list[tuple[HashAlgorithm, HashValue]]:
        return [(algorithm, HashValue(digest.finalize_reset())) for algorithm, digest in self._digests]

    def reset(self) -> None:
        """Discard any data fed to the digests since the last computation."""
        for _, digest in self._digests:
            digest.reset()

    def compute(self, stream: BinaryIO) -> list[tuple[HashAlgorithm, HashValue]]:
        """
        Calculate all configured hashes of a binary stream.

        The stream is read to the end in chunks of `chunk_size` bytes.

        Returns:
            (algorithm, hash value) pairs in canonical algorithm order.

        Raises:
            OSError: If reading the stream fails. The digests are reset
                before the error propagates.

        """
        try:
            while True:
                chunk = stream.read(self.chunk_size)
                if not chunk:
                    break  # EOF
                self._update(chunk)
        except BaseException:
            self.reset()
            raise
        return self._finalize_reset()
