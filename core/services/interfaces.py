"""Core service interfaces and shared result structures.

This module defines the explicit parse outcome used by internal parsing
helpers and the decoder interface implemented by the infrastructure layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from core.models import MetadataBag

T = TypeVar("T")


@dataclass(frozen=True)
class ParseFailure:
    """Reason an internal parse attempt did not produce a value."""

    reason: str


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Outcome of an internal parse attempt.

    Attributes:
        value: Parsed value when the attempt succeeded.
        failure: Failure details when it did not.
    """

    value: T | None = None
    failure: ParseFailure | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> ParseResult[T]:
        return cls(value=value)

    @classmethod
    def fail(cls, reason: str) -> ParseResult[T]:
        return cls(failure=ParseFailure(reason))


class IMetadataDecoder:
    """Interface for decoders turning an image file into a MetadataBag."""

    def decode(self, path: str) -> MetadataBag:
        """Decode the metadata of the image at `path`.

        Raises:
            OSError: When the file cannot be read or is not a supported image.
        """
        raise NotImplementedError
