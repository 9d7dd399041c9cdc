"""Explicit success-or-failure result for backup operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, cast

from prefbackup.backup.errors import BackupError

T = TypeVar("T")


@dataclass(frozen=True)
class BackupResult(Generic[T]):
    """Outcome of one export/import call: either a value or an error."""

    value: T | None = None
    error: BackupError | None = None

    @classmethod
    def success(cls, value: T) -> BackupResult[T]:
        """Construct a successful result.

        Args:
            value: Operation value.

        Returns:
            Successful result.
        """
        return cls(value=value)

    @classmethod
    def failure(cls, error: BackupError) -> BackupResult[T]:
        """Construct a failed result.

        Args:
            error: Terminal failure for the call.

        Returns:
            Failed result.
        """
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Whether the operation succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value or raise the stored error.

        Returns:
            Operation value.

        Raises:
            BackupError: Stored failure when the result is not ok.
        """
        if self.error is not None:
            raise self.error
        return cast(T, self.value)
