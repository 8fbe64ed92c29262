"""Abstract contract for record persistence."""

from abc import ABC, abstractmethod
from typing import TypeVar

from core.models.record import ImageRecord
from core.models.staged import StagedChange

RecordT = TypeVar("RecordT", bound=ImageRecord)


class RecordRepository(ABC):
    """Contract for storing records that own image collections.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    Collection managers stage changes; this interface applies them.
    """

    @abstractmethod
    def insert(self, *, record: RecordT) -> RecordT:
        """Persist a new record.

        Raises:
            DuplicateRecordError: If a record with the same id exists
            RecordOperationFailedError: If the write fails
        """

    @abstractmethod
    def get(self, *, record_type: type[RecordT], record_id: str) -> RecordT | None:
        """Fetch a record by id, or None if it does not exist.

        Raises:
            RecordOperationFailedError: If the read fails
        """

    @abstractmethod
    def update(self, *, staged: StagedChange) -> ImageRecord:
        """Apply a staged change and run its commit actions.

        The proposed field values are written first. Commit actions run
        only after that write succeeds, in the order they were prepared,
        and whatever they fold back into the staged change is written
        before returning.

        Returns:
            The record as persisted

        Raises:
            StaleVersionError: If the record's version moved on
            CommitFailedError: If the change was invalid or a commit action failed
            RecordOperationFailedError: If a write fails
        """
