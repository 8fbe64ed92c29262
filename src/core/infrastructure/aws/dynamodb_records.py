"""DynamoDB-backed implementation of RecordRepository."""

from decimal import Decimal
from typing import Any

from aws_lambda_powertools import Logger
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import (
    CommitFailedError,
    DuplicateRecordError,
    RecordOperationFailedError,
    StaleVersionError,
)
from core.models.record import ImageRecord, record_type_name
from core.models.staged import StagedChange
from core.repositories.record_repository import RecordRepository, RecordT

Item = dict[str, Any]

logger = Logger(UTC=True)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def from_dynamo(value: Any) -> Any:
    """Convert DynamoDB Decimals back into ints and floats."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_dynamo(inner) for key, inner in value.items()}
    if isinstance(value, list):
        return [from_dynamo(inner) for inner in value]
    return value


class DynamoDBRecords(RecordRepository):
    """DynamoDB-backed record storage with optimistic locking.

    Items are keyed by `record_type` (the lowercased dotted class name) and
    `record_id`. All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | DynamoDBAdapter) -> None:
        """Initialize with DynamoDB adapter."""
        self._db = adapter

    def insert(self, *, record: RecordT) -> RecordT:
        logger.debug("Inserting record", extra={"record_id": record.id})

        try:
            self._db.put_item(
                item=self._to_item(record),
                condition_expression=Attr("record_id").not_exists(),
            )
        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"record_id": record.id})

            if exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED:
                raise DuplicateRecordError(
                    message="This record already exists",
                    details={"record_id": record.id},
                ) from exc

            raise RecordOperationFailedError(
                message="Unable to save record at this time",
                details={"record_id": record.id},
            ) from exc

        logger.info("Record inserted", extra={"record_id": record.id})
        return record

    def get(self, *, record_type: type[RecordT], record_id: str) -> RecordT | None:
        logger.debug("Fetching record", extra={"record_id": record_id})

        try:
            response = self._db.get_item(
                key={"record_type": record_type_name(record_type), "record_id": record_id}
            )
        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"record_id": record_id})
            raise RecordOperationFailedError(
                message="Unable to retrieve record",
                details={"record_id": record_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        fields = {k: v for k, v in item.items() if k not in ("record_type", "record_id")}
        return record_type.model_validate(from_dynamo(fields))

    def update(self, *, staged: StagedChange) -> ImageRecord:
        """Write a staged change, then run and fold in its commit actions.

        The version is bumped once, by the first write. The folded write is
        conditional on that bumped version. A concurrent writer that slipped
        in between leaves the first write in place, so that case is reported
        as a commit failure carrying the proposed record.
        """
        record = staged.data

        if not staged.is_valid:
            logger.warning(
                "Refusing to write invalid staged change",
                extra={"record_id": record.id, "errors": staged.errors},
            )
            raise CommitFailedError(
                message="Unable to save record with invalid changes",
                errors=staged.errors,
            )

        expected = staged.expected_version
        version = expected + 1 if staged.lock_version else expected

        proposed = staged.apply_changes().model_copy(update={"version": version})
        proposed_item = self._to_item(proposed)
        self._write(proposed_item, expected_version=expected if staged.lock_version else None)

        for action in staged.actions:
            action(staged)

        persisted = staged.apply_changes().model_copy(update={"version": version})
        persisted_item = self._to_item(persisted)

        if persisted_item != proposed_item:
            try:
                self._write(persisted_item, expected_version=version if staged.lock_version else None)
            except StaleVersionError as exc:
                # The first write stands; only the commit results were lost.
                for field in self._changed_fields(proposed_item, persisted_item):
                    staged.add_error(field, "The record was modified before commit results were saved")

                logger.error(
                    "Record modified while commit actions ran",
                    extra={"record_id": record.id, "version": version, "errors": staged.errors},
                )
                raise CommitFailedError(
                    message="Unable to save commit results for record",
                    errors=staged.errors,
                    record=proposed,
                ) from exc

        if not staged.is_valid:
            logger.error(
                "Commit actions failed after record write",
                extra={"record_id": record.id, "errors": staged.errors},
            )
            raise CommitFailedError(
                message="Unable to complete image storage for record",
                errors=staged.errors,
                record=persisted,
            )

        logger.info("Record updated", extra={"record_id": record.id, "version": version})
        return persisted

    def _write(self, item: Item, *, expected_version: int | None) -> None:
        condition = None if expected_version is None else Attr("version").eq(expected_version)

        try:
            self._db.put_item(item=item, condition_expression=condition)
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED:
                logger.warning(
                    "Stale record version",
                    extra={"record_id": item["record_id"], "expected_version": expected_version},
                )
                raise StaleVersionError(
                    message="The record was modified by someone else",
                    details={"record_id": item["record_id"], "expected_version": expected_version},
                ) from exc

            logger.error("DynamoDB put_item failed", extra={"record_id": item["record_id"]})
            raise RecordOperationFailedError(
                message="Unable to save record at this time",
                details={"record_id": item["record_id"]},
            ) from exc

    @staticmethod
    def _changed_fields(before: Item, after: Item) -> list[str]:
        return [name for name, value in after.items() if before.get(name) != value]

    @staticmethod
    def _to_item(record: ImageRecord) -> Item:
        return {
            "record_type": record_type_name(record),
            "record_id": record.id,
            **record.model_dump(),
        }
