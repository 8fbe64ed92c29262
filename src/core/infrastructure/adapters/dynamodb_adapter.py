"""Thin DynamoDB adapter wrapping boto3 table operations."""

from typing import Any, Protocol, cast

import boto3

from core.models.errors import ConfigurationError
from core.models.settings import Settings


class DynamoDBTable(Protocol):
    """Minimal DynamoDB Table protocol."""

    def put_item(self, *, Item: dict[str, Any], **kwargs: Any) -> dict[str, Any]: ...
    def get_item(self, *, Key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapterProtocol(Protocol):
    """Minimal DynamoDB adapter protocol (repository-facing)."""

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: Any | None = None,
    ) -> dict[str, Any]: ...

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]: ...


class DynamoDBAdapter:
    """Low-level DynamoDB operations (mechanical, no error handling).

    This adapter:
    - Wraps boto3 DynamoDB resource
    - Does NOT handle errors (lets them bubble up)
    - Domain implementations catch and translate errors
    """

    def __init__(
        self,
        *,
        table_name: str | None,
        region_name: str | None = None,
        endpoint_url: str | None = None,
    ) -> None:
        """Initialize the DynamoDB table handle."""
        if not table_name:
            raise ConfigurationError(message="A DynamoDB records table name must be configured")

        dynamodb = boto3.resource(
            "dynamodb",
            endpoint_url=endpoint_url,
            region_name=region_name,
        )

        self.table: DynamoDBTable = cast(
            DynamoDBTable,
            dynamodb.Table(table_name),
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDBAdapter":
        return cls(
            table_name=settings.records_table_name,
            region_name=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )

    def put_item(
        self,
        *,
        item: dict[str, Any],
        condition_expression: Any | None = None,
    ) -> dict[str, Any]:
        """Insert or replace an item.

        `condition_expression` may be an expression string or a
        `boto3.dynamodb.conditions` object.

        Raises boto3 exceptions - caught by domain implementation.
        """
        kwargs: dict[str, Any] = {"Item": item}

        if condition_expression is not None:
            kwargs["ConditionExpression"] = condition_expression

        return self.table.put_item(**kwargs)

    def get_item(self, *, key: dict[str, Any]) -> dict[str, Any]:
        """Retrieve item by key.

        Raises boto3 exceptions - caught by domain implementation.
        """
        return self.table.get_item(Key=key)
