"""Tests for the thin DynamoDB adapter against a mocked table."""

import pytest
from boto3.dynamodb.conditions import Attr
from botocore.exceptions import ClientError

from conftest import AWS_REGION, RECORDS_TABLE_NAME
from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter
from core.models.errors import ConfigurationError

KEY = {"record_type": "support.records.user", "record_id": "1"}


@pytest.fixture
def adapter(records_table) -> DynamoDBAdapter:
    return DynamoDBAdapter(table_name=RECORDS_TABLE_NAME, region_name=AWS_REGION)


class TestDynamoDBAdapter:
    def test_requires_table_name(self) -> None:
        with pytest.raises(ConfigurationError):
            DynamoDBAdapter(table_name="")

    def test_put_and_get(self, adapter: DynamoDBAdapter) -> None:
        adapter.put_item(item={**KEY, "version": 1})

        assert adapter.get_item(key=KEY)["Item"]["version"] == 1

    def test_get_missing(self, adapter: DynamoDBAdapter) -> None:
        assert "Item" not in adapter.get_item(key=KEY)

    def test_condition_expression_objects(self, adapter: DynamoDBAdapter) -> None:
        adapter.put_item(item={**KEY, "version": 1})

        adapter.put_item(item={**KEY, "version": 2}, condition_expression=Attr("version").eq(1))

        with pytest.raises(ClientError) as exc:
            adapter.put_item(item={**KEY, "version": 3}, condition_expression=Attr("version").eq(1))

        assert exc.value.response["Error"]["Code"] == "ConditionalCheckFailedException"
        assert adapter.get_item(key=KEY)["Item"]["version"] == 2
