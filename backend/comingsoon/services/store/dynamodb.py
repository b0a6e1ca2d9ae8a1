"""DynamoDB store: one item per key, native TTL on expires_at. Imported only when STORE_BACKEND=dynamodb."""
from __future__ import annotations

import json
import time
from functools import partial

import anyio

from comingsoon.core.config import get_settings
from comingsoon.services.store.base import KeyValueStore, StoreError

settings = get_settings()


def _get_client():
    import boto3
    return boto3.client("dynamodb", region_name=settings.aws_region)


class DynamoDBStore(KeyValueStore):
    """Table schema: partition key `pk` (S); attributes `value` (S, JSON) and `expires_at` (N, epoch seconds).

    DynamoDB removes expired items lazily (up to days later), so reads also compare expires_at.
    boto3 is blocking: every call runs in a worker thread.
    """

    def __init__(self) -> None:
        if not settings.dynamodb_table:
            raise ValueError("DynamoDB store requires dynamodb_table to be set")
        self._table = settings.dynamodb_table
        self._client = _get_client()

    async def get_json(self, key: str) -> dict | None:
        try:
            resp = await anyio.to_thread.run_sync(
                partial(
                    self._client.get_item,
                    TableName=self._table,
                    Key={"pk": {"S": key}},
                    ConsistentRead=True,
                )
            )
        except Exception as e:
            raise StoreError(f"get_item failed for {key}") from e
        item = resp.get("Item")
        if not item:
            return None
        expires_at = item.get("expires_at", {}).get("N")
        if expires_at is not None and int(expires_at) <= int(time.time()):
            return None
        try:
            return json.loads(item["value"]["S"])
        except (KeyError, ValueError) as e:
            raise StoreError(f"Malformed item for {key}") from e

    async def put_json(self, key: str, value: dict, ttl_seconds: int | None = None) -> None:
        item = {"pk": {"S": key}, "value": {"S": json.dumps(value)}}
        if ttl_seconds:
            item["expires_at"] = {"N": str(int(time.time()) + int(ttl_seconds))}
        try:
            await anyio.to_thread.run_sync(
                partial(self._client.put_item, TableName=self._table, Item=item)
            )
        except Exception as e:
            raise StoreError(f"put_item failed for {key}") from e
