"""Create the Totem DynamoDB table and optionally seed locations.

Usage:
    python scripts/create_tables.py --endpoint-url http://localhost:4566
    python scripts/create_tables.py --table-suffix -dev --location "Main Street:01234"
"""

from __future__ import annotations

import argparse
from typing import Any

import boto3

from totem.core.protocols import ILocationStore
from totem.models.employee import Location
from totem.persistence.dynamodb_backend import DynamoDBStore

DEFAULT_TABLE = "totem-records"


def create_table(ddb: Any, table_name: str = DEFAULT_TABLE, suffix: str = "") -> bool:
    """Create the single PK/SK table. Returns False if it already exists."""
    client = ddb.meta.client
    full_name = f"{table_name}{suffix}"
    if full_name in client.list_tables().get("TableNames", []):
        print(f"  Table {full_name} already exists, skipping")
        return False
    client.create_table(
        TableName=full_name,
        KeySchema=[
            {"AttributeName": "PK", "KeyType": "HASH"},
            {"AttributeName": "SK", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "PK", "AttributeType": "S"},
            {"AttributeName": "SK", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    print(f"  Created table {full_name}")
    return True


def parse_location_arg(value: str) -> tuple[str, str]:
    """``"Name:Number"`` -> ``("Name", "Number")``."""
    name, sep, number = value.rpartition(":")
    if not sep or not name.strip() or not number.strip():
        raise argparse.ArgumentTypeError(f"expected NAME:NUMBER, got {value!r}")
    return name.strip(), number.strip()


def seed_locations(store: ILocationStore, locations: list[tuple[str, str]]) -> list[Location]:
    """Create locations whose number is not already present."""
    known = {loc.number for loc in store.list_locations()}
    created: list[Location] = []
    for name, number in locations:
        if number in known:
            print(f"  Location {number} already exists, skipping")
            continue
        created.append(store.create_location(name, number))
        known.add(number)
        print(f"  Created location {name} ({number})")
    return created


def main() -> None:
    parser = argparse.ArgumentParser(description="Create DynamoDB table for Totem")
    parser.add_argument("--endpoint-url", default=None, help="DynamoDB endpoint (e.g. http://localhost:4566)")
    parser.add_argument("--table-name", default=DEFAULT_TABLE, help="Base table name")
    parser.add_argument("--table-suffix", default="", help="Table name suffix (e.g. -dev)")
    parser.add_argument("--region", default="us-east-1", help="AWS region")
    parser.add_argument("--location", action="append", type=parse_location_arg, default=[],
                        help="Seed a location as NAME:NUMBER (repeatable)")
    args = parser.parse_args()

    kwargs: dict[str, Any] = {"region_name": args.region}
    if args.endpoint_url:
        kwargs["endpoint_url"] = args.endpoint_url

    ddb = boto3.resource("dynamodb", **kwargs)

    print("Creating table...")
    create_table(ddb, args.table_name, suffix=args.table_suffix)

    if args.location:
        print("Seeding locations...")
        store = DynamoDBStore(
            table_name=args.table_name,
            table_suffix=args.table_suffix,
            region=args.region,
            endpoint_url=args.endpoint_url,
        )
        seed_locations(store, args.location)

    print("Done!")


if __name__ == "__main__":
    main()
