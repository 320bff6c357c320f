"""
DevCamper Backend — Database Seeder
=====================================

What:  One-shot CLI that bulk-loads or bulk-clears bootcamp fixture data.
Why:   Fills a development database without going through the HTTP API.
How:   Reads config, opens its own MongoConnector and runs a single
       insert_many or delete_many against the bootcamps collection.

Usage:
    devcamper-seed -i                 # import devcamper/_data/bootcamps.json
    devcamper-seed -i --file x.json   # import another fixture
    devcamper-seed -d                 # delete every bootcamp

Both operations are unconditional: no dry run, no partial-failure recovery.
A failure (including one halfway through an ordered insert) is logged and
the process exits with status 1.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from bson import ObjectId
from pymongo.errors import PyMongoError
from rich.console import Console

from devcamper.config import settings
from devcamper.database import BOOTCAMP_COLLECTION, MongoConnector
from devcamper.exceptions import DevCamperError, SeedDataError
from devcamper.middleware.logging import setup_logging

logger = logging.getLogger(__name__)
console = Console()

IMPORT = "import"
DELETE = "delete"


def load_fixture(path: Path) -> List[Dict[str, Any]]:
    """
    Read a JSON array of bootcamp documents.

    An `_id` given as a 24-character hex string becomes an ObjectId, so
    fixture ids match the ids the server would generate.

    Raises:
        SeedDataError: missing file, invalid JSON, or not an array of objects.
    """
    try:
        with open(path, encoding="utf-8") as f:
            records = json.load(f)
    except FileNotFoundError:
        raise SeedDataError(f"Fixture file not found: {path}", context={"path": str(path)})
    except json.JSONDecodeError as e:
        raise SeedDataError(f"Fixture file is not valid JSON: {e}", context={"path": str(path)})

    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise SeedDataError(
            "Fixture file must contain a JSON array of objects",
            context={"path": str(path)},
        )

    for record in records:
        _id = record.get("_id")
        if isinstance(_id, str) and ObjectId.is_valid(_id):
            record["_id"] = ObjectId(_id)
    return records


async def import_data(collection, records: List[Dict[str, Any]]) -> int:
    """Bulk-insert records in order; returns how many were inserted."""
    if not records:
        return 0
    result = await collection.insert_many(records, ordered=True)
    return len(result.inserted_ids)


async def delete_data(collection) -> int:
    """Delete every document; returns how many were removed."""
    result = await collection.delete_many({})
    return result.deleted_count


async def seed(action: str, collection, fixture_path: Optional[Path] = None) -> int:
    """Run one seeder action against a collection; returns the document count affected."""
    if action == IMPORT:
        records = load_fixture(fixture_path or settings.seed_file_path)
        count = await import_data(collection, records)
        logger.info("Inserted %d bootcamps", count)
        console.print("Data imported...", style="bold green reverse")
        return count

    count = await delete_data(collection)
    logger.info("Deleted %d bootcamps", count)
    console.print("Data deleted...", style="bold red reverse")
    return count


async def run(action: str, fixture_path: Optional[Path] = None) -> int:
    """Connect, seed, disconnect. Returns the process exit code."""
    connector: Optional[MongoConnector] = None
    try:
        # A malformed MONGO_URI fails here, before any network call
        connector = MongoConnector.from_settings(settings)
        await connector.connect()
        await seed(action, connector.collection(BOOTCAMP_COLLECTION), fixture_path)
        return 0
    except (DevCamperError, PyMongoError) as e:
        logger.error("Seeding failed: %s", str(e), exc_info=True)
        return 1
    finally:
        if connector is not None:
            await connector.close()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="devcamper-seed",
        description="Import or delete bootcamp fixture data.",
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument(
        "-i", "--import", dest="action", action="store_const", const=IMPORT,
        help="import the fixture into the bootcamps collection",
    )
    action.add_argument(
        "-d", "--delete", dest="action", action="store_const", const=DELETE,
        help="delete every bootcamp",
    )
    parser.add_argument(
        "--file", type=Path, default=None,
        help="fixture path (default: SEED_FILE or the packaged bootcamps.json)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()
    return asyncio.run(run(args.action, args.file))


if __name__ == "__main__":
    sys.exit(main())
