"""Postman Collection v2.1 parser.

Decodes an exported collection into a plain JSON tree and checks that it
was exported with the supported schema. Nothing else is validated up
front; the ``expect_*`` helpers assert the few shapes the pipeline reads
at the point where it reads them.
"""

import json
from typing import Any

from pm2md.errors import CollectionDecodeError, CollectionShapeError, SchemaMismatchError

SCHEMA_V2_1 = "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"


def parse_collection(data: bytes | str) -> dict[str, Any]:
    """Parse exported collection JSON and verify its schema marker."""
    try:
        collection = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CollectionDecodeError(f"Invalid collection JSON: {e}") from e
    except RecursionError as e:
        raise CollectionDecodeError("Invalid collection JSON: nested too deeply") from e
    if not isinstance(collection, dict):
        raise CollectionDecodeError(
            f"Invalid collection JSON: expected an object, got {_type_name(collection)}"
        )

    info = collection.get("info")
    schema = info.get("schema") if isinstance(info, dict) else None
    if schema != SCHEMA_V2_1:
        raise SchemaMismatchError(
            "Unknown JSON schema. When exporting from Postman, export as Collection v2.1.0"
        )
    return collection


def collection_name(collection: dict[str, Any]) -> str:
    """Return ``info.name`` of a parsed collection."""
    info = expect_mapping(collection.get("info"), "info")
    return expect_str(info.get("name"), "info.name")


def expect_mapping(value: Any, where: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise CollectionShapeError(f"Expected an object at {where}, got {_type_name(value)}")
    return value


def expect_list(value: Any, where: str) -> list[Any]:
    if not isinstance(value, list):
        raise CollectionShapeError(f"Expected a list at {where}, got {_type_name(value)}")
    return value


def expect_str(value: Any, where: str) -> str:
    if not isinstance(value, str):
        raise CollectionShapeError(f"Expected a string at {where}, got {_type_name(value)}")
    return value


def expect_number(value: Any, where: str) -> int | float:
    # bool is an int subclass but never a status code
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CollectionShapeError(f"Expected a number at {where}, got {_type_name(value)}")
    return value


def _type_name(value: Any) -> str:
    if value is None:
        return "nothing"
    return {
        dict: "an object",
        list: "a list",
        str: "a string",
        bool: "a boolean",
        int: "a number",
        float: "a number",
    }.get(type(value), type(value).__name__)
