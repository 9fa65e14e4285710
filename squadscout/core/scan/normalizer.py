from __future__ import annotations

from typing import Any

from core.scan.errors import MalformedRecord
from core.scan.models import ServerRecord

MAX_NAME_LENGTH = 48
ELLIPSIS = "..."
UNKNOWN_MAP = "Unknown"
UNKNOWN_MODE = "Unknown"
UNKNOWN_COUNTRY = "??"


def truncate_name(name: str) -> str:
    if len(name) <= MAX_NAME_LENGTH:
        return name
    return name[: MAX_NAME_LENGTH - len(ELLIPSIS)] + ELLIPSIS


def normalize_record(raw: Any) -> ServerRecord:
    if not isinstance(raw, dict):
        raise MalformedRecord("record is not an object")

    attributes = raw.get("attributes")
    if not isinstance(attributes, dict):
        raise MalformedRecord("record has no attributes")

    name = attributes.get("name")
    if not isinstance(name, str):
        raise MalformedRecord("name missing or not a string")

    players = _required_count(attributes, "players")
    max_players = _required_count(attributes, "maxPlayers")

    details = attributes.get("details")
    if not isinstance(details, dict):
        details = {}

    return ServerRecord(
        name=truncate_name(name),
        players=players,
        max_players=max_players,
        map_name=_optional_text(details.get("map"), UNKNOWN_MAP),
        mode_name=_optional_text(details.get("gameMode"), UNKNOWN_MODE),
        country=_optional_text(attributes.get("country"), UNKNOWN_COUNTRY),
        server_id=_optional_id(raw.get("id")),
    )


def _required_count(attributes: dict[str, Any], key: str) -> int:
    value = attributes.get(key)
    # bool is an int subclass
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedRecord(f"{key} missing or not an integer")
    if value < 0:
        raise MalformedRecord(f"{key} is negative")
    return value


def _optional_text(value: Any, fallback: str) -> str:
    if not isinstance(value, str) or value.strip() == "":
        return fallback
    return value


def _optional_id(value: Any) -> str:
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, str):
        return value.strip()
    return ""
