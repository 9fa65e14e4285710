from __future__ import annotations

import pytest

from core.scan.errors import MalformedRecord
from core.scan.normalizer import normalize_record, truncate_name


def _entry(**attributes: object) -> dict[str, object]:
    base: dict[str, object] = {
        "name": "Normal Server",
        "players": 42,
        "maxPlayers": 100,
        "details": {"map": "Narva", "gameMode": "RAAS"},
        "country": "DE",
    }
    base.update(attributes)
    return {"type": "server", "attributes": base}


def test_complete_entry_is_normalized() -> None:
    record = normalize_record(_entry())

    assert record.name == "Normal Server"
    assert record.players == 42
    assert record.max_players == 100
    assert record.map_name == "Narva"
    assert record.mode_name == "RAAS"
    assert record.country == "DE"


def test_missing_optional_fields_use_fallbacks() -> None:
    raw = _entry(details={}, country=None)

    record = normalize_record(raw)

    assert record.map_name == "Unknown"
    assert record.mode_name == "Unknown"
    assert record.country == "??"


def test_missing_details_block_uses_fallbacks() -> None:
    raw = _entry()
    del raw["attributes"]["details"]  # type: ignore[attr-defined]

    record = normalize_record(raw)

    assert (record.map_name, record.mode_name) == ("Unknown", "Unknown")


def test_capacity_below_player_count_is_accepted() -> None:
    record = normalize_record(_entry(players=105, maxPlayers=100))

    assert record.players == 105
    assert record.max_players == 100


def test_missing_player_count_is_malformed() -> None:
    raw = _entry()
    del raw["attributes"]["players"]  # type: ignore[attr-defined]

    with pytest.raises(MalformedRecord):
        normalize_record(raw)


@pytest.mark.parametrize(
    "attributes",
    [
        {"name": None},
        {"name": 12},
        {"players": "42"},
        {"players": True},
        {"players": -1},
        {"maxPlayers": 99.5},
    ],
)
def test_wrong_required_field_shape_is_malformed(attributes: dict[str, object]) -> None:
    with pytest.raises(MalformedRecord):
        normalize_record(_entry(**attributes))


def test_entry_without_attributes_is_malformed() -> None:
    with pytest.raises(MalformedRecord):
        normalize_record({"type": "server"})

    with pytest.raises(MalformedRecord):
        normalize_record(["not", "an", "object"])


def test_long_name_is_truncated_with_ellipsis() -> None:
    record = normalize_record(_entry(name="A" * 49))

    assert record.name == "A" * 45 + "..."
    assert len(record.name) == 48


def test_name_at_limit_is_kept() -> None:
    assert truncate_name("B" * 48) == "B" * 48


def test_truncation_is_idempotent() -> None:
    once = truncate_name("C" * 80)

    assert truncate_name(once) == once


def test_truncation_keeps_whole_characters() -> None:
    name = "Сервер " * 10

    truncated = truncate_name(name)

    assert truncated == name[:45] + "..."
    truncated.encode("utf-8")


def test_upstream_id_is_carried_as_text() -> None:
    entry = _entry()
    entry["id"] = "4242"
    assert normalize_record(entry).server_id == "4242"

    entry["id"] = 4242
    assert normalize_record(entry).server_id == "4242"


@pytest.mark.parametrize("value", [None, True, 1.5, ["4242"]])
def test_unusable_id_is_left_empty(value: object) -> None:
    entry = _entry()
    entry["id"] = value

    assert normalize_record(entry).server_id == ""


def test_missing_id_is_not_malformed() -> None:
    assert normalize_record(_entry()).server_id == ""
