from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

HOME_COUNTRY = "UA"

NAME_BAN_TABLE: dict[str, tuple[str, ...]] = {
    "RU": ("RUSSIA", "MOSCOW", "SPB", "USSR", "ZOV", "WAGNER", "[RU]"),
    "CN": ("CHINESE", "ASIA", "[CN]", "QQ", "DOUYU"),
}


class ScanState(Enum):
    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True, slots=True)
class ServerRecord:
    name: str
    players: int
    max_players: int
    map_name: str
    mode_name: str
    country: str
    server_id: str = ""

    @property
    def is_nearly_full(self) -> bool:
        return self.players >= self.max_players - 2


@dataclass(frozen=True, slots=True)
class FilterCriteria:
    min_players: int = 0
    max_players: int = 100
    banned_countries: frozenset[str] = frozenset()
    name_bans: dict[str, tuple[str, ...]] = field(default_factory=lambda: dict(NAME_BAN_TABLE))
    map_filter: str = ""
    mode_filter: str = ""
    name_filter: str = ""
    home_country: str = HOME_COUNTRY

    def banned_name_fragments(self) -> list[str]:
        fragments: list[str] = []
        for country in sorted(self.banned_countries):
            fragments.extend(self.name_bans.get(country, ()))
        return fragments


@dataclass(frozen=True, slots=True)
class ScanBatch:
    records: tuple[ServerRecord, ...]
    next_url: str = ""
    pages_fetched: int = 0
    warnings: tuple[str, ...] = ()

    @property
    def has_more(self) -> bool:
        return self.next_url != ""
