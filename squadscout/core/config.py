from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from core.paths import get_config_path
from core.scan.models import HOME_COUNTRY, NAME_BAN_TABLE, FilterCriteria

SELECTABLE_COUNTRIES: tuple[tuple[str, str], ...] = (
    ("RU", "Russia"),
    ("BY", "Belarus"),
    ("CN", "China"),
    ("BR", "Brazil"),
    ("AU", "Australia"),
    ("SG", "Singapore"),
    ("KZ", "Kazakhstan"),
    ("HK", "Hong Kong"),
    ("TR", "Turkey"),
    ("US", "USA"),
    ("CA", "Canada"),
)

PLAYER_LIMIT = 100


class AppConfig:
    _SUPPORTED_LANGUAGES = {"en", "uk"}
    _SUPPORTED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}

    _DEFAULTS: dict[str, Any] = {
        "language": "en",
        "log_level": "INFO",
        "min_players": 0,
        "max_players": PLAYER_LIMIT,
        "banned_countries": ["BR", "BY", "CN", "RU"],
        "filter_map": "",
        "filter_mode": "",
        "filter_name": "",
        "request_timeout_s": 15.0,
    }

    def __init__(self, config_path: Path | None = None) -> None:
        self._config_path = config_path or get_config_path()
        self._data: dict[str, Any] = {}
        self._load_or_create()

    @property
    def path(self) -> Path:
        return self._config_path

    def _load_or_create(self) -> None:
        if not self._config_path.exists():
            self._data = dict(self._DEFAULTS)
            self._data["banned_countries"] = list(self._DEFAULTS["banned_countries"])
            self.save()
            return

        try:
            content = self._config_path.read_text(encoding="utf-8")
            loaded = json.loads(content)
            if not isinstance(loaded, dict):
                loaded = {}
        except (json.JSONDecodeError, OSError):
            loaded = {}

        self._data = dict(self._DEFAULTS)
        self._data.update(loaded)

        language = str(self._data.get("language", "")).strip().lower()
        if language == "ua":
            language = "uk"
        if language not in self._SUPPORTED_LANGUAGES:
            language = self._DEFAULTS["language"]
        self._data["language"] = language

        log_level = str(self._data.get("log_level", "")).strip().upper()
        if log_level not in self._SUPPORTED_LOG_LEVELS:
            log_level = self._DEFAULTS["log_level"]
        self._data["log_level"] = log_level

        self._data["min_players"] = self._clamp_players(self._data.get("min_players"), self._DEFAULTS["min_players"])
        self._data["max_players"] = self._clamp_players(self._data.get("max_players"), self._DEFAULTS["max_players"])
        self._data["banned_countries"] = self._sanitize_countries(self._data.get("banned_countries"))

        for key in ("filter_map", "filter_mode", "filter_name"):
            value = self._data.get(key)
            self._data[key] = value if isinstance(value, str) else ""

        try:
            timeout = float(self._data.get("request_timeout_s", self._DEFAULTS["request_timeout_s"]))
        except (TypeError, ValueError):
            timeout = self._DEFAULTS["request_timeout_s"]
        self._data["request_timeout_s"] = timeout if timeout > 0 else self._DEFAULTS["request_timeout_s"]

        self.save()

    def save(self) -> None:
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        self._config_path.write_text(
            json.dumps(self._data, indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def get_language(self) -> str:
        return str(self._data.get("language", self._DEFAULTS["language"]))

    def set_language(self, language: str) -> None:
        self._data["language"] = language
        self.save()

    def get_log_level(self) -> str:
        return str(self._data.get("log_level", self._DEFAULTS["log_level"]))

    def get_request_timeout(self) -> float:
        return float(self._data.get("request_timeout_s", self._DEFAULTS["request_timeout_s"]))

    def get_player_range(self) -> tuple[int, int]:
        return int(self._data["min_players"]), int(self._data["max_players"])

    def set_player_range(self, min_players: int, max_players: int) -> None:
        self._data["min_players"] = self._clamp_players(min_players, self._DEFAULTS["min_players"])
        self._data["max_players"] = self._clamp_players(max_players, self._DEFAULTS["max_players"])
        self.save()

    def get_banned_countries(self) -> set[str]:
        return set(self._data.get("banned_countries", []))

    def set_banned_countries(self, countries: set[str] | list[str]) -> None:
        self._data["banned_countries"] = self._sanitize_countries(list(countries))
        self.save()

    def get_text_filters(self) -> dict[str, str]:
        return {
            "map": str(self._data.get("filter_map", "")),
            "mode": str(self._data.get("filter_mode", "")),
            "name": str(self._data.get("filter_name", "")),
        }

    def set_text_filters(self, map_filter: str, mode_filter: str, name_filter: str) -> None:
        self._data["filter_map"] = map_filter.strip()
        self._data["filter_mode"] = mode_filter.strip()
        self._data["filter_name"] = name_filter.strip()
        self.save()

    def filter_criteria(self) -> FilterCriteria:
        min_players, max_players = self.get_player_range()
        filters = self.get_text_filters()
        return FilterCriteria(
            min_players=min_players,
            max_players=max_players,
            banned_countries=frozenset(self.get_banned_countries()),
            name_bans=dict(NAME_BAN_TABLE),
            map_filter=filters["map"],
            mode_filter=filters["mode"],
            name_filter=filters["name"],
            home_country=HOME_COUNTRY,
        )

    def _clamp_players(self, value: Any, default: int) -> int:
        if isinstance(value, bool):
            return default
        try:
            number = int(value)
        except (TypeError, ValueError):
            return default
        return max(0, min(PLAYER_LIMIT, number))

    def _sanitize_countries(self, raw: Any) -> list[str]:
        if not isinstance(raw, list):
            return list(self._DEFAULTS["banned_countries"])

        known = {code for code, _name in SELECTABLE_COUNTRIES}
        result = {str(item).strip().upper() for item in raw}
        return sorted(code for code in result if code in known)
