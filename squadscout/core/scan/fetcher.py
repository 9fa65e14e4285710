from __future__ import annotations

import logging
from typing import Any

import requests

from core.scan.errors import MalformedRecord, ParseFailure, TransportFailure
from core.scan.filters import should_keep
from core.scan.models import FilterCriteria, ScanBatch, ServerRecord
from core.scan.normalizer import normalize_record
from i18n.i18n import tr


class ServerListFetcher:
    LISTING_URL = "https://api.battlemetrics.com/servers"
    LISTING_PARAMS = {
        "filter[game]": "squad",
        "filter[status]": "online",
        "page[size]": "100",
        "sort": "-players",
    }
    MAX_PAGES = 3
    USER_AGENT = "SquadScout/1.0"

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout_s: float = 15.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._session = session or requests.Session()
        self._timeout_s = timeout_s
        self._logger = logger or logging.getLogger("squadscout.scan")

    def run_scan(self, criteria: FilterCriteria, continuation: str | None = None) -> ScanBatch:
        is_continuation = bool(continuation)
        pages_to_fetch = 1 if is_continuation else self.MAX_PAGES

        records: list[ServerRecord] = []
        warnings: list[str] = []
        next_url = ""
        pages_fetched = 0

        current_url = continuation if continuation else self.LISTING_URL
        params = None if is_continuation else self._initial_params(criteria)

        for _ in range(pages_to_fetch):
            try:
                payload = self._fetch_page(current_url, params)
                entries, next_url = self._parse_page(payload)
            except TransportFailure as error:
                self._logger.warning("Listing request failed: %s", error)
                warnings.append(tr("scan.warning.transport", error=error))
                next_url = ""
                break
            except ParseFailure as error:
                self._logger.warning("Listing page could not be parsed: %s", error)
                warnings.append(tr("scan.warning.parse", error=error))
                next_url = ""
                break

            pages_fetched += 1
            kept = self._collect(entries, criteria)
            records.extend(kept)
            self._logger.info(
                "Page %s fetched: entries=%s kept=%s more=%s",
                pages_fetched,
                len(entries),
                len(kept),
                next_url != "",
            )

            if next_url == "":
                break

            # Continuation links already encode the original query.
            current_url, params = next_url, None

        self._logger.info("Scan run finished: pages=%s servers=%s", pages_fetched, len(records))
        return ScanBatch(
            records=tuple(records),
            next_url=next_url,
            pages_fetched=pages_fetched,
            warnings=tuple(warnings),
        )

    def _initial_params(self, criteria: FilterCriteria) -> dict[str, str]:
        params = dict(self.LISTING_PARAMS)
        params["filter[players][min]"] = str(criteria.min_players)
        params["filter[players][max]"] = str(criteria.max_players)
        return params

    def _fetch_page(self, url: str, params: dict[str, str] | None) -> Any:
        try:
            response = self._session.get(
                url,
                params=params,
                timeout=self._timeout_s,
                headers={"User-Agent": self.USER_AGENT, "Accept": "application/json"},
            )
            response.raise_for_status()
        except requests.RequestException as error:
            raise TransportFailure(str(error)) from error

        try:
            return response.json()
        except ValueError as error:
            raise ParseFailure(f"invalid JSON: {error}") from error

    def _parse_page(self, payload: Any) -> tuple[list[Any], str]:
        if not isinstance(payload, dict):
            raise ParseFailure("listing document is not an object")

        entries = payload.get("data")
        if not isinstance(entries, list):
            raise ParseFailure("listing document has no data list")

        links = payload.get("links")
        next_url = ""
        if isinstance(links, dict):
            candidate = links.get("next")
            if isinstance(candidate, str):
                next_url = candidate.strip()

        return entries, next_url

    def _collect(self, entries: list[Any], criteria: FilterCriteria) -> list[ServerRecord]:
        kept: list[ServerRecord] = []
        for entry in entries:
            try:
                record = normalize_record(entry)
            except MalformedRecord as error:
                self._logger.debug("Skipping malformed listing entry: %s", error)
                continue

            if should_keep(record, criteria):
                kept.append(record)
        return kept
