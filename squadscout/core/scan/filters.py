from __future__ import annotations

from core.scan.models import FilterCriteria, ServerRecord


def should_keep(record: ServerRecord, criteria: FilterCriteria) -> bool:
    if record.country != criteria.home_country:
        if record.country in criteria.banned_countries:
            return False

        # Matches against every banned country's list, not the record's own country.
        name_upper = record.name.upper()
        for fragment in criteria.banned_name_fragments():
            if fragment in name_upper:
                return False

    if not _contains(record.map_name, criteria.map_filter):
        return False
    if not _contains(record.mode_name, criteria.mode_filter):
        return False
    if not _contains(record.name, criteria.name_filter):
        return False

    return True


def _contains(value: str, needle: str) -> bool:
    normalized = needle.strip().lower()
    if normalized == "":
        return True
    return normalized in value.lower()
