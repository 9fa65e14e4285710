from core.scan.coordinator import ScanCoordinator
from core.scan.errors import MalformedRecord, ParseFailure, ScanError, TransportFailure
from core.scan.fetcher import ServerListFetcher
from core.scan.models import FilterCriteria, ScanBatch, ScanState, ServerRecord

__all__ = [
    "FilterCriteria",
    "MalformedRecord",
    "ParseFailure",
    "ScanBatch",
    "ScanCoordinator",
    "ScanError",
    "ScanState",
    "ServerListFetcher",
    "ServerRecord",
    "TransportFailure",
]
