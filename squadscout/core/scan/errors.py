from __future__ import annotations


class ScanError(Exception):
    pass


class MalformedRecord(ScanError):
    """A listing entry lacks a required field or has one of the wrong type."""


class ParseFailure(ScanError):
    """A page body is not a listing document."""


class TransportFailure(ScanError):
    """A page could not be retrieved (connection error or non-success status)."""
