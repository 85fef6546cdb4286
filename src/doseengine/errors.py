# src/doseengine/errors.py
"""Error definitions for the dose engine."""

from __future__ import annotations
from typing import Dict, Optional, Sequence


class DoseEngineError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UnsupportedUnitConversion(DoseEngineError):
    """No conversion factor exists between the two units (e.g. ml -> mg)."""

    def __init__(self, from_unit, to_unit, message: Optional[str] = None):
        super().__init__(
            message or f"Cannot convert from {from_unit!r} to {to_unit!r}.",
            details={"from_unit": from_unit, "to_unit": to_unit},
        )
        self.from_unit = from_unit
        self.to_unit = to_unit


class UnrecognizedUnit(UnsupportedUnitConversion):
    """An INVALID (unparsed) unit reached a conversion."""

    def __init__(self, from_unit, to_unit):
        super().__init__(
            from_unit, to_unit,
            message=f"Unrecognized unit in conversion {from_unit!r} -> {to_unit!r}.",
        )


class DataError(DoseEngineError):
    """
    One or more messages reported while fetching substance data.

    messages : server-reported GraphQL errors, or a single transport message
    """

    def __init__(self, messages: Sequence[str]):
        self.messages = list(messages)
        super().__init__(str(self), details={"messages": self.messages})

    @property
    def err_count(self) -> int:
        return len(self.messages)

    def __str__(self) -> str:
        body = "".join(m + "\n" for m in self.messages)
        return f"Error count: {self.err_count}\n{body}"
