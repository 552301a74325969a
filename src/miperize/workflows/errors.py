"""Exception hierarchy for the miperize workflows."""

from __future__ import annotations

from typing import Optional

__all__ = [
    "MiperizeError",
    "ConstructionError",
    "ConfigError",
    "MarkupParseError",
    "ProbeFailure",
]


class MiperizeError(Exception):
    """Base class for every error raised by miperize."""


class ConstructionError(MiperizeError, TypeError):
    """Raised synchronously when a transform call is missing its callback."""


class ConfigError(MiperizeError, TypeError):
    """Raised when the engine options are not a usable mapping."""


class MarkupParseError(MiperizeError, ValueError):
    """The HTML parser rejected the input; fatal to the whole call."""

    def __init__(self, message: str, call_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.call_id = call_id


class ProbeFailure(MiperizeError):
    """Transport, timeout or decode failure while sizing a remote image.

    Only used inside the prober; it is always converted into a failed probe
    record and never reaches the caller of a transform.
    """

    def __init__(self, reason: str, url: str) -> None:
        super().__init__(f"{reason} ({url})")
        self.reason = reason
        self.url = url
