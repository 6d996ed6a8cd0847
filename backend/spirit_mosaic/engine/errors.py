"""Exception hierarchy for the mosaic engine."""

from __future__ import annotations


class MosaicError(Exception):
    """Base class for engine errors."""


class DataLoadError(MosaicError):
    """Initial data acquisition failed (missing file, unreadable CSV, ...)."""


class NoUsableRecordsError(DataLoadError):
    """Every source record was malformed."""


class UnknownModeError(MosaicError, KeyError):
    """A display or colour mode name that is not registered."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"Unknown {kind} mode: {name!r}")
        self.kind = kind
        self.name = name

    def __str__(self) -> str:
        return self.args[0]
