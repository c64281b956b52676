"""Exceptions raised by the citation generation pipeline."""
from __future__ import annotations

from typing import Optional, Tuple


class CitationGenerationError(RuntimeError):
    """Base class for failures that abort a generation run."""


class InputMissingError(CitationGenerationError):
    """Neither CSV content nor a spreadsheet URL was supplied."""


class MalformedSheetUrlError(CitationGenerationError):
    """The spreadsheet URL has no extractable document id."""


class FetchError(CitationGenerationError):
    """A remote resource could not be downloaded."""

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message)
        self.resource = resource


class ParseError(CitationGenerationError):
    """The CSV content could not be parsed into rows."""


class MalformedStyleError(CitationGenerationError):
    """The style document is not a CSL style."""


class EngineError(CitationGenerationError):
    """The rendering engine failed at the given lifecycle stage."""

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.stage = stage


class EngineUnavailableError(EngineError):
    """The rendering engine library is not installed."""


class NoValidItemsError(CitationGenerationError):
    """Every row was rejected during validation."""

    def __init__(self, message: str, errors: Tuple[str, ...] = ()):
        super().__init__(message)
        self.errors = tuple(errors)


__all__ = [
    "CitationGenerationError",
    "InputMissingError",
    "MalformedSheetUrlError",
    "FetchError",
    "ParseError",
    "MalformedStyleError",
    "EngineError",
    "EngineUnavailableError",
    "NoValidItemsError",
]
