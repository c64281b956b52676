"""APA 7 citation generation from tabular source lists."""

from .app import CitationGeneratorApp
from .builder import CitationItemBuilder
from .config import GeneratorConfig
from .models import (
    CitationItem,
    GenerationResult,
    LiteralName,
    PersonName,
    ValidationIssue,
    ValidationOutcome,
)
from .rendering import CitationEngine, CitationRenderer, LookupContext
from .sources import ResourceFetcher
from .tabular import CsvCodec

__all__ = [
    "CitationGeneratorApp",
    "CitationItemBuilder",
    "GeneratorConfig",
    "CitationItem",
    "GenerationResult",
    "LiteralName",
    "PersonName",
    "ValidationIssue",
    "ValidationOutcome",
    "CitationEngine",
    "CitationRenderer",
    "LookupContext",
    "ResourceFetcher",
    "CsvCodec",
]
