"""Data models for citation generation workflows."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class PersonName:
    """An author split into family and given parts."""

    family: str
    given: str

    def to_csl(self) -> Dict[str, str]:
        return {"family": self.family, "given": self.given}


@dataclass(frozen=True)
class LiteralName:
    """An author kept verbatim (organizations, single words, initials)."""

    literal: str

    def to_csl(self) -> Dict[str, str]:
        return {"literal": self.literal}


NameEntry = Union[PersonName, LiteralName]


@dataclass(frozen=True)
class VolumeIssue:
    volume: Optional[str] = None
    issue: Optional[str] = None


@dataclass(frozen=True)
class CitationItem:
    """Represents one source as a CSL item."""

    id: str
    type: str
    title: Optional[str] = None
    author: Tuple[NameEntry, ...] = ()
    issued: Optional[int] = None
    container_title: Optional[str] = None
    volume: Optional[str] = None
    issue: Optional[str] = None
    page: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None
    publisher: Optional[str] = None

    def to_csl(self) -> Dict[str, Any]:
        """Return the CSL-JSON representation consumed by the rendering engine."""
        data: Dict[str, Any] = {"id": self.id, "type": self.type}
        if self.title:
            data["title"] = self.title
        if self.author:
            data["author"] = [name.to_csl() for name in self.author]
        if self.issued is not None:
            data["issued"] = {"date-parts": [[self.issued]]}
        optional = {
            "container-title": self.container_title,
            "volume": self.volume,
            "issue": self.issue,
            "page": self.page,
            "DOI": self.doi,
            "URL": self.url,
            "publisher": self.publisher,
        }
        data.update({key: value for key, value in optional.items() if value})
        return data


@dataclass(frozen=True)
class ValidationIssue:
    """Represents a validation finding."""

    code: str
    message: str
    context: Optional[str] = None


@dataclass(frozen=True)
class ValidationOutcome:
    """Partition of built items into usable items and rejection reasons."""

    valid: Tuple[CitationItem, ...]
    issues: Tuple[ValidationIssue, ...] = ()

    @property
    def errors(self) -> List[str]:
        return [issue.message for issue in self.issues]

    @property
    def rejected_ids(self) -> List[str]:
        seen: List[str] = []
        for issue in self.issues:
            if issue.context and issue.context not in seen:
                seen.append(issue.context)
        return seen


@dataclass(frozen=True)
class RenderOutcome:
    """Plain-text citations in request order plus per-citation failures."""

    citations: Tuple[str, ...]
    errors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class GenerationResult:
    """Terminal aggregate of a generation run."""

    success: bool
    citations: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    rows: Tuple[Dict[str, str], ...] = ()
    status: str = ""
    debug_log: Tuple[str, ...] = ()
    items: Tuple[CitationItem, ...] = field(default=(), repr=False)

    @classmethod
    def failure(
        cls,
        message: str,
        errors: Tuple[str, ...] = (),
        debug_log: Tuple[str, ...] = (),
    ) -> "GenerationResult":
        """Build the terminal result of a run that aborted with ``message``."""
        return cls(
            success=False,
            errors=tuple(errors) + (message,),
            status=f"Error: {message}",
            debug_log=debug_log,
        )
