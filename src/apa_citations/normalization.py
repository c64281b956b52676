"""Column alias resolution and field-level normalization helpers."""
from __future__ import annotations

import re
from typing import Dict, Mapping, Optional, Tuple

from .models import VolumeIssue

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "title": ("Title",),
    "author": ("Author(s)", "Authors", "Author"),
    "year": ("Year", "Publication Year", "Date"),
    "container_title": ("Journal", "Publication", "Container Title", "Source"),
    "volume": ("Volume", "Volume-Issue"),
    "issue": ("Issue",),
    "page": ("Pages", "Page Range", "Page"),
    "identifier": ("DOI", "DOI/URL", "DOI or URL"),
    "url": ("URL",),
    "publisher": ("Publisher",),
    "source_type": ("Source Type",),
}

VOLUME_ISSUE_PATTERNS = (
    re.compile(r"(\d+)\s*\(\s*(\d+)\s*\)", re.ASCII),
    re.compile(r"vol\.?\s*(\d+)\s*no\.?\s*(\d+)", re.ASCII | re.IGNORECASE),
    re.compile(r"v\.?\s*(\d+)\s*n\.?\s*(\d+)", re.ASCII | re.IGNORECASE),
    re.compile(r"(\d+)\s*[-–—]\s*(\d+)", re.ASCII),
)
_DIGITS_ONLY = re.compile(r"^\d+$", re.ASCII)
_LEADING_INT = re.compile(r"^[+-]?\d+", re.ASCII)
_DOI_RESOLVER = re.compile(r"^https?://(dx\.)?doi\.org/")


def _clean(value: object) -> Optional[str]:
    if not isinstance(value, str):
        return None
    text = value.strip()
    return text or None


def resolve_field(
    row: Mapping[str, object], field: str, allow_blank: bool = False
) -> Optional[str]:
    """Return the first non-empty value among the aliases of ``field``.

    Headers are compared after trimming; each alias is tried with its exact
    spelling first and then case-insensitively. With ``allow_blank`` a
    whitespace-only cell is returned as-is when nothing better is found.
    """
    exact: Dict[str, object] = {}
    folded: Dict[str, object] = {}
    for key, value in row.items():
        name = str(key).strip()
        exact.setdefault(name, value)
        if _clean(value):
            folded.setdefault(name.lower(), value)

    blank: Optional[str] = None
    for alias in FIELD_ALIASES[field]:
        for candidate in (exact.get(alias), folded.get(alias.lower())):
            text = _clean(candidate)
            if text:
                return text
            if allow_blank and blank is None and isinstance(candidate, str) and candidate:
                blank = candidate
    return blank


def parse_volume_issue(cell: object) -> VolumeIssue:
    """Extract volume and issue from encodings like ``12(3)`` or ``vol. 5 no. 2``."""
    if not cell or not isinstance(cell, str):
        return VolumeIssue()
    text = cell.strip()
    for pattern in VOLUME_ISSUE_PATTERNS:
        match = pattern.search(text)
        if match:
            return VolumeIssue(volume=match.group(1), issue=match.group(2))
    if _DIGITS_ONLY.match(text):
        return VolumeIssue(volume=text)
    return VolumeIssue()


def parse_year(value: Optional[str]) -> Optional[int]:
    """Return the leading integer of ``value`` (``"2020-05-01"`` -> 2020)."""
    if not value:
        return None
    match = _LEADING_INT.match(value.strip())
    if not match:
        return None
    return int(match.group(0))


def split_identifier(value: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Classify a DOI-or-URL cell, returning ``(doi, url)``."""
    if not value:
        return None, None
    text = value.strip()
    if text.startswith("http"):
        if "doi.org/" in text:
            return _DOI_RESOLVER.sub("", text), None
        return None, text
    if text.startswith("10."):
        return text, None
    return None, None
