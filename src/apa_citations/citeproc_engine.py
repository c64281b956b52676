"""citeproc-py backed implementation of the citation engine interface."""
from __future__ import annotations

from io import BytesIO
from types import SimpleNamespace
from typing import Any, Dict, List, Sequence, Tuple
from xml.etree import ElementTree

from .errors import EngineError, EngineUnavailableError
from .rendering import CitationEngine, LookupContext

DEFAULT_LOCALE = "en-US"
_XML_LANG = "{http://www.w3.org/XML/1998/namespace}lang"


def _load_citeproc() -> SimpleNamespace:
    try:
        from citeproc import (
            Citation,
            CitationItem,
            CitationStylesBibliography,
            CitationStylesStyle,
            formatter,
        )
        from citeproc.source.json import CiteProcJSON
    except ImportError as exc:  # pragma: no cover - dependency error path
        raise EngineUnavailableError(
            "Citation rendering requires the 'citeproc-py' package. Install it to render citations.",
            stage="init",
        ) from exc
    return SimpleNamespace(
        Citation=Citation,
        CitationItem=CitationItem,
        CitationStylesBibliography=CitationStylesBibliography,
        CitationStylesStyle=CitationStylesStyle,
        CiteProcJSON=CiteProcJSON,
        html_formatter=formatter.html,
    )


def locale_code(locale_document: str) -> str:
    """Return the language tag declared by a CSL locale document."""
    if not locale_document or not locale_document.strip():
        return DEFAULT_LOCALE
    try:
        root = ElementTree.fromstring(locale_document.encode("utf-8"))
    except ElementTree.ParseError as exc:
        raise EngineError(f"Invalid CSL locale document: {exc}", stage="init") from exc
    if not root.tag.endswith("locale"):
        raise EngineError("Invalid CSL locale document: missing <locale> root", stage="init")
    return root.get(_XML_LANG) or DEFAULT_LOCALE


class CiteprocEngine(CitationEngine):
    """Renders bibliographies with citeproc-py in request order."""

    def __init__(self, context: LookupContext, style: str):
        self._citeproc = _load_citeproc()
        self.context = context
        self.locale = locale_code(context.retrieve_locale())
        self.style = self._citeproc.CitationStylesStyle(
            BytesIO(style.encode("utf-8")), locale=self.locale, validate=False
        )
        self._bibliography = None

    @staticmethod
    def check_available() -> None:
        _load_citeproc()

    def update_items(self, item_ids: Sequence[str]) -> None:
        records: List[Dict[str, Any]] = []
        for item_id in item_ids:
            record = self.context.retrieve_item(item_id)
            if record is None:
                raise KeyError(f"unknown item id {item_id}")
            records.append(record)
        bibliography = self._citeproc.CitationStylesBibliography(
            self.style, self._citeproc.CiteProcJSON(records), self._citeproc.html_formatter
        )
        # Registration order is kept; sorting would break the positional join.
        for item_id in item_ids:
            bibliography.register(
                self._citeproc.Citation([self._citeproc.CitationItem(item_id)])
            )
        self._bibliography = bibliography

    def make_bibliography(self) -> Tuple[Dict[str, Any], List[str]]:
        if self._bibliography is None:
            raise RuntimeError("update_items must be called before make_bibliography")
        entries = [str(entry) for entry in self._bibliography.bibliography()]
        return {"entry_count": len(entries), "locale": self.locale}, entries
