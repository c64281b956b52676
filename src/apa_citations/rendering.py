"""Boundary to the external CSL rendering engine."""
from __future__ import annotations

import re
from html.parser import HTMLParser
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from .errors import EngineError, MalformedStyleError
from .logging import RunLog
from .models import CitationItem, RenderOutcome

STYLE_ROOT_MARKER = "<style"


class LookupContext:
    """Callbacks the engine uses to fetch the locale and items by id."""

    def __init__(
        self,
        items: Sequence[CitationItem],
        locale: str,
        log: Optional[RunLog] = None,
    ):
        self._items = {item.id: item for item in items}
        self._locale = locale
        self._log = log

    def retrieve_locale(self, *_args: Any) -> str:
        if self._log:
            self._log.debug("Retrieving locale")
        return self._locale

    def retrieve_item(self, item_id: str) -> Optional[Dict[str, Any]]:
        item = self._items.get(item_id)
        if self._log:
            self._log.debug(f"Retrieving item {item_id}: {'found' if item else 'not found'}")
        return item.to_csl() if item else None


class CitationEngine:
    """Interface of a CSL processor as seen by the renderer."""

    def update_items(self, item_ids: Sequence[str]) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def make_bibliography(self) -> Tuple[Dict[str, Any], List[str]]:  # pragma: no cover - interface
        raise NotImplementedError


EngineFactory = Callable[[LookupContext, str], CitationEngine]


class _TextExtractor(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def markup_to_text(fragment: str) -> str:
    """Strip markup from a bibliography entry and collapse whitespace."""
    if not isinstance(fragment, str):
        raise TypeError(f"expected markup string, got {type(fragment).__name__}")
    parser = _TextExtractor()
    parser.feed(fragment)
    parser.close()
    return re.sub(r"\s+", " ", "".join(parser.parts)).strip()


def _default_engine_factory() -> EngineFactory:
    from .citeproc_engine import CiteprocEngine

    return CiteprocEngine


class CitationRenderer:
    """Feeds valid items to an engine and returns plain-text citations."""

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        text_extractor: Callable[[str], str] = markup_to_text,
    ):
        self.engine_factory = engine_factory or _default_engine_factory()
        self.text_extractor = text_extractor

    def check_ready(self) -> None:
        """Raise ``EngineUnavailableError`` when the engine cannot be used."""
        probe = getattr(self.engine_factory, "check_available", None)
        if probe is not None:
            probe()

    def render(
        self,
        items: Sequence[CitationItem],
        style: str,
        locale: str,
        log: Optional[RunLog] = None,
    ) -> RenderOutcome:
        log = log or RunLog()
        log.debug(f"Initializing CSL engine with {len(items)} items")
        if not style or STYLE_ROOT_MARKER not in style:
            raise MalformedStyleError("Invalid CSL style: not a valid XML document")

        context = LookupContext(items, locale, log)
        try:
            engine = self.engine_factory(context, style)
        except Exception as exc:
            log.debug(f"CSL engine initialization failed: {exc}")
            raise EngineError(
                f"Failed to initialize citation engine: {exc}", stage="init"
            ) from exc
        log.debug("CSL engine initialized successfully")

        item_ids = [item.id for item in items]
        log.debug(f"Updating items: {', '.join(item_ids)}")
        try:
            engine.update_items(item_ids)
        except Exception as exc:
            log.debug(f"Failed to update items: {exc}")
            raise EngineError(
                f"Failed to update citation items: {exc}", stage="update"
            ) from exc

        try:
            bibliography = engine.make_bibliography()
            fragments = bibliography[1] if bibliography else None
        except Exception as exc:
            log.debug(f"Bibliography generation failed: {exc}")
            raise EngineError(
                f"Failed to generate bibliography: {exc}", stage="bibliography"
            ) from exc
        if not isinstance(fragments, (list, tuple)) or not fragments:
            log.debug("No bibliography generated or empty result")
            raise EngineError(
                "Failed to generate bibliography: Bibliography generation returned empty result",
                stage="bibliography",
            )
        log.debug("Bibliography generated: success")

        citations: List[str] = []
        errors: List[str] = []
        for number, fragment in enumerate(fragments, start=1):
            try:
                text = self.text_extractor(fragment)
            except Exception as exc:
                message = f"Failed to process citation {number}: {exc}"
                log.debug(message)
                errors.append(message)
                citations.append(f"Error processing citation {number}")
                continue
            log.debug(f"Citation {number} processed: {text[:100]}...")
            citations.append(text)
        return RenderOutcome(citations=tuple(citations), errors=tuple(errors))
