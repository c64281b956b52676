"""High-level orchestrator for citation generation runs."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from .assembler import assemble_rows, skipped_warning
from .builder import CitationItemBuilder
from .config import GeneratorConfig
from .errors import (
    CitationGenerationError,
    InputMissingError,
    MalformedStyleError,
    NoValidItemsError,
)
from .logging import RunLog
from .models import CitationItem, GenerationResult
from .rendering import CitationRenderer
from .sources import ResourceFetcher
from .tabular import CsvCodec
from .validation import validate_items

STYLE_RESOURCE = "APA CSL style"
LOCALE_RESOURCE = "English locale"
MISSING_INPUT_MESSAGE = "Please provide a Google Sheet URL or upload a CSV file."

TextInput = Union[str, bytes]


class CitationGeneratorApp:
    """Coordinates ingestion, normalization, validation, rendering and assembly."""

    def __init__(
        self,
        config: GeneratorConfig | None = None,
        fetcher: ResourceFetcher | None = None,
        codec: CsvCodec | None = None,
        renderer: CitationRenderer | None = None,
        builder: CitationItemBuilder | None = None,
    ):
        self.config = config or GeneratorConfig()
        self.fetcher = fetcher or ResourceFetcher(
            timeout=self.config.request_timeout, user_agent=self.config.user_agent
        )
        self.codec = codec or CsvCodec()
        self.renderer = renderer or CitationRenderer()
        self.builder = builder or CitationItemBuilder()

    def load_rows(
        self,
        csv_text: Optional[TextInput] = None,
        sheet_url: Optional[str] = None,
        log: Optional[RunLog] = None,
    ) -> List[Dict[str, str]]:
        """Read CSV text or a spreadsheet export and parse it into rows."""
        log = log or RunLog()
        if sheet_url:
            if csv_text is not None:
                log.debug("Both a sheet URL and CSV content were supplied; using the sheet URL")
            log.status("Fetching data from Google Sheet...")
            text = self.fetcher.fetch_sheet(sheet_url, self.config.sheet_export_template)
            log.debug(f"Google Sheet data fetched: {len(text)} characters")
        elif csv_text is not None:
            log.status("Reading CSV file...")
            text = csv_text if isinstance(csv_text, str) else self.codec.decode(csv_text)
            log.debug(f"CSV file read: {len(text)} characters")
        else:
            raise InputMissingError(MISSING_INPUT_MESSAGE)

        log.status("Parsing CSV data...")
        rows = self.codec.parse(text)
        log.debug(f"CSV parsed successfully: {len(rows)} rows")
        return rows

    def load_resources(
        self, style_text: Optional[TextInput] = None, log: Optional[RunLog] = None
    ) -> Tuple[str, str]:
        """Return ``(style, locale)``, fetching both concurrently when needed."""
        log = log or RunLog()
        if isinstance(style_text, bytes):
            style_text = _decode_style(style_text)
        urls = {LOCALE_RESOURCE: self.config.locale_url}
        if style_text is None:
            log.status("Fetching default APA 7 citation style...")
            urls = {STYLE_RESOURCE: self.config.style_url, **urls}
        else:
            log.status("Reading custom CSL style file...")
            log.debug(f"Custom CSL file loaded: {len(style_text)} characters")

        fetched = self.fetcher.fetch_all(urls)
        for name, content in fetched.items():
            log.debug(f"{name} loaded: {len(content)} characters")
        style = style_text if style_text is not None else fetched[STYLE_RESOURCE]
        return style, fetched[LOCALE_RESOURCE]

    def build_items(
        self, rows: Sequence[Mapping[str, str]], log: Optional[RunLog] = None
    ) -> List[CitationItem]:
        log = log or RunLog()
        log.status("Converting data to CSL-JSON format...")
        return self.builder.build_all(rows, log)

    def generate_from_rows(
        self,
        rows: Sequence[Mapping[str, str]],
        style: str,
        locale: str,
        log: Optional[RunLog] = None,
    ) -> GenerationResult:
        """Run the pipeline on parsed rows with already-loaded resources.

        Raises ``CitationGenerationError`` subclasses for fatal failures.
        """
        log = log or RunLog()
        items = self.build_items(rows, log)

        log.status("Validating CSL items...")
        outcome = validate_items(items)
        if not outcome.valid:
            raise NoValidItemsError(
                "No valid citation items found. Please check your data format.",
                errors=tuple(outcome.errors),
            )

        log.status(f"Generating citations for {len(outcome.valid)} valid items...")
        rendered = self.renderer.render(outcome.valid, style, locale, log)

        warnings: List[str] = []
        warning = skipped_warning(len(items), len(outcome.valid))
        if warning:
            warnings.append(warning)

        final_rows = assemble_rows(
            rows, outcome.valid, rendered.citations, column=self.config.citation_column
        )
        success = len(rendered.citations) > 0
        if success:
            log.status(
                f"Successfully generated {len(rendered.citations)} citations.", "success"
            )
        else:
            log.status(
                "Failed to generate any citations. Check debug information for details.",
                "error",
            )
        return GenerationResult(
            success=success,
            citations=rendered.citations,
            errors=tuple(outcome.errors) + rendered.errors,
            warnings=tuple(warnings),
            rows=tuple(final_rows),
            status=log.status_message,
            debug_log=tuple(log.lines()),
            items=tuple(items),
        )

    def generate(
        self,
        csv_text: Optional[TextInput] = None,
        sheet_url: Optional[str] = None,
        style_text: Optional[TextInput] = None,
        log: Optional[RunLog] = None,
    ) -> GenerationResult:
        """Run a full generation; fatal failures become a terminal result."""
        log = log or RunLog()
        log.debug("Starting citation generation...")
        try:
            if not sheet_url and csv_text is None:
                raise InputMissingError(MISSING_INPUT_MESSAGE)
            self.renderer.check_ready()
            rows = self.load_rows(csv_text=csv_text, sheet_url=sheet_url, log=log)
            style, locale = self.load_resources(style_text, log)
            return self.generate_from_rows(rows, style, locale, log)
        except CitationGenerationError as exc:
            message = str(exc)
            log.debug(f"Generation failed: {message}")
            log.status(f"Error: {message}", "error")
            return GenerationResult.failure(
                message,
                errors=getattr(exc, "errors", ()),
                debug_log=tuple(log.lines()),
            )

    def export_csv(self, result: GenerationResult) -> str:
        return self.codec.serialize(result.rows)

    def close(self) -> None:
        self.fetcher.close()

    def __enter__(self) -> "CitationGeneratorApp":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _decode_style(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedStyleError(
            "Invalid CSL style: file is not valid UTF-8 text"
        ) from exc
