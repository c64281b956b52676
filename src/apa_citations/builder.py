"""Construction of CSL items from raw spreadsheet rows."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .authors import parse_authors
from .logging import RunLog
from .models import CitationItem
from .normalization import (
    parse_volume_issue,
    parse_year,
    resolve_field,
    split_identifier,
)
from .source_types import map_source_type


def item_id_for_index(index: int) -> str:
    """Return the item id for the row at 0-based ``index``."""
    return f"item_{index + 1}"


class CitationItemBuilder:
    """Builds one CSL item per row without rejecting anything."""

    def build(
        self, row: Mapping[str, object], index: int, log: Optional[RunLog] = None
    ) -> CitationItem:
        position = index + 1
        fields: Dict[str, Any] = {
            "id": item_id_for_index(index),
            "type": map_source_type(
                resolve_field(row, "source_type", allow_blank=True)
            ),
        }

        title = resolve_field(row, "title")
        if title:
            fields["title"] = title
        else:
            self._note(log, f"Item {position}: Missing title")

        authors = parse_authors(resolve_field(row, "author"))
        if authors:
            fields["author"] = tuple(authors)
        else:
            self._note(log, f"Item {position}: No valid authors found")

        raw_year = resolve_field(row, "year")
        year = parse_year(raw_year)
        if year is not None:
            fields["issued"] = year
        else:
            self._note(log, f"Item {position}: Invalid or missing year: {raw_year}")

        fields["container_title"] = resolve_field(row, "container_title")

        vol_issue = parse_volume_issue(resolve_field(row, "volume"))
        fields["volume"] = vol_issue.volume
        fields["issue"] = vol_issue.issue or resolve_field(row, "issue")

        fields["page"] = resolve_field(row, "page")

        doi, url = split_identifier(resolve_field(row, "identifier"))
        if not doi and not url:
            fallback_url = resolve_field(row, "url")
            if fallback_url and fallback_url.startswith("http"):
                url = fallback_url
        fields["doi"] = doi
        fields["url"] = url

        fields["publisher"] = resolve_field(row, "publisher")

        item = CitationItem(**fields)
        self._note(log, f"Created CSL item {position}: {json.dumps(item.to_csl(), indent=2)}")
        return item

    def build_all(
        self, rows: Sequence[Mapping[str, object]], log: Optional[RunLog] = None
    ) -> List[CitationItem]:
        return [self.build(row, index, log) for index, row in enumerate(rows)]

    @staticmethod
    def _note(log: Optional[RunLog], message: str) -> None:
        if log is not None:
            log.debug(message)
