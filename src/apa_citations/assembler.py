"""Re-joining rendered citations onto the original rows."""
from __future__ import annotations

from typing import Dict, List, Mapping, Optional, Sequence

from .builder import item_id_for_index
from .models import CitationItem

CITATION_COLUMN = "APA 7 Citation"
SKIPPED_SENTINEL = "Skipped: item failed validation"
MISSING_CITATION = "Error: Could not generate citation."


def citations_by_id(
    valid_items: Sequence[CitationItem], citations: Sequence[str]
) -> Dict[str, str]:
    """Pair valid items with citations rendered in the same order."""
    return {item.id: text for item, text in zip(valid_items, citations)}


def assemble_rows(
    rows: Sequence[Mapping[str, str]],
    valid_items: Sequence[CitationItem],
    citations: Sequence[str],
    column: str = CITATION_COLUMN,
) -> List[Dict[str, str]]:
    """Annotate every original row with its citation or the skipped sentinel.

    The output always has one row per input row.
    """
    rendered = citations_by_id(valid_items, citations)
    valid_ids = {item.id for item in valid_items}
    assembled: List[Dict[str, str]] = []
    for index, row in enumerate(rows):
        item_id = item_id_for_index(index)
        if item_id in valid_ids:
            text = rendered.get(item_id, MISSING_CITATION)
        else:
            text = SKIPPED_SENTINEL
        augmented = dict(row)
        augmented[column] = text
        assembled.append(augmented)
    return assembled


def skipped_warning(total: int, valid: int) -> Optional[str]:
    skipped = total - valid
    if skipped <= 0:
        return None
    return f"{skipped} items were skipped due to validation errors"
