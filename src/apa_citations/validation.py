"""Minimum-completeness validation of built CSL items."""
from __future__ import annotations

from typing import List, Sequence

from .models import CitationItem, ValidationIssue, ValidationOutcome
from .source_types import JOURNAL_ARTICLE


def validate_item(item: CitationItem, position: int) -> List[ValidationIssue]:
    """Return the reasons ``item`` cannot be rendered, in a fixed order."""
    issues: List[ValidationIssue] = []
    if not item.title and not item.author:
        issues.append(
            ValidationIssue(
                code="missing-title-and-author",
                message=f"Item {position}: Missing both title and author",
                context=item.id,
            )
        )
    if item.type == JOURNAL_ARTICLE and not item.container_title:
        issues.append(
            ValidationIssue(
                code="article-journal-missing-journal",
                message=f"Item {position}: Journal articles require a journal name",
                context=item.id,
            )
        )
    return issues


def validate_items(items: Sequence[CitationItem]) -> ValidationOutcome:
    """Partition ``items`` into the usable subsequence and rejection reasons."""
    valid: List[CitationItem] = []
    issues: List[ValidationIssue] = []
    for position, item in enumerate(items, start=1):
        item_issues = validate_item(item, position)
        if item_issues:
            issues.extend(item_issues)
        else:
            valid.append(item)
    return ValidationOutcome(valid=tuple(valid), issues=tuple(issues))
