"""Generation reporting utilities."""
from __future__ import annotations

from collections import Counter
from typing import List

from .models import GenerationResult
from .source_types import label_for_type


def render_report(result: GenerationResult) -> str:
    """Return a human-readable report summarizing a generation run."""

    lines: List[str] = ["Citation Generation Report"]
    if result.status:
        lines.append(f"Status: {result.status}")
    lines.append(f"Rows processed: {len(result.rows)}")
    lines.append(f"Citations generated: {len(result.citations)}")

    if result.items:
        counts = Counter(label_for_type(item.type) for item in result.items)
        breakdown = ", ".join(f"{label}: {count}" for label, count in sorted(counts.items()))
        lines.append(f"Source types: {breakdown}")

    if result.warnings:
        lines.append("Warnings:")
        lines.extend(f"[WARNING] {warning}" for warning in result.warnings)

    if not result.errors:
        lines.append("No errors detected.")
        return "\n".join(lines)

    lines.append("Errors:")
    lines.extend(f"[ERROR] {error}" for error in result.errors)
    return "\n".join(lines)
