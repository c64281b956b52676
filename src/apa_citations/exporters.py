"""Exporters for structured citation data."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Sequence

from .models import CitationItem, GenerationResult


def to_csl_json(items: Sequence[CitationItem]) -> str:
    return json.dumps([item.to_csl() for item in items], indent=2, ensure_ascii=False)


def result_to_dict(result: GenerationResult, include_debug: bool = False) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "success": result.success,
        "status": result.status,
        "citations": list(result.citations),
        "errors": list(result.errors),
        "warnings": list(result.warnings),
        "rows": [dict(row) for row in result.rows],
    }
    if include_debug:
        payload["debug_log"] = list(result.debug_log)
    return payload


def result_to_json(result: GenerationResult, include_debug: bool = False) -> str:
    return json.dumps(result_to_dict(result, include_debug), indent=2, ensure_ascii=False)


def citation_lines(result: GenerationResult) -> List[str]:
    return [f"{idx}. {text}" for idx, text in enumerate(result.citations, start=1)]
