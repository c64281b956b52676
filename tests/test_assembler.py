from apa_citations.assembler import (
    CITATION_COLUMN,
    MISSING_CITATION,
    SKIPPED_SENTINEL,
    assemble_rows,
    skipped_warning,
)
from apa_citations.models import CitationItem

ROWS = [{"Title": "A"}, {"Title": ""}, {"Title": "C"}]
VALID = [
    CitationItem(id="item_1", type="book", title="A"),
    CitationItem(id="item_3", type="book", title="C"),
]


def test_every_row_is_kept_and_annotated():
    rows = assemble_rows(ROWS, VALID, ["Cite A.", "Cite C."])

    assert len(rows) == len(ROWS)
    assert [row[CITATION_COLUMN] for row in rows] == ["Cite A.", SKIPPED_SENTINEL, "Cite C."]
    assert rows[1]["Title"] == ""


def test_original_rows_are_not_mutated():
    assemble_rows(ROWS, VALID, ["Cite A.", "Cite C."])
    assert CITATION_COLUMN not in ROWS[0]


def test_missing_rendered_citation_uses_placeholder():
    rows = assemble_rows(ROWS, VALID, ["Cite A."])
    assert rows[2][CITATION_COLUMN] == MISSING_CITATION


def test_custom_column_name():
    rows = assemble_rows(ROWS, VALID, ["Cite A.", "Cite C."], column="Reference")
    assert rows[0]["Reference"] == "Cite A."


def test_skipped_warning():
    assert skipped_warning(3, 2) == "1 items were skipped due to validation errors"
    assert skipped_warning(2, 2) is None
