"""Parsing of free-text author cells into CSL name entries."""
from __future__ import annotations

from typing import List

from .models import LiteralName, NameEntry, PersonName

_DELIMITERS = (";", " & ", " and ")


def parse_authors(cell: object) -> List[NameEntry]:
    """Split one author cell into ordered name entries.

    The cell is split on the first delimiter present (``;``, `` & ``,
    `` and ``). ``Family, Given`` fragments become person names, fragments
    without a comma are split on whitespace, and anything that cannot be
    confidently split is kept as a literal name.
    """
    if not cell or not isinstance(cell, str) or not cell.strip():
        return []

    text = cell.strip()
    fragments = [text]
    for delimiter in _DELIMITERS:
        if delimiter in text:
            fragments = text.split(delimiter)
            break

    names: List[NameEntry] = []
    for fragment in (part.strip() for part in fragments):
        if not fragment:
            continue
        if "," in fragment:
            family, given = (part.strip() for part in fragment.split(",", 1))
            if family and given:
                names.append(PersonName(family=family, given=given))
            continue
        tokens = fragment.split()
        if len(tokens) > 1 and len(tokens[0]) > 1:
            names.append(PersonName(family=tokens[-1], given=" ".join(tokens[:-1])))
        else:
            names.append(LiteralName(literal=fragment))
    return names
