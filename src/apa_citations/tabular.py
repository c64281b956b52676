"""CSV parsing and serialization backed by pandas."""
from __future__ import annotations

from io import StringIO
from typing import Dict, List, Mapping, Sequence

import pandas as pd

from .errors import ParseError


class CsvCodec:
    """Turns CSV text into string-valued rows and back."""

    encoding = "utf-8-sig"

    def decode(self, data: bytes) -> str:
        """Decode uploaded CSV bytes, dropping a leading byte order mark."""
        try:
            return data.decode(self.encoding)
        except UnicodeDecodeError as exc:
            raise ParseError(
                f"CSV Parsing Error: file is not valid UTF-8 text ({exc.reason} at byte {exc.start})"
            ) from exc

    def parse(self, text: str) -> List[Dict[str, str]]:
        if not text or not text.strip():
            raise ParseError("CSV Parsing Error: no data found")
        try:
            frame = pd.read_csv(
                StringIO(text),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                # Trailing delimiters must not turn the first column into the index.
                index_col=False,
                on_bad_lines="error",
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, ValueError) as exc:
            raise ParseError(f"CSV Parsing Error: {exc}") from exc
        frame = frame.fillna("")
        frame.columns = [str(column).strip() for column in frame.columns]
        return frame.to_dict(orient="records")

    def serialize(self, rows: Sequence[Mapping[str, str]]) -> str:
        if not rows:
            return ""
        columns: List[str] = []
        for row in rows:
            for key in row:
                if key not in columns:
                    columns.append(key)
        frame = pd.DataFrame(list(rows), columns=columns).fillna("")
        return frame.to_csv(index=False)
