"""
Table Module

The rectangular table produced by ingestion, plus the error taxonomy
used when ingestion cannot produce one.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Any, Mapping, Optional, Sequence, Tuple


class IngestionErrorKind(Enum):
    """Terminal failure kinds for ingestion."""
    EMPTY_INPUT = "empty_input"
    EMPTY_STRUCTURE = "empty_structure"
    NO_DATA_ROWS = "no_data_rows"
    MALFORMED_LINE = "malformed_line"


USER_MESSAGES = {
    IngestionErrorKind.EMPTY_INPUT: "The CSV file is empty",
    IngestionErrorKind.EMPTY_STRUCTURE: "Could not determine CSV structure",
    IngestionErrorKind.NO_DATA_ROWS: "No valid data rows found in the CSV file",
    IngestionErrorKind.MALFORMED_LINE: "The file could not be decoded as text",
}


class IngestionError(ValueError):
    """Raised when delimited text cannot be turned into a Table."""

    def __init__(self, kind: IngestionErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail
        message = self.user_message
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)

    @property
    def user_message(self) -> str:
        return USER_MESSAGES[self.kind]


def placeholder_name(position: int) -> str:
    """Synthetic column name for a 1-based position."""
    return f"Column{position}"


def shape_row(values: List[str], headers: List[str]) -> Dict[str, str]:
    """
    Pad or truncate positional values to the header width and key them by header.

    A header that is itself empty falls back to its positional placeholder.
    """
    values = list(values[:len(headers)])
    while len(values) < len(headers):
        values.append('')

    row = {}
    for index, header in enumerate(headers):
        row[header or placeholder_name(index + 1)] = values[index] or ''
    return row


@dataclass(frozen=True)
class Table:
    """
    Headers plus rows keyed by header, with an optional source label.

    Headers and rows are frozen on construction: headers become a tuple and
    each row a read-only mapping, so a Table stays rectangular once built.
    ``generated_headers`` lists the names that were synthesized rather than
    read from the input.
    """
    headers: Sequence[str]
    rows: Sequence[Mapping[str, str]] = field(default_factory=tuple)
    source_name: Optional[str] = None
    generated_headers: Sequence[str] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'headers', tuple(self.headers))
        object.__setattr__(self, 'rows', tuple(MappingProxyType(dict(row)) for row in self.rows))
        object.__setattr__(
            self, 'generated_headers', tuple(h for h in self.generated_headers if h in self.headers)
        )

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def column_count(self) -> int:
        return len(self.headers)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the wire keys the chat client expects."""
        return {
            "headers": list(self.headers),
            "rows": [dict(row) for row in self.rows],
            "fileName": self.source_name,
            "generatedHeaders": list(self.generated_headers)
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Table":
        """
        Rebuild a Table from its serialized form.

        The payload may come from a client, so the header and row invariants
        are re-applied: blank and duplicate headers are normalized and every
        row is reshaped to the header width.

        Raises:
            ValueError: if the payload or its headers have the wrong shape
            IngestionError: if no headers or no non-blank rows remain
        """
        if not isinstance(data, dict):
            raise ValueError("Table payload must be an object")

        raw_headers = data.get("headers") or []
        if not isinstance(raw_headers, list):
            raise ValueError("'headers' must be a list")

        headers, generated = dedupe_headers([str(h) for h in raw_headers])
        if not headers:
            raise IngestionError(IngestionErrorKind.EMPTY_STRUCTURE)

        rows = []
        for raw_row in data.get("rows") or []:
            if not isinstance(raw_row, dict):
                continue
            values = [_cell(raw_row.get(header)) for header in headers]
            if all(v.strip() == '' for v in values):
                continue
            rows.append(shape_row(values, headers))

        if not rows:
            raise IngestionError(IngestionErrorKind.NO_DATA_ROWS)

        carried = data.get("generatedHeaders") or []
        if isinstance(carried, list):
            generated += [str(h) for h in carried if str(h) not in generated]

        return cls(
            headers=headers,
            rows=rows,
            source_name=data.get("fileName"),
            generated_headers=generated
        )


def _cell(value: Any) -> str:
    return '' if value is None else str(value)


def dedupe_headers(fields: List[str]) -> Tuple[List[str], List[str]]:
    """
    Trim header fields, drop empty ones and replace duplicates.

    A repeated name becomes ``Column<N>`` for its 1-based position; if that
    placeholder is already used a numeric suffix is appended.

    Returns:
        The header list and the names that were generated for duplicates
    """
    headers: List[str] = []
    generated: List[str] = []
    seen = set()
    for name in (f.strip() for f in fields):
        if not name:
            continue
        if name in seen:
            candidate = placeholder_name(len(headers) + 1)
            suffix = 2
            while candidate in seen:
                candidate = f"{placeholder_name(len(headers) + 1)}_{suffix}"
                suffix += 1
            name = candidate
            generated.append(name)
        seen.add(name)
        headers.append(name)
    return headers, generated
