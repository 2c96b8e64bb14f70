"""
Table Ingestor Module

Turns raw delimited text into a rectangular Table. Exported files often
carry title or metadata rows above the real header, so the header row is
chosen by scoring the first few lines instead of assuming line one.
"""

import logging
import re
from typing import Dict, List, Optional, Tuple

from .table import (
    IngestionError,
    IngestionErrorKind,
    Table,
    dedupe_headers,
    placeholder_name,
    shape_row,
)

logger = logging.getLogger(__name__)

_LINE_BREAK = re.compile(r'\r\n|\n')
# Decimal with optional exponent; signed Infinity and unsigned 0x/0b/0o
# literals also count as numbers
_PLAIN_NUMBER = re.compile(
    r'^(?:[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?'
    r'|[+-]?Infinity'
    r'|0[xX][0-9a-fA-F]+|0[bB][01]+|0[oO][0-7]+)$'
)

HEADER_BONUS = 5


def is_plain_number(value: str) -> bool:
    """True for values like ``42``, ``-3.5``, ``.5``, ``1e6``, ``Infinity`` or ``0x1F`` (whitespace ignored)."""
    return bool(_PLAIN_NUMBER.match(value.strip()))


def _is_blank(fields: List[str]) -> bool:
    return all(f.strip() == '' for f in fields)


class TableIngestor:
    """Parses delimited text, infers the header row and reshapes the rows."""

    def __init__(self, delimiter: str = ',', max_lines: Optional[int] = None, header_window: int = 10):
        """
        Args:
            delimiter: Single-character field separator
            max_lines: Ceiling on non-blank lines considered; extra lines are dropped
            header_window: Number of leading lines scored as header candidates
        """
        if len(delimiter) != 1 or delimiter == '"':
            raise ValueError(f"Invalid delimiter: {delimiter!r}")
        self.delimiter = delimiter
        self.max_lines = max_lines
        self.header_window = header_window

    def tokenize_line(self, line: str) -> List[str]:
        """
        Split one line into fields.

        A double quote toggles quoting and is dropped; a delimiter inside
        quotes is kept as content. Doubled quotes are not treated as an
        escaped quote. Always returns at least one field.
        """
        fields = []
        current = []
        inside_quotes = False

        for char in line:
            if char == '"':
                inside_quotes = not inside_quotes
            elif char == self.delimiter and not inside_quotes:
                fields.append(''.join(current))
                current = []
            else:
                current.append(char)

        fields.append(''.join(current))
        return fields

    def split_lines(self, text: str) -> List[str]:
        """Split on CRLF or LF and drop lines that are blank after trimming."""
        return [line for line in _LINE_BREAK.split(text) if line.strip() != '']

    def select_header_row(self, lines: List[str]) -> int:
        """
        Pick the most plausible header index among the leading lines.

        Score is the number of later lines with the same field count, plus a
        bonus when the candidate has a non-numeric field. Ties go to the
        candidate with more matching rows, then to the earliest one. The last
        line is never a candidate.
        """
        tokenized = [self.tokenize_line(line) for line in lines]

        best_index = 0
        best_score = 0
        best_valid_rows = 0

        for i in range(min(self.header_window, len(lines) - 1)):
            candidate = tokenized[i]
            if _is_blank(candidate):
                continue

            header_score = 0
            if any(f.strip() != '' and not is_plain_number(f) for f in candidate):
                header_score = HEADER_BONUS

            width = len(candidate)
            valid_rows = sum(1 for fields in tokenized[i + 1:] if len(fields) == width)

            score = valid_rows + header_score
            if score > best_score or (score == best_score and valid_rows > best_valid_rows):
                best_index = i
                best_score = score
                best_valid_rows = valid_rows

        return best_index

    def build_headers(self, lines: List[str], header_index: int) -> List[str]:
        """
        Build unique, non-empty column names from the selected line.

        When the header line has no usable names, ``Column1..ColumnK`` are
        synthesized from the width of the following line.

        Raises:
            IngestionError: EMPTY_STRUCTURE if no headers can be built
        """
        return self._build_headers(lines, header_index)[0]

    def _build_headers(self, lines: List[str], header_index: int) -> Tuple[List[str], List[str]]:
        """Headers plus the names among them that were synthesized."""
        headers, generated = dedupe_headers(self.tokenize_line(lines[header_index]))
        if headers:
            return headers, generated

        if header_index + 1 >= len(lines):
            raise IngestionError(IngestionErrorKind.EMPTY_STRUCTURE)

        width = len(self.tokenize_line(lines[header_index + 1]))
        logger.info("Header row %d has no names, synthesizing %d columns", header_index, width)
        headers = [placeholder_name(i + 1) for i in range(width)]
        return headers, list(headers)

    def build_rows(self, lines: List[str], start_index: int, headers: List[str]) -> List[Dict[str, str]]:
        """
        Reshape every non-blank line from ``start_index`` into a row mapping.

        Raises:
            IngestionError: NO_DATA_ROWS if nothing remains
        """
        rows = []
        for line in lines[start_index:]:
            values = self.tokenize_line(line)
            if _is_blank(values):
                continue
            rows.append(shape_row(values, headers))

        if not rows:
            raise IngestionError(IngestionErrorKind.NO_DATA_ROWS)
        return rows

    def ingest(self, text: str, source_name: Optional[str] = None) -> Table:
        """
        Convert raw delimited text into a Table.

        Args:
            text: Full text content
            source_name: Optional label, usually the uploaded file name

        Returns:
            Table with unique headers and rows keyed by header

        Raises:
            IngestionError: EMPTY_INPUT, EMPTY_STRUCTURE or NO_DATA_ROWS
        """
        lines = self.split_lines(text or '')
        if not lines:
            raise IngestionError(IngestionErrorKind.EMPTY_INPUT)

        if self.max_lines is not None and len(lines) > self.max_lines:
            logger.warning(
                "Input has %d lines, keeping the first %d", len(lines), self.max_lines
            )
            lines = lines[:self.max_lines]

        header_index = self.select_header_row(lines)
        headers, generated = self._build_headers(lines, header_index)
        rows = self.build_rows(lines, header_index + 1, headers)

        logger.info(
            "Parsed %s: header at line %d, %d columns, %d data rows",
            source_name or "<text>", header_index + 1, len(headers), len(rows)
        )
        return Table(headers=headers, rows=rows, source_name=source_name, generated_headers=generated)
