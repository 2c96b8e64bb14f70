"""
SQL Builder Module

Renders a table answer as SQL: a CREATE TABLE statement with column
types guessed from the first row, followed by one INSERT per row.
"""

import re
from typing import Dict, List, Tuple

from data_ingestion.table_ingestor import is_plain_number

_DATE_PREFIX = re.compile(r'^(\d{4}-\d{2}-\d{2}|\d{2}/\d{2}/\d{4})')

def _cell(value) -> str:
    return '' if value is None else str(value)

class SqlBuilder:
    """Builds SQL statements for a header/row table."""

    def __init__(self, table_name: str = "sample_table"):
        """
        Initialize the SQL builder.

        Args:
            table_name: Name used in the generated statements
        """
        self.table_name = table_name

    def build(self, headers: List[str], rows: List[Dict[str, str]]) -> str:
        """Return CREATE TABLE and INSERT statements separated by blank lines."""
        statements = [self.build_create_table(headers, rows)]
        statements.extend(self.build_inserts(headers, rows))
        return "\n\n".join(statements)

    def build_create_table(self, headers: List[str], rows: List[Dict[str, str]]) -> str:
        first_row = rows[0] if rows else {}
        columns = [
            (self._column_name(h), self._infer_column_type(_cell(first_row.get(h))))
            for h in headers
        ]
        return self._build_create_table_sql(columns)

    def build_inserts(self, headers: List[str], rows: List[Dict[str, str]]) -> List[str]:
        col_names = ", ".join(self._column_name(h) for h in headers)
        statements = []
        for row in rows:
            values = ", ".join(self._convert_value(_cell(row.get(h))) for h in headers)
            statements.append(f"INSERT INTO {self.table_name} ({col_names})\nVALUES ({values});")
        return statements

    def _column_name(self, header: str) -> str:
        return re.sub(r'\s+', '_', header.strip())

    def _infer_column_type(self, sample: str) -> str:
        """Guess a SQL type from a single sample value."""
        if sample == '' or is_plain_number(sample):
            return 'NUMERIC'
        if _DATE_PREFIX.match(sample):
            return 'DATE'
        return 'VARCHAR(255)'

    def _build_create_table_sql(self, columns: List[Tuple[str, str]]) -> str:
        """Build CREATE TABLE SQL statement."""
        col_defs = [f"{name} {definition}" for name, definition in columns]
        sql = f"CREATE TABLE {self.table_name} (\n  "
        sql += ",\n  ".join(col_defs)
        sql += "\n);"
        return sql

    def _convert_value(self, value: str) -> str:
        """Leave numbers bare, single-quote everything else."""
        if value != '' and is_plain_number(value):
            return value.strip()
        escaped = value.replace("'", "''")
        return f"'{escaped}'"
