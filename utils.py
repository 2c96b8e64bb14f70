from typing import Dict, List, Optional

from data_ingestion.table import Table

def _csv_value(value, delimiter=','):
    value = '' if value is None else str(value)
    # Quote only when needed; the ingestor has no escape for embedded quotes
    return f'"{value}"' if delimiter in value else value

def table_to_csv(headers: List[str], rows: List[Dict[str, str]], delimiter: str = ',') -> str:
    """
    Renders headers and rows as delimited text, one line per row.
    """
    lines = [delimiter.join(_csv_value(h, delimiter) for h in headers)]
    for row in rows:
        lines.append(delimiter.join(_csv_value(row.get(h), delimiter) for h in headers))
    return '\n'.join(lines) + '\n'

def build_csv_sample(table: Table, max_rows: Optional[int] = 50) -> str:
    """
    CSV text of the first max_rows rows, used as model context.
    """
    rows = table.rows if max_rows is None else table.rows[:max_rows]
    return table_to_csv(table.headers, rows).rstrip('\n')
