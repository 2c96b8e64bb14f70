"""
File Analyzer Module

Builds the preview shown after an upload: header chips, row/column
counts, a per-column profile and a short natural language summary.
"""

from typing import Dict, List, Any
import pandas as pd

from .table import Table


class FileAnalyzer:
    """Profiles an ingested Table for preview and prompt context."""

    def __init__(self, max_samples: int = 5):
        """Initialize the file analyzer."""
        self.max_samples = max_samples

    def preview(self, table: Table) -> Dict[str, Any]:
        """
        Build the preview structure for a table.

        Args:
            table: Ingested table

        Returns:
            Dictionary with counts, headers, column profiles, issues and summary
        """
        df = self._to_frame(table)

        columns = [self._profile_column(df[header], header) for header in table.headers]
        synthetic = list(table.generated_headers)

        preview = {
            "file_name": table.source_name,
            "headers": list(table.headers),
            "row_count": table.row_count,
            "column_count": table.column_count,
            "synthetic_headers": synthetic,
            "columns": columns,
            "data_quality_issues": self._detect_data_quality_issues(columns, synthetic, table.row_count),
        }
        preview["summary"] = self._generate_nl_summary(preview)
        return preview

    def _to_frame(self, table: Table) -> pd.DataFrame:
        """Load rows into a string DataFrame with one column per header."""
        rows = [dict(row) for row in table.rows]
        return pd.DataFrame(rows, columns=list(table.headers), dtype=str).fillna('')

    def _infer_column_type(self, series: pd.Series) -> str:
        """Infer data type for a column of strings, ignoring empty cells."""
        values = series[series.str.strip() != ''].str.strip()
        if values.empty:
            return "string"

        lowered = values.str.lower()
        if lowered.isin(['true', 'false', 'yes', 'no']).all():
            return "boolean"

        numeric = pd.to_numeric(values, errors='coerce')
        if numeric.notna().all():
            if (numeric == numeric.round()).all() and not values.str.contains(r'[.eE]').any():
                return "integer"
            return "float"

        dates = pd.to_datetime(values, errors='coerce', format='mixed')
        if dates.notna().all():
            return "datetime"

        return "string"

    def _profile_column(self, series: pd.Series, name: str) -> Dict[str, Any]:
        """Profile a single column."""
        non_empty = series[series.str.strip() != '']
        return {
            "name": name,
            "type": self._infer_column_type(series),
            "empty_count": int(len(series) - len(non_empty)),
            "unique_count": int(non_empty.nunique()),
            "sample_values": non_empty.head(self.max_samples).tolist()
        }

    def _detect_data_quality_issues(self, columns: List[Dict[str, Any]], synthetic: List[str], row_count: int) -> List[str]:
        """Detect data quality issues worth showing next to the preview."""
        issues = []

        # Check for high empty percentage
        for col in columns:
            empty_pct = (col["empty_count"] / row_count * 100) if row_count > 0 else 0
            if empty_pct > 50:
                issues.append(f"Column '{col['name']}' has {empty_pct:.1f}% empty values")

        if synthetic:
            issues.append(
                f"{len(synthetic)} column name(s) were generated because the header was missing or repeated: "
                + ", ".join(synthetic)
            )

        return issues

    def _generate_nl_summary(self, preview: Dict[str, Any]) -> str:
        """Generate natural language summary of the preview."""
        name = preview["file_name"] or "The data"
        summary_parts = [
            f"{name} has {preview['row_count']:,} rows and {preview['column_count']} columns."
        ]

        col_list = ", ".join(
            f"{col['name']} ({col['type']})" for col in preview["columns"][:5]
        )
        if preview["column_count"] > 5:
            col_list += f", ... and {preview['column_count'] - 5} more"
        summary_parts.append(f" Columns: {col_list}.")

        if preview["data_quality_issues"]:
            summary_parts.append(f" {len(preview['data_quality_issues'])} data quality warning(s).")

        return "".join(summary_parts)
