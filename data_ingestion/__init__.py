"""
Data Ingestion Module

This module turns uploaded delimited text into clean rectangular tables,
profiles them for preview, and resolves the sample datasets.
"""

from .table import Table, IngestionError, IngestionErrorKind
from .table_ingestor import TableIngestor
from .file_parser import FileParser
from .file_analyzer import FileAnalyzer
from .supported_formats import SupportedFormats
from .data_sources import DataSourceRegistry, DataSourceType

__all__ = [
    'Table', 'IngestionError', 'IngestionErrorKind', 'TableIngestor',
    'FileParser', 'FileAnalyzer', 'SupportedFormats',
    'DataSourceRegistry', 'DataSourceType',
]
