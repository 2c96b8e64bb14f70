"""
Delimited text formats accepted for upload, with their delimiters and size limits.
"""

from enum import Enum
from typing import List, Optional

class FileFormat(Enum):
    """Delimited text flavours we know how to split."""
    CSV = "csv"
    TSV = "tsv"
    TXT = "txt"

def _normalize_extension(extension: str) -> str:
    ext = (extension or '').strip().lower()
    return ext if ext.startswith('.') else f'.{ext}'

class SupportedFormats:
    """Lookup tables for upload formats. All lookups are classmethods."""

    EXTENSION_MAP = {
        '.csv': FileFormat.CSV,
        '.tsv': FileFormat.TSV,
        '.txt': FileFormat.TXT,
    }

    # Consulted only when the upload has no extension
    MIME_TYPE_MAP = {
        'text/csv': FileFormat.CSV,
        'application/vnd.ms-excel': FileFormat.CSV,  # browsers on Windows label .csv this way
        'text/tab-separated-values': FileFormat.TSV,
        'text/plain': FileFormat.TXT,
    }

    # None means the delimiter is sniffed from the content
    DELIMITERS = {
        FileFormat.CSV: ',',
        FileFormat.TSV: '\t',
        FileFormat.TXT: None,
    }

    # Tried in this order when sniffing
    SNIFF_DELIMITERS = [',', '\t', '|', ';']

    MAX_FILE_SIZES = {
        FileFormat.CSV: 16 * 1024 * 1024,
        FileFormat.TSV: 16 * 1024 * 1024,
        FileFormat.TXT: 8 * 1024 * 1024,
    }
    DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024

    @classmethod
    def get_format(cls, extension: str) -> Optional[FileFormat]:
        """FileFormat for an extension, with or without the leading dot."""
        return cls.EXTENSION_MAP.get(_normalize_extension(extension))

    @classmethod
    def is_supported(cls, extension: str) -> bool:
        return cls.get_format(extension) is not None

    @classmethod
    def get_format_for_mime_type(cls, mime_type: Optional[str]) -> Optional[FileFormat]:
        """FileFormat for a content type such as ``text/csv; charset=utf-8``."""
        if not mime_type:
            return None
        base_type = mime_type.split(';', 1)[0].strip().lower()
        return cls.MIME_TYPE_MAP.get(base_type)

    @classmethod
    def get_supported_extensions(cls) -> List[str]:
        return list(cls.EXTENSION_MAP)

    @classmethod
    def get_delimiter(cls, file_format: FileFormat) -> Optional[str]:
        """Fixed delimiter for a format, or None when it has to be sniffed."""
        return cls.DELIMITERS.get(file_format, ',')

    @classmethod
    def get_max_file_size(cls, file_format: FileFormat) -> int:
        """Upload size limit in bytes."""
        return cls.MAX_FILE_SIZES.get(file_format, cls.DEFAULT_MAX_FILE_SIZE)
