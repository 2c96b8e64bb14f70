"""
File Parser Module

Handles decoding of uploaded delimited text files (CSV, TSV, TXT)
and hands the text to the TableIngestor.
"""

import logging
import chardet
from typing import Optional
from pathlib import Path
from .supported_formats import SupportedFormats
from .table import IngestionError, IngestionErrorKind, Table
from .table_ingestor import TableIngestor

logger = logging.getLogger(__name__)

class FileParser:
    """Decodes uploaded files and delegates table construction to TableIngestor."""

    def __init__(self, max_lines: Optional[int] = None):
        """
        Initialize the file parser.

        Args:
            max_lines: Ceiling on non-blank lines passed to the ingestor
        """
        self.supported_formats = SupportedFormats()
        self.max_lines = max_lines

    def parse_file(self, file_path: str) -> Table:
        """
        Parse a file from disk.

        Args:
            file_path: Path to the file to parse

        Returns:
            Table built from the file content
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        return self.parse_bytes(file_path.read_bytes(), file_path.name)

    def parse_bytes(self, raw: bytes, filename: str, mime_type: Optional[str] = None) -> Table:
        """
        Parse uploaded file content.

        Args:
            raw: File content as bytes
            filename: Original file name, used for format detection and as table label
            mime_type: Optional content type, consulted when the extension is unknown

        Returns:
            Table built from the file content

        Raises:
            ValueError: unsupported format or file too large
            IngestionError: content cannot be decoded or has no usable table
        """
        # Determine file format
        extension = Path(filename).suffix.lower()
        file_format = self.supported_formats.get_format(extension)
        if not file_format and not extension:
            file_format = self.supported_formats.get_format_for_mime_type(mime_type)

        if not file_format:
            raise ValueError(f"Unsupported file format: {extension or mime_type}")

        # Check file size
        max_size = self.supported_formats.get_max_file_size(file_format)
        if len(raw) > max_size:
            raise ValueError(f"File size ({len(raw)} bytes) exceeds maximum allowed ({max_size} bytes)")

        text = self._decode(raw)

        delimiter = self.supported_formats.get_delimiter(file_format)
        if delimiter is None:
            delimiter = self._detect_delimiter(text)

        ingestor = TableIngestor(delimiter=delimiter, max_lines=self.max_lines)
        return ingestor.ingest(text, source_name=filename)

    def _detect_encoding(self, raw: bytes) -> str:
        """Detect encoding using chardet on the first 10KB."""
        result = chardet.detect(raw[:10000])
        encoding = result['encoding'] or 'utf-8'
        # ascii only describes the sampled prefix
        return 'utf-8' if encoding.lower() == 'ascii' else encoding

    def _decode(self, raw: bytes) -> str:
        """
        Decode bytes to text, stripping a UTF-8 byte order mark.

        UTF-8 is tried on the whole content first; chardet is only asked
        when that fails.
        """
        if raw.startswith(b'\xef\xbb\xbf'):
            raw = raw[3:]

        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError:
            encoding = self._detect_encoding(raw)
            logger.info("Upload is not UTF-8, decoding as %s", encoding)

        try:
            return raw.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.warning("Could not decode upload as %s: %s", encoding, e)
            raise IngestionError(IngestionErrorKind.MALFORMED_LINE, str(e)) from e

    def _detect_delimiter(self, text: str) -> str:
        """Pick the first delimiter present on every one of the first five non-blank lines."""
        first_lines = [line for line in text.splitlines() if line.strip()][:5]

        for delimiter in SupportedFormats.SNIFF_DELIMITERS:
            if first_lines and all(delimiter in line for line in first_lines):
                return delimiter
        return ','
