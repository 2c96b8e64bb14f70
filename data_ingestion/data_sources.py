"""
Data Sources Module

Resolves which table a question is asked against: the user's uploaded
file, the platform benchmark sample, or one of the brand samples.
"""

from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from .table import Table

DEFAULT_SAMPLES_PATH = Path(__file__).with_name('sample_datasets.yaml')

class DataSourceType(Enum):
    """Where the active table comes from."""
    CSV = "csv"
    PLATFORM = "platform"
    BRAND = "brand"

class DataSourceRegistry:
    """Holds the sample datasets and picks the active table for a request."""

    def __init__(self, samples_path: Optional[str] = None):
        self.samples_path = Path(samples_path) if samples_path else DEFAULT_SAMPLES_PATH
        self.platform, self.brands = self._load_samples()

    def _load_samples(self):
        with open(self.samples_path, 'r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}

        platform = Table.from_dict(raw['platform']) if raw.get('platform') else None
        brands: Dict[str, Table] = {
            name: Table.from_dict(data) for name, data in (raw.get('brands') or {}).items()
        }
        return platform, brands

    def available_brands(self) -> List[str]:
        return list(self.brands.keys())

    def resolve(self, source_type, brand: Optional[str] = None, uploaded: Optional[Table] = None) -> Optional[Table]:
        """
        Return the table for the requested source.

        Args:
            source_type: DataSourceType or its string value
            brand: Brand name, used when the source is BRAND
            uploaded: The user's uploaded table, used when the source is CSV

        Returns:
            The matching Table, or None if that source has no data
        """
        try:
            source_type = DataSourceType(source_type)
        except ValueError:
            raise ValueError(f"Unknown data source: {source_type}")

        if source_type == DataSourceType.PLATFORM:
            return self.platform
        if source_type == DataSourceType.BRAND:
            return self.brands.get(brand) if brand else None
        return uploaded
