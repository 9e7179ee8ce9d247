"""
Disk cache shared by the reference data sources.

A source subclasses CachedSource and provides one `fetch_{key}` method per
dataset; `get_data(key, ext)` serves the dataset from
`{cache_dir}/{source name}/{key}.{ext}` while it is fresh and calls the
fetch method otherwise.
"""

import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

CsvInput = Union[str, Path, io.StringIO]


class CachedSource:
    """
    Base class for sources that keep downloaded data on disk.

    Supported formats are 'json' (any JSON-able value) and 'csv' (a
    DataFrame, or records DataFrame() accepts). CSV is always read with
    `csv_read_options`, for downloads and cache hits alike, so a dataset
    looks the same whichever way it was obtained: every column as text and
    empty cells as '' rather than NaN.
    """

    csv_read_options: Dict[str, Any] = {'dtype': str, 'keep_default_na': False}

    def __init__(self, cache_dir: str):
        """
        Args:
            cache_dir: Base directory for caching; `~` is expanded
        """
        self.cache_dir = Path(cache_dir).expanduser()
        self.source_name = self.__class__.__name__.lower()
        self.cache_path = self.cache_dir / self.source_name
        self.cache_path.mkdir(parents=True, exist_ok=True)
        self._force_refresh = False
        self._never_refresh = False

    def set_force_refresh(self, force_refresh: bool = True) -> None:
        self._force_refresh = force_refresh

    def set_never_refresh(self, never_refresh: bool = True) -> None:
        """Use cached data whenever it exists, regardless of age."""
        self._never_refresh = never_refresh

    @classmethod
    def read_csv(cls, source: CsvInput) -> pd.DataFrame:
        """Read a CSV file or buffer with the source's read options."""
        return pd.read_csv(source, **cls.csv_read_options)

    @classmethod
    def read_csv_text(cls, text: str) -> pd.DataFrame:
        """Read CSV content held in memory, e.g. an HTTP response body."""
        return cls.read_csv(io.StringIO(text))

    def cache_file(self, key: str, ext: str) -> Path:
        return self.cache_path / f"{key}.{ext}"

    def _stale_reason(self, path: Path, max_age_days: Optional[int]) -> Optional[str]:
        """Why the cached file cannot be used, or None when it can."""
        if self._force_refresh:
            return "force refresh"
        if not path.exists():
            return "missing"
        if self._never_refresh or max_age_days is None:
            return None
        age = datetime.now() - datetime.fromtimestamp(path.stat().st_mtime)
        return "expired" if age.days > max_age_days else None

    def _write(self, path: Path, data: Any) -> None:
        if path.suffix == '.json':
            path.write_text(json.dumps(data))
        else:
            frame = data if isinstance(data, pd.DataFrame) else pd.DataFrame(data)
            frame.to_csv(path, index=False)

    def _read(self, path: Path) -> Any:
        if path.suffix == '.json':
            return json.loads(path.read_text())
        return self.read_csv(path)

    def get_data(self, key: str, ext: str, max_age_days: Optional[int] = None) -> Any:
        """
        Get data from cache or fetch it if not available.

        Args:
            key: Data key, matching a fetch_{key} method
            ext: File extension, 'json' or 'csv'
            max_age_days: Maximum age of cache in days (None for no limit)

        Raises:
            ValueError: If ext is not a supported format
            NotImplementedError: If the fetch method doesn't exist
        """
        if ext not in ('json', 'csv'):
            raise ValueError(f"Unsupported file extension: {ext}")
        path = self.cache_file(key, ext)
        reason = self._stale_reason(path, max_age_days)
        if reason is None:
            logger.info(f"{path.name} retrieved from cache {self.source_name}")
            return self._read(path)

        fetch = getattr(self, f"fetch_{key}", None)
        if fetch is None:
            raise NotImplementedError(
                f"{self.__class__.__name__} has no fetch_{key}() method for key '{key}'"
            )
        data = fetch()
        self._write(path, data)
        logger.info(f"{path.name} [{reason}] fetched for {self.source_name}")
        return data
