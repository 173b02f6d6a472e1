"""
Data providers for the two report sources.
Defines the provider contracts consumed by the orchestrator and file-backed implementations.
"""
import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Protocol

import pandas as pd


RawRecord = dict[str, Any]


class ProviderError(Exception):
    """Raised when a provider cannot deliver its records (transport, auth, unreadable file)."""


# ============================================================================
# Provider Contracts
# ============================================================================

class CollectionHistoryProvider(Protocol):
    async def fetch_all(self) -> list[RawRecord]:
        ...


class SalesDataProvider(Protocol):
    async def fetch_all(self) -> list[RawRecord]:
        ...


# ============================================================================
# In-memory Provider
# ============================================================================

class StaticRecordProvider:
    """Serves a fixed list of records. Useful for embedding and tests."""

    def __init__(self, records: list[RawRecord] | None = None):
        self.records = list(records or [])

    async def fetch_all(self) -> list[RawRecord]:
        return list(self.records)


# ============================================================================
# File-backed Providers
# ============================================================================

class _FileRecordProvider(ABC):
    """Base for providers that read a whole export file on every fetch."""

    def __init__(self, path: str | Path, name: str = "records"):
        self.path = Path(path)
        self.name = name

    async def fetch_all(self) -> list[RawRecord]:
        if not self.path.exists():
            raise ProviderError(f"{self.name} file not found: {self.path}")
        try:
            df = await asyncio.to_thread(self._read_frame)
        except pd.errors.EmptyDataError:
            # An export with no rows and no header is an empty result, not a failure
            print(f"[data_loader] {self.path} is empty, no {self.name} loaded")
            return []
        except (OSError, ValueError) as exc:
            raise ProviderError(f"Could not read {self.name} from {self.path}: {exc}") from exc

        # Strip whitespace from column names
        df.columns = [str(c).strip() for c in df.columns]
        records = df.to_dict(orient="records")
        print(f"[data_loader] Loaded {len(records):,} {self.name} from {self.path}")
        return records

    @abstractmethod
    def _read_frame(self) -> pd.DataFrame:
        ...


class CsvRecordProvider(_FileRecordProvider):
    """
    Reads records from a CSV export.
    Every value is kept as text and blanks stay empty strings; typing is the normalizer's job.
    """

    def _read_frame(self) -> pd.DataFrame:
        return pd.read_csv(
            self.path,
            dtype=str,
            keep_default_na=False,
            low_memory=False,
        )


class JsonRecordProvider(_FileRecordProvider):
    """Reads records from a JSON array of objects."""

    def _read_frame(self) -> pd.DataFrame:
        # Date-looking columns must stay raw; the normalizer parses them
        return pd.read_json(
            self.path,
            orient="records",
            dtype=False,
            convert_dates=False,
            keep_default_dates=False,
        )


def build_provider(path: str | Path, name: str = "records") -> _FileRecordProvider:
    """Pick a file provider from the file extension (.json, otherwise CSV)."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return JsonRecordProvider(path, name=name)
    return CsvRecordProvider(path, name=name)
