from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import requests

from core.csv_io import ParseError, parse_csv
from core.facets import derive_all_options
from core.filters import Filters, apply_filters, normalize_filters
from core.records import EVENTS, QUOTATIONS, fields_for, normalize_records
from core.sample_data import sample_records
from core.sorting import SortOptions, normalize_sort, sort_records

logger = logging.getLogger(__name__)

EVENTS_CSV_URL_DEFAULT = (
    "https://docs.google.com/spreadsheets/d/e/2PACX-1vSPxGv63oDQ-OTM-K5R1rJote0aPAzfcP2OgjtBg1rIelemz_M6UcQpfNzeOyW7lFvcCPAmof7eKuYl"
    "/pub?output=csv"
)

QUOTATIONS_CSV_URL = os.environ.get("QUOTATIONS_CSV_URL") or None
EVENTS_CSV_URL = os.environ.get("EVENTS_CSV_URL") or EVENTS_CSV_URL_DEFAULT
FETCH_TIMEOUT_SECONDS = float(os.environ.get("FETCH_TIMEOUT_SECONDS") or 15)

SOURCE_REMOTE = "remote"
SOURCE_SAMPLE = "sample"


class FetchError(RuntimeError):
    """Network or HTTP failure while downloading a published sheet."""


def csv_url_for(kind: str) -> Optional[str]:
    if kind == QUOTATIONS:
        return QUOTATIONS_CSV_URL
    if kind == EVENTS:
        return EVENTS_CSV_URL
    raise ValueError(f"Unknown record kind: {kind!r}")


def fetch_csv(url: Optional[str], timeout: float = FETCH_TIMEOUT_SECONDS) -> str:
    if not url:
        raise FetchError("No CSV endpoint configured")
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise FetchError(f"Request to {url} failed: {exc}") from exc
    if not response.ok:
        raise FetchError(f"Could not load CSV: {response.status_code} {response.reason}")
    if "charset" not in response.headers.get("Content-Type", "").lower():
        response.encoding = "utf-8"
    return response.text


@dataclass(frozen=True)
class LoadResult:
    kind: str
    records: List[Dict[str, str]]
    source: str
    error: Optional[str] = None
    loaded_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_sample(self) -> bool:
        return self.source == SOURCE_SAMPLE

    def summary(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "source": self.source,
            "is_sample": self.is_sample,
            "error": self.error,
            "count": len(self.records),
            "loaded_at": self.loaded_at.isoformat(),
        }


def load(kind: str, url: Optional[str] = None, timeout: Optional[float] = None) -> LoadResult:
    """Fetch, parse and normalize one sheet; fall back to sample data on failure."""
    fields_for(kind)
    url = url if url is not None else csv_url_for(kind)
    timeout = FETCH_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        csv_text = fetch_csv(url, timeout=timeout)
        logger.info("Loaded %s sheet: %d characters, parsing CSV", kind, len(csv_text))
        rows = parse_csv(csv_text)
        if not rows:
            raise ParseError("CSV has a header but no complete data rows")
        records = normalize_records(rows, kind)
    except (FetchError, ParseError) as exc:
        logger.warning("Falling back to sample %s data: %s", kind, exc)
        return LoadResult(kind=kind, records=sample_records(kind), source=SOURCE_SAMPLE, error=str(exc))
    logger.info("Parsed %d %s records", len(records), kind)
    return LoadResult(kind=kind, records=records, source=SOURCE_REMOTE)


class DataStore:
    """Per-process holder of the latest load for each record kind.

    Every refresh takes a generation token; a load that finishes after a
    newer refresh has started is discarded instead of overwriting it.
    """

    def __init__(self, loader: Callable[[str], LoadResult] = load):
        self._loader = loader
        self._lock = threading.Lock()
        self._generation: Dict[str, int] = {}
        self._results: Dict[str, LoadResult] = {}

    def get(self, kind: str) -> LoadResult:
        with self._lock:
            current = self._results.get(kind)
        if current is not None:
            return current
        return self.refresh(kind)

    def refresh(self, kind: str) -> LoadResult:
        fields_for(kind)
        with self._lock:
            token = self._generation.get(kind, 0) + 1
            self._generation[kind] = token
        result = self._loader(kind)
        with self._lock:
            if self._generation.get(kind) != token:
                logger.info("Discarding stale %s load (generation %d)", kind, token)
                return self._results.get(kind, result)
            self._results[kind] = result
        return result

    def clear(self) -> None:
        with self._lock:
            self._results.clear()
            self._generation.clear()


_STORE = DataStore()


def get_store() -> DataStore:
    return _STORE


# ---------------- Public API ----------------
def load_dashboard_data(kind: str) -> LoadResult:
    return _STORE.get(kind)


def refresh_dashboard_data(kind: str) -> LoadResult:
    return _STORE.refresh(kind)


def prepare_context(
    kind: str,
    filters: dict | Filters | None,
    sort: dict | SortOptions | None,
    result: LoadResult,
) -> Dict[str, object]:
    filt = filters if not isinstance(filters, (dict, type(None))) else normalize_filters(filters, kind)
    order = sort if isinstance(sort, SortOptions) else normalize_sort(sort, kind)
    if filt.kind != kind:
        raise ValueError(f"Filters for {filt.kind} cannot be applied to {kind}")

    all_records = result.records
    filtered = apply_filters(all_records, filt)
    return {
        "kind": kind,
        "filters": filt,
        "sort": order,
        "load": result,
        "records": all_records,
        "filtered": sort_records(filtered, order.field, order.order),
        "options": derive_all_options(all_records, filt),
    }
