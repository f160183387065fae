from __future__ import annotations

import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from core import records as rec

ASC = "asc"
DESC = "desc"


@dataclass(frozen=True)
class SortOptions:
    field: str
    order: str = DESC


DEFAULT_SORT: Dict[str, SortOptions] = {
    rec.QUOTATIONS: SortOptions(field="price", order=DESC),
    rec.EVENTS: SortOptions(field="fecha", order=DESC),
}


def _first_present(record: Dict[str, str], *fields: str) -> str:
    for field in fields:
        if field in record:
            return record.get(field) or ""
    return ""


def locale_key(value: object) -> Tuple[str, str]:
    """Accent- and case-insensitive key, raw text as tie-breaker."""
    s = str(value or "")
    decomposed = unicodedata.normalize("NFKD", s)
    folded = "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()
    return folded, s


def _missing_first(value: Optional[Any]) -> Tuple[int, Any]:
    return (0, 0) if value is None else (1, value)


def _price_key(record: Dict[str, str]) -> Tuple[int, Any]:
    return _missing_first(rec.parse_number(record.get(rec.Q_UNIT_PRICE)))


def _date_key(record: Dict[str, str]) -> Tuple[int, Any]:
    return _missing_first(rec.parse_day_month_year(_first_present(record, rec.E_DATE, rec.Q_DATETIME)))


SORT_KEYS: Dict[str, Callable[[Dict[str, str]], Any]] = {
    "price": _price_key,
    "alphabetical": lambda r: locale_key(_first_present(r, rec.Q_DESCRIPTION, rec.E_PROBLEM)),
    "fecha": _date_key,
    "prioridad": lambda r: rec.priority_rank(r.get(rec.E_PRIORITY)),
    "estado": lambda r: locale_key(r.get(rec.E_STATUS)),
    "tipo": lambda r: locale_key(r.get(rec.E_TYPE)),
}

SORT_FIELDS: Dict[str, Tuple[str, ...]] = {
    rec.QUOTATIONS: ("price", "alphabetical", "fecha"),
    rec.EVENTS: ("fecha", "prioridad", "estado", "tipo", "alphabetical"),
}


def normalize_sort(raw: Optional[dict], kind: str) -> SortOptions:
    if kind not in DEFAULT_SORT:
        raise ValueError(f"Unknown record kind: {kind!r}")
    raw = raw or {}
    default = DEFAULT_SORT[kind]
    field = (raw.get("field") or default.field).strip()
    order = (raw.get("order") or default.order).strip().lower()
    if field not in SORT_FIELDS[kind]:
        raise ValueError(f"Unsupported sort field for {kind}: {field!r}")
    if order not in (ASC, DESC):
        raise ValueError(f"Unsupported sort order: {order!r}")
    return SortOptions(field=field, order=order)


def sort_records(records: Sequence[Dict[str, str]], field: str, order: str = ASC) -> List[Dict[str, str]]:
    key = SORT_KEYS.get(field)
    if key is None:
        raise ValueError(f"Unsupported sort field: {field!r}")
    if order not in (ASC, DESC):
        raise ValueError(f"Unsupported sort order: {order!r}")
    sign = -1 if order == DESC else 1

    def compare(a: Dict[str, str], b: Dict[str, str]) -> int:
        ka, kb = key(a), key(b)
        return sign * ((ka > kb) - (ka < kb))

    # Ties keep input order for both asc and desc.
    return sorted(records, key=cmp_to_key(compare))
