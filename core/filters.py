from __future__ import annotations

import logging
import re
from dataclasses import dataclass, fields
from typing import ClassVar, Dict, List, Optional, Sequence, Tuple, Type, Union

import pandas as pd

from core import records as rec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuotationFilters:
    search: Optional[str] = None
    proveedor: Optional[str] = None
    marca: Optional[str] = None
    tipo: Optional[str] = None
    tipo_item: Optional[str] = None
    modelo: Optional[str] = None
    diametro: Optional[str] = None
    material: Optional[str] = None
    year: Optional[str] = None
    price_range: Optional[str] = None

    kind: ClassVar[str] = rec.QUOTATIONS
    date_field: ClassVar[str] = rec.Q_DATETIME
    categorical: ClassVar[Dict[str, str]] = {
        "proveedor": rec.Q_PROVIDER,
        "marca": rec.Q_BRAND,
        "tipo": rec.Q_TYPE,
        "tipo_item": rec.Q_ITEM_TYPE,
        "modelo": rec.Q_MODEL,
        "diametro": rec.Q_DIAMETER,
        "material": rec.Q_MATERIAL,
    }


@dataclass(frozen=True)
class EventFilters:
    search: Optional[str] = None
    tipo: Optional[str] = None
    ubicacion: Optional[str] = None
    responsable: Optional[str] = None
    estado: Optional[str] = None
    prioridad: Optional[str] = None
    year: Optional[str] = None
    fecha_desde: Optional[str] = None
    fecha_hasta: Optional[str] = None

    kind: ClassVar[str] = rec.EVENTS
    date_field: ClassVar[str] = rec.E_DATE
    categorical: ClassVar[Dict[str, str]] = {
        "tipo": rec.E_TYPE,
        "ubicacion": rec.E_LOCATION,
        "responsable": rec.E_RESPONSIBLE,
        "estado": rec.E_STATUS,
        "prioridad": rec.E_PRIORITY,
    }


Filters = Union[QuotationFilters, EventFilters]

FILTER_CLASSES: Dict[str, Type[Filters]] = {rec.QUOTATIONS: QuotationFilters, rec.EVENTS: EventFilters}

_PRICE_RANGE_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*(?:-\s*(\d+(?:\.\d+)?)|(\+))\s*$")


def filters_class(kind: str) -> Type[Filters]:
    try:
        return FILTER_CLASSES[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None


def parse_price_range(value: str) -> Tuple[float, Optional[float]]:
    """``"10000-50000"`` -> (10000.0, 50000.0); ``"500000+"`` -> (500000.0, None)."""
    match = _PRICE_RANGE_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid price range: {value!r}")
    low = float(match.group(1))
    high = float(match.group(2)) if match.group(2) is not None else None
    if high is not None and high < low:
        raise ValueError(f"Invalid price range: {value!r}")
    return low, high


def _clean(value: object) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def normalize_filters(raw: Optional[dict], kind: str) -> Filters:
    cls = filters_class(kind)
    raw = raw or {}
    values = {f.name: _clean(raw.get(f.name)) for f in fields(cls)}

    price_range = values.get("price_range")
    if price_range is not None:
        try:
            parse_price_range(price_range)
        except ValueError:
            logger.warning("Ignoring malformed price range %r", price_range)
            values["price_range"] = None

    for key in ("fecha_desde", "fecha_hasta"):
        if values.get(key) is not None and rec.parse_iso_date(values[key]) is None:
            logger.warning("Ignoring malformed date bound %s=%r", key, values[key])
            values[key] = None

    return cls(**values)


def _column(df: pd.DataFrame, field: str) -> pd.Series:
    if field not in df.columns:
        return pd.Series("", index=df.index, dtype=object)
    return df[field]


def apply_filters(records: Sequence[Dict[str, str]], criteria: Filters) -> List[Dict[str, str]]:
    if not records:
        return []

    df = pd.DataFrame.from_records(list(records)).fillna("").astype(str)
    mask = pd.Series(True, index=df.index)

    if criteria.search:
        q = criteria.search.lower()
        haystack = pd.Series(
            [" ".join(str(v) for v in r.values()) for r in records], index=df.index, dtype=object
        ).str.lower()
        mask &= haystack.str.contains(q, regex=False, na=False)

    for name, field in criteria.categorical.items():
        wanted = getattr(criteria, name)
        if wanted:
            mask &= _column(df, field) == wanted

    if criteria.year:
        mask &= _column(df, criteria.date_field).map(rec.extract_year) == criteria.year

    price_range = getattr(criteria, "price_range", None)
    if price_range:
        try:
            low, high = parse_price_range(price_range)
        except ValueError:
            logger.warning("Ignoring malformed price range %r", price_range)
        else:
            prices = pd.to_numeric(_column(df, rec.Q_UNIT_PRICE).map(rec.parse_number), errors="coerce")
            mask &= prices.between(low, high) if high is not None else prices >= low

    desde = rec.parse_iso_date(getattr(criteria, "fecha_desde", None))
    hasta = rec.parse_iso_date(getattr(criteria, "fecha_hasta", None))
    if desde or hasta:
        dates = _column(df, criteria.date_field).map(rec.parse_day_month_year)
        in_range = dates.map(
            lambda d: d is not None and (desde is None or d >= desde) and (hasta is None or d <= hasta)
        )
        mask &= in_range.astype(bool)

    return [records[i] for i in df.index[mask.to_numpy()]]
