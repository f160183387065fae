from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

import numpy as np
import pandas as pd

from core import records as rec
from core.charts import bar_chart
from core.filters import QuotationFilters

PRICE_BUCKETS = [
    ("0-10K", -np.inf, 10_000),
    ("10K-50K", 10_000, 50_000),
    ("50K-100K", 50_000, 100_000),
    ("100K-500K", 100_000, 500_000),
    ("500K+", 500_000, np.inf),
]
PRICE_BUCKET_LABELS = [label for label, _, _ in PRICE_BUCKETS]


def _numeric(records: Sequence[Dict[str, str]], field: str) -> pd.Series:
    values = [rec.parse_number(r.get(field)) for r in records]
    return pd.to_numeric(pd.Series(values, dtype=object), errors="coerce").dropna()


def get_statistics(records: Sequence[Dict[str, str]]) -> Dict[str, Any]:
    """Summary figures; numeric aggregates only use prices that parse."""
    prices = _numeric(records, rec.Q_UNIT_PRICE)
    totals = _numeric(records, rec.Q_TOTAL_PRICE)
    providers = {r.get(rec.Q_PROVIDER, "").strip() for r in records if not rec.is_placeholder(r.get(rec.Q_PROVIDER))}
    has_prices = not prices.empty
    return {
        "total_items": len(records),
        "total_providers": len(providers),
        "avg_price": float(prices.mean()) if has_prices else 0.0,
        "total_value": float(totals.sum()) if not totals.empty else 0.0,
        "max_price": float(prices.max()) if has_prices else 0.0,
        "min_price": float(prices.min()) if has_prices else 0.0,
    }


def get_top_n(records: Sequence[Dict[str, str]], field: str, n: int = 5) -> List[Dict[str, Any]]:
    values = pd.Series([(r.get(field) or "").strip() for r in records], dtype=object)
    values = values[~values.map(rec.is_placeholder).astype(bool)]
    if values.empty or n <= 0:
        return []
    counts = values.groupby(values, sort=False).size().sort_values(ascending=False, kind="stable")
    return [{"name": str(name), "count": int(count)} for name, count in counts.head(n).items()]


def get_price_histogram(records: Sequence[Dict[str, str]]) -> Dict[str, int]:
    prices = _numeric(records, rec.Q_UNIT_PRICE).astype(float)
    edges = [low for _, low, _ in PRICE_BUCKETS] + [np.inf]
    buckets = pd.cut(prices, bins=edges, labels=PRICE_BUCKET_LABELS, right=False)
    counts = buckets.value_counts(sort=False)
    return {label: int(counts.get(label, 0)) for label in PRICE_BUCKET_LABELS}


def compute_quotations(filters: QuotationFilters, ctx: Dict[str, Any], *, top_n: int = 5) -> Dict[str, Any]:
    filtered: List[Dict[str, str]] = ctx.get("filtered", [])
    all_records: List[Dict[str, str]] = ctx.get("records", [])

    top_providers = get_top_n(filtered, rec.Q_PROVIDER, top_n)
    top_brands = get_top_n(filtered, rec.Q_BRAND, top_n)
    price_ranges = get_price_histogram(filtered)

    charts: Dict[str, Any] = {}
    if filtered:
        charts["price_ranges"] = bar_chart(
            [{"range": k, "count": v} for k, v in price_ranges.items()],
            "range",
            "count",
            title="Rango de precio",
            sort=PRICE_BUCKET_LABELS,
        )
        if top_providers:
            charts["top_providers"] = bar_chart(top_providers, "name", "count", title="Proveedor")

    load = ctx.get("load")
    sort = ctx.get("sort")
    return {
        "filters": asdict(filters),
        "sort": asdict(sort) if sort is not None else None,
        "source": load.summary() if load is not None else None,
        "total": len(all_records),
        "count": len(filtered),
        "records": filtered,
        "statistics": get_statistics(filtered),
        "top_providers": top_providers,
        "top_brands": top_brands,
        "price_ranges": price_ranges,
        "options": ctx.get("options", {}),
        "charts": charts,
    }
