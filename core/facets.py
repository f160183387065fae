"""Faceted filter options.

Each dimension's options come from the records matching every *other* active
criterion, so picking a value in one dropdown narrows the others without
hiding the dimension's own selection. Free-text search is never excluded.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Sequence

from core import records as rec
from core.filters import Filters, apply_filters


def facet_dimensions(criteria: Filters) -> List[str]:
    return list(criteria.categorical.keys()) + ["year"]


def _extractor(criteria: Filters, dimension: str) -> Callable[[Dict[str, str]], str]:
    if dimension == "year":
        return lambda r: rec.extract_year(r.get(criteria.date_field, ""))
    field = criteria.categorical.get(dimension)
    if field is None:
        raise ValueError(f"Unknown filter dimension for {criteria.kind}: {dimension!r}")
    return lambda r: r.get(field, "")


def derive_options(records: Sequence[Dict[str, str]], dimension: str, criteria: Filters) -> List[str]:
    extract = _extractor(criteria, dimension)
    reachable = apply_filters(records, replace(criteria, **{dimension: None}))
    values = {str(extract(r)).strip() for r in reachable}
    return sorted(v for v in values if not rec.is_placeholder(v))


def derive_all_options(records: Sequence[Dict[str, str]], criteria: Filters) -> Dict[str, List[str]]:
    return {dim: derive_options(records, dim, criteria) for dim in facet_dimensions(criteria)}
