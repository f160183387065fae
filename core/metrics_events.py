from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Sequence

import pandas as pd

from core import records as rec
from core.charts import bar_chart
from core.filters import EventFilters
from core.media import process_event_media


def _value_counts(records: Sequence[Dict[str, str]], field: str, order: Sequence[str]) -> Dict[str, int]:
    """Counts per value; known values first in ``order``, unknown values after in first-seen order."""
    values = pd.Series([(r.get(field) or "").strip() for r in records], dtype=object)
    counts = values.groupby(values, sort=False).size() if not values.empty else pd.Series(dtype=int)
    out = {name: int(counts.get(name, 0)) for name in order}
    for name, count in counts.items():
        if name not in out and not rec.is_placeholder(name):
            out[str(name)] = int(count)
    return out


def count_by_status(records: Sequence[Dict[str, str]]) -> Dict[str, int]:
    return _value_counts(records, rec.E_STATUS, rec.STATUS_VALUES)


def count_by_priority(records: Sequence[Dict[str, str]]) -> Dict[str, int]:
    ranked = sorted(rec.PRIORITY_RANK, key=rec.PRIORITY_RANK.get)
    return _value_counts(records, rec.E_PRIORITY, ranked)


def get_event_statistics(records: Sequence[Dict[str, str]]) -> Dict[str, Any]:
    by_status = count_by_status(records)

    completed_hours = [
        hours
        for hours in (
            rec.parse_number(r.get(rec.E_ACTUAL_HOURS)) for r in records if r.get(rec.E_STATUS) == rec.STATUS_COMPLETED
        )
        if hours is not None and hours > 0
    ]
    avg_completion = float(pd.Series(completed_hours, dtype=float).mean()) if completed_hours else 0.0

    # Actual cost wins unless it is missing or zero.
    total_cost = 0.0
    for r in records:
        cost = rec.parse_number(r.get(rec.E_ACTUAL_COST)) or rec.parse_number(r.get(rec.E_ESTIMATED_COST)) or 0.0
        total_cost += cost

    return {
        "total_events": len(records),
        "completed_events": by_status.get(rec.STATUS_COMPLETED, 0),
        "pending_events": by_status.get(rec.STATUS_PENDING, 0),
        "in_progress_events": by_status.get(rec.STATUS_IN_PROGRESS, 0),
        "avg_completion_time": avg_completion,
        "total_cost": total_cost,
    }


def compute_events(filters: EventFilters, ctx: Dict[str, Any]) -> Dict[str, Any]:
    filtered: List[Dict[str, str]] = ctx.get("filtered", [])
    all_records: List[Dict[str, str]] = ctx.get("records", [])

    by_status = count_by_status(filtered)
    by_priority = count_by_priority(filtered)

    charts: Dict[str, Any] = {}
    if filtered:
        charts["status"] = bar_chart(
            [{"estado": k, "count": v} for k, v in by_status.items()],
            "estado",
            "count",
            title="Estado",
            sort=list(by_status.keys()),
        )
        charts["priority"] = bar_chart(
            [{"prioridad": k, "count": v} for k, v in by_priority.items()],
            "prioridad",
            "count",
            title="Prioridad",
            sort=list(by_priority.keys()),
        )

    load = ctx.get("load")
    sort = ctx.get("sort")
    return {
        "filters": asdict(filters),
        "sort": asdict(sort) if sort is not None else None,
        "source": load.summary() if load is not None else None,
        "total": len(all_records),
        "count": len(filtered),
        "records": [dict(r, **process_event_media(r)) for r in filtered],
        "statistics": get_event_statistics(filtered),
        "by_status": by_status,
        "by_priority": by_priority,
        "options": ctx.get("options", {}),
        "charts": charts,
    }
