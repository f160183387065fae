from __future__ import annotations

from typing import Any, Dict, List

import altair as alt
import pandas as pd

alt.data_transformers.disable_max_rows()


def to_vega_spec(chart: alt.Chart) -> Dict[str, Any]:
    """Convert an Altair chart into a Vega-Lite spec dict (JSON-serializable)."""
    return chart.to_dict()


def bar_chart(rows: List[Dict[str, Any]], category: str, value: str, *, title: str, sort: Any = "-y") -> Dict[str, Any]:
    df = pd.DataFrame(rows, columns=[category, value])
    chart = (
        alt.Chart(df)
        .mark_bar()
        .encode(
            x=alt.X(f"{category}:N", title=title, sort=sort),
            y=alt.Y(f"{value}:Q", title="Cantidad"),
            tooltip=[alt.Tooltip(f"{category}:N"), alt.Tooltip(f"{value}:Q", format=",")],
        )
    )
    return to_vega_spec(chart)
