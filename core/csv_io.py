from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    """Raised when CSV text has no usable header."""


def parse_csv_line(line: str) -> List[str]:
    """Split one CSV line on commas outside double quotes.

    Quote characters only toggle the quoted state and are dropped from the
    field; every field is trimmed.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
    fields.append("".join(current).strip())
    return fields


def parse_csv(text: str) -> List[Dict[str, str]]:
    lines = [line for line in (text or "").splitlines() if line.strip()]
    if not lines:
        raise ParseError("CSV text has no lines")

    headers = parse_csv_line(lines[0])
    if not any(headers):
        raise ParseError("CSV header is empty")

    rows: List[Dict[str, str]] = []
    skipped = 0
    for line in lines[1:]:
        values = parse_csv_line(line)
        if len(values) < len(headers):
            skipped += 1
            continue
        rows.append({header: values[idx] for idx, header in enumerate(headers)})

    if skipped:
        logger.debug("Skipped %d CSV rows with fewer than %d fields", skipped, len(headers))
    return rows


def serialize_csv(records: Sequence[Dict[str, str]], fieldnames: Optional[Iterable[str]] = None) -> str:
    columns = list(fieldnames) if fieldnames is not None else (list(records[0].keys()) if records else [])
    if not columns:
        return ""
    df = pd.DataFrame.from_records(list(records), columns=columns)
    df = df.fillna("").astype(str)
    return df.to_csv(index=False, lineterminator="\n")
