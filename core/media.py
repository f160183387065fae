from __future__ import annotations

import re
from typing import Dict, List, Optional
from urllib.parse import quote

from core import records as rec

_DRIVE_ID_PATTERNS = (
    re.compile(r"/file/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"/d/([a-zA-Z0-9_-]+)"),
    re.compile(r"[?&]id=([a-zA-Z0-9_-]+)"),
)


def convert_google_drive_url(url: str) -> str:
    """Rewrite a Google Drive share link to its direct-view endpoint."""
    if not url or "drive.google.com" not in url:
        return url
    for pattern in _DRIVE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return f"https://drive.google.com/uc?export=view&id={match.group(1)}"
    return url


def media_type(url: str) -> str:
    # The sheet stores no MIME metadata; everything is shown as an image.
    return "image"


def _media_items(event: Dict[str, str], columns, title: str) -> List[Dict[str, str]]:
    items: List[Dict[str, str]] = []
    for idx, column in enumerate(columns, start=1):
        url = (event.get(column) or "").strip()
        if rec.is_placeholder(url):
            continue
        items.append({"url": convert_google_drive_url(url), "type": media_type(url), "title": f"{title} {idx}"})
    return items


def process_event_media(event: Dict[str, str]) -> Dict[str, List[Dict[str, str]]]:
    return {
        "event_media": _media_items(event, rec.E_EVENT_MEDIA, "Registro del Problema"),
        "solution_media": _media_items(event, rec.E_SOLUTION_MEDIA, "Registro de la Solución"),
    }


def quotation_image_url(quotation: Dict[str, str]) -> Optional[str]:
    link = quotation.get(rec.Q_IMAGE_LINK)
    if rec.is_placeholder(link):
        return None
    return convert_google_drive_url(str(link).strip())


def pdf_preview_url(link: Optional[str]) -> Optional[str]:
    if rec.is_placeholder(link):
        return None
    encoded = quote(str(link).strip(), safe="!*'()")
    return f"https://docs.google.com/viewer?url={encoded}&embedded=true"
