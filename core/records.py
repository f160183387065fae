from __future__ import annotations

import math
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

QUOTATIONS = "quotations"
EVENTS = "events"

# ---------------- Quotation columns ----------------
Q_DATETIME = "Fecha y hora"
Q_DESCRIPTION = "Descripción del Producto - Resumida"
Q_PROVIDER = "Nombre del Proveedor"
Q_BRAND = "Marca del Componente"
Q_MODEL = "Modelo del Componente"
Q_TYPE = "Tipo de Componente"
Q_MATERIAL = "Material"
Q_DIAMETER = "Diámetro"
Q_UNIT_PRICE = "Precio Unitario Neto en CLP"
Q_QUANTITY = "Cantidad"
Q_TOTAL_PRICE = "Precio Total Neto en CLP"
Q_LEAD_TIME = "Plazo de entrega"
Q_IMAGE_LINK = "Link Imagen"
Q_PDF_LINK = "Link archivo PDF"
Q_FILENAME = "Nombre del archivo"
Q_ITEM_TYPE = "Tipo de item"

QUOTATION_FIELDS: Tuple[str, ...] = (
    Q_DATETIME,
    Q_DESCRIPTION,
    Q_PROVIDER,
    Q_BRAND,
    Q_MODEL,
    Q_TYPE,
    Q_MATERIAL,
    Q_DIAMETER,
    Q_UNIT_PRICE,
    Q_QUANTITY,
    Q_TOTAL_PRICE,
    Q_LEAD_TIME,
    Q_IMAGE_LINK,
    Q_PDF_LINK,
    Q_FILENAME,
    Q_ITEM_TYPE,
)

ITEM_TYPE_COMPONENT = "Componente"
ITEM_TYPE_SERVICE = "Servicio"

# ---------------- Maintenance event columns ----------------
E_DATE = "Fecha"
E_TIME = "Hora"
E_TYPE = "Tipo de evento"
E_LOCATION = "Ubicación"
E_PROBLEM = "Descripción del problema"
E_RESPONSIBLE = "Responsable"
E_STATUS = "Estado"
E_PRIORITY = "Prioridad"
E_ESTIMATED_HOURS = "Tiempo estimado (horas)"
E_ACTUAL_HOURS = "Tiempo real (horas)"
E_SOLUTION = "Descripción de la solución"
E_MATERIALS = "Materiales utilizados"
E_ESTIMATED_COST = "Costo estimado"
E_ACTUAL_COST = "Costo real"
E_OBSERVATIONS = "Observaciones"
E_EVENT_MEDIA = tuple(f"Registro evento {i}" for i in range(1, 4))
E_SOLUTION_MEDIA = tuple(f"Registro solución {i}" for i in range(1, 4))

EVENT_FIELDS: Tuple[str, ...] = (
    E_DATE,
    E_TIME,
    E_TYPE,
    E_LOCATION,
    E_PROBLEM,
    E_RESPONSIBLE,
    E_STATUS,
    E_PRIORITY,
    E_ESTIMATED_HOURS,
    E_ACTUAL_HOURS,
    E_SOLUTION,
    E_MATERIALS,
    E_ESTIMATED_COST,
    E_ACTUAL_COST,
    E_OBSERVATIONS,
) + E_EVENT_MEDIA + E_SOLUTION_MEDIA

RECORD_FIELDS: Dict[str, Tuple[str, ...]] = {QUOTATIONS: QUOTATION_FIELDS, EVENTS: EVENT_FIELDS}

# ---------------- Enumerations ----------------
STATUS_PENDING = "Pendiente"
STATUS_IN_PROGRESS = "En Progreso"
STATUS_COMPLETED = "Completado"
STATUS_VALUES: Tuple[str, ...] = (STATUS_PENDING, STATUS_IN_PROGRESS, STATUS_COMPLETED)

PRIORITY_RANK: Dict[str, int] = {"Baja": 1, "Media": 2, "Alta": 3, "Crítica": 4}

PLACEHOLDER_VALUES = frozenset({"No aplica", "No especificado"})


def fields_for(kind: str) -> Tuple[str, ...]:
    try:
        return RECORD_FIELDS[kind]
    except KeyError:
        raise ValueError(f"Unknown record kind: {kind!r}") from None


def normalize_record(raw: Mapping[str, object], kind: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for field in fields_for(kind):
        value = raw.get(field)
        out[field] = "" if value is None else str(value).strip()
    return out


def normalize_records(rows: Iterable[Mapping[str, object]], kind: str) -> List[Dict[str, str]]:
    fields_for(kind)
    return [normalize_record(row, kind) for row in rows]


# ---------------- Value helpers ----------------
def is_placeholder(value: object) -> bool:
    if value is None:
        return True
    s = str(value).strip()
    return not s or s in PLACEHOLDER_VALUES


def display_value(value: object, default: str = "No especificado") -> str:
    return default if is_placeholder(value) else str(value).strip()


def parse_number(value: object) -> Optional[float]:
    if value is None:
        return None
    try:
        out = float(str(value).strip())
    except ValueError:
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def parse_day_month_year(value: object) -> Optional[date]:
    """Parse ``DD-MM-YYYY`` with an optional trailing `` HH:MM``."""
    if value is None:
        return None
    match = re.match(r"^\s*(\d{1,2})-(\d{1,2})-(\d{4})(?:\s|$)", str(value))
    if not match:
        return None
    day, month, year = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_iso_date(value: object) -> Optional[date]:
    if value is None:
        return None
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def extract_year(value: object) -> str:
    if value is None:
        return ""
    parts = str(value).split("-")
    if len(parts) < 3:
        return ""
    return parts[2].split(" ")[0].strip()


def priority_rank(value: object) -> int:
    return PRIORITY_RANK.get(str(value or "").strip(), 0)


def format_clp(amount: object) -> str:
    num = parse_number(amount)
    if num is None:
        return "N/A"
    rounded = int(Decimal(str(num)).quantize(Decimal(1), rounding=ROUND_HALF_UP))
    digits = f"{abs(rounded):,}".replace(",", ".")
    return f"-${digits}" if rounded < 0 else f"${digits}"


def format_date(value: object) -> str:
    if is_placeholder(value):
        return "N/A"
    return str(value).strip().split(" ")[0]
