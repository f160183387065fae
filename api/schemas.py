from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class QuotationFiltersModel(BaseModel):
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


class EventFiltersModel(BaseModel):
    search: Optional[str] = None
    tipo: Optional[str] = None
    ubicacion: Optional[str] = None
    responsable: Optional[str] = None
    estado: Optional[str] = None
    prioridad: Optional[str] = None
    year: Optional[str] = None
    fecha_desde: Optional[str] = None
    fecha_hasta: Optional[str] = None


class SortModel(BaseModel):
    field: Optional[str] = None
    order: Optional[Literal["asc", "desc"]] = None


class QuotationQueryModel(BaseModel):
    filters: QuotationFiltersModel = Field(default_factory=QuotationFiltersModel)
    sort: SortModel = Field(default_factory=SortModel)
    top_n: int = Field(default=5, ge=1, le=50)


class EventQueryModel(BaseModel):
    filters: EventFiltersModel = Field(default_factory=EventFiltersModel)
    sort: SortModel = Field(default_factory=SortModel)


class SourceResponse(BaseModel):
    kind: str
    source: str
    is_sample: bool
    error: Optional[str] = None
    count: int
    loaded_at: str
