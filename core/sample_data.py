"""Embedded datasets served when the published sheet cannot be loaded."""

from __future__ import annotations

from typing import Dict, List

from core.records import EVENTS, QUOTATIONS, normalize_records

_SAMPLE_QUOTATIONS = [
    {
        "Fecha y hora": "12-03-2025 10:15",
        "Descripción del Producto - Resumida": "Válvula de bola 2 pulgadas acero inoxidable",
        "Nombre del Proveedor": "Comercial Valvulas Andes",
        "Marca del Componente": "Genebre",
        "Modelo del Componente": "2025-2",
        "Tipo de Componente": "Válvula",
        "Material": "Acero inoxidable",
        "Diámetro": "2\"",
        "Precio Unitario Neto en CLP": "85000",
        "Cantidad": "4",
        "Precio Total Neto en CLP": "340000",
        "Plazo de entrega": "5 días hábiles",
        "Link Imagen": "",
        "Link archivo PDF": "",
        "Nombre del archivo": "cotizacion_valvulas_andes.pdf",
        "Tipo de item": "Componente",
    },
    {
        "Fecha y hora": "28-11-2024 16:40",
        "Descripción del Producto - Resumida": "Rodamiento rígido de bolas 6205",
        "Nombre del Proveedor": "Rodamientos del Sur",
        "Marca del Componente": "SKF",
        "Modelo del Componente": "6205-2RS",
        "Tipo de Componente": "Rodamiento",
        "Material": "Acero",
        "Diámetro": "52 mm",
        "Precio Unitario Neto en CLP": "7500",
        "Cantidad": "20",
        "Precio Total Neto en CLP": "150000",
        "Plazo de entrega": "Inmediato",
        "Link Imagen": "",
        "Link archivo PDF": "",
        "Nombre del archivo": "",
        "Tipo de item": "Componente",
    },
    {
        "Fecha y hora": "03-02-2025 09:05",
        "Descripción del Producto - Resumida": "Mantención preventiva bomba centrífuga",
        "Nombre del Proveedor": "Servicios Industriales Norte",
        "Marca del Componente": "No aplica",
        "Modelo del Componente": "No aplica",
        "Tipo de Componente": "No aplica",
        "Material": "No aplica",
        "Diámetro": "No aplica",
        "Precio Unitario Neto en CLP": "650000",
        "Cantidad": "1",
        "Precio Total Neto en CLP": "650000",
        "Plazo de entrega": "10 días hábiles",
        "Link Imagen": "",
        "Link archivo PDF": "",
        "Nombre del archivo": "",
        "Tipo de item": "Servicio",
    },
    {
        "Fecha y hora": "19-03-2025 11:30",
        "Descripción del Producto - Resumida": "Manguera hidráulica alta presión 1/2 pulgada",
        "Nombre del Proveedor": "Comercial Valvulas Andes",
        "Marca del Componente": "Parker",
        "Modelo del Componente": "451TC-8",
        "Tipo de Componente": "Manguera",
        "Material": "Caucho sintético",
        "Diámetro": "1/2\"",
        "Precio Unitario Neto en CLP": "32000",
        "Cantidad": "10",
        "Precio Total Neto en CLP": "320000",
        "Plazo de entrega": "3 días hábiles",
        "Link Imagen": "",
        "Link archivo PDF": "",
        "Nombre del archivo": "",
        "Tipo de item": "Componente",
    },
]

_SAMPLE_EVENTS = [
    {
        "Fecha": "15-01-2025",
        "Hora": "09:30",
        "Tipo de evento": "Tarjeta de Mantenimiento",
        "Ubicación": "Planta Principal - Línea 1",
        "Descripción del problema": "Fuga de aceite en motor principal de la línea de producción",
        "Responsable": "Juan Pérez",
        "Estado": "Completado",
        "Prioridad": "Alta",
        "Tiempo estimado (horas)": "4",
        "Tiempo real (horas)": "3.5",
        "Descripción de la solución": "Reemplazo de sello principal y limpieza del área afectada",
        "Materiales utilizados": "Sello de motor, aceite hidráulico, trapos industriales",
        "Costo estimado": "150000",
        "Costo real": "135000",
        "Observaciones": "Trabajo completado sin incidentes. Se recomienda inspección mensual.",
        "Registro evento 1": "https://images.pexels.com/photos/162553/keys-workshop-mechanic-tools-162553.jpeg",
        "Registro evento 2": "https://images.pexels.com/photos/257736/pexels-photo-257736.jpeg",
        "Registro solución 1": "https://images.pexels.com/photos/1108101/pexels-photo-1108101.jpeg",
        "Registro solución 2": "https://images.pexels.com/photos/159298/gears-cogs-machine-machinery-159298.jpeg",
    },
    {
        "Fecha": "16-01-2025",
        "Hora": "14:15",
        "Tipo de evento": "Tarjeta de Seguridad",
        "Ubicación": "Almacén - Zona B",
        "Descripción del problema": "Estantería con daño estructural detectado durante inspección",
        "Responsable": "María González",
        "Estado": "En Progreso",
        "Prioridad": "Crítica",
        "Tiempo estimado (horas)": "8",
        "Tiempo real (horas)": "0",
        "Descripción de la solución": "Refuerzo estructural y reemplazo de elementos dañados",
        "Costo estimado": "300000",
        "Costo real": "0",
        "Observaciones": "Área acordonada por seguridad. Trabajo programado para mañana.",
        "Registro evento 1": "https://images.pexels.com/photos/1108572/pexels-photo-1108572.jpeg",
    },
    {
        "Fecha": "17-01-2025",
        "Hora": "11:00",
        "Tipo de evento": "Orden de Trabajo",
        "Ubicación": "Oficinas - Piso 2",
        "Descripción del problema": "Sistema de aire acondicionado no funciona correctamente",
        "Responsable": "Carlos Rodríguez",
        "Estado": "Pendiente",
        "Prioridad": "Media",
        "Tiempo estimado (horas)": "6",
        "Tiempo real (horas)": "0",
        "Descripción de la solución": "Revisión y limpieza del sistema, reemplazo de filtros",
        "Costo estimado": "80000",
        "Costo real": "0",
        "Observaciones": "Programado para el próximo lunes",
        "Registro evento 1": "https://images.pexels.com/photos/416978/pexels-photo-416978.jpeg",
        "Registro evento 2": "https://images.pexels.com/photos/209251/pexels-photo-209251.jpeg",
        "Registro evento 3": "https://images.pexels.com/photos/1108099/pexels-photo-1108099.jpeg",
    },
]


def sample_records(kind: str) -> List[Dict[str, str]]:
    """Fresh normalized copies of the embedded dataset for ``kind``."""
    source = _SAMPLE_QUOTATIONS if kind == QUOTATIONS else _SAMPLE_EVENTS if kind == EVENTS else None
    if source is None:
        raise ValueError(f"Unknown record kind: {kind!r}")
    return normalize_records(source, kind)
