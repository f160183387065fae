"""Core (UI-agnostic) dashboard logic.

This package contains:
- CSV parsing/serialization and the published-sheet loader (with sample fallback)
- record normalization for quotations and maintenance events
- filter normalization, faceted filter options and sorting
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
