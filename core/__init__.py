"""Core (UI-agnostic) court decision statistics logic.

This package contains:
- lookup table loading (JSON -> frozen records) and city/judge lookup
- percentage normalization, city aggregates and judge sort policies
- ring chart geometry and fill animation state
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict) and SVG rendering
"""
