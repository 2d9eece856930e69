"""Core (UI-agnostic) risk dashboard logic.

This package contains:
- data loading (CSV -> typed pandas frame)
- filter criteria and the filter engine
- aggregation and profile functions (chart-ready series)
- KPI and chart compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
