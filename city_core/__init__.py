"""Core (UI-agnostic) city explorer logic.

This package contains:
- data loading (bundled CSV -> immutable CityDataset)
- query normalization and the filter/sort engine
- aggregate summaries and page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
- dashboard UI state transitions
"""
