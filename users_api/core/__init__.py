"""Core Layer — domain values, contracts and error taxonomy. No IO, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - Repository contracts are Protocols; implementations live in infrastructure/
"""
