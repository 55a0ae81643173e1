"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate at system boundary and convert to core request values
    - Separate from models: schemas are API contracts, models are persistence
"""
