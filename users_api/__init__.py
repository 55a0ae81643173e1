"""Users API Package — CRUD pipeline for the user resource.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
