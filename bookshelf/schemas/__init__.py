"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary (types, required fields)
    - Content rules (blank title/author) live in services/, not here

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
"""
