"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routers registered explicitly in main.py (no auto-discovery)
    - The only layer that turns errors into HTTP status codes
"""
