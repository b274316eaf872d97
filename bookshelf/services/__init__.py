"""Services — validation and orchestration between the API and storage.

Invariants:
    - Services know nothing about HTTP (no status codes, no Request objects)
"""
