"""Core — domain errors shared by every layer.

Invariants:
    - core/ imports nothing from infrastructure/, services/ or api/
"""
