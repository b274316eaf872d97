"""Infrastructure Layer — connection pool, book queries, logging setup.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Storage failures leave this layer only as StorageError subclasses
"""
