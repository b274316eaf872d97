"""Database Schema — declarative Base and Alembic migrations.

Invariants:
    - Base.metadata describes the same schema the migrations create
    - Migrations are applied on startup by db/migrate.py
"""
