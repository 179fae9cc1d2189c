"""Database Metadata — declarative Base shared by ORM models and Alembic.

Invariants:
    - Importing db/ never opens a connection
"""
