"""Infrastructure — database engine, structured logging, notification delivery.

Invariants:
    - Everything here does IO; nothing here decides business rules

Design Decisions:
    - asyncpg driver for PostgreSQL (native async, no thread pool overhead)
"""
