"""Database Infrastructure — SQLAlchemy declarative base and column types.

Invariants:
    - Single async engine per process (initialized via init_db)
    - All datetimes persisted and returned as timezone-aware UTC

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
