"""Database Infrastructure — SQLAlchemy declarative Base for the event log tables.

Invariants:
    - All ORM models inherit from Base (db/base.py)

Design Decisions:
    - asyncpg driver for PostgreSQL in production; aiosqlite in tests
"""
