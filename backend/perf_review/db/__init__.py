"""Database Metadata — SQLAlchemy declarative Base shared by models and migrations.

Invariants:
    - All sessions are async (AsyncSession, see infrastructure/database.py)

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
