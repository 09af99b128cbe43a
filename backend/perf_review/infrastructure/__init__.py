"""Infrastructure Layer — persistence adapters and cross-cutting concerns.

Invariants:
    - Repositories translate between ORM rows and core domain objects
    - SQLAlchemy errors are mapped to core DatabaseError, never leaked raw
"""
