"""Database metadata — the declarative Base shared by models, Alembic and tests."""
