"""Database metadata — declarative Base shared by models/ and alembic/."""
