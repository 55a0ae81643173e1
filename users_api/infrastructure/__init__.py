"""Infrastructure — database session management, the SQLAlchemy user repository, logging setup."""
