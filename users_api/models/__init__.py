"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is populated for create_all and alembic
"""

from users_api.models.user import UserModel  # noqa: F401
