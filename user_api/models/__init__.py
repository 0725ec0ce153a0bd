"""ORM Models: SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata is populated by a single import
      (alembic env.py and create_all on startup)
"""

from user_api.models.user import User  # noqa: F401
