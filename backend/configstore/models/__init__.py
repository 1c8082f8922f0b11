"""ORM Models — SQLAlchemy declarative models for persisted resources.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows convert to and from core resources; nothing outside infrastructure
      handles rows directly

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all
"""

from configstore.models.datasource import DatasourceRow  # noqa: F401
