"""Datasource ORM — one row per (project, name).

Invariants:
    - Composite primary key (project, name): the database enforces name
      uniqueness within a project atomically
    - project is "" (never NULL) for global datasources so the key stays total
    - spec column stores the full DatasourceSpec as JSON; plugin_kind and
      is_default are denormalized copies for indexing

Design Decisions:
    - JSON column for spec: plugin payloads vary per kind
    - No uniqueness constraint on is_default: the default rule is enforced by
      the service at validation time only
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from configstore.core.resources import Datasource, DatasourceSpec, Metadata
from configstore.db.base import Base


class DatasourceRow(Base):
    """Persisted datasource."""
    __tablename__ = "datasources"

    project: Mapped[str] = mapped_column(String(75), primary_key=True, default="")
    name: Mapped[str] = mapped_column(String(75), primary_key=True)
    plugin_kind: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    spec: Mapped[dict] = mapped_column(JSON, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @classmethod
    def from_resource(cls, entity: Datasource) -> "DatasourceRow":
        metadata = entity.metadata
        row = cls(
            project=metadata.project,
            name=metadata.name,
            plugin_kind=entity.spec.kind,
            is_default=entity.spec.default,
            spec=entity.spec.model_dump(mode="json"),
            version=metadata.version,
        )
        # unset timestamps fall back to the column defaults
        if metadata.created_at is not None:
            row.created_at = metadata.created_at
        if metadata.updated_at is not None:
            row.updated_at = metadata.updated_at
        return row

    def to_resource(self) -> Datasource:
        return Datasource(
            metadata=Metadata(
                name=self.name,
                project=self.project,
                created_at=_as_utc(self.created_at),
                updated_at=_as_utc(self.updated_at),
                version=self.version,
            ),
            spec=DatasourceSpec.model_validate(self.spec),
        )


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
