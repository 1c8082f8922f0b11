"""Schema Registry — validates datasource plugin payloads and the default rule.

Invariants:
    - validate() raises SchemaValidationError, never returns an error value
    - Default uniqueness is checked first: it needs no schema lookup
    - In strict mode an unregistered plugin kind is rejected; otherwise its
      payload is accepted as opaque

Design Decisions:
    - Registry maps kind -> pydantic model: adding a plugin is one register() call
    - pydantic ValidationError converted to SchemaValidationError listing the
      failing field paths, so the API returns a 400 and not a 500
"""

import logging

from pydantic import BaseModel, ValidationError

from configstore.core.datasource_rules import find_conflicting_default
from configstore.core.errors import SchemaValidationError
from configstore.core.resources import Datasource
from configstore.schemas.plugins import LokiPayload, PrometheusPayload, TempoPayload

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Plugin-kind -> payload model lookup implementing DatasourceValidator."""

    def __init__(
        self, models: dict[str, type[BaseModel]] | None = None, strict: bool = True,
    ):
        self._models: dict[str, type[BaseModel]] = dict(models or {})
        self.strict = strict

    @classmethod
    def default(cls, strict: bool = True) -> "SchemaRegistry":
        """Registry preloaded with the built-in plugin kinds."""
        return cls(
            {
                "prometheus": PrometheusPayload,
                "tempo": TempoPayload,
                "loki": LokiPayload,
            },
            strict=strict,
        )

    def register(self, kind: str, model: type[BaseModel]) -> None:
        self._models[kind] = model

    @property
    def kinds(self) -> list[str]:
        return sorted(self._models)

    def validate(
        self, entity: Datasource, existing: list[Datasource] | None,
    ) -> None:
        if existing:
            self._check_default_uniqueness(entity, existing)
        self._check_plugin(entity)

    def _check_default_uniqueness(
        self, entity: Datasource, existing: list[Datasource],
    ) -> None:
        other = find_conflicting_default(entity, existing)
        if other is not None:
            raise SchemaValidationError(
                f"datasource '{entity.metadata.name}' cannot be the default of "
                f"project '{entity.metadata.project}': "
                f"'{other.metadata.name}' is already the default",
                fields=["spec.default"],
            )

    def _check_plugin(self, entity: Datasource) -> None:
        kind = entity.spec.kind
        model = self._models.get(kind)
        if model is None:
            if self.strict:
                raise SchemaValidationError(
                    f"unknown datasource plugin kind '{kind}'",
                    fields=["spec.plugin.kind"],
                )
            logger.debug(f"No schema registered for plugin kind {kind!r}, skipping")
            return
        try:
            model.model_validate(entity.spec.plugin.spec)
        except ValidationError as e:
            fields = [
                "spec.plugin.spec." + ".".join(str(loc) for loc in err["loc"])
                if err["loc"] else "spec.plugin.spec"
                for err in e.errors()
            ]
            raise SchemaValidationError(
                f"invalid '{kind}' plugin spec: "
                + "; ".join(err["msg"] for err in e.errors()),
                fields=fields,
            ) from e
