"""Plugin Payload Schemas — per-kind shape of datasource plugin.spec.

Invariants:
    - HTTP-backed plugins set exactly one of direct_url / proxy
    - Unknown keys are rejected (extra="forbid") so typos surface as 400s
    - scrape_interval is a duration string: digits followed by ms, s, m, h or d

Design Decisions:
    - pydantic models over a separate schema language: one validation engine
      for request bodies and plugin payloads
"""

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, model_validator


class HTTPProxy(BaseModel):
    """Server-side proxy: the config store forwards queries to url."""
    model_config = ConfigDict(extra="forbid")

    url: HttpUrl
    allowed_endpoints: list[str] = Field(default_factory=list)
    headers: dict[str, str] = Field(default_factory=dict)
    secret: str | None = None


class HTTPDatasourcePayload(BaseModel):
    """Common shape of datasources reached over HTTP."""
    model_config = ConfigDict(extra="forbid")

    direct_url: HttpUrl | None = None
    proxy: HTTPProxy | None = None

    @model_validator(mode="after")
    def exactly_one_access_mode(self):
        if (self.direct_url is None) == (self.proxy is None):
            raise ValueError("exactly one of direct_url or proxy must be set")
        return self


class PrometheusPayload(HTTPDatasourcePayload):
    scrape_interval: str | None = Field(None, pattern=r"^[0-9]+(ms|s|m|h|d)$")


class TempoPayload(HTTPDatasourcePayload):
    pass


class LokiPayload(HTTPDatasourcePayload):
    pass
