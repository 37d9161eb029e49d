from __future__ import annotations

"""Artifact and verdict schemas.

CONTRACT
- Inputs: Pydantic models (camelCase keys accepted, as emitted by the gatherer)
- Outputs:
  - Validated runtime artifacts (ServiceWorker, StartUrl, URL)
  - AuditResult, dumped with camelCase keys via model_dump(by_alias=True)
- Invariants:
  - Runtime artifacts are immutable once validated
  - Service worker status is one of the five lifecycle states
- Failure:
  - Raises ValidationError on shape mismatch
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ServiceWorkerStatus = Literal["installing", "installed", "activating", "activated", "redundant"]


class ServiceWorkerVersion(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    status: ServiceWorkerStatus
    script_url: str = Field(alias="scriptURL")


class ServiceWorkerArtifact(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    versions: tuple[ServiceWorkerVersion, ...] = ()

    def has_activated(self) -> bool:
        return any(v.status == "activated" for v in self.versions)


class StartUrlArtifact(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    status_code: int = Field(alias="statusCode")
    debug_string: str | None = Field(default=None, alias="debugString")


class UrlArtifact(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    final_url: str = Field(alias="finalUrl")


class AuditDetailsItem(BaseModel):
    failures: list[str] = Field(default_factory=list)


class AuditDetails(BaseModel):
    items: list[AuditDetailsItem] = Field(default_factory=list)


class AuditResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    raw_value: bool = Field(alias="rawValue")
    explanation: str | None = None
    warnings: list[str] = Field(default_factory=list)
    details: AuditDetails = Field(default_factory=AuditDetails)

    @property
    def failures(self) -> list[str]:
        if not self.details.items:
            return []
        return self.details.items[0].failures
