from __future__ import annotations

"""Artifact bundle.

CONTRACT
- Inputs: gatherer output keyed as Manifest / ServiceWorker / StartUrl / URL
- Outputs (required):
  - AuditArtifacts; manifest is None when the page links no manifest
- Invariants:
  - A serialized manifest ({raw, manifestUrl, documentUrl}) is run through
    parse_manifest, so malformed manifest text is never a load error
- Failure:
  - Raises ValueError on a malformed bundle (collaborator contract violation)
  - Raises FileNotFoundError when the dump is missing
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..manifest.parser import parse_manifest
from ..manifest.types import Manifest
from .schemas import ServiceWorkerArtifact, StartUrlArtifact, UrlArtifact


@dataclass(frozen=True)
class AuditArtifacts:
    """Artifact bundle handed to the installability audit."""
    manifest: Manifest | None
    service_worker: ServiceWorkerArtifact
    start_url: StartUrlArtifact
    url: UrlArtifact

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditArtifacts:
        if not isinstance(data, dict):
            raise ValueError("Artifact bundle must be a JSON object")
        missing = [k for k in ("ServiceWorker", "StartUrl", "URL") if k not in data]
        if missing:
            raise ValueError(f"Artifact bundle is missing: {', '.join(missing)}")

        manifest = None
        raw_manifest = data.get("Manifest")
        if raw_manifest is not None:
            try:
                manifest = parse_manifest(
                    raw_manifest["raw"], raw_manifest["manifestUrl"], raw_manifest["documentUrl"]
                )
            except (KeyError, TypeError) as exc:
                raise ValueError(
                    "Manifest artifact must have raw, manifestUrl and documentUrl"
                ) from exc

        try:
            return cls(
                manifest=manifest,
                service_worker=ServiceWorkerArtifact.model_validate(data["ServiceWorker"]),
                start_url=StartUrlArtifact.model_validate(data["StartUrl"]),
                url=UrlArtifact.model_validate(data["URL"]),
            )
        except ValidationError as exc:
            raise ValueError(f"Invalid artifact bundle: {exc}") from exc


def load_artifacts(path: Path) -> AuditArtifacts:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Artifact bundle {path} is not valid JSON: {exc}") from exc
    return AuditArtifacts.from_dict(data)
