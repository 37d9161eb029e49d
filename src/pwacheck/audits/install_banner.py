from __future__ import annotations

"""Web app install banner audit.

CONTRACT
- Inputs: AuditArtifacts (Manifest, ServiceWorker, StartUrl, URL)
- Outputs (required):
  - AuditResult (rawValue, explanation, warnings, details.items[0].failures)
- Invariants:
  - rawValue is True iff no failures were recorded
  - Missing / unparsable manifests short-circuit with an explanation only
  - All manifest and runtime checks run, in fixed order:
    start_url, short_name, name, icons, service worker, start_url cached
  - A StartUrl debug string is always surfaced as a warning
- Failure:
  - Never raises for well-formed artifacts
"""

from dataclasses import dataclass, field
from typing import Callable

from loguru import logger

from ..artifacts.bundle import AuditArtifacts
from ..artifacts.schemas import AuditDetails, AuditDetailsItem, AuditResult
from ..config import AuditConfig
from ..manifest.types import ManifestFields

NO_MANIFEST = "No manifest was fetched."
PARSE_FAILURE = "Manifest failed to parse as valid JSON"

ManifestCheck = tuple[Callable[[ManifestFields], bool], str]

MANIFEST_CHECKS: list[ManifestCheck] = [
    (lambda m: bool(m.start_url.value), "Manifest does not have start_url"),
    (lambda m: bool(m.short_name.value), "Manifest does not have short_name"),
    (lambda m: bool(m.name.value), "Manifest does not have name"),
    (lambda m: bool(m.icons.value), "Manifest does not have icons"),
]

NO_SERVICE_WORKER = "Site does not register a service worker"
START_URL_NOT_CACHED = "Manifest start_url is not cached by a service worker"


def explain(failures: list[str]) -> str | None:
    if not failures:
        return None
    if len(failures) == 1:
        return f"Failure: {failures[0]}."
    return "Failures: " + ",\n".join(failures) + "."


@dataclass
class InstallabilityAuditor:
    name: str = "webapp-install-banner"
    description: str = "User can be prompted to Install the Web App"
    required_artifacts: tuple[str, ...] = ("URL", "ServiceWorker", "Manifest", "StartUrl")
    config: AuditConfig = field(default_factory=AuditConfig)

    def runtime_failures(self, artifacts: AuditArtifacts) -> list[str]:
        failures: list[str] = []
        has_sw = artifacts.service_worker.has_activated()
        if not has_sw:
            failures.append(NO_SERVICE_WORKER)
        # An uncached start_url is implied by a missing worker; only report it on its own.
        if artifacts.start_url.status_code != 200 and (
            has_sw or self.config.independent_runtime_checks
        ):
            failures.append(START_URL_NOT_CACHED)
        return failures

    def evaluate(self, artifacts: AuditArtifacts) -> AuditResult:
        warnings: list[str] = []
        if artifacts.start_url.debug_string:
            warnings.append(artifacts.start_url.debug_string)

        manifest = artifacts.manifest
        if manifest is None:
            logger.info(f"{self.name}: FAIL (no manifest)")
            return AuditResult(raw_value=False, explanation=NO_MANIFEST, warnings=warnings)
        if manifest.value is None:
            explanation = PARSE_FAILURE
            if manifest.debug_string:
                explanation += f": {manifest.debug_string}"
            logger.info(f"{self.name}: FAIL (unparsable manifest)")
            return AuditResult(raw_value=False, explanation=explanation, warnings=warnings)

        failures = [msg for passes, msg in MANIFEST_CHECKS if not passes(manifest.value)]
        failures += self.runtime_failures(artifacts)
        for f in failures:
            logger.debug(f"{self.name}: {f}")

        ok = not failures
        logger.info(f"{self.name}: {'PASS' if ok else 'FAIL'} ({len(failures)} failures)")
        return AuditResult(
            raw_value=ok,
            explanation=explain(failures),
            warnings=warnings,
            details=AuditDetails(items=[AuditDetailsItem(failures=failures)]),
        )

    async def audit(self, artifacts: AuditArtifacts) -> AuditResult:
        return self.evaluate(artifacts)
