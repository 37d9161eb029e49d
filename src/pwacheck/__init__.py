"""pwacheck package.

Simple API for audit orchestration layers:

    import pwacheck

    manifest = pwacheck.parse_manifest(text, manifest_url, document_url)
    tree = pwacheck.describe_manifest(text, manifest_url, document_url)

    # Check install eligibility from a gatherer dump
    result = pwacheck.audit_installability("artifacts.json")
"""

import asyncio
from pathlib import Path
from typing import Optional

from .artifacts.bundle import AuditArtifacts, load_artifacts
from .artifacts.schemas import AuditResult
from .audits.install_banner import InstallabilityAuditor
from .config import AuditConfig, configure_logging, load_audit_config
from .manifest.parser import parse_manifest
from .manifest.types import FieldValue, IconDescriptor, Manifest, ManifestFields


def audit_installability(
    artifacts: AuditArtifacts | str | Path,
    *,
    config_file: Optional[str | Path] = None,
) -> dict:
    """Run the install banner audit. Returns the verdict as a dict.

    Args:
        artifacts: An AuditArtifacts bundle, or a path to a gatherer JSON dump
        config_file: Optional path to audit.yaml

    Returns:
        dict with keys: rawValue, explanation, warnings, details
    """
    cfg = AuditConfig()
    if config_file:
        cfg = load_audit_config(Path(config_file))
        configure_logging(cfg.log_level)
    if not isinstance(artifacts, AuditArtifacts):
        artifacts = load_artifacts(Path(artifacts))

    result = asyncio.run(InstallabilityAuditor(config=cfg).audit(artifacts))
    return result.model_dump(by_alias=True)


def describe_manifest(raw_text: str, manifest_url: str, document_url: str) -> dict:
    """Parse a manifest and return its value tree as a dict.

    Returns:
        dict with keys: raw, value (per-member raw/value/debugString or None), debugString
    """
    return parse_manifest(raw_text, manifest_url, document_url).to_dict()


__all__ = [
    "audit_installability",
    "describe_manifest",
    "parse_manifest",
    "configure_logging",
    "load_artifacts",
    "load_audit_config",
    "AuditArtifacts",
    "AuditConfig",
    "AuditResult",
    "FieldValue",
    "IconDescriptor",
    "InstallabilityAuditor",
    "Manifest",
    "ManifestFields",
]
