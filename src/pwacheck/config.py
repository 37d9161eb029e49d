from __future__ import annotations

"""Configuration models.

CONTRACT
- Inputs: YAML file path (audit.yaml) or dictionary data
- Outputs (required):
  - Validated AuditConfig
- Invariants:
  - Defaults reproduce the stock install-banner behaviour
  - log_level is a loguru level name
- Failure:
  - Raises ValueError on invalid schema
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class AuditConfig:
    # Report an uncached start_url even when no service worker is activated.
    independent_runtime_checks: bool = False
    log_level: str = "WARNING"


AUDIT_CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "independent_runtime_checks": {"type": "boolean"},
        "log_level": {"type": "string", "enum": LOG_LEVELS},
    },
    "additionalProperties": False,
}


def audit_config_from_dict(data: dict[str, Any]) -> AuditConfig:
    import jsonschema  # lazy import

    try:
        jsonschema.validate(instance=data, schema=AUDIT_CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Invalid audit config: {e.message}") from e

    return AuditConfig(
        independent_runtime_checks=bool(data.get("independent_runtime_checks", False)),
        log_level=str(data.get("log_level", "WARNING")),
    )


def load_audit_config(path: Path) -> AuditConfig:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid audit config: {e}") from e
    return audit_config_from_dict(data)


def configure_logging(level: str = "WARNING") -> None:
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
