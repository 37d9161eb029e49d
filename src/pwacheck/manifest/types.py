from __future__ import annotations

"""Manifest value tree.

CONTRACT
- Inputs: values produced by the manifest parser
- Outputs:
  - FieldValue, IconDescriptor, ManifestFields, Manifest (frozen)
- Invariants:
  - Manifest.value is None iff the raw text was not a JSON object
  - FieldValue.value is None whenever the member is absent or invalid
- Failure:
  - None (plain data)
"""

import re
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_SIZE_TOKEN_RE = re.compile(r"^([1-9][0-9]*)[xX]([1-9][0-9]*)$")


@dataclass(frozen=True)
class FieldValue(Generic[T]):
    raw: Any = None
    value: T | None = None
    debug_string: str | None = None

    def to_dict(self) -> dict[str, Any]:
        value: Any = self.value
        if isinstance(value, tuple):
            value = [v.to_dict() if hasattr(v, "to_dict") else v for v in value]
        return {"raw": self.raw, "value": value, "debugString": self.debug_string}


@dataclass(frozen=True)
class IconDescriptor:
    src: str
    sizes: frozenset[str] = frozenset()
    type: str | None = None
    density: float = 1.0

    def dimensions(self) -> list[tuple[int, int]]:
        """Parse "WxH" size tokens into (width, height) pairs, largest first."""
        dims = []
        for token in self.sizes:
            m = _SIZE_TOKEN_RE.match(token)
            if m:
                dims.append((int(m.group(1)), int(m.group(2))))
        return sorted(dims, reverse=True)

    def to_dict(self) -> dict[str, Any]:
        return {
            "src": self.src,
            "sizes": sorted(self.sizes),
            "type": self.type,
            "density": self.density,
        }


@dataclass(frozen=True)
class ManifestFields:
    start_url: FieldValue[str]
    short_name: FieldValue[str]
    name: FieldValue[str]
    icons: FieldValue[tuple[IconDescriptor, ...]]

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_url": self.start_url.to_dict(),
            "short_name": self.short_name.to_dict(),
            "name": self.name.to_dict(),
            "icons": self.icons.to_dict(),
        }


@dataclass(frozen=True)
class Manifest:
    raw: str
    value: ManifestFields | None = None
    debug_string: str | None = None

    @property
    def is_parse_failure(self) -> bool:
        return self.value is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "raw": self.raw,
            "value": self.value.to_dict() if self.value is not None else None,
            "debugString": self.debug_string,
        }
