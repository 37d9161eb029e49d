from __future__ import annotations

"""Web app manifest parser.

CONTRACT
- Inputs: raw manifest text, manifest URL, document URL
- Outputs (required):
  - Manifest value tree (see manifest.types)
- Invariants:
  - Never raises; parse problems become debug strings
  - Each member is extracted independently of its siblings
  - start_url and icon src are resolved against the manifest URL
- Failure:
  - Manifest.value is None when the text is not a JSON object
"""

import json
from typing import Any

from loguru import logger

from ..util.urls import resolve_url, same_origin
from .types import FieldValue, IconDescriptor, Manifest, ManifestFields

_MISSING = object()


def _parse_string(raw: Any, member: str) -> FieldValue[str]:
    if raw is _MISSING:
        return FieldValue()
    if not isinstance(raw, str):
        return FieldValue(raw=raw, debug_string="ERROR: expected a string.")
    value = raw.strip()
    if not value:
        return FieldValue(raw=raw, debug_string=f"ERROR: {member} is an empty string.")
    return FieldValue(raw=raw, value=value)


def _parse_start_url(raw: Any, manifest_url: str, document_url: str) -> FieldValue[str]:
    if raw is _MISSING:
        return FieldValue()
    if not isinstance(raw, str):
        return FieldValue(raw=raw, debug_string="ERROR: expected a string.")
    if raw == "":
        return FieldValue(raw=raw, debug_string="ERROR: start_url string empty")

    start_url = resolve_url(raw, manifest_url)
    if start_url is None:
        return FieldValue(
            raw=raw, debug_string=f"ERROR: invalid start_url relative to {manifest_url}"
        )
    if not same_origin(start_url, document_url):
        return FieldValue(
            raw=raw, debug_string="ERROR: start_url must be same-origin as document"
        )
    return FieldValue(raw=raw, value=start_url)


def _parse_icon(raw: Any, manifest_url: str) -> IconDescriptor | None:
    if not isinstance(raw, dict):
        return None
    src = raw.get("src")
    if not isinstance(src, str) or not src.strip():
        return None
    resolved = resolve_url(src, manifest_url)
    if resolved is None:
        return None

    sizes = raw.get("sizes")
    size_tokens = frozenset(sizes.split()) if isinstance(sizes, str) else frozenset()
    mime = raw.get("type")
    density = raw.get("density", 1.0)
    # bool is an int subclass; reject it explicitly
    if isinstance(density, bool) or not isinstance(density, (int, float)) or density <= 0:
        density = 1.0
    return IconDescriptor(
        src=resolved,
        sizes=size_tokens,
        type=mime.strip() if isinstance(mime, str) and mime.strip() else None,
        density=float(density),
    )


def _parse_icons(raw: Any, manifest_url: str) -> FieldValue[tuple[IconDescriptor, ...]]:
    if raw is _MISSING:
        return FieldValue()
    if not isinstance(raw, list):
        return FieldValue(
            raw=raw, debug_string="ERROR: 'icons' expected to be an array but is not."
        )

    icons: list[IconDescriptor] = []
    for entry in raw:
        icon = _parse_icon(entry, manifest_url)
        if icon is not None:
            icons.append(icon)

    dropped = len(raw) - len(icons)
    debug_string = None
    if dropped:
        debug_string = f"WARNING: ignored {dropped} icon(s) without a usable 'src'."
    return FieldValue(raw=raw, value=tuple(icons), debug_string=debug_string)


def parse_manifest(raw_text: str, manifest_url: str, document_url: str) -> Manifest:
    try:
        data = json.loads(raw_text)
    except (ValueError, TypeError, RecursionError) as e:
        logger.debug(f"Manifest at {manifest_url} is not valid JSON: {e}")
        return Manifest(raw=raw_text, debug_string=f"ERROR: file isn't valid JSON: {e}")

    if not isinstance(data, dict):
        logger.debug(f"Manifest at {manifest_url} is {type(data).__name__}, not an object")
        return Manifest(raw=raw_text, debug_string="ERROR: manifest is not a JSON object")

    fields = ManifestFields(
        start_url=_parse_start_url(data.get("start_url", _MISSING), manifest_url, document_url),
        short_name=_parse_string(data.get("short_name", _MISSING), "short_name"),
        name=_parse_string(data.get("name", _MISSING), "name"),
        icons=_parse_icons(data.get("icons", _MISSING), manifest_url),
    )
    logger.debug(f"Parsed manifest at {manifest_url}")
    return Manifest(raw=raw_text, value=fields)
