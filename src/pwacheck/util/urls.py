from __future__ import annotations

"""URL helpers.

CONTRACT
- Inputs: URL strings (possibly relative)
- Outputs:
  - resolve_url() returns an absolute URL string or None
  - same_origin() compares scheme/host/port
- Invariants:
  - Default ports (http 80, https 443) compare equal to an omitted port
- Failure:
  - Never raises; unparsable input yields None / False
"""

from urllib.parse import urljoin, urlparse

_DEFAULT_PORTS = {"http": 80, "https": 443}


def resolve_url(raw: str, base: str) -> str | None:
    try:
        resolved = urljoin(base, raw.strip())
        parsed = urlparse(resolved)
        parsed.port  # raises ValueError on a malformed port
    except ValueError:
        return None
    if not parsed.scheme:
        return None
    if parsed.scheme in _DEFAULT_PORTS and not parsed.hostname:
        return None
    return resolved


def _origin(url: str) -> tuple[str, str, int | None] | None:
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError:
        return None
    scheme = parsed.scheme.lower()
    if port is None:
        port = _DEFAULT_PORTS.get(scheme)
    return scheme, (parsed.hostname or "").lower(), port


def same_origin(a: str, b: str) -> bool:
    oa, ob = _origin(a), _origin(b)
    return oa is not None and oa == ob
