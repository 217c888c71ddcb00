from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional
from urllib.parse import unquote


def build_url(base_url: str, path: str) -> str:
    """Join base URL and API path without doubling or dropping slashes."""
    if path.startswith(("http://", "https://")):
        return path
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


def clean_params(params: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Drop None / "" values so they never reach the query string."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None and v != ""}


_FILENAME_STAR = re.compile(r"filename\*\s*=\s*(?:UTF-8'')?([^;]+)", re.IGNORECASE)
_FILENAME = re.compile(r'filename\s*=\s*"?([^";]+)"?', re.IGNORECASE)


def filename_from_disposition(header: Optional[str], default: str) -> str:
    """Filename from a Content-Disposition header (RFC 5987 form preferred)."""
    if not header:
        return default
    m = _FILENAME_STAR.search(header)
    if m:
        return unquote(m.group(1).strip().strip('"'))
    m = _FILENAME.search(header)
    if m:
        return m.group(1).strip()
    return default
