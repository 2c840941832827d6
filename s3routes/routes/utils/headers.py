"""Response header overrides for object retrieval requests."""

from typing import Dict, Mapping, Optional

# Query parameter -> response header it overrides
OVERRIDE_HEADERS = {
    'response-content-type': 'Content-Type',
    'response-content-language': 'Content-Language',
    'response-expires': 'Expires',
    'response-cache-control': 'Cache-Control',
    'response-content-disposition': 'Content-Disposition',
    'response-content-encoding': 'Content-Encoding',
}


def merge_overrides(override_params: Optional[Mapping[str, str]],
                    base_headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Apply client header overrides on top of the computed headers.

    Args:
        override_params (Mapping): Request parameters; only the keys in
            OVERRIDE_HEADERS are honoured, and only when truthy
        base_headers (Mapping): Headers computed for the object

    Returns:
        dict: New header set; neither argument is modified
    """
    headers = dict(base_headers or {})
    override_params = override_params or {}
    for param, header in OVERRIDE_HEADERS.items():
        value = override_params.get(param)
        if value:
            headers[header] = value
    return headers


def extract_override_params(args: Mapping[str, str]) -> Dict[str, str]:
    """Pick the recognised override parameters out of request query args."""
    return {param: args[param] for param in OVERRIDE_HEADERS if args.get(param)}


def find_invalid_header(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """Name of the first header whose value would split the header block."""
    for name, value in (headers or {}).items():
        if value and ('\r' in str(value) or '\n' in str(value)):
            return name
    return None
