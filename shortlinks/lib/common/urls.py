"""Display URL helpers: which host to advertise and how to join the code."""

from typing import Dict, Mapping, Optional

_FORWARDED = {
    "forwarded_proto": "x-forwarded-proto",
    "forwarded_host": "x-forwarded-host",
    "forwarded_for": "x-forwarded-for",
}


def extract_forwarded_headers(headers: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Pick the X-Forwarded-* values out of request headers (case-insensitive)."""
    lowered = {k.lower(): v for k, v in headers.items()}
    return {key: lowered.get(header) for key, header in _FORWARDED.items()}


def build_base_url(
    headers: Mapping[str, str],
    configured_base_url: str,
    trust_forwarded: bool = False,
) -> str:
    """Base URL for display links, without trailing slash.

    Proxy headers only override the configured value when the deployment
    trusts them and both scheme and host are present.
    """
    if trust_forwarded:
        forwarded = extract_forwarded_headers(headers)
        proto, host = forwarded["forwarded_proto"], forwarded["forwarded_host"]
        if proto and host:
            return f"{proto}://{host}"

    return configured_base_url.rstrip("/")


def build_short_url(short_code: str, base_url: str, path_prefix: str = "") -> str:
    """Join base URL, optional path prefix and short code.

    >>> build_short_url("aB3xY9", "https://sho.rt/", "/s/")
    'https://sho.rt/s/aB3xY9'
    """
    parts = [base_url.rstrip("/")]
    if path_prefix.strip("/"):
        parts.append(path_prefix.strip("/"))
    parts.append(short_code)
    return "/".join(parts)
