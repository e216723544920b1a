"""Client IP and country resolution from proxy and edge headers.

Cloudflare and Vercel inject the visitor's address and country into the
request; generic reverse proxies only forward the address. Header values are
trusted as-is and never format-checked.
"""

from collections.abc import Mapping
from typing import NamedTuple

from starlette.datastructures import Headers

UNKNOWN_IP = "unknown"
UNKNOWN_COUNTRY = "Unknown"
LOCAL_COUNTRY = "Local"

LOOPBACK_IPS = {"::1", "127.0.0.1"}

# Highest priority first
IP_HEADERS: list[str] = ["cf-connecting-ip", "x-forwarded-for", "x-real-ip"]
COUNTRY_HEADERS: list[str] = ["cf-ipcountry", "x-vercel-ip-country"]


class ClientLocation(NamedTuple):
    ip: str
    country: str


def _lookup(headers: Mapping[str, str]) -> Mapping[str, str]:
    """Return a mapping that can be queried with lower-case header names."""
    if isinstance(headers, Headers):
        return headers
    return {key.lower(): value for key, value in headers.items()}


def resolve_ip(headers: Mapping[str, str]) -> str:
    """Return the client IP from the first non-empty IP header.

    ``x-forwarded-for`` is a comma-separated hop list; the left-most entry is
    the originating client.
    """
    lookup = _lookup(headers)
    for name in IP_HEADERS:
        value = lookup.get(name)
        if not value:
            continue
        if name == "x-forwarded-for":
            value = value.split(",")[0].strip()
            if not value:
                continue
        return value
    return UNKNOWN_IP


def is_loopback(ip: str) -> bool:
    return ip in LOOPBACK_IPS


def resolve_country(headers: Mapping[str, str], ip: str) -> str:
    """Return the client country code, or ``Local`` for loopback addresses."""
    if is_loopback(ip):
        return LOCAL_COUNTRY

    lookup = _lookup(headers)
    for name in COUNTRY_HEADERS:
        value = lookup.get(name)
        if value:
            return value
    return UNKNOWN_COUNTRY


def resolve_client_location(headers: Mapping[str, str]) -> ClientLocation:
    """Resolve ``(ip, country)`` for a request's headers.

    Missing headers degrade to the ``unknown`` / ``Unknown`` sentinels.
    """
    ip = resolve_ip(headers)
    return ClientLocation(ip=ip, country=resolve_country(headers, ip))
