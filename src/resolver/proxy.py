"""Upstream proxy configuration from request parameters."""

from __future__ import annotations

from typing import Optional

from ..errors import ClientInputError
from .browser_models import ProxyDescriptor

PROXY_SCHEMES = ("http", "https", "socks4", "socks5")


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def build_proxy_config(
    host: Optional[str],
    port: Optional[str | int],
    scheme: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[ProxyDescriptor]:
    """Build a ProxyDescriptor, or None when proxy mode is not requested.

    Proxy mode needs both host and port. Credentials are kept only as a pair.
    Raises ClientInputError for a syntactically invalid host, port or scheme.
    """
    host = _clean(host)
    port_raw = _clean(str(port) if port is not None else "")
    if not host or not port_raw:
        return None

    if any(ch.isspace() for ch in host) or "/" in host or "@" in host:
        raise ClientInputError(f"Invalid proxy host: {host!r}")

    try:
        port_num = int(port_raw)
    except ValueError:
        raise ClientInputError(f"Invalid proxy port: {port_raw!r}")
    if not 1 <= port_num <= 65535:
        raise ClientInputError(f"Proxy port out of range: {port_num}")

    scheme = _clean(scheme).lower() or "http"
    if scheme not in PROXY_SCHEMES:
        raise ClientInputError(f"Unsupported proxy scheme: {scheme!r}")

    username = _clean(username)
    password = password or ""
    if not (username and password):
        username, password = "", ""

    return ProxyDescriptor(
        host=host,
        port=port_num,
        scheme=scheme,
        username=username or None,
        password=password or None,
    )
