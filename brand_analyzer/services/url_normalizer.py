"""URL normalization and resolution for analyzed pages."""

import ipaddress
import re
from dataclasses import dataclass
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

from brand_analyzer.services.errors import InvalidURLError

_SCHEME_PREFIX = re.compile(r"^https?://", re.IGNORECASE)
_HOSTNAME = re.compile(r"^[\w-]+(\.[\w-]+)*\.?$")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# Characters left as-is when re-encoding; "%" keeps existing escapes intact
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"


@dataclass(frozen=True)
class NormalizedURL:
    """Canonical absolute http(s) URL for one analysis request."""

    href: str
    scheme: str
    host: str
    origin: str

    def __str__(self) -> str:
        return self.href


def _is_valid_host(host: str) -> bool:
    if ":" in host:
        try:
            ipaddress.IPv6Address(host)
        except ValueError:
            return False
        return True
    return bool(_HOSTNAME.match(host))


def _forward_slashes(candidate: str) -> str:
    """Treat backslashes before any query or fragment as path separators."""
    end = len(candidate)
    for marker in ("?", "#"):
        position = candidate.find(marker)
        if position != -1:
            end = min(end, position)
    return candidate[:end].replace("\\", "/") + candidate[end:]


def _with_scheme(candidate: str) -> str:
    """Prefix https:// when absent and collapse extra slashes before the host."""
    match = _SCHEME_PREFIX.match(candidate)
    prefix = match.group(0) if match else "https://"
    rest = candidate[match.end():] if match else candidate
    return prefix + rest.lstrip("/")


def normalize_url(raw: str) -> NormalizedURL:
    """
    Turn user input into a canonical absolute URL.

    Prepends https:// when no http(s) scheme is present (extra leading
    slashes collapse, backslashes in the path count as "/"), lowercases scheme
    and host, drops default ports, and percent-encodes unsafe path/query
    characters. Normalizing an already-normalized href returns it unchanged.

    Args:
        raw: Untrusted URL string (e.g. "example.com")

    Returns:
        NormalizedURL with href, scheme, host and origin

    Raises:
        InvalidURLError: If no valid host can be parsed
    """
    candidate = (raw or "").strip()
    if not candidate:
        raise InvalidURLError("Invalid URL: empty input", url=raw)
    candidate = _with_scheme(_forward_slashes(candidate))

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL: {raw}", url=raw) from e

    host = parts.hostname or ""
    if not host or not _is_valid_host(host):
        raise InvalidURLError(f"Invalid URL: {raw}", url=raw)

    scheme = parts.scheme.lower()
    host_port = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        host_port = f"{host_port}:{port}"

    netloc = host_port
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{host_port}"

    href = urlunsplit(
        (
            scheme,
            netloc,
            quote(parts.path or "/", safe=_PATH_SAFE),
            quote(parts.query, safe=_QUERY_SAFE),
            quote(parts.fragment, safe=_QUERY_SAFE),
        )
    )
    return NormalizedURL(
        href=href,
        scheme=scheme,
        host=host,
        origin=f"{scheme}://{host_port}",
    )


def resolve_url(base: str, reference: str | None) -> str | None:
    """Resolve a possibly relative reference against base.

    Returns None for empty references or results that do not parse as an
    absolute URL.
    """
    if not reference or not reference.strip():
        return None
    try:
        resolved = urljoin(base, reference.strip())
        parts = urlsplit(resolved)
        parts.port
    except ValueError:
        return None
    if not parts.scheme:
        return None
    if parts.scheme in _DEFAULT_PORTS and not parts.hostname:
        return None
    return resolved
