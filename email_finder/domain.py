"""
Domain normalisation.

Turns free-form user input ("Acme.com", "https://www.acme.com/about", ...)
into a canonical origin and a lowercase host.
"""

import ipaddress
import logging
import re
from urllib.parse import urlsplit

import idna

from email_finder.exceptions import BlockedDomain, InvalidInput
from email_finder.models import NormalizedDomain

# Initialize logger
log = logging.getLogger(__name__)

BLOCKED_DOMAINS = frozenset({
    "example.com",
    "email.com",
    "domain.com",
    "yourdomain.com",
    "test.com",
})

DEFAULT_PORTS = {"http": 80, "https": 443}

_SCHEME_RE = re.compile(r"^https?://", re.I)
_HOST_RE = re.compile(r"^[a-z0-9_-]+(?:\.[a-z0-9_-]+)*\.?$")


def is_blocked(hostname: str) -> bool:
    """True if ``hostname`` is one of the placeholder domains."""
    return hostname.lower() in BLOCKED_DOMAINS


def _ascii_host(hostname: str, raw: str) -> str:
    if hostname.isascii():
        return hostname
    try:
        return idna.encode(hostname, uts46=True).decode("ascii")
    except idna.IDNAError as exc:
        log.debug("IDNA encode failed for %r: %s", hostname, exc)
        raise InvalidInput(f"Invalid domain: {raw}") from exc


def _ipv6_host(hostname: str, raw: str) -> str:
    """Bracketed, compressed form of an IPv6 literal host."""
    try:
        address = ipaddress.IPv6Address(hostname)
    except ValueError as exc:
        raise InvalidInput(f"Invalid domain: {raw}") from exc
    return f"[{address.compressed}]"


def normalise_domain(raw: str) -> NormalizedDomain:
    """
    Normalise a domain or URL into its origin and host.

    Input without an http(s) scheme is treated as an https URL.

    Args:
        raw: Domain or URL as typed by the user

    Returns:
        NormalizedDomain with ``origin`` (scheme + host) and lowercase ``host``

    Raises:
        InvalidInput: If the input is empty or cannot be parsed as a URL
        BlockedDomain: If the host is a placeholder domain
    """
    trimmed = (raw or "").strip()
    if not trimmed:
        raise InvalidInput("Domain cannot be empty")

    candidate = trimmed if _SCHEME_RE.match(trimmed) else f"https://{trimmed}"

    try:
        parts = urlsplit(candidate)
        hostname = parts.hostname
        port = parts.port
    except ValueError as exc:
        log.debug("URL parse failed for %r: %s", candidate, exc)
        raise InvalidInput(f"Invalid domain: {trimmed}") from exc

    if not hostname:
        raise InvalidInput(f"Invalid domain: {trimmed}")

    if ":" in hostname:
        hostname = _ipv6_host(hostname, trimmed)
    else:
        hostname = _ascii_host(hostname, trimmed).lower()
        if not _HOST_RE.match(hostname):
            raise InvalidInput(f"Invalid domain: {trimmed}")

    if is_blocked(hostname):
        log.info("Rejecting placeholder domain %s", hostname)
        raise BlockedDomain("Please provide a real company domain.")

    scheme = parts.scheme.lower()
    host = hostname
    if port is not None and port != DEFAULT_PORTS[scheme]:
        host = f"{hostname}:{port}"

    return NormalizedDomain(origin=f"{scheme}://{host}", host=host)
