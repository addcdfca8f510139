"""Device fingerprinting and client IP extraction.

Device fingerprints are generated from request headers so the fraud scorer
can tell a returning device from an unrecognized one.

Fingerprint Components:
- User-Agent header (browser, OS, version)
- Accept-Language header (preferred languages)
- Accept-Encoding header
- Accept header

Security:
- SHA256 hash (64 hex characters)
- Not reversible
- No PII retained

Headers are accepted as any string mapping; lookups are case-insensitive so
callers can pass framework header objects or plain dicts.
"""

import hashlib
from collections.abc import Mapping

UNKNOWN_IP = "0.0.0.0"


def _header(headers: Mapping[str, str], name: str) -> str:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return ""


def generate_device_fingerprint(headers: Mapping[str, str]) -> str:
    """Generate SHA256 hash of device fingerprint from request headers.

    Args:
        headers: Request headers.

    Returns:
        SHA256 hash (64 hex characters).

    Examples:
        >>> fingerprint = generate_device_fingerprint({"user-agent": "Mozilla/5.0"})
        >>> len(fingerprint)
        64
    """
    components = [
        _header(headers, "user-agent"),
        _header(headers, "accept-language"),
        _header(headers, "accept-encoding"),
        _header(headers, "accept"),
    ]
    return hashlib.sha256("|".join(components).encode("utf-8")).hexdigest()


def get_client_ip(headers: Mapping[str, str], remote_addr: str | None = None) -> str:
    """Resolve the client IP behind proxies.

    Precedence: first X-Forwarded-For entry, X-Real-IP, socket address,
    then "0.0.0.0".

    Args:
        headers: Request headers.
        remote_addr: Peer address from the transport, if known.

    Returns:
        Client IP address string.
    """
    forwarded = _header(headers, "x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = _header(headers, "x-real-ip").strip()
    if real_ip:
        return real_ip

    return remote_addr or UNKNOWN_IP


def hash_payment_identifier(identifier: str) -> str:
    """Hash a card number (or other payment identifier) for history lookups.

    Raw card numbers never leave this function; the history provider is only
    ever asked about the SHA256 digest.
    """
    return hashlib.sha256(identifier.encode("utf-8")).hexdigest()
