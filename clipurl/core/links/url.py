"""URL parsing and normalization for clipboard text"""

import ipaddress
import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from ..errors import UrlParseError

_SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*:')

# Leading/trailing characters dropped before parsing: C0 controls and space
_STRIP_CHARS = ''.join(chr(c) for c in range(0x21))

_WHITESPACE_RE = re.compile(r'[\x00-\x20\x7f]')

_FORBIDDEN_HOST_CHARS = set(' #%/:<>?@[\\]^|')

DEFAULT_PORTS = {
    'http': 80,
    'https': 443,
    'ws': 80,
    'wss': 443,
    'ftp': 21,
}

# Schemes whose URLs always carry an authority component
SPECIAL_SCHEMES = frozenset(DEFAULT_PORTS) | {'file'}


@dataclass(frozen=True)
class CandidateURL:
    """A parsed and normalized URL taken from the clipboard"""
    scheme: str
    netloc: str
    path: str
    query: str = ""
    fragment: str = ""

    @property
    def is_special(self) -> bool:
        return self.scheme in SPECIAL_SCHEMES

    def __str__(self) -> str:
        text = f"{self.scheme}:"
        # An empty authority must still be written when the path starts with //
        if self.netloc or self.is_special or self.path.startswith("//"):
            text += f"//{self.netloc}"
        text += self.path
        if self.query:
            text += f"?{self.query}"
        if self.fragment:
            text += f"#{self.fragment}"
        return text


def _normalize_host(hostname: str, netloc: str) -> str:
    """
    Validate a host and return it in canonical form

    Args:
        hostname: Host as reported by urlsplit (lowercased, no brackets)
        netloc: Raw authority component

    Returns:
        Host suitable for re-serialization

    Raises:
        UrlParseError: If the host is malformed
    """
    if '[' in netloc:
        try:
            ipaddress.IPv6Address(hostname)
        except ValueError as e:
            raise UrlParseError(f"Invalid IPv6 host: {hostname}") from e
        return f"[{hostname}]"

    if _FORBIDDEN_HOST_CHARS.intersection(hostname):
        raise UrlParseError(f"Invalid host: {hostname}")

    return hostname


def parse_url_strict(text: str) -> CandidateURL:
    """
    Parse text as an absolute URL

    Args:
        text: Candidate text, typically the clipboard contents

    Returns:
        Normalized URL

    Raises:
        UrlParseError: If the text is not a well-formed URL
    """
    text = text.strip(_STRIP_CHARS)

    if not text:
        raise UrlParseError("Empty input")

    if _WHITESPACE_RE.search(text):
        raise UrlParseError("URL contains whitespace or control characters")

    if not _SCHEME_RE.match(text):
        raise UrlParseError("Relative URL without a scheme")

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError as e:
        raise UrlParseError(str(e)) from e

    scheme = parts.scheme.lower()
    netloc = parts.netloc
    path = parts.path

    if parts.netloc:
        hostname = parts.hostname or ""
        if scheme in DEFAULT_PORTS and not hostname:
            raise UrlParseError(f"Empty host for {scheme} URL")

        host = _normalize_host(hostname, parts.netloc) if hostname else ""
        userinfo, _, _ = parts.netloc.rpartition('@')

        netloc = f"{userinfo}@{host}" if userinfo else host
        if port is not None and port != DEFAULT_PORTS.get(scheme):
            netloc += f":{port}"

    elif scheme in DEFAULT_PORTS:
        raise UrlParseError(f"Empty host for {scheme} URL")

    if scheme in SPECIAL_SCHEMES and not path:
        path = "/"

    return CandidateURL(
        scheme=scheme,
        netloc=netloc,
        path=path,
        query=parts.query,
        fragment=parts.fragment,
    )


def parse_url(text: str) -> Optional[CandidateURL]:
    """Parse text as a URL, returning None if it is not one"""
    try:
        return parse_url_strict(text)
    except UrlParseError:
        return None


def is_url(text: str) -> bool:
    return parse_url(text) is not None
