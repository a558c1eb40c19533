from __future__ import annotations

import re
from typing import Any, NamedTuple
from urllib.parse import quote, urlsplit, urlunsplit

DEFAULT_PORTS = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_BAD_HOST_RE = re.compile(r"[\s<>\"{}|\\^`#?/@]")
# Characters left as-is when re-encoding; "%" keeps existing escapes intact.
_PATH_SAFE = "/%:@!$&'()*+,;=-._~"
_QUERY_SAFE = _PATH_SAFE + "?"
_USERINFO_SAFE = "%:!$&'()*+,;=-._~"


class UrlCheck(NamedTuple):
    value: str
    valid: bool


def clean_text(value: Any) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return value.strip()


def _format_host(hostname: str) -> str:
    if ":" in hostname:
        return f"[{hostname}]"
    return hostname


def check_url(value: Any) -> UrlCheck:
    """Parse ``value`` as an absolute URL and re-serialize it.

    Returns the canonical form with ``valid=True`` when the text parses, or
    the trimmed input unchanged with ``valid=False`` when it does not. Never
    raises.
    """
    raw = clean_text(value)
    if not raw:
        return UrlCheck("", False)

    try:
        parts = urlsplit(raw)
        port = parts.port
    except ValueError:
        return UrlCheck(raw, False)

    scheme = parts.scheme.lower()
    if not scheme or not _SCHEME_RE.match(scheme):
        return UrlCheck(raw, False)

    if scheme not in DEFAULT_PORTS:
        # Opaque or non-web schemes (mailto:, data:, file:) keep their text.
        return UrlCheck(scheme + raw[len(parts.scheme):], True)

    hostname = parts.hostname or ""
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii").lower()
        except UnicodeError:
            return UrlCheck(raw, False)
    if not hostname or _BAD_HOST_RE.search(hostname):
        return UrlCheck(raw, False)

    netloc = _format_host(hostname)
    if port is not None and port != DEFAULT_PORTS[scheme]:
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{quote(userinfo, safe=_USERINFO_SAFE)}@{netloc}"

    path = quote(parts.path, safe=_PATH_SAFE) or "/"
    if not path.startswith("/"):
        path = f"/{path}"
    url = urlunsplit((scheme, netloc, path, "", ""))
    # An empty "?" or "#" is kept, as browsers do.
    before_fragment, has_fragment, _ = raw.partition("#")
    if "?" in before_fragment:
        url += "?" + quote(parts.query, safe=_QUERY_SAFE)
    if has_fragment:
        url += "#" + quote(parts.fragment, safe=_QUERY_SAFE + "#")

    return UrlCheck(url, True)


def normalize_url(value: Any) -> str:
    return check_url(value).value


def escape_html(value: Any) -> str:
    return (
        str(value)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )


def with_trailing_slash(url: str) -> str:
    """Return ``url`` ending in exactly one ``/`` (one existing slash is reused)."""
    if url.endswith("/"):
        return url
    return f"{url}/"
