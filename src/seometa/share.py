from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional
from urllib.parse import urlsplit, urlunsplit

from . import base64url
from .normalize import MetaRecord, record_from_payload

logger = logging.getLogger(__name__)

SHARE_VERSION = 1
CONFIG_PREFIX = "config="


def build_payload(record: MetaRecord) -> dict:
    return {"v": SHARE_VERSION, "d": record.to_dict()}


def build_token(record: MetaRecord) -> str:
    # Compact separators match JSON.stringify, so browser links decode here too.
    text = json.dumps(build_payload(record), ensure_ascii=False, separators=(",", ":"))
    return base64url.encode(text)


def build_share_url(page_url: str, record: MetaRecord) -> str:
    parts = urlsplit(page_url)
    fragment = CONFIG_PREFIX + build_token(record)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, fragment))


def token_from_fragment(text: Any) -> Optional[str]:
    """Pull the token out of a share URL, ``#config=...`` or ``config=...``."""
    if not isinstance(text, str):
        return None
    value = text.strip()
    if "#" in value:
        value = value.split("#", 1)[1]
    if not value.startswith(CONFIG_PREFIX):
        return None
    return value[len(CONFIG_PREFIX):]


def load_token(token: str) -> Optional[MetaRecord]:
    try:
        raw = base64url.decode(token)
        payload = json.loads(raw)
    except (ValueError, RecursionError) as exc:
        logger.debug("Ignoring unreadable share token: %s", exc)
        return None

    if not isinstance(payload, Mapping):
        logger.debug("Ignoring share payload of type %s", type(payload).__name__)
        return None
    version = payload.get("v")
    if isinstance(version, bool) or version != SHARE_VERSION:
        logger.debug("Ignoring share payload with version %r", version)
        return None
    data = payload.get("d")
    if not isinstance(data, Mapping):
        logger.debug("Ignoring share payload without a 'd' object")
        return None
    return record_from_payload(data)


def load_share(text: Any) -> Optional[MetaRecord]:
    token = token_from_fragment(text)
    if token is None:
        return None
    return load_token(token)
