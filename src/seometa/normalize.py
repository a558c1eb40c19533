from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from .utils import clean_text, normalize_url

DEFAULT_LANG = "en"

# Wire (JSON / form) key -> MetaRecord attribute.
FIELD_KEYS = {
    "title": "title",
    "description": "description",
    "canonical": "canonical",
    "siteName": "site_name",
    "ogImage": "og_image",
    "twitter": "twitter",
    "themeColor": "theme_color",
    "lang": "lang",
}

EXAMPLE_INPUT = {
    "title": "GitHub SEO Meta Generator - generate meta tags fast",
    "description": (
        "Generate SEO-friendly meta tags (Open Graph, Twitter cards, JSON-LD) "
        "for GitHub Pages and copy them in one click."
    ),
    "canonical": "https://username.github.io/repo/",
    "siteName": "username.github.io",
    "ogImage": "https://username.github.io/repo/og.png",
    "twitter": "@yourhandle",
    "themeColor": "#0b1020",
    "lang": "en",
}


@dataclass(frozen=True)
class MetaRecord:
    title: str = ""
    description: str = ""
    canonical: str = ""
    site_name: str = ""
    og_image: str = ""
    twitter: str = ""
    theme_color: str = ""
    lang: str = DEFAULT_LANG

    def to_dict(self) -> Dict[str, str]:
        return {key: getattr(self, attr) for key, attr in FIELD_KEYS.items()}


def clean_twitter(value: Any) -> str:
    handle = clean_text(value)
    if not handle:
        return ""
    return handle if handle.startswith("@") else f"@{handle}"


def clamp_lang(value: Any) -> str:
    return clean_text(value) or DEFAULT_LANG


def normalize_record(raw: Optional[Mapping[str, Any]]) -> MetaRecord:
    """Build a canonical record from raw form-like input.

    Missing keys count as empty, unparseable URLs are kept as typed, and no
    input is ever rejected.
    """
    if not isinstance(raw, Mapping):
        raw = {}
    return MetaRecord(
        title=clean_text(raw.get("title")),
        description=clean_text(raw.get("description")),
        canonical=normalize_url(raw.get("canonical")),
        site_name=clean_text(raw.get("siteName")),
        og_image=normalize_url(raw.get("ogImage")),
        twitter=clean_twitter(raw.get("twitter")),
        theme_color=clean_text(raw.get("themeColor")),
        lang=clamp_lang(raw.get("lang")),
    )


def record_from_payload(data: Any) -> MetaRecord:
    """Normalize untrusted decoded data, accepting only string field values."""
    if not isinstance(data, Mapping):
        data = {}
    accepted = {key: data[key] for key in FIELD_KEYS if isinstance(data.get(key), str)}
    return normalize_record(accepted)
