from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .normalize import MetaRecord
from .utils import escape_html, with_trailing_slash

SCHEMA_CONTEXT = "https://schema.org"
SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
FALLBACK_LOC = "https://example.com/"
TITLE_WARN_LENGTH = 60
DESCRIPTION_WARN_LENGTH = 160

SITEMAP_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<urlset xmlns="{ns}">
  <url>
    <loc>{loc}</loc>
  </url>
</urlset>
"""

HTML_TEMPLATE = """<!doctype html>
<html lang="{lang}">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
{head}
  </head>
  <body>
    <main>
      <h1>{title}</h1>
      <p>{description}</p>
    </main>
  </body>
</html>
"""

_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.I)


@dataclass
class RenderedArtifacts:
    record: MetaRecord
    head: str
    robots: str
    sitemap: str
    html: str
    warnings: List[str] = field(default_factory=list)


def _meta_name(name: str, content: str) -> str:
    return f'<meta name="{name}" content="{escape_html(content)}" />'


def _meta_property(prop: str, content: str) -> str:
    return f'<meta property="{prop}" content="{escape_html(content)}" />'


def json_ld(record: MetaRecord) -> Dict[str, Any]:
    website: Dict[str, Any] = {"@type": "WebSite", "name": record.site_name or record.title}
    webpage: Dict[str, Any] = {
        "@type": "WebPage",
        "name": record.title,
        "description": record.description,
    }
    if record.canonical:
        website["url"] = record.canonical
        webpage["url"] = record.canonical
    webpage["inLanguage"] = record.lang
    return {"@context": SCHEMA_CONTEXT, "@graph": [website, webpage]}


def json_ld_script(record: MetaRecord) -> str:
    text = json.dumps(json_ld(record), ensure_ascii=False, separators=(",", ":"))
    text = _SCRIPT_CLOSE_RE.sub(r"<\\/\1", text)
    return f'<script type="application/ld+json">{text}</script>'


def head_lines(record: MetaRecord) -> List[str]:
    lines = [f"<title>{escape_html(record.title)}</title>"]
    lines.append(_meta_name("description", record.description))
    if record.canonical:
        lines.append(f'<link rel="canonical" href="{escape_html(record.canonical)}" />')
    if record.theme_color:
        lines.append(_meta_name("theme-color", record.theme_color))

    lines.append(_meta_property("og:title", record.title))
    lines.append(_meta_property("og:description", record.description))
    if record.canonical:
        lines.append(_meta_property("og:url", record.canonical))
    if record.site_name:
        lines.append(_meta_property("og:site_name", record.site_name))
    lines.append(_meta_property("og:type", "website"))
    if record.og_image:
        lines.append(_meta_property("og:image", record.og_image))

    card = "summary_large_image" if record.og_image else "summary"
    lines.append(_meta_name("twitter:card", card))
    if record.twitter:
        lines.append(_meta_name("twitter:site", record.twitter))
    lines.append(_meta_name("twitter:title", record.title))
    lines.append(_meta_name("twitter:description", record.description))
    if record.og_image:
        lines.append(_meta_name("twitter:image", record.og_image))

    lines.append(json_ld_script(record))
    return lines


def head_snippet(record: MetaRecord) -> str:
    return "\n".join(head_lines(record))


def robots_txt(record: MetaRecord) -> str:
    if not record.canonical:
        return "User-agent: *\nAllow: /\n"
    base = with_trailing_slash(record.canonical)
    return f"User-agent: *\nAllow: /\n\nSitemap: {base}sitemap.xml\n"


def sitemap_xml(record: MetaRecord) -> str:
    if not record.canonical:
        loc = FALLBACK_LOC
    else:
        loc = escape_html(with_trailing_slash(record.canonical))
    return SITEMAP_TEMPLATE.format(ns=SITEMAP_NS, loc=loc)


def standalone_html(record: MetaRecord) -> str:
    """Minimal page with the head snippet in place, used for the template download."""
    head = "\n".join(f"    {line}" for line in head_lines(record))
    return HTML_TEMPLATE.format(
        lang=escape_html(record.lang),
        head=head,
        title=escape_html(record.title),
        description=escape_html(record.description),
    )


def length_warnings(record: MetaRecord) -> List[str]:
    warnings: List[str] = []
    if len(record.title) > TITLE_WARN_LENGTH:
        warnings.append(f"Title is over about {TITLE_WARN_LENGTH} chars.")
    if len(record.description) > DESCRIPTION_WARN_LENGTH:
        warnings.append(f"Description is over about {DESCRIPTION_WARN_LENGTH} chars.")
    return warnings


def render_all(record: MetaRecord) -> RenderedArtifacts:
    return RenderedArtifacts(
        record=record,
        head=head_snippet(record),
        robots=robots_txt(record),
        sitemap=sitemap_xml(record),
        html=standalone_html(record),
        warnings=length_warnings(record),
    )
