from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .normalize import EXAMPLE_INPUT, normalize_record
from .render import render_all
from .share import build_share_url, build_token, load_share

# argparse dest -> wire key
FIELD_FLAGS = {
    "title": "title",
    "description": "description",
    "canonical": "canonical",
    "site_name": "siteName",
    "og_image": "ogImage",
    "twitter": "twitter",
    "theme_color": "themeColor",
    "lang": "lang",
}
OUTPUT_FILES = {
    "head.html": "head",
    "robots.txt": "robots",
    "sitemap.xml": "sitemap",
    "template.html": "html",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seo-meta",
        description="Generate a <head> meta snippet, robots.txt and sitemap.xml from page metadata.",
    )
    parser.add_argument("--title", help="Page title")
    parser.add_argument("--description", help="Meta description")
    parser.add_argument("--canonical", help="Canonical URL (e.g., https://example.com/)")
    parser.add_argument("--site-name", dest="site_name", help="Site name for og:site_name and JSON-LD")
    parser.add_argument("--og-image", dest="og_image", help="Absolute URL of the social preview image")
    parser.add_argument("--twitter", help="Twitter/X handle, with or without the leading @")
    parser.add_argument("--theme-color", dest="theme_color", help="CSS color for the theme-color meta tag")
    parser.add_argument("--lang", help="Page language tag (default: en)")
    parser.add_argument("--example", action="store_true", help="Start from the built-in example values")
    parser.add_argument(
        "--config",
        help="Start from a shared configuration (share URL, '#config=...' fragment or 'config=...')",
    )
    parser.add_argument("--json", dest="as_json", action="store_true", help="Output JSON to stdout")
    parser.add_argument("--save", action="store_true", help="Write the generated files to the output directory")
    parser.add_argument("--out-dir", default=".", help="Directory to write outputs (default: current directory)")
    parser.add_argument("--share-url", help="Page URL to attach the shareable '#config=' fragment to")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def collect_input(args: argparse.Namespace) -> dict:
    raw: dict = {}
    if args.example:
        raw.update(EXAMPLE_INPUT)
    if args.config:
        shared = load_share(args.config)
        if shared is None:
            print("Warning: could not read shared configuration; ignoring it.", file=sys.stderr)
        else:
            raw.update(shared.to_dict())
    for dest, key in FIELD_FLAGS.items():
        value = getattr(args, dest)
        if value is not None:
            raw[key] = value
    return raw


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    record = normalize_record(collect_input(args))
    artifacts = render_all(record)
    token = build_token(record)
    share_url = build_share_url(args.share_url, record) if args.share_url else None

    if args.save:
        out_dir = Path(args.out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)
        for filename, attr in OUTPUT_FILES.items():
            (out_dir / filename).write_text(getattr(artifacts, attr), encoding="utf-8")

    if args.as_json:
        print(
            json.dumps(
                {
                    "record": record.to_dict(),
                    "head": artifacts.head,
                    "robots": artifacts.robots,
                    "sitemap": artifacts.sitemap,
                    "warnings": artifacts.warnings,
                    "token": token,
                    "share_url": share_url,
                },
                indent=2,
                ensure_ascii=False,
            )
        )
        return 0

    # Human-readable output
    print("<head> snippet:\n")
    print(artifacts.head)
    print("\nrobots.txt:\n")
    print(artifacts.robots)
    print("sitemap.xml:\n")
    print(artifacts.sitemap)

    if artifacts.warnings:
        print("Warnings:")
        for w in artifacts.warnings:
            print(f"  - {w}")

    print(f"\nShare token: {token}")
    if share_url:
        print(f"Share URL: {share_url}")

    if args.save:
        print("Saved files to:", str(Path(args.out_dir)))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
