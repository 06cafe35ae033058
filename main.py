#!/usr/bin/env python3
"""Parties taxonomy: resolve site paths, list static paths and write sitemaps."""

import argparse
import json
import os
import sys
from dataclasses import asdict
from pathlib import Path

from models import NotFound
from services.catalog import DEFAULT_CATALOG_PATH, Catalog, CatalogError, fetch_catalog, find_warnings, load_catalog
from services.content import SITE_ORIGIN, compose
from services.events import get_pagination_info
from services.http import HttpError
from services.jsonld import breadcrumb_schema, item_list_schema
from services.paths import pagination_links
from services.routes import resolve
from services.segments import path_to_segments, segments_to_path
from services.sitemap import write_sitemaps
from services.static_paths import enumerate_static_paths


def load(catalog_url: str | None, catalog_path: Path) -> Catalog:
    """Load the catalog, preferring the remote source when one is configured."""
    if catalog_url:
        print(f"Fetching catalog from {catalog_url}...", file=sys.stderr)
        try:
            catalog = fetch_catalog(catalog_url)
        except HttpError as e:
            print(f"⚠️  Remote catalog failed: {e}", file=sys.stderr)
            print(f"Falling back to {catalog_path}", file=sys.stderr)
            catalog = load_catalog(catalog_path)
    else:
        catalog = load_catalog(catalog_path)

    print(
        f"Loaded {len(catalog.cities)} cities, {len(catalog.intents)} intents, "
        f"{len(catalog.events)} events, {len(catalog.articles)} articles",
        file=sys.stderr,
    )
    for warning in find_warnings(catalog):
        print(f"⚠️  Catalog warning: {warning}", file=sys.stderr)
    return catalog


def cmd_paths(catalog: Catalog, args: argparse.Namespace) -> int:
    paths = enumerate_static_paths(catalog)
    for segments in paths:
        print(segments_to_path(segments))
    print(f"{len(paths)} static paths", file=sys.stderr)
    return 0


def cmd_sitemaps(catalog: Catalog, args: argparse.Namespace) -> int:
    print(f"Writing sitemaps to {args.out}...", file=sys.stderr)
    written = write_sitemaps(catalog, args.out, args.origin, args.base_path)
    for filepath in written:
        print(filepath)
    return 0


def cmd_resolve(catalog: Catalog, args: argparse.Namespace) -> int:
    route = resolve(catalog, path_to_segments(args.path))
    if isinstance(route, NotFound):
        print(f"Not found: {args.path} ({route.reason})", file=sys.stderr)
        return 1

    copy = compose(route)
    pagination = get_pagination_info(catalog, route)
    prev_href, next_href = pagination_links(route, pagination.total_pages)
    schemas = [breadcrumb_schema(copy.breadcrumbs)]
    if route.is_listing:
        schemas.append(item_list_schema(copy.h1, pagination.events))

    data = {
        "kind": route.kind,
        "page": route.page,
        "copy": {
            "meta_title": copy.meta_title,
            "meta_description": copy.meta_description,
            "canonical": copy.canonical,
            "h1": copy.h1,
            "intro": copy.intro,
            "breadcrumbs": [asdict(crumb) for crumb in copy.breadcrumbs],
            "faq": [asdict(entry) for entry in copy.faq],
        },
        "events": [event.slug for event in pagination.events],
        "total": pagination.total,
        "total_pages": pagination.total_pages,
        "prev": prev_href,
        "next": next_href,
        "jsonld": schemas,
    }
    print(json.dumps(data, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--catalog",
        type=Path,
        default=Path(os.environ.get("CATALOG_PATH", DEFAULT_CATALOG_PATH)),
        help="Local catalog JSON file",
    )
    parser.add_argument(
        "--catalog-url",
        default=os.environ.get("CATALOG_URL", ""),
        help="Remote catalog JSON endpoint (falls back to --catalog on failure)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    paths_cmd = commands.add_parser("paths", help="Print every static path")
    paths_cmd.set_defaults(handler=cmd_paths)

    sitemaps_cmd = commands.add_parser("sitemaps", help="Write sitemap files")
    sitemaps_cmd.add_argument("--out", type=Path, default=Path("public/sitemaps"))
    sitemaps_cmd.add_argument("--origin", default=SITE_ORIGIN)
    sitemaps_cmd.add_argument(
        "--base-path",
        default="/sitemaps",
        help="URL path the section files are served from, used in the sitemap.xml index",
    )
    sitemaps_cmd.set_defaults(handler=cmd_sitemaps)

    resolve_cmd = commands.add_parser("resolve", help="Resolve a path and print its page copy")
    resolve_cmd.add_argument("path")
    resolve_cmd.set_defaults(handler=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        catalog = load(args.catalog_url, args.catalog)
    except CatalogError as e:
        print(f"❌ Invalid catalog: {e}", file=sys.stderr)
        return 2
    return args.handler(catalog, args)


if __name__ == "__main__":
    sys.exit(main())
