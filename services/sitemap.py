from pathlib import Path
from urllib.parse import quote
from xml.sax.saxutils import escape

from services.catalog import Catalog
from services.segments import segments_to_path
from services.static_paths import (
    enumerate_article_paths,
    enumerate_city_intent_paths,
    enumerate_city_paths,
    enumerate_event_paths,
    enumerate_intent_paths,
)

SITEMAP_XMLNS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def build_url(origin: str, segments: list[str]) -> str:
    """Absolute, percent-encoded URL for a segment list."""
    return f"{origin.rstrip('/')}{quote(segments_to_path(segments))}"


def build_urlset(urls: list[str]) -> str:
    entries = "\n".join(
        f"  <url>\n    <loc>{escape(url)}</loc>\n    <changefreq>daily</changefreq>\n  </url>"
        for url in urls
    )
    return f'<?xml version="1.0" encoding="UTF-8"?>\n<urlset xmlns="{SITEMAP_XMLNS}">\n{entries}\n</urlset>\n'


def build_sitemap_index(urls: list[str]) -> str:
    entries = "\n".join(f"  <sitemap>\n    <loc>{escape(url)}</loc>\n  </sitemap>" for url in urls)
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>\n<sitemapindex xmlns="{SITEMAP_XMLNS}">\n'
        f"{entries}\n</sitemapindex>\n"
    )


def sitemap_sections(catalog: Catalog) -> dict[str, list[list[str]]]:
    return {
        "pages.xml": [[]],
        "cities.xml": enumerate_city_paths(catalog),
        "intents.xml": enumerate_intent_paths(catalog),
        "city-intents.xml": enumerate_city_intent_paths(catalog),
        "articles.xml": enumerate_article_paths(catalog),
        "events.xml": enumerate_event_paths(catalog),
    }


def write_sitemaps(catalog: Catalog, out_dir: Path, origin: str, base_path: str = "/sitemaps") -> list[Path]:
    """Write one sitemap per section plus a sitemap.xml index. Empty sections are skipped.

    `base_path` is the public URL path the section files are served from, so the
    index entries match wherever `out_dir` is deployed.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    for filename, paths in sitemap_sections(catalog).items():
        if not paths:
            continue
        filepath = out_dir / filename
        filepath.write_text(build_urlset([build_url(origin, p) for p in paths]), encoding="utf-8")
        written.append(filepath)

    prefix = f"{origin.rstrip('/')}/{base_path.strip('/')}".rstrip("/")
    index_urls = [f"{prefix}/{p.name}" for p in written]
    index_path = out_dir / "sitemap.xml"
    index_path.write_text(build_sitemap_index(index_urls), encoding="utf-8")
    written.append(index_path)
    return written
