"""Classify URL path segments into page routes.

Resolution order is fixed: articles keyword, pagination split, city lookup,
then intent lookup on the whole remaining path. City slugs and the first
segment of intent paths are disjoint (the catalog enforces it), so trying
cities first never hides an intent.
"""

from collections.abc import Iterable

from models import NotFound, Route
from services.catalog import Catalog
from services.segments import ARTICLES_KEYWORD, clean_segments, extract_pagination


def resolve(catalog: Catalog, raw_segments: Iterable[str] | None) -> Route | NotFound:
    """Map already-decoded path segments to a Route, or NotFound."""
    segments = clean_segments(raw_segments)
    if not segments:
        return Route(kind="home")

    if segments[0] == ARTICLES_KEYWORD:
        return _resolve_articles(catalog, segments)

    split = extract_pagination(segments)
    if split.trailing:
        return NotFound(tuple(segments), "segments after page number")
    if not split.base:
        return Route(kind="home")

    base, page = split.base, split.page
    city = catalog.city(base[0])
    if city:
        if len(base) == 1:
            return Route(kind="city", city=city, page=page)
        intent = catalog.intent(base[1:])
        if intent is None:
            return NotFound(tuple(segments), "unknown intent for city")
        return Route(kind="city-intent", city=city, intent=intent, page=page)

    intent = catalog.intent(base)
    if intent:
        return Route(kind="intent", intent=intent, page=page)

    return NotFound(tuple(segments), "unknown city or intent")


def _resolve_articles(catalog: Catalog, segments: list[str]) -> Route | NotFound:
    if len(segments) == 1:
        return Route(kind="articles")
    if len(segments) > 2:
        return NotFound(tuple(segments), "nested article path")
    article = catalog.article(segments[1])
    if article is None:
        return NotFound(tuple(segments), "unknown article")
    return Route(kind="article", article=article)
