"""Enumerate every path the resolver accepts, for static pre-generation.

Any new Route kind needs a matching rule here; the test suite resolves
every enumerated path to keep the two in lockstep.
"""

from models import City, Intent
from services.catalog import Catalog
from services.events import paginate_events
from services.paths import (
    article_segments,
    articles_segments,
    city_intent_segments,
    city_segments,
    event_segments,
    intent_segments,
)
from services.segments import append_page_to_segments


def paginated_paths(base: list[str], total_pages: int) -> list[list[str]]:
    return [append_page_to_segments(base, page) for page in range(1, total_pages + 1)]


def _listing_paths(catalog: Catalog, base: list[str], city: City | None, intent: Intent | None) -> list[list[str]]:
    total_pages = paginate_events(catalog, city=city, intent=intent, page=1).total_pages
    return paginated_paths(base, total_pages)


def enumerate_city_paths(catalog: Catalog) -> list[list[str]]:
    paths: list[list[str]] = []
    for city in catalog.cities:
        paths.extend(_listing_paths(catalog, city_segments(city), city, None))
    return paths


def enumerate_intent_paths(catalog: Catalog) -> list[list[str]]:
    paths: list[list[str]] = []
    for intent in catalog.intents:
        paths.extend(_listing_paths(catalog, intent_segments(intent), None, intent))
    return paths


def enumerate_city_intent_paths(catalog: Catalog) -> list[list[str]]:
    paths: list[list[str]] = []
    for city in catalog.cities:
        for intent in catalog.intents:
            paths.extend(_listing_paths(catalog, city_intent_segments(city, intent), city, intent))
    return paths


def enumerate_article_paths(catalog: Catalog) -> list[list[str]]:
    return [articles_segments()] + [article_segments(article) for article in catalog.articles]


def enumerate_static_paths(catalog: Catalog) -> list[list[str]]:
    """Home, cities, intents, city x intent pairs, then the articles section."""
    paths: list[list[str]] = [[]]
    paths.extend(enumerate_city_paths(catalog))
    paths.extend(enumerate_intent_paths(catalog))
    paths.extend(enumerate_city_intent_paths(catalog))
    paths.extend(enumerate_article_paths(catalog))
    return paths


def enumerate_event_paths(catalog: Catalog) -> list[list[str]]:
    """Event detail paths. These are served outside the segment resolver."""
    return [event_segments(event) for event in catalog.events]
