import math

from models import City, Event, Intent, PaginatedEvents, Route
from services.catalog import Catalog

EVENTS_PAGE_SIZE = 6


def event_matches_intent(event: Event, intent: Intent) -> bool:
    """Check an event's tags against an intent, by intent kind."""
    first = intent.slug_segments[0]
    if intent.kind == "genre":
        return first in event.genres
    if intent.kind == "audience":
        return first in event.audiences
    if intent.kind == "time":
        # Composite time intents (e.g. holiday/name) are tagged by full path.
        return intent.path in event.times or first in event.times
    if intent.kind == "venue":
        return False
    if intent.kind == "promoter":
        return False
    return False


def sort_events_by_date(events: list[Event]) -> list[Event]:
    # ISO-8601 strings with a shared offset sort chronologically.
    return sorted(events, key=lambda e: e.start_date)


def filter_events(
    catalog: Catalog,
    city: City | None = None,
    intent: Intent | None = None,
) -> list[Event]:
    """Events for a city and/or intent, soonest first."""
    filtered = list(catalog.events)
    if city:
        filtered = [e for e in filtered if e.city_slug == city.slug]
    if intent:
        filtered = [e for e in filtered if event_matches_intent(e, intent)]
    return sort_events_by_date(filtered)


def paginate_events(
    catalog: Catalog,
    city: City | None = None,
    intent: Intent | None = None,
    page: int = 1,
    page_size: int = EVENTS_PAGE_SIZE,
) -> PaginatedEvents:
    """Slice filtered events into a page, clamping the page into range."""
    filtered = filter_events(catalog, city=city, intent=intent)
    total = len(filtered)
    total_pages = max(1, math.ceil(total / page_size))
    current = min(max(page, 1), total_pages)
    start = (current - 1) * page_size
    return PaginatedEvents(
        events=filtered[start:start + page_size],
        total=total,
        total_pages=total_pages,
    )


def get_pagination_info(catalog: Catalog, route: Route) -> PaginatedEvents:
    if not route.is_listing:
        return PaginatedEvents(events=[], total=0, total_pages=1)
    return paginate_events(catalog, city=route.city, intent=route.intent, page=route.page)
