from models import Article, City, Event, Intent, Route
from services.segments import ARTICLES_KEYWORD, append_page_to_segments, segments_to_path

EVENT_PREFIX = "event"


def city_segments(city: City) -> list[str]:
    return [city.slug]


def intent_segments(intent: Intent) -> list[str]:
    return list(intent.slug_segments)


def city_intent_segments(city: City, intent: Intent) -> list[str]:
    return [city.slug, *intent.slug_segments]


def articles_segments() -> list[str]:
    return [ARTICLES_KEYWORD]


def article_segments(article: Article) -> list[str]:
    return [ARTICLES_KEYWORD, article.slug]


def listing_segments(route: Route) -> list[str]:
    """Base segments of a listing route, without pagination."""
    if route.kind == "city":
        return city_segments(route.city)
    if route.kind == "intent":
        return intent_segments(route.intent)
    if route.kind == "city-intent":
        return city_intent_segments(route.city, route.intent)
    raise ValueError(f"Route kind {route.kind!r} is not a listing")


def route_segments(route: Route, page: int | None = None) -> list[str]:
    """Canonical segments for any route, paginated for listings."""
    if route.kind == "home":
        return []
    if route.kind == "articles":
        return articles_segments()
    if route.kind == "article":
        return article_segments(route.article)
    return append_page_to_segments(listing_segments(route), route.page if page is None else page)


def pagination_links(route: Route, total_pages: int) -> tuple[str | None, str | None]:
    """Previous/next page hrefs, each present only when its target page exists."""
    if not route.is_listing:
        return None, None

    prev_href = None
    next_href = None
    if 1 <= route.page - 1 <= total_pages:
        prev_href = segments_to_path(route_segments(route, route.page - 1))
    if 1 <= route.page + 1 <= total_pages:
        next_href = segments_to_path(route_segments(route, route.page + 1))
    return prev_href, next_href


def event_segments(event: Event) -> list[str]:
    """Event detail pages live under their own prefix, outside the resolver."""
    return [EVENT_PREFIX, event.slug]
