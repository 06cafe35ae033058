"""Read-only catalog of cities, intents, events and articles.

The catalog is built once at startup, either from the bundled JSON file or
from a remote JSON endpoint, and validated before any path is resolved.
"""

import json
from pathlib import Path

from bs4 import BeautifulSoup
from dateutil.parser import isoparse

from models import INTENT_KINDS, Article, City, Event, FaqEntry, Intent, Venue
from services.http import fetch_json
from services.segments import PAGE_KEYWORD, RESERVED_KEYWORDS

DATA_DIR = Path(__file__).parent.parent / "data"
DEFAULT_CATALOG_PATH = DATA_DIR / "catalog.json"


class CatalogError(Exception):
    """Raised when catalog data is malformed or violates the slug namespace rules."""


class Catalog:
    def __init__(
        self,
        cities: list[City],
        intents: list[Intent],
        events: list[Event],
        articles: list[Article],
    ) -> None:
        self.cities = tuple(cities)
        self.intents = tuple(intents)
        self.events = tuple(events)
        self.articles = tuple(articles)

        self._cities_by_slug = _index(self.cities, lambda c: c.slug, "city")
        self._intents_by_segments = _index(self.intents, lambda i: i.slug_segments, "intent")
        self._intents_by_tag = {intent.path: intent for intent in self.intents}
        self._events_by_slug = _index(self.events, lambda e: e.slug, "event")
        self._articles_by_slug = _index(self.articles, lambda a: a.slug, "article")

        _check_cities(self.cities)
        _check_intents(self.intents, self._cities_by_slug)
        _check_events(self.events)

    def city(self, slug: str) -> City | None:
        return self._cities_by_slug.get(slug)

    def intent(self, segments: list[str] | tuple[str, ...]) -> Intent | None:
        """Exact ordered match of the full segment list."""
        if not segments:
            return None
        return self._intents_by_segments.get(tuple(segments))

    def intent_for_tag(self, tag: str) -> Intent | None:
        """Find the intent an event tag points at, by full path or first segment."""
        intent = self._intents_by_tag.get(tag)
        if intent:
            return intent
        for candidate in self.intents:
            if candidate.slug_segments[0] == tag:
                return candidate
        return None

    def event(self, slug: str) -> Event | None:
        return self._events_by_slug.get(slug)

    def article(self, slug: str) -> Article | None:
        return self._articles_by_slug.get(slug)

    @classmethod
    def from_dict(cls, payload: dict) -> "Catalog":
        if not isinstance(payload, dict):
            raise CatalogError("Catalog payload must be a JSON object")
        return cls(
            cities=[parse_city(item) for item in payload.get("cities", [])],
            intents=[parse_intent(item) for item in payload.get("intents", [])],
            events=[parse_event(item) for item in payload.get("events", [])],
            articles=[parse_article(item) for item in payload.get("articles", [])],
        )


def _index(items, key, label: str) -> dict:
    index: dict = {}
    for item in items:
        item_key = key(item)
        if item_key in index:
            raise CatalogError(f"Duplicate {label} slug: {item_key!r}")
        index[item_key] = item
    return index


def _check_cities(cities: tuple[City, ...]) -> None:
    for city in cities:
        if not city.slug or "/" in city.slug:
            raise CatalogError(f"Invalid city slug: {city.slug!r}")
        if city.slug in RESERVED_KEYWORDS:
            raise CatalogError(f"City slug {city.slug!r} is a reserved keyword")


def _check_intents(intents: tuple[Intent, ...], cities_by_slug: dict) -> None:
    for intent in intents:
        if not intent.slug_segments:
            raise CatalogError(f"Intent {intent.name!r} has an empty path")
        if intent.kind not in INTENT_KINDS:
            raise CatalogError(f"Intent {intent.path!r} has unknown kind {intent.kind!r}")
        for segment in intent.slug_segments:
            if not segment or "/" in segment:
                raise CatalogError(f"Intent {intent.path!r} has an invalid segment {segment!r}")
            if segment == PAGE_KEYWORD:
                raise CatalogError(f"Intent {intent.path!r} contains the pagination keyword")
        first = intent.slug_segments[0]
        if first in RESERVED_KEYWORDS:
            raise CatalogError(f"Intent {intent.path!r} starts with a reserved keyword")
        # The resolver tries cities first, so a collision would hide the intent.
        if first in cities_by_slug:
            raise CatalogError(f"Intent {intent.path!r} collides with city slug {first!r}")


def _check_events(events: tuple[Event, ...]) -> None:
    for event in events:
        for label, value in (("start", event.start_date), ("end", event.end_date)):
            try:
                parsed = isoparse(value)
            except (TypeError, ValueError) as e:
                raise CatalogError(f"Event {event.slug!r} has an invalid {label} date {value!r}") from e
            if parsed.tzinfo is None:
                raise CatalogError(f"Event {event.slug!r} {label} date {value!r} has no UTC offset")


def find_warnings(catalog: Catalog) -> list[str]:
    """Collect non-fatal inconsistencies between catalog tables."""
    warnings: list[str] = []
    for event in catalog.events:
        if catalog.city(event.city_slug) is None:
            warnings.append(f"Event {event.slug!r} references unknown city {event.city_slug!r}")
        for tag in (*event.genres, *event.audiences, *event.times):
            if catalog.intent_for_tag(tag) is None:
                warnings.append(f"Event {event.slug!r} tag {tag!r} matches no intent")
    for article in catalog.articles:
        for segments in article.related_intents:
            if catalog.intent(segments) is None:
                warnings.append(f"Article {article.slug!r} links unknown intent {'/'.join(segments)!r}")
        for slug in article.related_city_slugs:
            if catalog.city(slug) is None:
                warnings.append(f"Article {article.slug!r} links unknown city {slug!r}")
    return warnings


def html_to_text(value: str) -> str:
    """Strip markup from text that may arrive as HTML from a remote source."""
    if "<" not in value:
        return value
    return BeautifulSoup(value, "html.parser").get_text(" ", strip=True)


def _require(data: dict, key: str, label: str):
    try:
        return data[key]
    except KeyError:
        raise CatalogError(f"{label} is missing required field {key!r}") from None
    except TypeError:
        raise CatalogError(f"{label} must be a JSON object") from None


def _strings(value, where: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise CatalogError(f"{where} must be a list of strings, got {value!r}")
    return tuple(value)


def _string_list(data: dict, key: str, label: str, required: bool = False) -> tuple[str, ...]:
    value = _require(data, key, label) if required else data.get(key, [])
    return _strings(value, f"{label} field {key!r}")


def parse_faq(items: list[dict] | None) -> tuple[FaqEntry, ...]:
    return tuple(
        FaqEntry(question=_require(item, "question", "FAQ entry"), answer=_require(item, "answer", "FAQ entry"))
        for item in items or []
    )


def parse_city(data: dict) -> City:
    return City(
        slug=_require(data, "slug", "City"),
        name=_require(data, "name", "City"),
        meta_title=data.get("metaTitle", ""),
        meta_description=data.get("metaDescription", ""),
        intro=data.get("intro", ""),
        neighborhoods=_string_list(data, "neighborhoods", "City"),
        landmarks=_string_list(data, "landmarks", "City"),
        faq=parse_faq(data.get("faq")),
        hero_image=data.get("heroImage", ""),
        hero_alt=data.get("heroAlt", ""),
    )


def parse_intent(data: dict) -> Intent:
    return Intent(
        slug_segments=_string_list(data, "slugSegments", "Intent", required=True),
        name=_require(data, "name", "Intent"),
        kind=_require(data, "kind", "Intent"),
        meta_title=data.get("metaTitle", ""),
        meta_description=data.get("metaDescription", ""),
        intro=data.get("intro", ""),
        faq=parse_faq(data.get("faq")),
    )


def parse_event(data: dict) -> Event:
    slug = _require(data, "slug", "Event")
    label = f"Event {slug!r}"
    venue = _require(data, "venue", label)
    return Event(
        slug=slug,
        name=_require(data, "name", label),
        description=html_to_text(data.get("description", "")),
        city_slug=_require(data, "citySlug", label),
        venue=Venue(
            name=_require(venue, "name", f"{label} venue"),
            address=venue.get("address", ""),
            map_url=venue.get("mapUrl"),
            phone=venue.get("phone"),
        ),
        organizer=data.get("organizer", ""),
        start_date=_require(data, "startDate", label),
        end_date=_require(data, "endDate", label),
        price=data.get("price", 0),
        currency=data.get("currency", "ILS"),
        ticket_url=data.get("ticketUrl", ""),
        genres=_string_list(data, "genres", label),
        audiences=_string_list(data, "audiences", label),
        times=_string_list(data, "times", label),
        image=data.get("image", ""),
        image_alt=data.get("imageAlt", ""),
    )


def parse_article(data: dict) -> Article:
    slug = _require(data, "slug", "Article")
    label = f"Article {slug!r}"
    return Article(
        slug=slug,
        title=_require(data, "title", label),
        excerpt=data.get("excerpt", ""),
        intro=data.get("intro", ""),
        body=tuple(html_to_text(paragraph) for paragraph in _string_list(data, "body", label)),
        related_intents=_related_intents(data, label),
        related_city_slugs=_string_list(data, "relatedCitySlugs", label),
        faq=parse_faq(data.get("faq")),
    )


def _related_intents(data: dict, label: str) -> tuple[tuple[str, ...], ...]:
    value = data.get("relatedIntents", [])
    if not isinstance(value, list):
        raise CatalogError(f"{label} field 'relatedIntents' must be a list of segment lists")
    return tuple(_strings(segments, f"{label} related intent") for segments in value)


def load_catalog(path: Path = DEFAULT_CATALOG_PATH) -> Catalog:
    """Load and validate a catalog from a local JSON file."""
    try:
        with open(path, encoding="utf-8") as f:
            payload = json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid catalog JSON in {path}: {e}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e
    return Catalog.from_dict(payload)


def fetch_catalog(url: str) -> Catalog:
    """Fetch and validate a catalog from a remote JSON endpoint."""
    return Catalog.from_dict(fetch_json(url))
