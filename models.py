from dataclasses import dataclass, field
from typing import Literal

IntentKind = Literal["audience", "genre", "time", "venue", "promoter"]
INTENT_KINDS: tuple[str, ...] = ("audience", "genre", "time", "venue", "promoter")

RouteKind = Literal["home", "city", "intent", "city-intent", "articles", "article"]


@dataclass(frozen=True)
class FaqEntry:
    question: str
    answer: str


@dataclass(frozen=True)
class City:
    slug: str
    name: str
    meta_title: str
    meta_description: str
    intro: str
    neighborhoods: tuple[str, ...] = ()
    landmarks: tuple[str, ...] = ()
    faq: tuple[FaqEntry, ...] = ()
    hero_image: str = ""
    hero_alt: str = ""


@dataclass(frozen=True)
class Intent:
    slug_segments: tuple[str, ...]
    name: str
    kind: IntentKind
    meta_title: str
    meta_description: str
    intro: str
    faq: tuple[FaqEntry, ...] = ()

    @property
    def path(self) -> str:
        return "/".join(self.slug_segments)


@dataclass(frozen=True)
class Venue:
    name: str
    address: str
    map_url: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class Event:
    slug: str
    name: str
    description: str
    city_slug: str
    venue: Venue
    organizer: str
    start_date: str
    end_date: str
    price: float
    ticket_url: str
    currency: str = "ILS"
    genres: tuple[str, ...] = ()
    audiences: tuple[str, ...] = ()
    times: tuple[str, ...] = ()
    image: str = ""
    image_alt: str = ""


@dataclass(frozen=True)
class Article:
    slug: str
    title: str
    excerpt: str
    intro: str
    body: tuple[str, ...] = ()
    related_intents: tuple[tuple[str, ...], ...] = ()
    related_city_slugs: tuple[str, ...] = ()
    faq: tuple[FaqEntry, ...] = ()


@dataclass(frozen=True)
class Route:
    """A resolved page. Only the fields relevant to `kind` are set."""

    kind: RouteKind
    city: City | None = None
    intent: Intent | None = None
    article: Article | None = None
    page: int = 1

    @property
    def is_listing(self) -> bool:
        return self.kind in ("city", "intent", "city-intent")


@dataclass(frozen=True)
class NotFound:
    """Resolution outcome for paths that map to no page."""

    segments: tuple[str, ...]
    reason: str


@dataclass(frozen=True)
class BreadcrumbItem:
    name: str
    href: str


@dataclass(frozen=True)
class Link:
    name: str
    href: str


@dataclass
class PageCopy:
    meta_title: str
    meta_description: str
    canonical: str
    h1: str
    intro: str
    breadcrumbs: list[BreadcrumbItem]
    faq: list[FaqEntry] = field(default_factory=list)
    city: City | None = None
    intent: Intent | None = None
    article: Article | None = None


@dataclass
class PaginatedEvents:
    events: list[Event]
    total: int
    total_pages: int
