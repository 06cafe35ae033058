"""schema.org structured data for listing, article and event pages."""

from models import BreadcrumbItem, Event
from services.content import SITE_ORIGIN, absolute_url, event_path

SCHEMA_CONTEXT = "https://schema.org"


def breadcrumb_schema(breadcrumbs: list[BreadcrumbItem]) -> dict:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "BreadcrumbList",
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "name": crumb.name,
                "item": SITE_ORIGIN if crumb.href == "/" else absolute_url(crumb.href),
            }
            for position, crumb in enumerate(breadcrumbs, start=1)
        ],
    }


def item_list_schema(name: str, events: list[Event]) -> dict:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "ItemList",
        "name": name,
        "itemListElement": [
            {
                "@type": "ListItem",
                "position": position,
                "url": absolute_url(event_path(event)),
            }
            for position, event in enumerate(events, start=1)
        ],
    }


def event_schema(event: Event) -> dict:
    return {
        "@context": SCHEMA_CONTEXT,
        "@type": "Event",
        "name": event.name,
        "startDate": event.start_date,
        "endDate": event.end_date,
        "eventStatus": "https://schema.org/EventScheduled",
        "eventAttendanceMode": "https://schema.org/OfflineEventAttendanceMode",
        "location": {
            "@type": "Place",
            "name": event.venue.name,
            "address": event.venue.address,
        },
        "organizer": {
            "@type": "Organization",
            "name": event.organizer,
        },
        "offers": {
            "@type": "Offer",
            "price": _format_price(event.price),
            "priceCurrency": event.currency,
            "availability": "https://schema.org/InStock",
            "url": absolute_url(event_path(event)),
        },
    }


def _format_price(price: float) -> str:
    # 120.0 -> "120", matching how whole prices are written in the catalog.
    return str(int(price)) if float(price).is_integer() else str(price)
