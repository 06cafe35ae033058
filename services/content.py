"""Page copy for resolved routes: meta text, canonical URL, headings,
breadcrumbs and FAQ.

Composition is total over a resolved Route. City and intent listings take
their copy verbatim from the catalog; city x intent pages synthesize theirs
from fixed templates so thousands of combinations get distinct text.
"""

import os

from models import (
    Article,
    BreadcrumbItem,
    City,
    Event,
    FaqEntry,
    Intent,
    Link,
    PageCopy,
    Route,
)
from services.catalog import Catalog
from services.paths import (
    article_segments,
    articles_segments,
    city_intent_segments,
    city_segments,
    event_segments,
    intent_segments,
    route_segments,
)
from services.segments import segments_to_path

SITE_ORIGIN = os.environ.get("SITE_ORIGIN", "https://www.parties247.co.il").rstrip("/")
SITE_NAME = "Parties 24/7"

META_TITLE_MAX = 60
META_TITLE_CUT = 56
CITY_INTENT_DESCRIPTION_MAX = 158
ARTICLE_DESCRIPTION_MAX = 155
EVENT_DESCRIPTION_CUT = 140

HOME_LABEL = "בית"
ARTICLES_LABEL = "כתבות"

HOME_COPY = {
    "meta_title": f"מסיבות ואירועים בישראל - {SITE_NAME}",
    "meta_description": (
        "המסיבות הכי חמות בישראל בערים המובילות. בחרו עיר, ז'אנר או קהל יעד "
        "וגלה אירועים עם קישורים להזמנת כרטיסים."
    ),
    "h1": f"{SITE_NAME} – הבית למסיבות בישראל",
    "intro": (
        f"ברוכים הבאים ללוח המסיבות של {SITE_NAME}. ריכזנו בדף הבית את הקטגוריות הכי "
        "מבוקשות – ערים, ז'אנרים, קהלי יעד וזמנים ספציפיים – כדי שתמצאו את האירוע שלכם "
        "בכמה קליקים. כל אירוע נבדק ידנית ומציג זמני התחלה, מפיקים, מפות הגעה וקישורים "
        "לרכישת כרטיסים. התוכן מתעדכן מדי יום כדי שתמיד תדעו מה קורה הלילה, מחר ובחגים."
    ),
}

ARTICLES_COPY = {
    "meta_title": "כתבות ומדריכים למסיבות",
    "meta_description": (
        "טיפים למפיקים ולבליינים: מדריכים על מועדונים, בטיחות נוער וחוויות מיוחדות בכל הארץ."
    ),
    "h1": "כתבות מסיבות",
    "intro": (
        f"האסופה המערכתית של {SITE_NAME} מציגה מדריכים מקצועיים לחיי לילה בישראל. "
        "נסקור מועדונים, מפיקים, נושאי בטיחות לנוער והשראות לחופשות מסיבות. "
        "כל כתבה מקושרת לדפי הקטגוריות וללוח האירועים הרלוונטי."
    ),
}

KIND_LINES = {
    "audience": (
        "אנחנו מרכזים רק את האירועים שמפוקחים ומתאימים לקהל היעד, "
        "עם מידע על אבטחה, הסעות ושעת כניסה מדויקת."
    ),
    "genre": "הדף מסנן ליינים לפי תתי ז'אנרים ומדגיש שיתופי פעולה של מפיקים מובילים בעיר.",
    "time": "הלוח מציג לוח זמנים מלא לפי ימים ושעות כדי שתדעו בדיוק מה קורה ומתי.",
}


def absolute_url(path: str) -> str:
    return f"{SITE_ORIGIN}{path}"


def home_crumb() -> BreadcrumbItem:
    return BreadcrumbItem(name=HOME_LABEL, href="/")


def articles_crumb() -> BreadcrumbItem:
    return BreadcrumbItem(name=ARTICLES_LABEL, href=segments_to_path(articles_segments()))


def city_breadcrumbs(city: City, intent: Intent | None = None) -> list[BreadcrumbItem]:
    crumbs = [home_crumb(), BreadcrumbItem(name=city.name, href=segments_to_path(city_segments(city)))]
    if intent:
        crumbs.append(
            BreadcrumbItem(name=intent.name, href=segments_to_path(city_intent_segments(city, intent)))
        )
    return crumbs


def intent_breadcrumbs(intent: Intent) -> list[BreadcrumbItem]:
    return [home_crumb(), BreadcrumbItem(name=intent.name, href=segments_to_path(intent_segments(intent)))]


def truncate(text: str, limit: int) -> str:
    return text[:limit]


def city_intent_title(city: City, intent: Intent) -> str:
    if intent.kind == "time":
        return f"מסיבות ב{city.name} – {intent.name}"
    return f"{intent.name} ב{city.name}"


def city_intent_meta_title(city: City, intent: Intent) -> str:
    base = city_intent_title(city, intent)
    candidate = f"{base} - {SITE_NAME}"
    if len(candidate) <= META_TITLE_MAX:
        return candidate
    return f"{base[:META_TITLE_CUT]}…"


def city_intent_description(city: City, intent: Intent) -> str:
    core = f"{intent.name} ב{city.name} עם פירוט מלא על ליינים, קודי הנחה וקישורים למפת הגעה."
    if intent.kind == "time":
        note = "עדכון יומי ללוח המסיבות הקרובות."
    else:
        note = "פרטים על קהל היעד, אמנים אורחים ואבטחה."
    return truncate(f"{core} {note}", CITY_INTENT_DESCRIPTION_MAX)


def city_intent_intro(city: City, intent: Intent) -> str:
    """Five templated sentences built from the city's places and the intent kind."""
    neighborhoods = ", ".join(city.neighborhoods[:3])
    landmarks = " ו".join(city.landmarks[:2])
    # venue and promoter intents share the time wording until they get their own.
    kind_line = KIND_LINES.get(intent.kind, KIND_LINES["time"])
    sentences = [
        f"{intent.name} ב{city.name} מתרחשות סביב {neighborhoods} ומושכות קהל שמחפש חוויה ממוקדת.",
        kind_line,
        f"תוכלו למצוא כאן קישורים לרכישת כרטיסים, מפות הגעה ומידע על חניונים קרובים ליד {landmarks}.",
        "כל אירוע נבדק ידנית כדי לוודא שיש צוות אבטחה, נקודות מים ומדיניות ברורה לגבי גיל, "
        "כך שתוכלו לצאת בראש שקט.",
        "אנו מעדכנים את הרשימה מדי יום עם אורחים מיוחדים, הטבות פריסייל וטיפים להתארגנות חזרה הביתה.",
    ]
    return " ".join(sentences)


def compose(route: Route) -> PageCopy:
    """Build the page copy for a resolved route."""
    canonical = absolute_url(segments_to_path(route_segments(route)))

    if route.kind == "home":
        return PageCopy(canonical=canonical, breadcrumbs=[home_crumb()], **HOME_COPY)

    if route.kind == "city":
        city = route.city
        return PageCopy(
            meta_title=city.meta_title,
            meta_description=city.meta_description,
            canonical=canonical,
            h1=f"מסיבות ב{city.name}",
            intro=city.intro,
            breadcrumbs=city_breadcrumbs(city),
            faq=list(city.faq),
            city=city,
        )

    if route.kind == "intent":
        intent = route.intent
        return PageCopy(
            meta_title=intent.meta_title,
            meta_description=intent.meta_description,
            canonical=canonical,
            h1=intent.name,
            intro=intent.intro,
            breadcrumbs=intent_breadcrumbs(intent),
            faq=list(intent.faq),
            intent=intent,
        )

    if route.kind == "city-intent":
        city, intent = route.city, route.intent
        faq: list[FaqEntry] = [*intent.faq[:2], *city.faq[:1]]
        return PageCopy(
            meta_title=city_intent_meta_title(city, intent),
            meta_description=city_intent_description(city, intent),
            canonical=canonical,
            h1=city_intent_title(city, intent),
            intro=city_intent_intro(city, intent),
            breadcrumbs=city_breadcrumbs(city, intent),
            faq=faq,
            city=city,
            intent=intent,
        )

    if route.kind == "articles":
        return PageCopy(canonical=canonical, breadcrumbs=[home_crumb(), articles_crumb()], **ARTICLES_COPY)

    if route.kind == "article":
        article = route.article
        return PageCopy(
            meta_title=f"{article.title} - {SITE_NAME}",
            meta_description=truncate(article.excerpt, ARTICLE_DESCRIPTION_MAX),
            canonical=canonical,
            h1=article.title,
            intro=article.intro,
            breadcrumbs=[
                home_crumb(),
                articles_crumb(),
                BreadcrumbItem(name=article.title, href=segments_to_path(article_segments(article))),
            ],
            faq=list(article.faq),
            article=article,
        )

    raise ValueError(f"Unknown route kind: {route.kind!r}")


def event_path(event: Event) -> str:
    return segments_to_path(event_segments(event))


def compose_event(catalog: Catalog, event: Event) -> PageCopy:
    """Page copy for an event detail page."""
    city = catalog.city(event.city_slug)
    title = f"{event.name} ב{city.name}" if city else event.name
    href = event_path(event)
    if city:
        breadcrumbs = [
            home_crumb(),
            BreadcrumbItem(name=city.name, href=segments_to_path(city_segments(city))),
            BreadcrumbItem(name=event.name, href=href),
        ]
    else:
        breadcrumbs = [home_crumb()]
    return PageCopy(
        meta_title=f"{title} - {SITE_NAME}",
        meta_description=f"{event.description[:EVENT_DESCRIPTION_CUT]}...",
        canonical=absolute_url(href),
        h1=event.name,
        intro=event.description,
        breadcrumbs=breadcrumbs,
        city=city,
    )


def related_links(catalog: Catalog, event: Event) -> list[Link]:
    """City link first, then one link per distinct intent the event's tags name."""
    links: list[Link] = []
    city = catalog.city(event.city_slug)
    if city:
        links.append(Link(name=f"מסיבות ב{city.name}", href=segments_to_path(city_segments(city))))

    seen: set[str] = set()
    for tag in (*event.genres, *event.audiences, *event.times):
        if tag in seen:
            continue
        seen.add(tag)
        intent = catalog.intent_for_tag(tag)
        if intent:
            links.append(Link(name=intent.name, href=segments_to_path(intent_segments(intent))))
    return links


def article_related_links(catalog: Catalog, article: Article) -> list[Link]:
    links: list[Link] = []
    for segments in article.related_intents:
        intent = catalog.intent(segments)
        if intent:
            links.append(Link(name=intent.name, href=segments_to_path(intent_segments(intent))))
    for slug in article.related_city_slugs:
        city = catalog.city(slug)
        if city:
            links.append(Link(name=f"מסיבות ב{city.name}", href=segments_to_path(city_segments(city))))
    return links
