"""Tests for catalog loading and validation."""

import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from factories import TLV, build_catalog, make_article, make_city, make_event, make_intent
from services.catalog import (
    DEFAULT_CATALOG_PATH,
    Catalog,
    CatalogError,
    fetch_catalog,
    find_warnings,
    html_to_text,
    load_catalog,
)
from services.http import HttpError
from services.segments import ARTICLES_KEYWORD, PAGE_KEYWORD


def catalog_payload() -> dict:
    return {
        "cities": [
            {
                "slug": TLV,
                "name": "תל אביב",
                "metaTitle": "מסיבות בתל אביב",
                "neighborhoods": ["פלורנטין"],
                "faq": [{"question": "מתי?", "answer": "בלילה"}],
            }
        ],
        "intents": [
            {"slugSegments": ["חגים", "סוכות"], "name": "מסיבות סוכות", "kind": "time"},
        ],
        "events": [
            {
                "slug": "sukkot-night",
                "name": "לילה בסוכות",
                "description": "<p>מסיבה <b>גדולה</b></p>",
                "citySlug": TLV,
                "venue": {"name": "קלרה", "address": "הנמל 25", "phone": "03-555-8822"},
                "startDate": "2025-10-15T22:00:00+03:00",
                "endDate": "2025-10-16T04:00:00+03:00",
                "price": 100,
                "times": ["חגים/סוכות"],
            }
        ],
        "articles": [
            {
                "slug": "guide",
                "title": "מדריך",
                "body": ["<p>פסקה</p>"],
                "relatedIntents": [["חגים", "סוכות"]],
            }
        ],
    }


class TestCatalogLookups:
    def test_lookups(self):
        catalog = build_catalog()
        assert catalog.city(TLV).name == "תל אביב"
        assert catalog.city("missing") is None
        assert catalog.intent(["חגים", "סוכות"]).kind == "time"
        assert catalog.intent(("חגים", "סוכות")) is catalog.intent(["חגים", "סוכות"])
        assert catalog.intent(["חגים"]) is None
        assert catalog.intent([]) is None
        assert catalog.article("guide").slug == "guide"
        assert catalog.event("haifa-sukkot").city_slug == "חיפה"

    def test_intent_for_tag(self):
        catalog = build_catalog()
        assert catalog.intent_for_tag("חגים/סוכות").name == "מסיבות סוכות"
        assert catalog.intent_for_tag("חגים").name == "מסיבות סוכות"
        assert catalog.intent_for_tag("פופ") is None


class TestCatalogValidation:
    def test_duplicate_city(self):
        with pytest.raises(CatalogError, match="Duplicate city"):
            Catalog(cities=[make_city(TLV), make_city(TLV)], intents=[], events=[], articles=[])

    def test_duplicate_intent_path(self):
        with pytest.raises(CatalogError, match="Duplicate intent"):
            Catalog(cities=[], intents=[make_intent(["טכנו"]), make_intent(["טכנו"])], events=[], articles=[])

    def test_duplicate_article(self):
        with pytest.raises(CatalogError, match="Duplicate article"):
            Catalog(cities=[], intents=[], events=[], articles=[make_article(), make_article()])

    def test_city_intent_collision(self):
        with pytest.raises(CatalogError, match="collides"):
            Catalog(cities=[make_city(TLV)], intents=[make_intent([TLV, "טכנו"])], events=[], articles=[])

    def test_reserved_city_slug(self):
        with pytest.raises(CatalogError, match="reserved"):
            Catalog(cities=[make_city(ARTICLES_KEYWORD)], intents=[], events=[], articles=[])

    def test_reserved_intent_segment(self):
        with pytest.raises(CatalogError, match="pagination keyword"):
            Catalog(cities=[], intents=[make_intent(["טכנו", PAGE_KEYWORD])], events=[], articles=[])

    def test_empty_intent_path(self):
        with pytest.raises(CatalogError, match="empty path"):
            Catalog(cities=[], intents=[make_intent([])], events=[], articles=[])

    def test_unknown_intent_kind(self):
        with pytest.raises(CatalogError, match="unknown kind"):
            Catalog(cities=[], intents=[make_intent(["x"], "weather")], events=[], articles=[])

    def test_slash_in_city_slug(self):
        with pytest.raises(CatalogError, match="Invalid city slug"):
            Catalog(cities=[make_city("a/b")], intents=[], events=[], articles=[])

    def test_invalid_date(self):
        with pytest.raises(CatalogError, match="invalid start date"):
            Catalog(cities=[], intents=[], events=[make_event("e", start_date="soon")], articles=[])

    def test_date_without_offset(self):
        with pytest.raises(CatalogError, match="no UTC offset"):
            Catalog(cities=[], intents=[], events=[make_event("e", start_date="2025-04-10T21:30:00")], articles=[])


class TestFindWarnings:
    def test_clean_catalog(self):
        catalog = Catalog.from_dict(catalog_payload())
        assert find_warnings(catalog) == []

    def test_reports_dangling_references(self):
        catalog = Catalog(
            cities=[make_city(TLV)],
            intents=[],
            events=[make_event("e", city_slug="nowhere", genres=("פופ",))],
            articles=[make_article(related_intents=(("טכנו",),), related_city_slugs=("nowhere",))],
        )
        warnings = find_warnings(catalog)
        assert len(warnings) == 4
        assert any("unknown city 'nowhere'" in w for w in warnings)
        assert any("tag 'פופ'" in w for w in warnings)


class TestFromDict:
    def test_parses_fields(self):
        catalog = Catalog.from_dict(catalog_payload())
        city = catalog.city(TLV)
        assert city.meta_title == "מסיבות בתל אביב"
        assert city.neighborhoods == ("פלורנטין",)
        assert city.faq[0].answer == "בלילה"

        event = catalog.event("sukkot-night")
        assert event.venue.phone == "03-555-8822"
        assert event.venue.map_url is None
        assert event.currency == "ILS"
        assert event.times == ("חגים/סוכות",)

        article = catalog.article("guide")
        assert article.related_intents == (("חגים", "סוכות"),)

    def test_strips_html(self):
        catalog = Catalog.from_dict(catalog_payload())
        assert catalog.event("sukkot-night").description == "מסיבה גדולה"
        assert catalog.article("guide").body == ("פסקה",)

    def test_missing_required_field(self):
        payload = catalog_payload()
        del payload["events"][0]["citySlug"]
        with pytest.raises(CatalogError, match="citySlug"):
            Catalog.from_dict(payload)

    def test_not_an_object(self):
        with pytest.raises(CatalogError):
            Catalog.from_dict([])

    def test_string_slug_segments_rejected(self):
        with pytest.raises(CatalogError, match="slugSegments"):
            Catalog.from_dict({"intents": [{"slugSegments": "טכנו", "name": "טכנו", "kind": "genre"}]})

    @pytest.mark.parametrize(
        "section, field",
        [
            ("cities", "neighborhoods"),
            ("events", "genres"),
            ("articles", "relatedCitySlugs"),
            ("articles", "body"),
        ],
    )
    def test_string_where_list_expected(self, section, field):
        payload = catalog_payload()
        payload[section][0][field] = "פלורנטין"
        with pytest.raises(CatalogError, match=field):
            Catalog.from_dict(payload)

    def test_related_intent_must_be_segment_list(self):
        payload = catalog_payload()
        payload["articles"][0]["relatedIntents"] = ["חגים/סוכות"]
        with pytest.raises(CatalogError, match="related intent"):
            Catalog.from_dict(payload)


class TestHtmlToText:
    def test_plain_text_untouched(self):
        assert html_to_text("  טקסט רגיל ") == "  טקסט רגיל "

    def test_markup_removed(self):
        assert html_to_text("<div>שלום<br/>עולם</div>") == "שלום עולם"


class TestLoadCatalog:
    def test_bundled_catalog_is_valid(self):
        catalog = load_catalog(DEFAULT_CATALOG_PATH)
        assert len(catalog.cities) == 5
        assert len(catalog.events) == 6
        assert find_warnings(catalog) == []

    def test_file(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps(catalog_payload(), ensure_ascii=False), encoding="utf-8")
        assert load_catalog(path).city(TLV) is not None

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid catalog JSON"):
            load_catalog(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read catalog file"):
            load_catalog(tmp_path / "missing.json")

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read catalog file"):
            load_catalog(tmp_path)


class TestFetchCatalog:
    @patch("services.http.httpx.get")
    def test_fetch(self, mock_get):
        mock_response = MagicMock()
        mock_response.json.return_value = catalog_payload()
        mock_get.return_value = mock_response

        catalog = fetch_catalog("https://api.example.com/catalog")

        assert catalog.event("sukkot-night") is not None
        mock_get.assert_called_once_with(
            "https://api.example.com/catalog", follow_redirects=True, timeout=30.0
        )

    @patch("services.http.httpx.get")
    def test_transport_error(self, mock_get):
        mock_get.side_effect = httpx.ConnectError("connection refused")
        with pytest.raises(HttpError):
            fetch_catalog("https://api.example.com/catalog")

    @patch("services.http.httpx.get")
    def test_invalid_json(self, mock_get):
        mock_response = MagicMock()
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_get.return_value = mock_response
        with pytest.raises(HttpError, match="Invalid JSON"):
            fetch_catalog("https://api.example.com/catalog")
