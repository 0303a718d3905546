from __future__ import annotations

from listing_scrape_application.components.models import (
    Listing,
    build_listing_schema,
    build_pagination_schema,
    parse_listings,
    parse_pagination_links,
)


def test_raw_card_fields_are_coerced():
    listing = Listing.model_validate(
        {
            "title": "2-к. квартира, 45,5 м², 5/12 эт.",
            "price": "12 500 ₽",
            "location": "м. Сокол",
            "area": "45,5 м²",
            "rooms": "2",
        }
    )

    record = listing.to_record()
    assert record["price"] == 12500
    assert record["area"] == 45.5
    assert record["rooms"] == 2
    assert "views" not in record
    assert "seller_rating" not in record


def test_missing_price_drops_record_but_keeps_others():
    payload = {
        "listings": [
            {"title": "Студия", "location": "Москва"},
            {"title": "1-к. квартира", "price": "9 900 000 ₽", "location": "Химки"},
        ]
    }

    listings = parse_listings(payload)

    assert [item.title for item in listings] == ["1-к. квартира"]


def test_unparseable_price_drops_record():
    payload = {"listings": [{"title": "Дом", "price": "договорная", "location": "МО"}]}

    assert parse_listings(payload) == []


def test_optional_fields_absent_not_zero():
    listings = parse_listings(
        {
            "listings": [
                {
                    "title": "3-к. квартира",
                    "price": 21000000,
                    "location": "Москва",
                    "area": "не указана",
                    "views": None,
                    "floor": 7,
                    "description": "   ",
                }
            ]
        }
    )

    assert len(listings) == 1
    listing = listings[0]
    assert listing.area is None
    assert listing.views is None
    assert listing.floor == "7"
    assert listing.description is None


def test_blank_required_text_rejects_record():
    assert parse_listings({"listings": [{"title": "  ", "price": 1, "location": "X"}]}) == []


def test_non_object_rows_and_bad_payloads():
    assert parse_listings({"listings": ["oops", 3]}) == []
    assert parse_listings({"listings": "nope"}) == []
    assert parse_listings(None) == []


def test_schemas_describe_requested_shapes():
    listing_schema = build_listing_schema()
    pagination_schema = build_pagination_schema()

    assert listing_schema["required"] == ["listings"]
    assert listing_schema["properties"]["listings"]["description"] == "Объявления недвижимости на Avito"
    assert pagination_schema["properties"]["page_links"]["description"] == (
        "Pagination links in the bottom of the page."
    )


def test_pagination_links_skip_blank_entries():
    payload = {"page_links": [{"link": "/moskva?p=2"}, {"link": ""}, {"href": "/x"}, " /moskva?p=3 "]}

    assert parse_pagination_links(payload) == ["/moskva?p=2", "/moskva?p=3"]
    assert parse_pagination_links({}) == []
