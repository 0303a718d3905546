from .coercion import Number, coerce_number
from .listing import (
    Listing,
    ListingsExtraction,
    PaginationExtraction,
    PaginationLink,
    RawListing,
    build_listing_schema,
    build_pagination_schema,
    parse_listings,
    parse_pagination_links,
)

__all__ = [
    "Number",
    "coerce_number",
    "Listing",
    "ListingsExtraction",
    "PaginationExtraction",
    "PaginationLink",
    "RawListing",
    "build_listing_schema",
    "build_pagination_schema",
    "parse_listings",
    "parse_pagination_links",
]
