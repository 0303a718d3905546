from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .coercion import Number, coerce_number

logger = logging.getLogger("listing_scrape.models")


class RawListing(BaseModel):
    """Shape requested from the extraction service for one listing card.

    Numeric fields accept text because the service often copies the visible
    label ("12 500 ₽", "45,5 м²") instead of a bare number.
    """

    title: str = Field(description="Listing headline as shown on the card.")
    price: Union[float, str] = Field(description="Asking price in rubles.")
    location: str = Field(description="Address, district or metro station.")
    area: Optional[Union[float, str]] = Field(default=None, description="Total area in square meters.")
    rooms: Optional[Union[int, str]] = Field(default=None, description="Number of rooms.")
    floor: Optional[str] = Field(default=None, description="Floor, e.g. '5/12 эт.'.")
    description: Optional[str] = None
    seller_rating: Optional[Union[float, str]] = Field(default=None, description="Seller rating, 0-5.")
    views: Optional[Union[int, str]] = Field(default=None, description="View counter.")


class ListingsExtraction(BaseModel):
    listings: List[RawListing] = Field(description="Объявления недвижимости на Avito")


class PaginationLink(BaseModel):
    link: str


class PaginationExtraction(BaseModel):
    page_links: List[PaginationLink] = Field(
        description="Pagination links in the bottom of the page."
    )


def _coerce_text(value: Any) -> Any:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class Listing(BaseModel):
    """A validated listing record; optional numerics stay ``None`` when unparseable."""

    title: str
    price: Number
    location: str
    area: Optional[Number] = None
    rooms: Optional[Number] = None
    floor: Optional[str] = None
    description: Optional[str] = None
    seller_rating: Optional[Number] = None
    views: Optional[Number] = None

    model_config = ConfigDict(extra="ignore")

    @field_validator("title", "location", "floor", "description", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        return _coerce_text(value)

    @field_validator("price", "area", "seller_rating", mode="before")
    @classmethod
    def _coerce_decimal(cls, value: Any) -> Optional[Number]:
        return coerce_number(value, allow_decimal=True)

    @field_validator("rooms", "views", mode="before")
    @classmethod
    def _coerce_count(cls, value: Any) -> Optional[Number]:
        return coerce_number(value, allow_decimal=False)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


def build_listing_schema() -> Dict[str, Any]:
    """JSON schema used to ask Firecrawl for listing cards."""

    return ListingsExtraction.model_json_schema()


def build_pagination_schema() -> Dict[str, Any]:
    """JSON schema used to ask Firecrawl for the pagination block."""

    return PaginationExtraction.model_json_schema()


def parse_listings(payload: Any) -> List[Listing]:
    """Validate the ``listings`` array of an extraction payload.

    Records missing a required field (or with an unparseable price) are
    dropped; a bad record never fails the page.
    """

    rows: Any = payload.get("listings") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        return []

    listings: List[Listing] = []
    for idx, row in enumerate(rows):
        if not isinstance(row, dict):
            logger.debug("Dropping non-object listing row index=%s", idx)
            continue
        try:
            listings.append(Listing.model_validate(row))
        except ValidationError as exc:
            logger.debug(
                "Dropping invalid listing index=%s errors=%s",
                idx,
                [".".join(str(p) for p in err["loc"]) for err in exc.errors()],
            )
    return listings


def parse_pagination_links(payload: Any) -> List[str]:
    """Return the raw ``link`` strings of a pagination payload, skipping blanks."""

    rows: Any = payload.get("page_links") if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        return []

    links: List[str] = []
    for row in rows:
        if isinstance(row, dict):
            row = row.get("link")
        if isinstance(row, str) and row.strip():
            links.append(row.strip())
    return links
