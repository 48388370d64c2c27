"""
Centralized DOM schema for the BookATeeTime (TeeQuest) search results page.

All CSS selectors and attribute names used by BookATeeTimeProvider are defined
here. When TeeQuest changes its markup, update selectors ONLY in this file.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class TeeTimeSelectors:
    """Selectors for the tee time cards on the search results page."""

    # One card per bookable tee time
    tee_time: str = "div.tee-time"
    # Hole count text ("18 Holes") lives in a nested span
    holes_text: str = "span"
    # Booking button; its href is relative to the site origin
    booking_link: str = "a.btn"


@dataclass(frozen=True)
class TeeTimeAttributes:
    """Data attributes carried by each tee time card."""

    # Local course time as YYYYMMDDHHMM
    date_time: str = "data-date-time"
    price: str = "data-price"
    available: str = "data-available"
    href: str = "href"


@dataclass(frozen=True)
class BookATeeTimeDOMSchema:
    """Top-level container grouping all selector categories."""

    TEE_TIME: TeeTimeSelectors = TeeTimeSelectors()
    ATTRIBUTES: TeeTimeAttributes = TeeTimeAttributes()


# Single import point: `from teetimes.providers.bookateetime_dom_schema import DOM`
DOM = BookATeeTimeDOMSchema()
