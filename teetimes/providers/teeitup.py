"""
TeeItUp (Kenna) provider.

The Kenna API is multi-tenant: every request has to carry the tenant's booking
site as Origin/Referer and its alias in X-Be-Alias, so only courses with a
verbose identity can be queried. Prices are in cents.
"""

import logging
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from teetimes.config import settings
from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime, VerboseCourseId
from teetimes.providers.base import ProviderError, TeeTimeProvider, parse_rfc3339

logger = logging.getLogger(__name__)

API_URL = "https://phx-api-be-east-1b.kenna.io/v2/tee-times"
FALLBACK_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
# The booking site takes a player cap; TeeItUp courses are not capped.
MAX_PLAYERS_PARAM = 9999


class TeeItUpModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TeeItUpPromotion(TeeItUpModel):
    green_fee_cart: float | None = None


class TeeItUpRate(TeeItUpModel):
    holes: int
    green_fee_cart: float | None = None
    promotion: TeeItUpPromotion | None = None

    @property
    def price_cents(self) -> float | None:
        """Cart-inclusive price; a promotion price overrides the rate's own."""
        if self.promotion is not None and self.promotion.green_fee_cart is not None:
            return self.promotion.green_fee_cart
        return self.green_fee_cart


class TeeItUpTeeTime(TeeItUpModel):
    teetime: str
    max_players: int
    rates: list[TeeItUpRate] = Field(default_factory=list)


class TeeItUpResponse(TeeItUpModel):
    teetimes: list[Any] = Field(default_factory=list)


def parse_tee_time(value: str) -> datetime | None:
    parsed = parse_rfc3339(value)
    if parsed is not None:
        return parsed
    try:
        return datetime.strptime(value, FALLBACK_TIME_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        return None


class TeeItUpProvider(TeeTimeProvider):
    name = "TeeItUp"
    source = CourseSource.TEEITUP

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        verbose = course.verbose_id
        if verbose is None:
            logger.debug(f"[{self.name}] {course.name} has no verbose id, skipping")
            return []

        response = await client.get(
            API_URL,
            params={"date": date, "facilityIds": verbose.id},
            headers={
                "Accept": "application/json, text/plain, */*",
                "Origin": verbose.url,
                "Referer": verbose.url,
                "User-Agent": settings.user_agent,
                "X-Be-Alias": verbose.alias,
            },
        )
        response.raise_for_status()
        return self.parse_tee_times(response.json(), course, verbose, date)

    def parse_tee_times(
        self,
        payload: Any,
        course: GolfCourse,
        verbose: VerboseCourseId,
        date: str,
    ) -> list[TeeTime]:
        """
        Map a Kenna response onto canonical tee times.

        The payload is a list whose first element holds the facility's tee
        times. Each tee time is priced by its first rate; tee times without
        rates, or whose first rate has no price, are dropped.
        """
        if not isinstance(payload, list):
            raise ProviderError(f"Expected a list, got {type(payload).__name__}")
        if not payload:
            return []

        response = TeeItUpResponse.model_validate(payload[0])
        book_url = f"{verbose.url}/?course={verbose.id}&date={date}&max={MAX_PLAYERS_PARAM}"

        tee_times: list[TeeTime] = []
        for entry in response.teetimes:
            try:
                tt = TeeItUpTeeTime.model_validate(entry)
            except ValidationError as e:
                logger.debug(f"[{self.name}] {course.name} skipping malformed tee time: {e}")
                continue

            if not tt.rates:
                continue
            rate = tt.rates[0]
            price_cents = rate.price_cents
            if price_cents is None:
                continue
            tee_time = parse_tee_time(tt.teetime)
            if tee_time is None:
                logger.debug(f"[{self.name}] {course.name} skipping unparsable time: {tt.teetime}")
                continue

            tee_times.append(
                TeeTime(
                    course=course.name,
                    tee_time=tee_time,
                    price=price_cents / 100,
                    players=tt.max_players,
                    holes=rate.holes,
                    lat=course.lat,
                    lon=course.lon,
                    book_url=book_url,
                )
            )
        return tee_times
