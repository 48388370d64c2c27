"""GolfBack provider. Tee times are returned by a JSON POST endpoint."""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from teetimes.config import settings
from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime
from teetimes.providers.base import TeeTimeProvider, parse_rfc3339

logger = logging.getLogger(__name__)

API_URL = "https://api.golfback.com/api/v1"
BOOKING_URL = "https://golfback.com/#/course/{course_id}/date/{date}/teetime/{tee_time_id}"
REFERER = "https://golfback.com/"
BOOKING_HOLES = 18


class GolfBackRate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    price: float
    rate_plan_id: str
    name: str | None = None
    holes: int | None = None
    base_price: float | None = None
    has_cart_included: bool | None = None


class GolfBackTeeTime(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str
    date_time: str
    holes: list[int] = Field(default_factory=list)
    players_max: int
    rates: list[GolfBackRate] = Field(default_factory=list)
    course_name: str | None = None
    is_available: bool | None = None


class GolfBackResponse(BaseModel):
    # Entries are validated one at a time so a single bad entry is dropped alone.
    data: list[Any] = Field(default_factory=list)


class GolfBackProvider(TeeTimeProvider):
    name = "GolfBack"
    source = CourseSource.GOLFBACK

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        course_id = course.external_id
        response = await client.post(
            f"{API_URL}/courses/{course_id}/date/{date}/teetimes",
            json={"date": date, "course_id": course_id, "players": players},
            headers={"User-Agent": settings.user_agent, "Referer": REFERER},
        )
        response.raise_for_status()
        return self.parse_tee_times(response.json(), course, date, players)

    def parse_tee_times(
        self,
        payload: Any,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        """
        Map a GolfBack response onto canonical tee times.

        The first rate is the canonical price; entries without rates or with an
        unparsable time are dropped. Hole count is the largest offered option.
        """
        response = GolfBackResponse.model_validate(payload)

        tee_times: list[TeeTime] = []
        for entry in response.data:
            try:
                tt = GolfBackTeeTime.model_validate(entry)
            except ValidationError as e:
                logger.debug(f"[{self.name}] {course.name} skipping malformed tee time: {e}")
                continue

            if not tt.rates:
                continue
            tee_time = parse_rfc3339(tt.date_time)
            if tee_time is None:
                logger.debug(f"[{self.name}] {course.name} skipping unparsable time: {tt.date_time}")
                continue

            first_rate = tt.rates[0]
            book_url = BOOKING_URL.format(course_id=course.external_id, date=date, tee_time_id=tt.id)
            tee_times.append(
                TeeTime(
                    course=course.name,
                    tee_time=tee_time,
                    price=first_rate.price,
                    players=tt.players_max,
                    holes=max(tt.holes) if tt.holes else None,
                    lat=course.lat,
                    lon=course.lon,
                    book_url=(
                        f"{book_url}?rateId={first_rate.rate_plan_id}"
                        f"&holes={BOOKING_HOLES}&players={players}"
                    ),
                )
            )
        return tee_times
