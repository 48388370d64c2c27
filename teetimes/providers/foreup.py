"""
ForeUp provider.

ForeUp's booking API is a plain GET returning a flat JSON list. It expects
dates as MM-DD-YYYY and reports local times without an offset; those are read
with the fixed offset from settings.foreup_utc_offset_hours.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import httpx
from pydantic import BaseModel, field_validator

from teetimes.config import settings
from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime
from teetimes.providers.base import InvalidDateError, ProviderError, TeeTimeProvider

logger = logging.getLogger(__name__)

API_URL = "https://foreupsoftware.com/index.php/api/booking/times"
REFERER_URL = "https://foreupsoftware.com/index.php/booking/{course_id}/7340"
BOOKING_URL = "https://foreupsoftware.com/index.php/booking/22857/{course_id}#/teetimes"

BOOKING_CLASS = "14824"
API_KEY = "no_limits"
TIME_FORMAT = "%Y-%m-%d %H:%M"


def flip_date(date: str) -> str:
    """Convert YYYY-MM-DD to ForeUp's MM-DD-YYYY."""
    try:
        parsed = datetime.strptime(date, "%Y-%m-%d")
    except ValueError as e:
        raise InvalidDateError(f"Invalid date {date!r}: {e}") from e
    return parsed.strftime("%m-%d-%Y")


def parse_holes(value: Any) -> int:
    """
    Normalize ForeUp's hole count, which is either a number or a label.

    Labels mentioning "18" mean 18 holes; any other label means 9.
    """
    if isinstance(value, bool):
        raise ValueError(f"Unexpected type for holes: {value!r}")
    if isinstance(value, str):
        return 18 if "18" in value else 9
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ValueError(f"Unexpected type for holes: {value!r}")


class ForeUpTeeTime(BaseModel):
    time: str
    green_fee: float
    cart_fee: float
    available_spots: int
    holes: int

    @field_validator("holes", mode="before")
    @classmethod
    def _normalize_holes(cls, value: Any) -> int:
        return parse_holes(value)


class ForeUpProvider(TeeTimeProvider):
    name = "ForeUp"
    source = CourseSource.FOREUP

    def check_date(self, date: str) -> None:
        flip_date(date)

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        course_id = course.external_id
        response = await client.get(
            API_URL,
            params={
                "time": "all",
                "date": flip_date(date),
                "holes": "all",
                "players": players,
                "booking_class": BOOKING_CLASS,
                "schedule_id": course_id,
                "api_key": API_KEY,
            },
            headers={
                "User-Agent": settings.user_agent,
                "Referer": REFERER_URL.format(course_id=course_id),
                "Content-Type": "application/json",
            },
        )
        response.raise_for_status()
        return self.parse_tee_times(response.json(), course)

    def parse_tee_times(self, payload: Any, course: GolfCourse) -> list[TeeTime]:
        if not isinstance(payload, list):
            raise ProviderError(f"Expected a list of tee times, got {type(payload).__name__}")

        offset = timezone(timedelta(hours=settings.foreup_utc_offset_hours))
        book_url = BOOKING_URL.format(course_id=course.external_id)

        tee_times: list[TeeTime] = []
        for entry in payload:
            try:
                tt = ForeUpTeeTime.model_validate(entry)
                tee_time = datetime.strptime(tt.time, TIME_FORMAT).replace(tzinfo=offset)
            except ValueError as e:
                logger.debug(f"[{self.name}] {course.name} skipping malformed tee time: {e}")
                continue

            tee_times.append(
                TeeTime(
                    course=course.name,
                    tee_time=tee_time,
                    price=tt.green_fee + tt.cart_fee,
                    players=tt.available_spots,
                    holes=tt.holes,
                    lat=course.lat,
                    lon=course.lon,
                    book_url=book_url,
                )
            )
        return tee_times
