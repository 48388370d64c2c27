"""
Tests for TeeTimeService in teetimes/services/tee_time_service.py.

These tests verify provider ordering, partial failure isolation and an
end-to-end search across all four real providers with stubbed HTTP.
"""

import asyncio
from datetime import UTC, datetime

import httpx
import pytest

from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime
from teetimes.providers.base import TeeTimeProvider
from teetimes.providers.bookateetime import BookATeeTimeProvider
from teetimes.providers.foreup import ForeUpProvider
from teetimes.providers.golfback import GolfBackProvider
from teetimes.providers.teeitup import TeeItUpProvider
from teetimes.services.tee_time_service import TeeTimeService
from tests.fixtures.sample_data import VERBOSE_ID, make_course, mock_client


class DelayedProvider(TeeTimeProvider):
    """Answers after a fixed delay with one record per eligible course."""

    def __init__(self, name: str, source: CourseSource, delay: float) -> None:
        self.name = name
        self.source = source
        self.delay = delay

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        await asyncio.sleep(self.delay)
        return [
            TeeTime(
                course=course.name,
                tee_time=datetime(2024, 6, 15, 18, 30, tzinfo=UTC),
                price=10.0,
                players=players,
                lat=course.lat,
                lon=course.lon,
                book_url=self.name,
            )
        ]


class BrokenProvider(TeeTimeProvider):
    name = "Broken"
    source = CourseSource.GOLFBACK

    async def fetch(self, client, course, date, players):  # type: ignore[no-untyped-def]
        return []

    async def search(self, courses, date, players, client=None):  # type: ignore[no-untyped-def]
        raise RuntimeError("provider crashed")


def unused_handler(request: httpx.Request) -> httpx.Response:
    raise AssertionError("stub providers never send requests")


@pytest.fixture
def courses() -> list[GolfCourse]:
    return [
        make_course(name="Swope", course_id=1218, source="bookateetime"),
        make_course(name="Painted Hills", course_id="gb-1", source="golfback"),
        make_course(name="Tomahawk Hills", course_id=2141, source="foreup"),
        make_course(name="Falcon Ridge", course_id=3384, source="foreup"),
        make_course(name="St. Andrews", course_id=VERBOSE_ID, source="teeitup"),
        make_course(name="Plain TeeItUp", course_id=9999, source="teeitup"),
    ]


class TestDefaultProviders:
    """Tests for the default provider line-up."""

    def test_fixed_provider_order(self) -> None:
        service = TeeTimeService()
        assert [type(p) for p in service.providers] == [
            BookATeeTimeProvider,
            GolfBackProvider,
            ForeUpProvider,
            TeeItUpProvider,
        ]


class TestGetTeeTimes:
    """Tests for aggregation across providers."""

    @pytest.mark.asyncio
    async def test_provider_order_regardless_of_speed(self, courses: list[GolfCourse]) -> None:
        """Segments follow provider order even when later providers finish first."""
        service = TeeTimeService(
            [
                DelayedProvider("slow", CourseSource.BOOKATEETIME, 0.05),
                DelayedProvider("medium", CourseSource.GOLFBACK, 0.02),
                DelayedProvider("fast", CourseSource.FOREUP, 0.0),
            ]
        )
        async with mock_client(unused_handler) as client:
            result = await service.get_tee_times(courses, "2024-06-15", 4, client=client)

        assert [(t.book_url, t.course) for t in result] == [
            ("slow", "Swope"),
            ("medium", "Painted Hills"),
            ("fast", "Tomahawk Hills"),
            ("fast", "Falcon Ridge"),
        ]

    @pytest.mark.asyncio
    async def test_crashing_provider_is_isolated(self, courses: list[GolfCourse]) -> None:
        service = TeeTimeService(
            [
                DelayedProvider("first", CourseSource.BOOKATEETIME, 0.0),
                BrokenProvider(),
                DelayedProvider("last", CourseSource.FOREUP, 0.0),
            ]
        )
        async with mock_client(unused_handler) as client:
            result = await service.get_tee_times(courses, "2024-06-15", 4, client=client)

        assert [t.book_url for t in result] == ["first", "last", "last"]

    @pytest.mark.asyncio
    async def test_no_courses(self) -> None:
        assert await TeeTimeService().get_tee_times([], "2024-06-15", 4) == []

    @pytest.mark.asyncio
    async def test_all_providers_with_partial_failure(self, courses: list[GolfCourse]) -> None:
        """One course's transport failure removes only that course's records."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            host = request.url.host
            if host == "bookateetime.teequest.com":
                return httpx.Response(
                    200,
                    text=(
                        '<div class="tee-time" data-date-time="202406150800" '
                        'data-price="45.00" data-available="4"><span>18 Holes</span></div>'
                    ),
                )
            if host == "api.golfback.com":
                return httpx.Response(
                    200,
                    json={
                        "data": [
                            {
                                "id": "tt-1",
                                "dateTime": "2024-06-15T14:00:00Z",
                                "holes": [9, 18],
                                "playersMax": 4,
                                "rates": [{"price": 34.0, "ratePlanId": "r-1"}],
                            }
                        ]
                    },
                )
            if host == "foreupsoftware.com":
                if request.url.params["schedule_id"] == "2141":
                    raise httpx.ConnectError("connection refused", request=request)
                return httpx.Response(
                    200,
                    json=[
                        {
                            "time": "2024-06-15 09:00",
                            "green_fee": 30.0,
                            "cart_fee": 15.0,
                            "available_spots": 2,
                            "holes": "18 holes",
                        }
                    ],
                )
            if host == "phx-api-be-east-1b.kenna.io":
                return httpx.Response(
                    200,
                    json=[
                        {
                            "teetimes": [
                                {
                                    "teetime": "2024-06-15T16:00:00Z",
                                    "maxPlayers": 3,
                                    "rates": [{"holes": 18, "greenFeeCart": 4500}],
                                }
                            ]
                        }
                    ],
                )
            raise AssertionError(f"unexpected request {request.url}")

        async with mock_client(handler) as client:
            result = await TeeTimeService().get_tee_times(courses, "2024-06-15", 4, client=client)

        assert [t.course for t in result] == ["Swope", "Painted Hills", "Falcon Ridge", "St. Andrews"]
        assert [t.price for t in result] == [45.0, 34.0, 45.0, 45.0]
        assert [t.holes for t in result] == [18, 18, 18, 18]
        assert result[0].tee_time == datetime(2024, 6, 15, 13, 0, tzinfo=UTC)
        # The plain-id TeeItUp course is never queried.
        assert len([r for r in requests if r.url.host == "phx-api-be-east-1b.kenna.io"]) == 1

    @pytest.mark.asyncio
    async def test_bad_date_only_affects_foreup(self, courses: list[GolfCourse]) -> None:
        """ForeUp rejects an unparsable date; other providers still answer."""
        hosts: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            hosts.append(request.url.host)
            if request.url.host == "bookateetime.teequest.com":
                return httpx.Response(200, text="<html></html>")
            if request.url.host == "api.golfback.com":
                return httpx.Response(200, json={"data": []})
            return httpx.Response(200, json=[])

        async with mock_client(handler) as client:
            result = await TeeTimeService().get_tee_times(courses, "15/06/2024", 4, client=client)

        assert result == []
        assert "foreupsoftware.com" not in hosts
        assert "api.golfback.com" in hosts
