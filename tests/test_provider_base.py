"""
Tests for the shared provider plumbing in teetimes/providers/base.py.

These tests use a stub provider to verify course eligibility, concurrent
fan-out ordering and per-course failure isolation.
"""

import asyncio
from datetime import UTC, datetime

import httpx
import pytest

from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime
from teetimes.providers.base import (
    InvalidDateError,
    ProviderError,
    TeeTimeProvider,
    parse_rfc3339,
)
from tests.fixtures.sample_data import make_course, mock_client


class StubProvider(TeeTimeProvider):
    """Returns one record per course, failing for course names listed in failures."""

    name = "Stub"
    source = CourseSource.FOREUP

    def __init__(self, failures: dict[str, Exception] | None = None, delays: dict[str, float] | None = None) -> None:
        self.failures = failures or {}
        self.delays = delays or {}
        self.fetched: list[str] = []

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        self.fetched.append(course.name)
        await asyncio.sleep(self.delays.get(course.name, 0))
        if course.name in self.failures:
            raise self.failures[course.name]
        return [
            TeeTime(
                course=course.name,
                tee_time=datetime(2024, 6, 15, 18, 30, tzinfo=UTC),
                price=40.0,
                players=players,
                lat=course.lat,
                lon=course.lon,
                book_url="https://example.com",
            )
        ]


def foreup_course(name: str) -> GolfCourse:
    return make_course(name=name, source="foreup")


def unused_handler(request: httpx.Request) -> httpx.Response:
    raise AssertionError("stub providers never send requests")


class TestParseRfc3339:
    """Tests for the RFC 3339 helper."""

    def test_zulu(self) -> None:
        assert parse_rfc3339("2024-06-15T18:30:00Z") == datetime(2024, 6, 15, 18, 30, tzinfo=UTC)

    def test_offset(self) -> None:
        assert parse_rfc3339("2024-06-15T13:30:00-05:00") == datetime(2024, 6, 15, 18, 30, tzinfo=UTC)

    def test_naive_rejected(self) -> None:
        assert parse_rfc3339("2024-06-15T13:30:00") is None

    def test_garbage_rejected(self) -> None:
        assert parse_rfc3339("not a time") is None


class TestSearch:
    """Tests for TeeTimeProvider.search."""

    @pytest.mark.asyncio
    async def test_only_matching_source(self) -> None:
        provider = StubProvider()
        courses = [
            foreup_course("A"),
            make_course(name="B", source="golfback"),
            foreup_course("C"),
        ]
        async with mock_client(unused_handler) as client:
            result = await provider.search(courses, "2024-06-15", 4, client=client)

        assert [t.course for t in result] == ["A", "C"]
        assert sorted(provider.fetched) == ["A", "C"]

    @pytest.mark.asyncio
    async def test_no_eligible_courses(self) -> None:
        provider = StubProvider()
        result = await provider.search([make_course(source="golfback")], "2024-06-15", 4)
        assert result == []
        assert provider.fetched == []

    @pytest.mark.asyncio
    async def test_course_order_kept_regardless_of_completion(self) -> None:
        provider = StubProvider(delays={"A": 0.05, "B": 0.0, "C": 0.02})
        courses = [foreup_course("A"), foreup_course("B"), foreup_course("C")]
        async with mock_client(unused_handler) as client:
            result = await provider.search(courses, "2024-06-15", 4, client=client)
        assert [t.course for t in result] == ["A", "B", "C"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("timed out"),
            ProviderError("unexpected payload"),
            ValueError("bad json"),
        ],
    )
    async def test_failing_course_is_isolated(self, error: Exception) -> None:
        provider = StubProvider(failures={"B": error})
        courses = [foreup_course("A"), foreup_course("B"), foreup_course("C")]
        async with mock_client(unused_handler) as client:
            result = await provider.search(courses, "2024-06-15", 4, client=client)
        assert [t.course for t in result] == ["A", "C"]

    @pytest.mark.asyncio
    async def test_unexpected_error_is_isolated(self) -> None:
        provider = StubProvider(failures={"A": KeyError("teetimes")})
        courses = [foreup_course("A"), foreup_course("B")]
        async with mock_client(unused_handler) as client:
            result = await provider.search(courses, "2024-06-15", 4, client=client)
        assert [t.course for t in result] == ["B"]

    @pytest.mark.asyncio
    async def test_rejected_date_skips_all_courses(self) -> None:
        class StrictDateProvider(StubProvider):
            def check_date(self, date: str) -> None:
                raise InvalidDateError(f"bad date {date}")

        provider = StrictDateProvider()
        async with mock_client(unused_handler) as client:
            result = await provider.search([foreup_course("A")], "nope", 4, client=client)
        assert result == []
        assert provider.fetched == []

    @pytest.mark.asyncio
    async def test_creates_client_when_omitted(self) -> None:
        provider = StubProvider()
        result = await provider.search([foreup_course("A")], "2024-06-15", 2)
        assert [t.players for t in result] == [2]
