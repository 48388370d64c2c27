"""
Base class and shared plumbing for tee time providers.

Every provider follows the same contract: given the full course list, a
request date and a player count, query the provider for each course tagged
with its source and return canonical TeeTime records. Failures are scoped to
a single course and degrade to an empty contribution; nothing is raised to
the caller.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime

import httpx

from teetimes.config import settings
from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised when a provider response cannot be turned into tee times."""


class InvalidDateError(ProviderError):
    """Raised when a provider cannot use the requested date."""


def create_client() -> httpx.AsyncClient:
    """Create the HTTP client shared by all fetches of one request."""
    return httpx.AsyncClient(timeout=settings.request_timeout_seconds, follow_redirects=True)


def parse_rfc3339(value: str) -> datetime | None:
    """Parse an RFC 3339 timestamp into UTC, or None if it is not one."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed.astimezone(UTC)


class TeeTimeProvider(ABC):
    """Abstract base class for tee time booking providers."""

    name: str
    source: CourseSource

    @abstractmethod
    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        """
        Query the provider for one course.

        May raise httpx.HTTPError for transport failures and ProviderError
        (or ValueError) for responses that do not have the expected shape.
        """
        pass

    def check_date(self, date: str) -> None:
        """Reject a request date this provider cannot use. Accepts anything by default."""
        pass

    def eligible(self, courses: Sequence[GolfCourse]) -> list[GolfCourse]:
        return [course for course in courses if course.source == self.source.value]

    async def fetch_one(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        """Fetch one course, logging any failure and returning no records for it."""
        try:
            return await self.fetch(client, course, date, players)
        except httpx.HTTPError as e:
            logger.warning(f"[{self.name}] {course.name} HTTP error: {e!r}")
        except (ProviderError, ValueError) as e:
            logger.warning(f"[{self.name}] {course.name} parse error: {e}")
        return []

    async def search(
        self,
        courses: Sequence[GolfCourse],
        date: str,
        players: int,
        client: httpx.AsyncClient | None = None,
    ) -> list[TeeTime]:
        """
        Fetch tee times for every course tagged with this provider's source.

        All eligible courses are fetched concurrently. Results are flattened in
        course order, each course's records in the provider's response order.

        Args:
            courses: Candidate courses; those with another source are ignored.
            date: Requested date as YYYY-MM-DD.
            players: Requested party size.
            client: Optional shared HTTP client. One is created when omitted.

        Returns:
            The canonical records that could be retrieved, possibly empty.
        """
        eligible = self.eligible(courses)
        if not eligible:
            return []

        try:
            self.check_date(date)
        except InvalidDateError as e:
            logger.warning(f"[{self.name}] Skipping {len(eligible)} course(s): {e}")
            return []

        if client is not None:
            return await self._fetch_all(client, eligible, date, players)
        async with create_client() as owned_client:
            return await self._fetch_all(owned_client, eligible, date, players)

    async def _fetch_all(
        self,
        client: httpx.AsyncClient,
        courses: list[GolfCourse],
        date: str,
        players: int,
    ) -> list[TeeTime]:
        results = await asyncio.gather(
            *(self.fetch_one(client, course, date, players) for course in courses),
            return_exceptions=True,
        )

        tee_times: list[TeeTime] = []
        for course, result in zip(courses, results):
            if isinstance(result, Exception):
                logger.error(f"[{self.name}] {course.name} unexpected error: {result!r}")
                continue
            tee_times.extend(result)
        return tee_times
