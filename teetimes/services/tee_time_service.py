"""
Tee time aggregation across all providers.

Every provider searches the same course list concurrently over one shared HTTP
client. Results are concatenated in fixed provider order, so the output is
deterministic regardless of which provider answers first. A failing provider
contributes nothing; the aggregate call itself never fails.
"""

import asyncio
import logging
from collections.abc import Sequence

import httpx

from teetimes.models.schemas import GolfCourse, TeeTime
from teetimes.providers.base import TeeTimeProvider, create_client
from teetimes.providers.registry import default_providers

logger = logging.getLogger(__name__)


class TeeTimeService:
    """
    Fans tee time searches out to every provider and merges the results.

    Attributes:
        _providers: Providers in output order.
    """

    def __init__(self, providers: Sequence[TeeTimeProvider] | None = None) -> None:
        self._providers = list(providers) if providers is not None else default_providers()

    @property
    def providers(self) -> list[TeeTimeProvider]:
        return list(self._providers)

    async def get_tee_times(
        self,
        courses: Sequence[GolfCourse],
        date: str,
        players: int,
        client: httpx.AsyncClient | None = None,
    ) -> list[TeeTime]:
        """
        Collect tee times for the given courses from every provider.

        Args:
            courses: Courses to search; each provider picks the ones tagged for it.
            date: Requested date as YYYY-MM-DD.
            players: Requested party size.
            client: Optional HTTP client shared by all providers.

        Returns:
            Provider segments concatenated in provider order. Not sorted by
            time or price, and not deduplicated across providers.
        """
        if client is not None:
            return await self._search_all(client, courses, date, players)
        async with create_client() as owned_client:
            return await self._search_all(owned_client, courses, date, players)

    async def _search_all(
        self,
        client: httpx.AsyncClient,
        courses: Sequence[GolfCourse],
        date: str,
        players: int,
    ) -> list[TeeTime]:
        segments = await asyncio.gather(
            *(provider.search(courses, date, players, client=client) for provider in self._providers),
            return_exceptions=True,
        )

        results: list[TeeTime] = []
        counts: list[str] = []
        for provider, segment in zip(self._providers, segments):
            if isinstance(segment, Exception):
                logger.error(f"[{provider.name}] search failed: {segment!r}")
                segment = []
            results.extend(segment)
            counts.append(f"{provider.name}={len(segment)}")

        logger.info(
            f"Found {len(results)} tee times for {len(courses)} course(s) on {date} "
            f"({', '.join(counts)})"
        )
        return results


tee_time_service = TeeTimeService()
