"""Aggregated tee time search endpoint."""

import logging
from datetime import datetime

import pytz
from fastapi import APIRouter

from teetimes.config import settings
from teetimes.models.schemas import TeeTime
from teetimes.services.course_service import course_service, parse_coords
from teetimes.services.tee_time_service import tee_time_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tee_times"])


def resolve_date(raw: str | None) -> str:
    """Use the requested date as given, or today in the configured timezone."""
    if raw:
        return raw
    tz = pytz.timezone(settings.timezone)
    return datetime.now(tz).strftime("%Y-%m-%d")


def resolve_players(raw: str | None) -> int:
    """Parse a non-negative player count, falling back to the default."""
    if raw is None:
        return settings.default_players
    try:
        players = int(raw)
    except ValueError:
        logger.debug(f"Ignoring malformed players {raw!r}")
        return settings.default_players
    return players if players >= 0 else settings.default_players


@router.get("/tee_times", response_model=list[TeeTime])
async def list_tee_times(
    coords: str | None = None,
    date: str | None = None,
    players: str | None = None,
) -> list[TeeTime]:
    """
    Search every provider for tee times at the courses inside a bounding box.

    Provider failures never fail the request; the response holds whatever
    could be retrieved, grouped by provider.
    """
    courses = course_service.select(parse_coords(coords))
    return await tee_time_service.get_tee_times(
        courses,
        resolve_date(date),
        resolve_players(players),
    )
