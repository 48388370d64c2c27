"""
BookATeeTime (TeeQuest) provider.

TeeQuest has no JSON API; the public search page is fetched and each tee time
card is scraped from the HTML. Card times are US Central local times.
"""

import logging
import re
from datetime import datetime

import httpx
import pytz
from bs4 import BeautifulSoup, Tag
from pytz.exceptions import InvalidTimeError

from teetimes.config import settings
from teetimes.models.schemas import CourseSource, GolfCourse, TeeTime
from teetimes.providers.base import TeeTimeProvider
from teetimes.providers.bookateetime_dom_schema import DOM

logger = logging.getLogger(__name__)

BASE_URL = "https://bookateetime.teequest.com"
SEARCH_URL = f"{BASE_URL}/search/{{course_id}}/{{date}}"

SELECTED_HOLES = 18
DATE_TIME_FORMAT = "%Y%m%d%H%M"
COURSE_TIMEZONE = pytz.timezone("America/Chicago")

HOLES_PATTERN = re.compile(r"\d+")


class BookATeeTimeProvider(TeeTimeProvider):
    name = "BookATeeTime"
    source = CourseSource.BOOKATEETIME

    async def fetch(
        self,
        client: httpx.AsyncClient,
        course: GolfCourse,
        date: str,
        players: int,
    ) -> list[TeeTime]:
        response = await client.get(
            SEARCH_URL.format(course_id=course.external_id, date=date),
            params={"selectedPlayers": players, "selectedHoles": SELECTED_HOLES},
            headers={"User-Agent": settings.user_agent},
        )
        response.raise_for_status()
        return self.parse_tee_times(response.text, course)

    def parse_tee_times(self, html: str, course: GolfCourse) -> list[TeeTime]:
        """Scrape every tee time card from a search results page, skipping incomplete ones."""
        soup = BeautifulSoup(html, "html.parser")

        tee_times: list[TeeTime] = []
        for card in soup.select(DOM.TEE_TIME.tee_time):
            tee_time = self._parse_card(card, course)
            if tee_time is None:
                logger.debug(f"[{self.name}] {course.name} skipping incomplete card: {card.attrs}")
                continue
            tee_times.append(tee_time)
        return tee_times

    def _parse_card(self, card: Tag, course: GolfCourse) -> TeeTime | None:
        raw_time = card.get(DOM.ATTRIBUTES.date_time)
        raw_price = card.get(DOM.ATTRIBUTES.price)
        raw_available = card.get(DOM.ATTRIBUTES.available)
        if not isinstance(raw_time, str) or not isinstance(raw_price, str) or not isinstance(raw_available, str):
            return None

        tee_time = self._parse_local_time(raw_time)
        if tee_time is None:
            return None

        try:
            price = float(raw_price)
            available = int(raw_available)
        except ValueError:
            return None

        return TeeTime(
            course=course.name,
            tee_time=tee_time,
            price=price,
            players=available,
            holes=self._parse_holes(card),
            lat=course.lat,
            lon=course.lon,
            book_url=f"{BASE_URL}{self._booking_href(card)}",
        )

    def _parse_local_time(self, value: str) -> datetime | None:
        """
        Convert a YYYYMMDDHHMM Central time to UTC.

        Times that fall in a DST gap or overlap are rejected rather than guessed.
        """
        try:
            naive = datetime.strptime(value, DATE_TIME_FORMAT)
            local = COURSE_TIMEZONE.localize(naive, is_dst=None)
        except (ValueError, InvalidTimeError):
            return None
        return local.astimezone(pytz.utc)

    def _parse_holes(self, card: Tag) -> int | None:
        for span in card.select(DOM.TEE_TIME.holes_text):
            match = HOLES_PATTERN.search(span.get_text())
            if match:
                return int(match.group())
        return None

    def _booking_href(self, card: Tag) -> str:
        link = card.select_one(DOM.TEE_TIME.booking_link)
        if link is None:
            return ""
        href = link.get(DOM.ATTRIBUTES.href)
        return href if isinstance(href, str) else ""
