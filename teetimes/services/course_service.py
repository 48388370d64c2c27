"""
Course catalog and geographic course selection.

The catalog is a static JSON list of courses loaded once per process. Requests
only ever read it, narrowing it down with an inclusive bounding box.
"""

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from teetimes.config import settings
from teetimes.models.schemas import Coordinates, GolfCourse

logger = logging.getLogger(__name__)

_course_list = TypeAdapter(list[GolfCourse])


class CatalogError(Exception):
    """Raised when the course catalog cannot be read or validated."""


def default_coords() -> Coordinates:
    return Coordinates(
        min_lat=settings.default_min_lat,
        max_lat=settings.default_max_lat,
        min_lon=settings.default_min_lon,
        max_lon=settings.default_max_lon,
    )


def parse_coords(raw: str | None) -> Coordinates | None:
    """
    Decode a JSON-encoded bounding box query parameter.

    Returns None when the parameter is absent or malformed, which callers
    treat as "use the default box".
    """
    if not raw:
        return None
    try:
        return Coordinates.model_validate_json(raw)
    except ValidationError as e:
        logger.debug(f"Ignoring malformed coords {raw!r}: {e}")
        return None


def select_courses(courses: Sequence[GolfCourse], coords: Coordinates | None = None) -> list[GolfCourse]:
    """Return the courses inside the box (inclusive), in catalog order."""
    box = coords or default_coords()
    return [course for course in courses if box.contains(course.lat, course.lon)]


def load_courses(path: Path) -> tuple[GolfCourse, ...]:
    """
    Read and validate the course catalog.

    Raises:
        CatalogError: If the file is missing, is not JSON, or holds an invalid course.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        return tuple(_course_list.validate_python(raw))
    except (OSError, ValueError) as e:
        raise CatalogError(f"Failed to load course catalog {path}: {e}") from e


class CourseService:
    """Holds the immutable course catalog snapshot for the process lifetime."""

    def __init__(self, catalog_path: Path | None = None) -> None:
        self._catalog_path = catalog_path
        self._courses: tuple[GolfCourse, ...] | None = None

    def load(self) -> tuple[GolfCourse, ...]:
        """Load the catalog if it has not been loaded yet and return it."""
        if self._courses is None:
            path = self._catalog_path or settings.catalog_path
            self._courses = load_courses(path)
            logger.info(f"Loaded {len(self._courses)} courses from {path}")
        return self._courses

    @property
    def courses(self) -> tuple[GolfCourse, ...]:
        return self.load()

    def select(self, coords: Coordinates | None = None) -> list[GolfCourse]:
        return select_courses(self.courses, coords)


course_service = CourseService()
