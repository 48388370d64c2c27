from fastapi import APIRouter

from teetimes.models.schemas import GolfCourse
from teetimes.services.course_service import course_service, parse_coords

router = APIRouter(tags=["courses"])


@router.get("/courses", response_model=list[GolfCourse])
async def list_courses(coords: str | None = None) -> list[GolfCourse]:
    """
    List catalog courses inside a bounding box.

    Args:
        coords: JSON object {"min_lat", "max_lat", "min_lon", "max_lon"}.
            Missing or malformed values fall back to the default box.
    """
    return course_service.select(parse_coords(coords))
