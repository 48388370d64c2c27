"""
Canonical data model shared by the catalog, the provider adapters and the API.

Courses come from the static catalog and are immutable for the life of the
process. Tee times are produced by the adapters, one canonical record per
upstream slot, and are never mutated after creation.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class CourseSource(str, Enum):
    BOOKATEETIME = "bookateetime"
    GOLFBACK = "golfback"
    FOREUP = "foreup"
    TEEITUP = "teeitup"


class VerboseCourseId(BaseModel):
    """Course identity carrying the tenant's booking site URL and alias."""

    model_config = ConfigDict(frozen=True)

    id: int
    url: str
    alias: str


CourseId = Union[int, str, VerboseCourseId]


def parse_course_id(value: Any) -> CourseId:
    """
    Parse a raw catalog identity into one of the three CourseId shapes.

    Shapes are tried in a fixed order: integer, then string, then the
    verbose {id, url, alias} object. Booleans are not integers here.

    Raises:
        ValueError: If the value matches none of the shapes.
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value
    if isinstance(value, VerboseCourseId):
        return value
    if isinstance(value, dict):
        try:
            return VerboseCourseId.model_validate(value)
        except ValidationError as e:
            raise ValueError(f"Invalid verbose course id: {e.errors()}") from e
    raise ValueError(f"Unsupported course id shape: {value!r}")


class GolfCourse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: CourseId
    name: str
    lat: float
    lon: float
    source: str = Field(..., description="Provider tag that decides which adapter queries this course")

    @field_validator("id", mode="before")
    @classmethod
    def _parse_id(cls, value: Any) -> CourseId:
        return parse_course_id(value)

    @property
    def external_id(self) -> str:
        """The provider-facing identifier, whatever shape the identity has."""
        if isinstance(self.id, VerboseCourseId):
            return str(self.id.id)
        return str(self.id)

    @property
    def verbose_id(self) -> VerboseCourseId | None:
        return self.id if isinstance(self.id, VerboseCourseId) else None


class Coordinates(BaseModel):
    """Inclusive latitude/longitude bounding box."""

    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return self.min_lat <= lat <= self.max_lat and self.min_lon <= lon <= self.max_lon


class TeeTime(BaseModel):
    model_config = ConfigDict(frozen=True)

    course: str
    tee_time: datetime = Field(..., description="Absolute tee time in UTC")
    price: float = Field(..., description="Price in dollars")
    players: int = Field(..., description="Available player slots")
    holes: int | None = None
    lat: float
    lon: float
    book_url: str

    @field_validator("tee_time")
    @classmethod
    def _require_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            raise ValueError("tee_time must be timezone-aware")
        return value.astimezone(UTC)
