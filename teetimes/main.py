import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from teetimes.api import courses, health, tee_times
from teetimes.config import settings
from teetimes.services.course_service import course_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    loaded = course_service.load()
    logger.info(f"Serving tee times for {len(loaded)} catalog courses")

    yield


app = FastAPI(
    title="TeeTimes",
    description="Golf tee time availability aggregated across booking providers",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(courses.router)
app.include_router(tee_times.router)
