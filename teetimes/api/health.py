from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    return {"status": "healthy", "service": "teetimes"}


@router.get("/")
async def root() -> dict[str, str | dict[str, str]]:
    return {
        "service": "TeeTimes - Golf Tee Time Aggregator",
        "version": "0.1.0",
        "endpoints": {
            "health": "/health",
            "courses": "/courses",
            "tee_times": "/tee_times",
        },
    }
