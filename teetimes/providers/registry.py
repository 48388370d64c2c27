"""Ordered registry of tee time providers. Add new providers here."""

from teetimes.providers.base import TeeTimeProvider
from teetimes.providers.bookateetime import BookATeeTimeProvider
from teetimes.providers.foreup import ForeUpProvider
from teetimes.providers.golfback import GolfBackProvider
from teetimes.providers.teeitup import TeeItUpProvider


def default_providers() -> list[TeeTimeProvider]:
    """Providers in the order their results are concatenated."""
    return [
        BookATeeTimeProvider(),
        GolfBackProvider(),
        ForeUpProvider(),
        TeeItUpProvider(),
    ]
