# services/display.py
# ------------------------------------------------------------------------------
# Small helpers shared by the Streamlit page, the CLI and the HTTP API.
# ------------------------------------------------------------------------------
from typing import Optional
from urllib.parse import quote

from core.models import EnrichedDayPlan

_PLACEHOLDER_URL = "https://source.unsplash.com/300x200/?{query},landmark"
_BOOKING_URL = "https://www.booking.com/searchresults.html?ss={query}"


def placeholder_image_url(location: str) -> str:
    """Stock picture keyed by the overnight location (same text → same URL)."""
    return _PLACEHOLDER_URL.format(query=quote(location.strip()))


def day_image(day: EnrichedDayPlan) -> str:
    return day.image or placeholder_image_url(day.overnight)


def hop_label(day: EnrichedDayPlan, index: int) -> Optional[str]:
    """'45 minutes to next attraction' / '… to overnight stay', None when unknown."""
    times = day.attraction_travel_times
    if not times or index >= len(times):
        return None
    target = "next attraction" if index < len(day.attractions) - 1 else "overnight stay"
    return f"{times[index]} to {target}"


def booking_url(location: str) -> str:
    """Hotel search for the overnight stop."""
    return _BOOKING_URL.format(query=quote(location.strip(), safe=""))


PROVIDER_NAMES = {"openai": "OpenAI", "gemini": "Google Gemini"}


def provider_label(provider: str) -> str:
    return PROVIDER_NAMES.get(provider, provider)
