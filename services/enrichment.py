# services/enrichment.py
# ------------------------------------------------------------------------------
# Per-day enrichment: hop travel times (model, then local fallback) and an
# optional generated picture. Nothing in here raises past enrich_day().
# ------------------------------------------------------------------------------
import json
import logging
import random
import textwrap
from typing import List, Optional, Sequence

from ai.gateway import ModelGateway
from core.errors import ImageGenerationError, RateLimitError
from core.models import DayPlan, EnrichedDayPlan

logger = logging.getLogger(__name__)

TRAVEL_TIME_TEMPERATURE = 0.3
FALLBACK_MIN_MINUTES = 20
FALLBACK_MAX_MINUTES = 60  # exclusive
IMAGE_ATTRACTIONS = 3

IMAGE_WARNING = (
    "Some images could not be generated due to API limits. "
    "Using fallback images instead."
)

TRAVEL_TIME_SYSTEM_PROMPT = (
    "You are a helpful travel planning assistant that provides accurate "
    "travel time estimates."
)

_TRAVEL_TIME_TEMPLATE = textwrap.dedent(
    """\
    The day starts in {start}. Calculate estimated driving times between these
    consecutive stops of the road trip:
    {route}

    Provide realistic estimates for driving between these locations.
    Return the response as a JSON object with this exact format:
    {{
      "times": ["X hours Y minutes", "X hours Y minutes", ...]
    }}

    The array should have {count} elements, representing the time to drive from
    each location to the next.
    Be realistic with driving estimates based on typical routes and speeds.
    """
)


# ──────────────────────────────────────────────────────────────────────────────
# Travel times
# ──────────────────────────────────────────────────────────────────────────────
def hop_locations(day: DayPlan) -> List[str]:
    """Stops whose consecutive pairs are the day's hops: attractions, then the night stop."""
    return [*day.attractions, day.overnight]


def format_minutes(minutes: int) -> str:
    hours, rest = divmod(minutes, 60)
    if hours > 0:
        return f"{hours} hours {rest} minutes"
    return f"{rest} minutes"


def fallback_travel_times(hops: int, rng: Optional[random.Random] = None) -> List[str]:
    rng = rng or random.Random()
    return [
        format_minutes(rng.randrange(FALLBACK_MIN_MINUTES, FALLBACK_MAX_MINUTES))
        for _ in range(hops)
    ]


def build_travel_time_prompt(day: DayPlan) -> str:
    locations = hop_locations(day)
    return _TRAVEL_TIME_TEMPLATE.format(
        start=day.from_,
        route=" → ".join(locations),
        count=len(locations) - 1,
    )


def _parse_times(raw: str, expected: int) -> Optional[List[str]]:
    data = json.loads(raw)
    if isinstance(data, dict) and isinstance(data.get("times"), list):
        times = data["times"]
    elif isinstance(data, list):
        times = data
    else:
        return None

    times = [str(t).strip() for t in times if t is not None]
    if len(times) != expected or not all(times):
        return None
    return times


def estimate_travel_times(gateway: ModelGateway, day: DayPlan,
                          rng: Optional[random.Random] = None) -> List[str]:
    """Always returns one duration per hop, falling back to synthetic values."""
    expected = len(hop_locations(day)) - 1
    try:
        raw = gateway.chat_complete(
            TRAVEL_TIME_SYSTEM_PROMPT,
            build_travel_time_prompt(day),
            TRAVEL_TIME_TEMPERATURE,
        )
        times = _parse_times(raw, expected)
    except Exception as exc:
        logger.warning("Travel times for day %s failed (%s), using estimates", day.day, exc)
        return fallback_travel_times(expected, rng)

    if times is None:
        logger.warning("Unusable travel times for day %s, using estimates", day.day)
        return fallback_travel_times(expected, rng)
    logger.debug("Travel times for day %s: %s", day.day, times)
    return times


# ──────────────────────────────────────────────────────────────────────────────
# Images
# ──────────────────────────────────────────────────────────────────────────────
def build_image_prompt(day: DayPlan) -> str:
    attractions = ", ".join(day.attractions[:IMAGE_ATTRACTIONS])
    return (
        f"A beautiful travel photo showing highlights of a road trip from {day.from_} "
        f"to {day.to}, featuring {day.overnight} and attractions like {attractions}. "
        "High quality, scenic landscape photography style."
    )


def generate_day_image(gateway: ModelGateway, day: DayPlan,
                       warnings: Optional[List[str]] = None) -> Optional[str]:
    """URL of the generated picture, or None; failures are logged, not raised."""
    try:
        return gateway.generate_image(build_image_prompt(day))
    except Exception as exc:
        logger.warning("Image generation for day %s failed: %s", day.day, exc)
        if (warnings is not None and isinstance(exc, (RateLimitError, ImageGenerationError))
                and IMAGE_WARNING not in warnings):
            warnings.append(IMAGE_WARNING)
        return None


# ──────────────────────────────────────────────────────────────────────────────
# Public entry point
# ──────────────────────────────────────────────────────────────────────────────
def enrich_day(gateway: ModelGateway, day: DayPlan, generate_images: bool,
               rng: Optional[random.Random] = None,
               warnings: Optional[List[str]] = None) -> EnrichedDayPlan:
    """
    Return a new record with travel times and, when asked, an image.

    Days without attractions come back unchanged (no travel times, no image).
    At most two model calls are made, each exactly once.
    """
    if not day.attractions:
        return EnrichedDayPlan.from_plan(day)

    times = estimate_travel_times(gateway, day, rng)
    image = generate_day_image(gateway, day, warnings) if generate_images else None
    return EnrichedDayPlan.from_plan(
        day,
        attraction_travel_times=tuple(times),
        image=image,
    )


def enrich_days(gateway: ModelGateway, days: Sequence[DayPlan], generate_images: bool,
                rng: Optional[random.Random] = None,
                warnings: Optional[List[str]] = None) -> List[EnrichedDayPlan]:
    """Enrich days one after the other, in itinerary order."""
    return [enrich_day(gateway, d, generate_images, rng, warnings) for d in days]
