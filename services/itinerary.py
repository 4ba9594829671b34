# services/itinerary.py
# ------------------------------------------------------------------------------
# Itinerary synthesis: prompt → model → JSON → list[DayPlan]
# ------------------------------------------------------------------------------
import json
import logging
import textwrap
from typing import Any, List

from ai.gateway import ModelGateway
from core.errors import GatewayError, SynthesisError
from core.models import DayPlan

logger = logging.getLogger(__name__)

TEMPERATURE = 0.7
MAX_ATTRACTIONS = 5

DEGRADED_TRAVEL_TIME = "Unknown"
DEGRADED_ATTRACTION = "Unable to generate attractions. Please try again."

SYSTEM_PROMPT = (
    "You are a helpful travel planning assistant. Provide realistic travel "
    "times based on typical driving speeds and routes."
)

# ──────────────────────────────────────────────────────────────────────────────
# Prompt template
# ──────────────────────────────────────────────────────────────────────────────
_PROMPT_TEMPLATE = textwrap.dedent(
    """\
    Create a road trip itinerary from {start} to {destination} over {days} days.
    Return exactly {days} day entries. For each day include:
    1. The starting point
    2. The destination for that day
    3. Where to stay overnight
    4. 3-5 interesting attractions or landmarks to visit along the way
    5. Estimated driving time between the starting point and destination for each day

    Format your response as JSON with the following structure:
    {{
      "itinerary": [
        {{
          "day": 1,
          "from": "Starting City",
          "to": "Destination City",
          "overnight": "Overnight Stay Location",
          "travelTime": "X hours Y minutes",
          "attractions": ["Attraction 1", "Attraction 2", "Attraction 3"]
        }},
        ...
      ]
    }}

    Only respond with the JSON, no additional text.
    """
)


def build_prompt(start: str, destination: str, duration_days: int) -> str:
    """Return the itinerary prompt for the model."""
    return _PROMPT_TEMPLATE.format(start=start, destination=destination, days=duration_days)


def degraded_itinerary(start: str, destination: str) -> List[DayPlan]:
    return [
        DayPlan(
            day=1,
            from_=start,
            to=destination,
            overnight=destination,
            attractions=(DEGRADED_ATTRACTION,),
            travel_time=DEGRADED_TRAVEL_TIME,
        )
    ]


def is_degraded(days: List[DayPlan], start: str, destination: str) -> bool:
    """True when `days` is the fallback itinerary for this trip."""
    return days == degraded_itinerary(start, destination)


# ──────────────────────────────────────────────────────────────────────────────
# Normalisation helpers
# ──────────────────────────────────────────────────────────────────────────────
def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _attractions(value: Any) -> tuple:
    if not isinstance(value, list):
        return ()
    cleaned = [_text(v) for v in value]
    return tuple(a for a in cleaned if a)[:MAX_ATTRACTIONS]


def normalize_days(entries: list, start: str, destination: str,
                   duration_days: int) -> List[DayPlan]:
    """
    Turn the model's day entries into DayPlan records.

    Non-object entries are dropped, days are renumbered 1..n in list order and
    the reply is cut to `duration_days`. Missing locations are filled from the
    previous overnight stop (or the trip start) and the trip destination.
    """
    usable = [e for e in entries if isinstance(e, dict)]
    if len(usable) < len(entries):
        logger.warning("Dropped %d malformed day entries", len(entries) - len(usable))
    if len(usable) > duration_days:
        logger.warning("Model returned %d days for a %d-day trip, truncating",
                       len(usable), duration_days)
        usable = usable[:duration_days]
    elif len(usable) < duration_days:
        logger.warning("Model returned %d days for a %d-day trip",
                       len(usable), duration_days)

    days: List[DayPlan] = []
    previous_stop = start
    for index, entry in enumerate(usable, start=1):
        to = _text(entry.get("to")) or destination
        overnight = _text(entry.get("overnight")) or to
        days.append(
            DayPlan(
                day=index,
                from_=_text(entry.get("from")) or previous_stop,
                to=to,
                overnight=overnight,
                attractions=_attractions(entry.get("attractions")),
                travel_time=_text(entry.get("travelTime")) or None,
            )
        )
        previous_stop = overnight
    return days


# ──────────────────────────────────────────────────────────────────────────────
# Public entry point
# ──────────────────────────────────────────────────────────────────────────────
def synthesize(gateway: ModelGateway, start: str, destination: str,
               duration_days: int) -> List[DayPlan]:
    """
    Ask the model for a `duration_days` road trip and return the day plans.

    Accepted reply shapes, in order: {"itinerary": [...]}, a bare list. Any
    other valid JSON gives the one-day degraded itinerary. A transport failure
    or a reply that is not JSON raises SynthesisError.
    """
    prompt = build_prompt(start, destination, duration_days)
    try:
        raw = gateway.chat_complete(SYSTEM_PROMPT, prompt, TEMPERATURE)
    except GatewayError as exc:
        raise SynthesisError(f"Failed to generate itinerary: {exc}") from exc

    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise SynthesisError("The model returned an itinerary that is not valid JSON.") from exc

    if isinstance(data, dict) and isinstance(data.get("itinerary"), list):
        entries = data["itinerary"]
    elif isinstance(data, list):
        entries = data
    else:
        logger.warning("Unexpected itinerary format: %.200r", data)
        return degraded_itinerary(start, destination)

    days = normalize_days(entries, start, destination, duration_days)
    if not days:
        logger.warning("Itinerary reply contained no usable day entries")
        return degraded_itinerary(start, destination)
    return days
