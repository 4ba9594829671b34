# services/planner.py

import logging
import random
from typing import Optional

from ai.gateway import ModelGateway
from core.errors import MissingCredentialError
from core.models import EnrichedDayPlan, TripPlan, TripRequest
from services.enrichment import enrich_days
from services.itinerary import is_degraded, synthesize

logger = logging.getLogger(__name__)


def plan_trip(gateway: Optional[ModelGateway], request: TripRequest,
              rng: Optional[random.Random] = None) -> TripPlan:
    """
    Full pipeline for one request: synthesize the days, then enrich them in
    order. Raises MissingCredentialError without a gateway and SynthesisError
    when no itinerary can be produced; every per-day problem is absorbed.
    The fallback itinerary is returned as is, without further model calls.
    """
    if gateway is None:
        raise MissingCredentialError("No model gateway configured: the API key is missing.")

    logger.info("Planning %d-day trip %s → %s (images=%s)", request.duration,
                request.start_location, request.destination, request.generate_images)
    days = synthesize(gateway, request.start_location, request.destination, request.duration)

    plan = TripPlan(request=request)
    if is_degraded(days, request.start_location, request.destination):
        plan.itinerary = [EnrichedDayPlan.from_plan(d) for d in days]
        return plan
    plan.itinerary = enrich_days(gateway, days, request.generate_images, rng, plan.warnings)
    return plan
