# tests/test_live.py

import os

import pytest

from ai.gateway import create_gateway
from core.config import Settings
from core.models import TripRequest
from services.planner import plan_trip

API_KEY = os.getenv("OPENAI_API_KEY")


@pytest.mark.skipif(not API_KEY, reason="OPENAI_API_KEY absent: live test skipped")
def test_plan_real_trip():
    """Smoke test against the real API, without images to keep it cheap."""
    gateway = create_gateway(Settings(openai_api_key=API_KEY))
    plan = plan_trip(gateway, TripRequest("New York, NY", "Miami, FL", 2, generate_images=False))
    assert 1 <= len(plan.itinerary) <= 2
    for d in plan.itinerary:
        if d.attractions:
            assert len(d.attraction_travel_times) == len(d.attractions)
