# tests/test_enrichment.py

import json
import random
import re

import pytest

from conftest import FakeGateway
from core.errors import GatewayError, ImageGenerationError, RateLimitError
from core.models import DayPlan
from services import enrichment as en

DURATION_RE = re.compile(r"^(\d+ hours )?\d+ minutes$")

DAY = DayPlan(
    day=2,
    from_="Washington, DC",
    to="Charleston, SC",
    overnight="Charleston, SC",
    attractions=("Monticello", "Duke Gardens", "Rainbow Row", "Fort Sumter"),
)


@pytest.mark.parametrize("minutes,text", [
    (20, "20 minutes"),
    (59, "59 minutes"),
    (60, "1 hours 0 minutes"),
    (135, "2 hours 15 minutes"),
])
def test_format_minutes(minutes, text):
    assert en.format_minutes(minutes) == text


def test_fallback_values_are_in_range():
    times = en.fallback_travel_times(200, random.Random(1))
    assert len(times) == 200
    for t in times:
        assert DURATION_RE.match(t)
        assert "hours" not in t
        assert 20 <= int(t.split()[0]) < 60


def test_fallback_is_reproducible_with_a_seed():
    assert en.fallback_travel_times(5, random.Random(42)) == \
        en.fallback_travel_times(5, random.Random(42))
    rng = random.Random(3)
    expected_rng = random.Random(3)
    expected = [f"{expected_rng.randrange(20, 60)} minutes" for _ in range(4)]
    assert en.fallback_travel_times(4, rng) == expected


def test_hops_go_through_attractions_to_overnight():
    assert en.hop_locations(DAY) == [
        "Monticello", "Duke Gardens", "Rainbow Row", "Fort Sumter", "Charleston, SC"]
    prompt = en.build_travel_time_prompt(DAY)
    assert "Monticello → Duke Gardens → Rainbow Row → Fort Sumter → Charleston, SC" in prompt
    assert "should have 4 elements" in prompt
    assert "starts in Washington, DC" in prompt


def test_model_times_are_used():
    times = ["10 minutes", "25 minutes", "1 hours 5 minutes", "40 minutes"]
    gw = FakeGateway(times=json.dumps({"times": times}))
    day = en.enrich_day(gw, DAY, generate_images=False)
    assert day.attraction_travel_times == tuple(times)
    (_, _, temperature), = gw.chat_calls
    assert temperature == 0.3


def test_bare_array_times_are_accepted():
    gw = FakeGateway(times=json.dumps(["1 minutes", "2 minutes", "3 minutes", "4 minutes"]))
    day = en.enrich_day(gw, DAY, generate_images=False)
    assert day.attraction_travel_times[-1] == "4 minutes"


@pytest.mark.parametrize("reply", [
    '{"durations": ["5 minutes"]}',
    '{"times": ["5 minutes"]}',  # wrong length
    '{"times": ["5 minutes", "", "5 minutes", "5 minutes"]}',
    "not json",
    GatewayError("network down"),
])
def test_bad_times_fall_back(reply):
    gw = FakeGateway(times=reply)
    day = en.enrich_day(gw, DAY, generate_images=False, rng=random.Random(9))
    assert day.attraction_travel_times == tuple(en.fallback_travel_times(4, random.Random(9)))
    assert len(day.attraction_travel_times) == len(DAY.attractions)


def test_image_is_attached():
    gw = FakeGateway(image="https://img.test/charleston.png")
    day = en.enrich_day(gw, DAY, generate_images=True)
    assert day.image == "https://img.test/charleston.png"
    (prompt,) = gw.image_calls
    assert "from Washington, DC to Charleston, SC" in prompt
    assert "Monticello, Duke Gardens, Rainbow Row" in prompt
    assert "Fort Sumter" not in prompt


def test_no_image_call_when_disabled():
    gw = FakeGateway()
    day = en.enrich_day(gw, DAY, generate_images=False)
    assert day.image is None
    assert gw.image_calls == []


@pytest.mark.parametrize("exc", [RateLimitError("rate limit"), ImageGenerationError("dall-e"),
                                 GatewayError("oops"), RuntimeError("unexpected")])
def test_image_failure_is_silent(exc):
    gw = FakeGateway(image=exc)
    warnings = []
    day = en.enrich_day(gw, DAY, generate_images=True, warnings=warnings)
    assert day.image is None
    assert "image" not in day.to_dict()
    assert len(day.attraction_travel_times) == 4


def test_only_quota_and_image_errors_warn():
    warnings = []
    en.enrich_day(FakeGateway(image=GatewayError("oops")), DAY, True, warnings=warnings)
    assert warnings == []
    for _ in range(2):
        en.enrich_day(FakeGateway(image=RateLimitError("rate limit")), DAY, True,
                      warnings=warnings)
    assert warnings == [en.IMAGE_WARNING]


def test_day_without_attractions_is_untouched():
    gw = FakeGateway()
    bare = DayPlan(1, "A", "B", "B")
    day = en.enrich_day(gw, bare, generate_images=True)
    assert day.attraction_travel_times is None
    assert day.image is None
    assert gw.chat_calls == [] and gw.image_calls == []


def test_enrich_returns_a_new_record():
    day = en.enrich_day(FakeGateway(), DAY, generate_images=True)
    assert day is not DAY
    assert not hasattr(DAY, "image")
    assert day.attractions == DAY.attractions
