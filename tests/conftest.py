# tests/conftest.py

import json
import re

import pytest

from services.itinerary import SYSTEM_PROMPT as ITINERARY_SYSTEM_PROMPT

_COUNT_RE = re.compile(r"should have (\d+) elements")


def _default_times(prompt: str) -> str:
    count = int(_COUNT_RE.search(prompt).group(1))
    return json.dumps({"times": [f"{15 + i} minutes" for i in range(count)]})


class FakeGateway:
    """
    Scripted stand-in for a model gateway. Each reply is a string, an
    exception instance (raised) or a callable taking the user prompt.
    """

    def __init__(self, itinerary=None, times=_default_times, image="https://img.test/day.png"):
        self.itinerary = itinerary
        self.times = times
        self.image = image
        self.chat_calls = []
        self.image_calls = []

    @staticmethod
    def _reply(reply, prompt):
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(prompt)
        return reply

    def chat_complete(self, system_prompt, user_prompt, temperature):
        self.chat_calls.append((system_prompt, user_prompt, temperature))
        if system_prompt == ITINERARY_SYSTEM_PROMPT:
            return self._reply(self.itinerary, user_prompt)
        return self._reply(self.times, user_prompt)

    def generate_image(self, prompt):
        self.image_calls.append(prompt)
        return self._reply(self.image, prompt)


def itinerary_json(days, wrap=True):
    return json.dumps({"itinerary": days} if wrap else days)


NY_MIAMI_DAYS = [
    {
        "day": 1,
        "from": "New York, NY",
        "to": "Washington, DC",
        "overnight": "Washington, DC",
        "travelTime": "4 hours 10 minutes",
        "attractions": ["Liberty Bell", "Independence Hall", "National Mall"],
    },
    {
        "day": 2,
        "from": "Washington, DC",
        "to": "Charleston, SC",
        "overnight": "Charleston, SC",
        "travelTime": "8 hours 5 minutes",
        "attractions": ["Monticello", "Duke Gardens", "Rainbow Row", "Fort Sumter"],
    },
    {
        "day": 3,
        "from": "Charleston, SC",
        "to": "Miami, FL",
        "overnight": "Miami, FL",
        "travelTime": "8 hours 30 minutes",
        "attractions": ["Savannah Historic District", "Jekyll Island",
                        "Castillo de San Marcos", "Kennedy Space Center", "South Beach"],
    },
]


@pytest.fixture
def ny_miami_gateway():
    return FakeGateway(itinerary=itinerary_json(NY_MIAMI_DAYS))


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("LLM_PROVIDER", "OPENAI_API_KEY", "GEMINI_API_KEY", "OPENAI_CHAT_MODEL",
                "OPENAI_IMAGE_MODEL", "IMAGE_SIZE", "IMAGE_QUALITY", "IMAGE_STYLE",
                "GEMINI_MODEL"):
        monkeypatch.delenv(var, raising=False)
