# core/models.py

from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

MIN_DURATION = 1
MAX_DURATION = 14


@dataclass(frozen=True)
class TripRequest:
    start_location: str
    destination: str
    duration: int
    generate_images: bool = True

    def __post_init__(self):
        for name in ("start_location", "destination"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string.")
            object.__setattr__(self, name, value.strip())
        # bool is an int subclass, refuse it explicitly
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise ValueError("duration must be an integer number of days.")
        if not MIN_DURATION <= self.duration <= MAX_DURATION:
            raise ValueError(
                f"duration must be between {MIN_DURATION} and {MAX_DURATION} days."
            )


@dataclass(frozen=True)
class DayPlan:
    day: int
    from_: str
    to: str
    overnight: str
    attractions: Tuple[str, ...] = ()
    travel_time: Optional[str] = None

    def to_dict(self) -> dict:
        """Presentation shape: camelCase JSON keys, optional fields omitted."""
        out = {
            "day": self.day,
            "from": self.from_,
            "to": self.to,
            "overnight": self.overnight,
            "attractions": list(self.attractions),
        }
        if self.travel_time is not None:
            out["travelTime"] = self.travel_time
        return out


@dataclass(frozen=True)
class EnrichedDayPlan(DayPlan):
    attraction_travel_times: Optional[Tuple[str, ...]] = None
    image: Optional[str] = None

    @classmethod
    def from_plan(cls, plan: DayPlan, **derived) -> "EnrichedDayPlan":
        base = {f.name: getattr(plan, f.name) for f in fields(DayPlan)}
        return cls(**base, **derived)

    def to_dict(self) -> dict:
        out = super().to_dict()
        if self.attraction_travel_times is not None:
            out["attractionTravelTimes"] = list(self.attraction_travel_times)
        if self.image is not None:
            out["image"] = self.image
        return out


@dataclass
class TripPlan:
    request: TripRequest
    itinerary: List[EnrichedDayPlan] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "itinerary": [d.to_dict() for d in self.itinerary],
            "warnings": list(self.warnings),
        }
