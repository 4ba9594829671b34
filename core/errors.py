# core/errors.py

class TripPlannerError(RuntimeError):
    """Base class for every error raised by the trip planner."""


class MissingCredentialError(TripPlannerError):
    """The model provider API key is not configured."""


class GatewayError(TripPlannerError):
    """A call to the model provider failed (network, quota, bad reply…)."""


class RateLimitError(GatewayError):
    pass


class GatewayAuthenticationError(GatewayError):
    pass


class ImageGenerationError(GatewayError):
    pass


class SynthesisError(TripPlannerError):
    """No itinerary could be produced for the request."""
