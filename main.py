# main.py
# HTTP API: `uvicorn main:app`

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, Field, field_validator

from ai.gateway import create_gateway
from core.config import load_settings
from core.errors import MissingCredentialError, SynthesisError
from core.models import MAX_DURATION, MIN_DURATION, TripRequest
from services.planner import plan_trip

# Load environment variables (.env)
load_dotenv()


# Schema for the itinerary request
class ItineraryRequest(BaseModel):
    start_location: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    duration: int = Field(3, ge=MIN_DURATION, le=MAX_DURATION)
    generate_images: bool = True

    @field_validator("start_location", "destination")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


def create_app(gateway=None) -> FastAPI:
    """
    `gateway` is built lazily from the environment when not given, so the app
    starts without a key and every planning call answers 503 until one is set.
    """
    application = FastAPI(title="Road Trip Planner")
    application.state.gateway = gateway

    def _gateway(request: Request):
        if request.app.state.gateway is None:
            request.app.state.gateway = create_gateway(load_settings(dotenv=False))
        return request.app.state.gateway

    @application.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @application.post("/api/itinerary", response_model=dict)
    def generate_itinerary_endpoint(req: ItineraryRequest, request: Request):
        trip_req = TripRequest(
            start_location=req.start_location,
            destination=req.destination,
            duration=req.duration,
            generate_images=req.generate_images,
        )
        try:
            # ValueError: unknown LLM_PROVIDER
            gateway = _gateway(request)
        except (MissingCredentialError, ValueError) as e:
            raise HTTPException(status_code=503, detail=str(e))
        try:
            plan = plan_trip(gateway, trip_req)
        except MissingCredentialError as e:
            raise HTTPException(status_code=503, detail=str(e))
        except SynthesisError as e:
            raise HTTPException(status_code=502, detail=str(e))
        return plan.to_dict()

    return application


app = create_app()
