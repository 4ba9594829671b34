# ai/gateway.py
# ------------------------------------------------------------------------------
# Model gateway contract + backend selection.
#
# A gateway issues exactly one request per call: no retry, no cache. Every
# backend turns provider failures into the errors of core.errors.
# ------------------------------------------------------------------------------
from typing import Optional, Protocol

from core.config import Settings
from core.errors import MissingCredentialError


class ModelGateway(Protocol):
    def chat_complete(self, system_prompt: str, user_prompt: str,
                      temperature: float) -> str: ...

    def generate_image(self, prompt: str) -> Optional[str]: ...


def check_prompt(prompt: str, name: str = "prompt") -> None:
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError(f"{name} must be a non-empty string.")


def check_temperature(temperature: float) -> None:
    if not 0.0 <= temperature <= 1.0:
        raise ValueError(f"temperature must be within [0, 1] (got {temperature}).")


def create_gateway(settings: Settings) -> ModelGateway:
    """
    Build the gateway for the configured provider.
    Raises MissingCredentialError before any client is created when the
    provider's API key is absent.
    """
    api_key = settings.require_api_key()

    if settings.provider == "gemini":
        from ai.gemini import GeminiGateway
        return GeminiGateway(api_key, model=settings.gemini_model)

    if settings.provider == "openai":
        from ai.openai_client import OpenAIGateway
        return OpenAIGateway(
            api_key,
            chat_model=settings.chat_model,
            image_model=settings.image_model,
            image_size=settings.image_size,
            image_quality=settings.image_quality,
            image_style=settings.image_style,
        )

    raise MissingCredentialError(f"Unknown LLM provider {settings.provider!r}.")
