# ai/gemini.py
# ------------------------------------------------------------------------------
# Gemini backend (chat only). Selected with LLM_PROVIDER=gemini.
# ------------------------------------------------------------------------------
import logging
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from ai.gateway import check_prompt, check_temperature
from core.errors import (
    GatewayAuthenticationError,
    GatewayError,
    ImageGenerationError,
    MissingCredentialError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


def strip_code_fence(text: str) -> str:
    """Drop a surrounding ```json … ``` fence, keep the payload untouched."""
    t = text.strip()
    if t.startswith("```"):
        t = t[3:]
        if t[:4].lower() == "json":
            t = t[4:]
        if t.rstrip().endswith("```"):
            t = t.rstrip()[:-3]
    return t.strip()


class GeminiGateway:
    def __init__(self, api_key: Optional[str], model: str = "gemini-1.5-flash"):
        if not api_key:
            raise MissingCredentialError("Environment variable GEMINI_API_KEY is missing.")
        genai.configure(api_key=api_key)
        self.model = model

    # ──────────────────────────────────────────────────────────────────────────
    # Chat: the system prompt becomes the model's system instruction and the
    # reply is forced to JSON.
    # ──────────────────────────────────────────────────────────────────────────
    def chat_complete(self, system_prompt: str, user_prompt: str,
                      temperature: float) -> str:
        check_prompt(system_prompt, "system_prompt")
        check_prompt(user_prompt, "user_prompt")
        check_temperature(temperature)

        model = genai.GenerativeModel(
            self.model,
            system_instruction=system_prompt,
            generation_config=genai.GenerationConfig(
                temperature=temperature,
                response_mime_type="application/json",
            ),
        )
        logger.info("Chat completion with %s (temperature=%s)", self.model, temperature)
        try:
            resp = model.generate_content(user_prompt)
        except google_exceptions.ResourceExhausted as exc:
            raise RateLimitError(f"Gemini rate limit reached: {exc}") from exc
        except (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied) as exc:
            raise GatewayAuthenticationError(f"Gemini rejected the API key: {exc}") from exc
        except google_exceptions.GoogleAPIError as exc:
            raise GatewayError(f"Gemini request failed: {exc}") from exc

        try:
            text = resp.text
        except ValueError as exc:  # blocked or empty candidate
            raise GatewayError(f"No response from the model: {exc}") from exc
        text = strip_code_fence(text or "")
        if not text:
            raise GatewayError("No response from the model.")
        return text

    def generate_image(self, prompt: str) -> Optional[str]:
        check_prompt(prompt)
        raise ImageGenerationError(
            f"Image generation is not available with the Gemini backend ({self.model})."
        )
