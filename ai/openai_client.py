# ai/openai_client.py
# ------------------------------------------------------------------------------
# OpenAI backend: JSON-mode chat completions + DALL·E images.
# ------------------------------------------------------------------------------
import logging
from typing import Optional

import openai
from openai import OpenAI

from ai.gateway import check_prompt, check_temperature
from core.errors import (
    GatewayAuthenticationError,
    GatewayError,
    ImageGenerationError,
    MissingCredentialError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


class OpenAIGateway:
    def __init__(
        self,
        api_key: Optional[str],
        chat_model: str = "gpt-3.5-turbo-0125",
        image_model: str = "dall-e-3",
        image_size: str = "1024x1024",
        image_quality: str = "standard",
        image_style: str = "natural",
        client=None,
    ):
        if not api_key:
            raise MissingCredentialError(
                "OpenAI API key is missing. Please add it to your .env file."
            )
        self.chat_model = chat_model
        self.image_model = image_model
        self.image_size = image_size
        self.image_quality = image_quality
        self.image_style = image_style
        self._client = client if client is not None else OpenAI(api_key=api_key)

    # ──────────────────────────────────────────────────────────────────────────
    # Chat
    # ──────────────────────────────────────────────────────────────────────────
    def chat_complete(self, system_prompt: str, user_prompt: str,
                      temperature: float) -> str:
        check_prompt(system_prompt, "system_prompt")
        check_prompt(user_prompt, "user_prompt")
        check_temperature(temperature)

        logger.info("Chat completion with %s (temperature=%s)",
                    self.chat_model, temperature)
        try:
            resp = self._client.chat.completions.create(
                model=self.chat_model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=temperature,
                response_format={"type": "json_object"},
            )
        except openai.RateLimitError as exc:
            raise RateLimitError(f"OpenAI rate limit reached: {exc}") from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise GatewayAuthenticationError(f"OpenAI rejected the API key: {exc}") from exc
        except openai.OpenAIError as exc:
            raise GatewayError(f"OpenAI request failed: {exc}") from exc

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise GatewayError("No response from the model.")
        return content

    # ──────────────────────────────────────────────────────────────────────────
    # Images
    # ──────────────────────────────────────────────────────────────────────────
    def generate_image(self, prompt: str) -> Optional[str]:
        check_prompt(prompt)

        logger.info("Image generation with %s", self.image_model)
        try:
            resp = self._client.images.generate(
                model=self.image_model,
                prompt=prompt,
                n=1,
                size=self.image_size,
                quality=self.image_quality,
                style=self.image_style,
            )
        except openai.RateLimitError as exc:
            raise RateLimitError(f"OpenAI rate limit reached: {exc}") from exc
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise GatewayAuthenticationError(f"OpenAI rejected the API key: {exc}") from exc
        except openai.OpenAIError as exc:
            raise ImageGenerationError(f"{self.image_model} image generation failed: {exc}") from exc

        if not resp.data:
            return None
        return resp.data[0].url or None
