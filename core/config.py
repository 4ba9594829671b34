# core/config.py

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from core.errors import MissingCredentialError

PROVIDERS = ("openai", "gemini")

_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
}


@dataclass(frozen=True)
class Settings:
    provider: str = "openai"
    openai_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    chat_model: str = "gpt-3.5-turbo-0125"
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    image_quality: str = "standard"
    image_style: str = "natural"
    gemini_model: str = "gemini-1.5-flash"

    @property
    def key_variable(self) -> str:
        return _KEY_VARS[self.provider]

    @property
    def api_key(self) -> Optional[str]:
        key = self.openai_api_key if self.provider == "openai" else self.gemini_api_key
        return key or None

    def require_api_key(self) -> str:
        key = self.api_key
        if not key:
            raise MissingCredentialError(
                f"{self.key_variable} is missing. Please add it to your .env file."
            )
        return key


def load_settings(dotenv: bool = True) -> Settings:
    """
    Read the configuration from the process environment.
    `.env` is loaded first unless `dotenv=False` (tests pass False).
    """
    if dotenv:
        load_dotenv()

    provider = os.getenv("LLM_PROVIDER", "openai").strip().lower()
    if provider not in PROVIDERS:
        raise ValueError(
            f"LLM_PROVIDER must be one of {', '.join(PROVIDERS)} (got {provider!r})."
        )

    defaults = Settings()
    return Settings(
        provider=provider,
        openai_api_key=os.getenv("OPENAI_API_KEY"),
        gemini_api_key=os.getenv("GEMINI_API_KEY"),
        chat_model=os.getenv("OPENAI_CHAT_MODEL", defaults.chat_model),
        image_model=os.getenv("OPENAI_IMAGE_MODEL", defaults.image_model),
        image_size=os.getenv("IMAGE_SIZE", defaults.image_size),
        image_quality=os.getenv("IMAGE_QUALITY", defaults.image_quality),
        image_style=os.getenv("IMAGE_STYLE", defaults.image_style),
        gemini_model=os.getenv("GEMINI_MODEL", defaults.gemini_model),
    )
