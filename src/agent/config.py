"""Tutor configuration with environment variable loading.

Pydantic-based configuration for the Gemini-backed tutor agent.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

_DEFAULT_SESSIONS_DB = Path(__file__).parent.parent.parent / "data" / "sessions.db"


def _stream_timeout_from_env() -> str | None:
    raw = os.getenv("TUTOR_STREAM_TIMEOUT", "60").strip()
    if not raw or raw.lower() == "none":
        return None
    return raw


class TutorConfig(BaseModel):
    """Configuration for the tutor agent.

    Attributes:
        api_key: Google AI API key.
        model_name: Gemini model identifier.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        history_runs: Number of previous turns replayed into the model context.
        stream_timeout: Seconds to wait for the next reply chunk (None waits forever).
        sessions_db: SQLite file holding conversation history.
    """

    # Environment-sourced defaults go through the same checks as arguments
    model_config = ConfigDict(validate_default=True)

    api_key: str = Field(
        default_factory=lambda: os.getenv("GOOGLE_API_KEY", os.getenv("GEMINI_API_KEY", "")),
        description="API key for Google Gemini",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("TUTOR_MODEL", "gemini-2.5-flash"),
        description="Model to use",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    history_runs: int = Field(
        default=50,
        ge=1,
        le=200,
        description="Previous turns included in the model context",
    )
    stream_timeout: float | None = Field(
        default_factory=_stream_timeout_from_env,
        gt=0,
        description="Maximum wait in seconds between reply chunks",
    )
    sessions_db: Path = Field(
        default_factory=lambda: Path(os.getenv("TUTOR_SESSIONS_DB", str(_DEFAULT_SESSIONS_DB))),
        description="SQLite database for conversation history",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError(
                "API key required. Set GOOGLE_API_KEY or GEMINI_API_KEY in .env"
            )
        return v.strip()


def get_tutor_config() -> TutorConfig:
    """Create tutor configuration from environment.

    Returns:
        Configured TutorConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return TutorConfig()
