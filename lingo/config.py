"""Configuration management for the translation workbench."""

import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from .constants import DEFAULT_LOCALE, DEFAULT_PROJECT

load_dotenv()


def _default_database_path() -> str:
    return str(Path(tempfile.gettempdir()) / "lingo-web" / "translations.db")


@dataclass
class Config:
    """Application configuration."""

    # API Keys
    openai_api_key: str = field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))

    # Upstream GlotPress API
    glotpress_base_url: str = field(
        default_factory=lambda: os.getenv(
            "GLOTPRESS_BASE_URL", "https://translate.wordpress.org/api/projects"
        )
    )
    http_timeout: float = field(
        default_factory=lambda: float(os.getenv("LINGO_HTTP_TIMEOUT", "30"))
    )

    # Translation store
    store_url: str = field(
        default_factory=lambda: os.getenv("LINGO_STORE_URL", "http://127.0.0.1:8000")
    )
    database_path: str = field(
        default_factory=lambda: os.getenv("LINGO_DATABASE_PATH", _default_database_path())
    )

    # Session settings
    strings_per_session: int = field(
        default_factory=lambda: int(os.getenv("LINGO_STRINGS_PER_SESSION", "10"))
    )
    default_locale: str = field(
        default_factory=lambda: os.getenv("LINGO_DEFAULT_LOCALE", DEFAULT_LOCALE)
    )
    default_project: str = field(
        default_factory=lambda: os.getenv("LINGO_DEFAULT_PROJECT", DEFAULT_PROJECT)
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LINGO_LOG_LEVEL", "INFO"))

    # Transcription settings
    transcription_model: str = "whisper-1"
    max_audio_bytes: int = 10 * 1024 * 1024

    # Preview runtime
    playground_base_url: str = "https://playground.wordpress.net"

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []
        if not self.glotpress_base_url:
            errors.append("GLOTPRESS_BASE_URL is not set")
        if self.strings_per_session < 1:
            errors.append("LINGO_STRINGS_PER_SESSION must be at least 1")
        if self.http_timeout <= 0:
            errors.append("LINGO_HTTP_TIMEOUT must be positive")
        return errors


# Global config instance
config = Config()
