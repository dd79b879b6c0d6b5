"""
pagedemo — Application Configuration
=====================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Templates shipped inside the package
DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults; nothing is required to start
    the server locally.
    """

    # ── Views ─────────────────────────────────────────────────────────────
    # What: Directory the view resolver loads templates from
    templates_dir: str = Field(default=str(DEFAULT_TEMPLATES_DIR))

    # What: Appended to a view identifier to form the template file name
    # ("index" → "index.html")
    template_suffix: str = Field(default=".html")

    # ── CORS ──────────────────────────────────────────────────────────────
    cors_origins: str = Field(default="http://localhost:8080")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("template_suffix")
    @classmethod
    def validate_template_suffix(cls, v: str) -> str:
        if v and not v.startswith("."):
            return "." + v
        return v

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # What: Per-IP sliding window rate limit
    rate_limit_requests: int = Field(default=300, ge=1, le=100_000)
    rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # TEMPLATES_DIR and templates_dir both work
    }

    def validate_views(
        self,
        view_names: Iterable[str],
        templates_dir: Optional[str] = None,
        suffix: Optional[str] = None,
    ) -> None:
        """
        What:  Checks that a template file exists for every view identifier.
        When:  Called during app startup (lifespan).
        How:   Raises ValueError listing every missing template.
        """
        root = Path(templates_dir or self.templates_dir)
        suffix = self.template_suffix if suffix is None else suffix
        errors = []
        if not root.is_dir():
            errors.append(f"TEMPLATES_DIR '{root}' is not a directory")
        else:
            for name in view_names:
                template = root / f"{name}{suffix}"
                if not template.is_file():
                    errors.append(f"Template for view '{name}' not found at {template}")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
