"""Server configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Application settings loaded from environment."""

    host: str = "0.0.0.0"
    port: int = 8080

    # CORS
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:8080"])

    # OpenAPI servers
    dev_url: str = "http://localhost:8080"
    prod_url: str = "https://tutorials.example.com"

    # Largest accepted request body, in bytes
    max_body_size: int = 1_048_576

    # Observability
    log_format: str = "pretty"  # "json" or "pretty"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "8080")),
            cors_origins=_split_csv(os.environ.get("CORS_ORIGINS", "http://localhost:8080")),
            dev_url=os.environ.get("DEV_URL", "http://localhost:8080"),
            prod_url=os.environ.get("PROD_URL", "https://tutorials.example.com"),
            max_body_size=int(os.environ.get("MAX_BODY_SIZE", "1048576")),
            log_format=os.environ.get("LOG_FORMAT", "pretty"),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )


settings = Settings.from_env()
