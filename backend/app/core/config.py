from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    title: str = "Greeting API"
    version: str = "0.1.0"
    port: int = 8000
    reload: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def _split_csv(value: str) -> List[str]:
    return [s.strip() for s in value.split(",") if s.strip()]


def load_settings() -> Settings:
    return Settings(
        title=os.environ.get("APP_TITLE", "Greeting API"),
        version=os.environ.get("APP_VERSION", "0.1.0"),
        port=int(os.environ.get("PORT", 8000)),
        reload=os.environ.get("RELOAD", "false").lower() == "true",
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        cors_origins=_split_csv(os.environ.get("CORS_ORIGINS", "*")),
    )
