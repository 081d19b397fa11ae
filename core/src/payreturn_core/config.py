from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from payreturn_core.home import PayReturnPaths


class NetworkConfig(BaseModel):
    bind_host: str = Field(default="127.0.0.1")
    core_port: int = Field(default=8797, ge=1, le=65535)


class LoggingConfig(BaseModel):
    max_size_mb: int = Field(
        default=10, ge=1, description="Max size of a log file in MB before rolling."
    )
    backup_count: int = Field(default=5, ge=1, description="Number of log archives to keep.")


class ReturnPageConfig(BaseModel):
    """Settings for the payment return page and its deep-link handoff."""

    deep_link_base: str = Field(
        default="myapp://payment",
        description=(
            "Prefix used to derive the deep link when the request carries no redirect, "
            "e.g. exp://localhost:8081/--/payment when testing under Expo Go."
        ),
    )
    allowed_redirect_schemes: list[str] = Field(
        default_factory=list,
        description="If non-empty, explicit redirect targets must use one of these URI schemes.",
    )
    loading_indicator: bool = Field(
        default=True,
        description="Show the loading indicator, failure message and 'Try Again' button.",
    )
    fallback_timeout_ms: int = Field(
        default=2000,
        ge=1,
        description="How long the page waits for evidence that the app opened.",
    )

    @field_validator("deep_link_base")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped:
            raise ValueError("deep_link_base must not be blank")
        return stripped

    @field_validator("allowed_redirect_schemes")
    @classmethod
    def _normalize_schemes(cls, value: list[str]) -> list[str]:
        return [s.strip().lower().rstrip(":") for s in value if s.strip()]


class CoreConfig(BaseModel):
    version: str = Field(default="1")
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    return_page: ReturnPageConfig = Field(default_factory=ReturnPageConfig)


def _read_json(path: Path) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_core_config(paths: PayReturnPaths) -> CoreConfig:
    """Load config from ${PAYRETURN_HOME}/config/core.json.

    - If missing: returns defaults.
    - Validation is performed by Pydantic.
    """

    config_path = paths.core_config_path
    if not config_path.exists():
        return CoreConfig()

    raw = _read_json(config_path)
    return CoreConfig.model_validate(raw)


def write_core_config(paths: PayReturnPaths, config: CoreConfig) -> None:
    """Persist config to ${PAYRETURN_HOME}/config/core.json."""

    payload = config.model_dump(mode="json", exclude_none=True)
    paths.config_dir.mkdir(parents=True, exist_ok=True)
    paths.core_config_path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
