"""Pydantic configuration models for the support centre."""

import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def support_home() -> Path:
    """Base directory for local state; SUPPORTCENTRE_HOME overrides ~/.supportcentre."""
    return Path(os.environ.get("SUPPORTCENTRE_HOME", Path.home() / ".supportcentre"))


class ApiConfig(BaseModel):
    """Where the client reaches the feedback API."""

    endpoint: str = "http://127.0.0.1:8000"
    timeout: float = Field(10.0, gt=0)
    read_attempts: int = Field(2, ge=1, le=5)

    @field_validator("endpoint")
    @classmethod
    def validate_endpoint(cls, v: str) -> str:
        if v.startswith("${") and v.endswith("}"):
            v = os.getenv(v[2:-1], "http://127.0.0.1:8000")
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"API endpoint must be an http(s) URL, got: {v}")
        return v.rstrip("/")


class ServerConfig(BaseModel):
    host: str = "127.0.0.1"
    port: int = Field(8000, ge=1, le=65535)
    allowed_origin: str = "*"


class StorageConfig(BaseModel):
    """Server database and client local-state locations."""

    db_path: Path = Field(default_factory=lambda: support_home() / "feedback.db")
    local_state: Path = Field(default_factory=lambda: support_home() / "local_state.json")

    @model_validator(mode="after")
    def expand_paths(self):
        """Expand ~ in all paths."""
        self.db_path = self.db_path.expanduser()
        self.local_state = self.local_state.expanduser()
        return self


class TrackingConfig(BaseModel):
    """Interaction history and recommendation tuning."""

    history_limit: int = Field(20, ge=1)
    external_history_limit: int = Field(50, ge=1)
    passive_weight: float = Field(0.1, ge=0)
    top_interests: int = Field(3, ge=1)
    max_recommendations: int = Field(8, ge=1)


class FeedbackConfig(BaseModel):
    vote_retention_days: int = Field(365, ge=1)
    max_comment_length: int = Field(500, ge=1)
    max_vote_attempts: int = Field(3, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class SupportConfig(BaseModel):
    """Root configuration."""

    api: ApiConfig = Field(default_factory=ApiConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    tracking: TrackingConfig = Field(default_factory=TrackingConfig)
    feedback: FeedbackConfig = Field(default_factory=FeedbackConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "SupportConfig":
        if "storage" in data:
            for key in ["db_path", "local_state"]:
                if key in data["storage"] and isinstance(data["storage"][key], str):
                    data["storage"][key] = Path(data["storage"][key])
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
