"""Pydantic configuration models for the chatbot."""

from pydantic import BaseModel, Field, field_validator, model_validator

from db import database_path_from_url

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class DatabaseConfig(BaseModel):
    """Store connection."""

    url: str = "sqlite:///~/chatbot/chatbot.db"

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        database_path_from_url(v)
        return v.strip()

    @property
    def path(self):
        return database_path_from_url(self.url)


class ServerConfig(BaseModel):
    """HTTP listener configuration."""

    host: str = "127.0.0.1"
    port: int = 3000
    frontend_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError(f"port must be 1-65535, got {v}")
        return v


class HistoryConfig(BaseModel):
    """Message history paging."""

    default_limit: int = 50
    max_limit: int = 500

    @model_validator(mode="after")
    def validate_limits(self):
        if self.default_limit < 1 or self.max_limit < 1:
            raise ValueError("History limits must be positive")
        if self.default_limit > self.max_limit:
            raise ValueError(
                f"default_limit ({self.default_limit}) exceeds max_limit ({self.max_limit})"
            )
        return self


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = Field(default=False, alias="json")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class ChatbotConfig(BaseModel):
    """Main configuration model."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    history: HistoryConfig = Field(default_factory=HistoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict) -> "ChatbotConfig":
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
