"""Dependency injection for FastAPI routes."""

from functools import lru_cache

from fastapi import Depends, Request

from chat import ChatService, ChatStore
from cli.config import load_config_model
from cli.config_models import ChatbotConfig


@lru_cache
def get_config() -> ChatbotConfig:
    """Load config from defaults, config.yaml and environment."""
    return load_config_model()


def get_app_config(request: Request) -> ChatbotConfig:
    return request.app.state.config


def get_store(request: Request) -> ChatStore:
    """Store handle opened by the application lifespan."""
    return request.app.state.store


def get_chat_service(
    store: ChatStore = Depends(get_store),
    config: ChatbotConfig = Depends(get_app_config),
) -> ChatService:
    return ChatService(
        store,
        default_limit=config.history.default_limit,
        max_limit=config.history.max_limit,
    )
