"""Pydantic request/response schemas for the web API."""

from typing import Literal, Optional, Union

from pydantic import BaseModel

# --- Turns ---


class TurnRequest(BaseModel):
    # Optional so a missing message reaches the handler and becomes a 400.
    message: Optional[str] = None


class FactItem(BaseModel):
    id: int
    category: str
    key: str
    value: str


class TurnResponse(BaseModel):
    type: Literal["data", "text"]
    content: Union[list[FactItem], str]


class ErrorResponse(BaseModel):
    error: str
    message: str


# --- History ---


class MessageItem(BaseModel):
    id: int
    content: str
    sender: Literal["user", "bot"]
    timestamp: str


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalMessages: int


class HistoryResponse(BaseModel):
    messages: list[MessageItem]
    pagination: Pagination


class ClearResponse(BaseModel):
    message: str
    deleted: int


# --- Health ---


class HealthResponse(BaseModel):
    status: str
    timestamp: str
