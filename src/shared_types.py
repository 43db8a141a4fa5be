"""Shared enums for the chatbot."""

from enum import StrEnum


class Sender(StrEnum):
    USER = "user"
    BOT = "bot"


class AnswerType(StrEnum):
    DATA = "data"
    TEXT = "text"
