"""Domain values for messages, reply patterns, facts and answers."""

import json
from dataclasses import asdict, dataclass, field
from typing import Union

from shared_types import AnswerType, Sender


@dataclass
class Message:
    id: int
    content: str
    sender: Sender
    timestamp: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "content": self.content,
            "sender": self.sender.value,
            "timestamp": self.timestamp,
        }


@dataclass
class ReplyPattern:
    id: int
    pattern: str
    response: str


@dataclass
class Fact:
    id: int
    category: str
    key: str
    value: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class DataAnswer:
    """Facts matched by a keyword search."""

    rows: list[Fact] = field(default_factory=list)


@dataclass
class TextAnswer:
    """Canned pattern response or the fallback text."""

    text: str


Answer = Union[DataAnswer, TextAnswer]


@dataclass
class Reply:
    """Serialized answer returned to the caller and stored as the bot message."""

    type: AnswerType
    content: list[dict] | str

    @classmethod
    def from_answer(cls, answer: Answer) -> "Reply":
        if isinstance(answer, DataAnswer):
            return cls(type=AnswerType.DATA, content=[f.to_dict() for f in answer.rows])
        return cls(type=AnswerType.TEXT, content=answer.text)

    def to_dict(self) -> dict:
        return {"type": self.type.value, "content": self.content}

    def to_json(self) -> str:
        return json.dumps(self.to_dict())


@dataclass
class HistoryPage:
    messages: list[Message]
    current_page: int
    total_pages: int
    total_messages: int

    def to_dict(self) -> dict:
        return {
            "messages": [m.to_dict() for m in self.messages],
            "pagination": {
                "currentPage": self.current_page,
                "totalPages": self.total_pages,
                "totalMessages": self.total_messages,
            },
        }
