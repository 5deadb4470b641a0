"""
Client-held chat state. Never persisted by the backend; shapes only.
"""
from typing import Literal

from pydantic import Field

from edubot.schemas.common import ContractModel


class ChatMessage(ContractModel):
    id: str
    type: Literal["user", "ai"]
    content: str
    timestamp: int  # epoch ms


class ChatSession(ContractModel):
    qr_code: str
    title: str
    messages: list[ChatMessage] = Field(default_factory=list)
    last_activity: int  # epoch ms

    def append(self, message: ChatMessage) -> None:
        """Add a message and bump last_activity; messages stay in timestamp order."""
        self.messages.append(message)
        self.messages.sort(key=lambda m: m.timestamp)
        self.last_activity = max(self.last_activity, message.timestamp)
