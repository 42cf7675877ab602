"""Ordered conversation log shared by the orchestrator, the stream consumer
and the renderers.

The store only ever appends, except that the trailing message may have its
content replaced while a response streams in. Readers take tuple snapshots.
"""

from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field
from uuid_extensions import uuid7

from ..llm.models import ChatMessage, Role

VISIBLE_ROLES: frozenset[str] = frozenset({"user", "assistant"})


class Message(BaseModel):
    """A single entry in the conversation log."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: str(uuid7()), description="Opaque identifier")
    role: Role = Field(description="user, assistant or system")
    content: str = Field(default="", description="Message text")

    def to_chat_message(self) -> ChatMessage:
        """Role/content pair for the model request."""
        return ChatMessage(role=self.role, content=self.content)


class ConversationStore:
    """Append-only ordered message log."""

    def __init__(self, messages: list[Message] | None = None):
        self._messages: list[Message] = list(messages or [])

    def append(self, role: Role, content: str) -> Message:
        """Create and append a message."""
        return self.append_message(Message(role=role, content=content))

    def append_message(self, message: Message) -> Message:
        self._messages.append(message)
        return message

    def replace_content(self, message_id: str, content: str) -> Message:
        """Replace the content of the trailing message.

        Raises:
            ValueError: If `message_id` is not the last message
        """
        if not self._messages or self._messages[-1].id != message_id:
            raise ValueError(f"Message {message_id} is not the trailing message")
        updated = self._messages[-1].model_copy(update={"content": content})
        self._messages[-1] = updated
        return updated

    def messages(self) -> tuple[Message, ...]:
        """Snapshot of every message, system messages included."""
        return tuple(self._messages)

    def visible(self) -> tuple[Message, ...]:
        """Snapshot of the messages shown in the transcript."""
        return tuple(m for m in self._messages if m.role in VISIBLE_ROLES)

    def as_chat_messages(self) -> list[ChatMessage]:
        """Full ordered conversation in model-request form."""
        return [m.to_chat_message() for m in self._messages]

    def last(self) -> Message | None:
        return self._messages[-1] if self._messages else None

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages())
