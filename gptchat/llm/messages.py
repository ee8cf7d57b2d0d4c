"""Message and wire-schema contracts for chat completions.

Architectural role:
    Defines the conversation record types shared by `gptchat.llm.client` and
    `gptchat.core.conversation`, plus the request/response envelopes exchanged
    with the completions endpoint.

Schema strictness:
    Responses are validated against `ChatResponse` as a whole. A body either
    matches `{choices: [{message: {role, content}}]}` or it is rejected; no
    partial field recovery is attempted. Unknown extra fields are ignored.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict

from gptchat.llm.provider_config import SYSTEM_MESSAGE


Role = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """One role-tagged conversation entry. Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str


class ChatRequest(BaseModel):
    """Request envelope: model id plus the full transcript."""

    model: str
    messages: list[Message]


class Choice(BaseModel):
    message: Message


class ChatResponse(BaseModel):
    """Response envelope. Only `choices[0].message` is ever consumed."""

    choices: list[Choice]


class Transcript:
    """Ordered, append-only conversation history.

    Invariants:
        - `self[0]` is always present and has role `system`.
        - Entries are never removed, replaced, or reordered.

    The turn loop owns the transcript; the completion client only reads it.
    """

    def __init__(self, system_message: str = SYSTEM_MESSAGE):
        self._messages = [Message(role="system", content=system_message)]

    def append(self, message: Message) -> None:
        if not isinstance(message, Message):
            raise TypeError(f"expected Message, got {type(message).__name__}")
        self._messages.append(message)

    def add_user(self, content: str) -> Message:
        """Append and return a `user` message carrying `content` verbatim."""
        message = Message(role="user", content=content)
        self.append(message)
        return message

    @property
    def system(self) -> Message:
        return self._messages[0]

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the current entries."""
        return tuple(self._messages)

    def to_payload(self) -> list[dict]:
        return [message.model_dump() for message in self._messages]

    def __len__(self):
        return len(self._messages)

    def __getitem__(self, index):
        return self._messages[index]

    def __iter__(self):
        return iter(tuple(self._messages))

    def __repr__(self):
        return f"Transcript({len(self._messages)} messages)"
