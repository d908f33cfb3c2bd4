"""Conversation normalization for provider requests."""

from dataclasses import dataclass
from typing import Any, Dict, List


@dataclass(frozen=True)
class ConversationTurn:
    """One dialogue turn; role is "user" or "assistant"."""
    role: str
    content: str

    def to_input(self) -> Dict[str, Any]:
        """Responses API input item (assistant turns are output_text)."""
        if self.role == "assistant":
            return {"role": "assistant", "content": [{"type": "output_text", "text": self.content}]}
        return {"role": "user", "content": [{"type": "input_text", "text": self.content}]}


def normalize_conversation(messages: Any) -> List[ConversationTurn]:
    """
    Normalize client messages into turns.

    Text comes from "content" or, failing that, "text". Turns without
    usable text are dropped and any role but "assistant" becomes "user".
    """
    if not isinstance(messages, list):
        return []

    turns = []
    for message in messages:
        if not isinstance(message, dict):
            continue

        role = "assistant" if message.get("role") == "assistant" else "user"
        content = message.get("content")
        if not isinstance(content, str):
            content = message.get("text")
        if not isinstance(content, str):
            content = ""

        content = content.strip()
        if content:
            turns.append(ConversationTurn(role=role, content=content))

    return turns
