"""
Chat message data model.
"""

from dataclasses import dataclass

CHAT_ROLES = ("user", "model")


@dataclass(frozen=True)
class ChatMessage:
    """
    One entry of the assistant conversation.
    The in-flight model reply is replaced, never mutated.
    """
    role: str  # "user" or "model"
    text: str
    is_thinking: bool = False  # Placeholder shown until the first fragment arrives

    def __post_init__(self):
        if self.role not in CHAT_ROLES:
            raise ValueError(f"Invalid role: {self.role}. Must be 'user' or 'model'")

    def to_content(self) -> dict:
        """Convert to a Gemini content dict."""
        return {"role": self.role, "parts": [self.text]}
