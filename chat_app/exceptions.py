"""Errors raised by the chat core.

Absence is never an error: lookups return ``None`` or an empty list. The
routers translate these exceptions into HTTP 400 responses.
"""


class ChatError(ValueError):
    """Base class for every error the chat core raises."""


class ValidationError(ChatError):
    """Malformed input reached the core (missing user, blank name, bad limit...)."""


class DuplicateUsername(ChatError):
    def __init__(self, username: str):
        self.username = username
        super().__init__("Username already taken")


class EmptyContent(ChatError):
    def __init__(self):
        super().__init__("Message content cannot be empty")
