"""Error taxonomy for chat turns."""


class ChatError(Exception):
    """Base exception for chat errors."""
    pass


class ValidationError(ChatError):
    """Raised when the inbound message is missing or blank."""
    pass


class PersistenceError(ChatError):
    """Raised when a store read or write fails."""
    pass


class ResolutionError(ChatError):
    """Raised when a reply cannot be computed."""
    pass
