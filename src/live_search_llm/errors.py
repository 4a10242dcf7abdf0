class LiveSearchError(Exception):
    """Base class for errors raised inside live_search_llm."""


class TransportError(LiveSearchError):
    """The request never produced an HTTP response (DNS, connect, IO)."""


class ProtocolError(LiveSearchError):
    """The server answered with a non-2xx status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"{status_code} {reason}".strip())


class OperationError(LiveSearchError):
    """Raised when unwrapping a failed operation result."""
