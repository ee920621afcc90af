class ShopperError(Exception):
    """Base class for errors raised by the shopping assistant."""


class SessionNotFoundError(ShopperError, KeyError):
    """No session is registered under the given identifier."""

    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"No session found for: {self.session_id}."


class FetchError(ShopperError):
    """The item search could not be completed (timeout, transport or decoding failure)."""


class MalformedPayloadError(FetchError):
    """The search response lacks a field needed to build the reply."""


class RateLimitExceeded(FetchError):
    """The outbound search budget is spent for longer than a turn may wait."""
