"""Exception types raised by transfers, delegates, and paginated listings."""


class OnchainTransfersError(Exception):
    """Base exception for all package errors."""


class InvalidStateError(OnchainTransfersError):
    """Raised when an operation is not allowed in the transfer's current state."""


class SigningError(OnchainTransfersError):
    """Raised when a payload cannot be signed."""


class TransportError(OnchainTransfersError):
    """Raised for any failure talking to the remote API."""


class APIError(TransportError):
    """
    Error response returned by the remote API.

    Parameters
    ----------
    message : str
        Human readable description
    status_code : int
        HTTP status code
    api_code : str | None
        Machine readable error code from the response body
    api_message : str | None
        Error message from the response body

    """

    def __init__(
        self,
        message: str,
        status_code: int,
        api_code: str | None = None,
        api_message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.api_code = api_code
        self.api_message = api_message

    @property
    def is_retryable(self) -> bool:
        """Whether the request may succeed if repeated."""
        return self.status_code == 429 or self.status_code >= 500


class TransferTimeoutError(OnchainTransfersError, TimeoutError):
    """Raised when a transfer does not reach a terminal status in time."""


class ProtocolViolationError(OnchainTransfersError):
    """Raised when the API reports more pages but gives no cursor for them."""
