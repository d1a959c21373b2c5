"""Exceptions raised while fetching content documents.

FetchError and its subclass carry the HTTP status and the address that
failed; FormatError carries the pydantic error strings for documents that
decoded but did not match their schema.
"""


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConnectionError(ClientError):
    """Raised when the content source cannot be reached."""

    pass


class FetchError(ClientError):
    """Raised when the content source answers with a non-2xx status.

    Attributes:
        status_code: HTTP status of the response
        url: Address of the failed request, if known
    """

    def __init__(self, message: str, status_code: int, url: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class NotFoundError(FetchError):
    """Raised when a document does not exist in the content source."""

    def __init__(self, message: str = "Document not found", url: str | None = None):
        super().__init__(message, status_code=404, url=url)


class FormatError(ClientError):
    """Raised when a decoded document does not have the expected shape.

    Attributes:
        errors: Validation error details, one string per failed field
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        self.errors = errors or []
        super().__init__(message)
