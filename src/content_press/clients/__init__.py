"""Network clients for the content source."""

from .client import Client, build_address
from .content_client import ContentClient
from .exceptions import (
    ClientError,
    ConnectionError,
    FetchError,
    FormatError,
    NotFoundError,
)

__all__ = [
    "Client",
    "ContentClient",
    "build_address",
    "ClientError",
    "ConnectionError",
    "FetchError",
    "NotFoundError",
    "FormatError",
]
