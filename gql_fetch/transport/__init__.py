"""
HTTP transports for gql_fetch.
"""

from .aiohttp_transport import AiohttpTransport, create_transport
from .base import BaseTransport, HTTPRequest, HTTPResponse

__all__ = [
    "BaseTransport",
    "HTTPRequest",
    "HTTPResponse",
    "AiohttpTransport",
    "create_transport",
]
