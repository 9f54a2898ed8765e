"""
Transport boundary.

The client hands a fully built ``HTTPRequest`` to a transport and receives an
``HTTPResponse``. Connection handling, TLS, timeouts and cancellation are the
transport's concern.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlsplit


def _lookup_header(headers: Dict[str, str], name: str) -> Optional[str]:
    lowered = name.lower()
    for key, value in headers.items():
        if key.lower() == lowered:
            return value
    return None


@dataclass(frozen=True)
class HTTPRequest:
    """HTTP request handed to a transport."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[bytes] = None

    def get_header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        return _lookup_header(self.headers, name)

    def json(self) -> Any:
        """Decoded JSON body, or None for bodyless requests."""
        if self.body is None:
            return None
        return json.loads(self.body.decode("utf-8"))

    def query_params(self) -> Dict[str, str]:
        """URL query parameters, first value of each."""
        parsed = parse_qs(urlsplit(self.url).query, keep_blank_values=True)
        return {key: values[0] for key, values in parsed.items()}


@dataclass(frozen=True)
class HTTPResponse:
    """HTTP response returned by a transport."""

    status_code: int
    body: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def get_header(self, name: str) -> Optional[str]:
        return _lookup_header(self.headers, name)

    def text(self, encoding: str = "utf-8") -> str:
        return self.body.decode(encoding, errors="replace")


class BaseTransport(ABC):
    """
    Abstract base class for transports.

    Any object with a compatible ``send`` method can be injected into the
    client; subclassing is optional.
    """

    @abstractmethod
    def send(self, request: HTTPRequest) -> HTTPResponse:
        """
        Execute a request.

        Args:
            request: Request to send

        Returns:
            The response, whatever its status code

        Raises:
            NetworkError: If no response could be obtained
        """
