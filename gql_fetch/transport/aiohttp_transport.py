"""
Default transport backed by aiohttp.

Each ``send`` call opens a session inside a private event loop and closes it
before returning, so the transport is safe to use from synchronous code. It
must not be called from a running event loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from ..exceptions import ErrorHandler, NetworkError
from .base import BaseTransport, HTTPRequest, HTTPResponse

logger = logging.getLogger(__name__)


class AiohttpTransport(BaseTransport):
    """
    Synchronous transport executing requests with aiohttp.

    Examples:
        ```python
        transport = AiohttpTransport(timeout=10.0)
        client = GraphQLClient("https://api.example.com/graphql", transport=transport)
        ```
    """

    def __init__(self, timeout: float = 30.0, verify_ssl: bool = True):
        """
        Initialize transport.

        Args:
            timeout: Total request timeout in seconds
            verify_ssl: Verify SSL certificates
        """
        self.timeout = timeout
        self.verify_ssl = verify_ssl

    def send(self, request: HTTPRequest) -> HTTPResponse:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self._send(request))
        raise NetworkError(
            "AiohttpTransport cannot be used from a running event loop; "
            "inject an asynchronous-aware transport instead",
            url=request.url,
        )

    async def _send(self, request: HTTPRequest) -> HTTPResponse:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        connector = aiohttp.TCPConnector(ssl=self.verify_ssl)

        try:
            async with aiohttp.ClientSession(
                timeout=timeout,
                connector=connector,
                raise_for_status=False,  # Status codes are classified by Results
            ) as session:
                async with session.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    data=request.body,
                ) as response:
                    body = await response.read()
                    logger.debug(
                        "%s %s -> %d (%d bytes)",
                        request.method,
                        request.url,
                        response.status,
                        len(body),
                    )
                    return HTTPResponse(
                        status_code=response.status,
                        body=body,
                        headers=dict(response.headers),
                    )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise ErrorHandler.handle_aiohttp_error(e, request.url, self.timeout) from e


def create_transport(timeout: Optional[float] = None, verify_ssl: bool = True) -> AiohttpTransport:
    """Create the default transport."""
    return AiohttpTransport(timeout=timeout or 30.0, verify_ssl=verify_ssl)
