"""
Exception types for gql_fetch.

Programmer errors (bad argument values, malformed builders, wrong query
objects) and transport failures are raised. HTTP error statuses and GraphQL
error payloads are never raised; they are reported through ``Results``.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

import aiohttp


class GQLFetchError(Exception):
    """
    Base exception for all gql_fetch errors.

    Attributes:
        message: Human-readable error message
        url: Endpoint involved in the error (if applicable)
        details: Additional error details as keyword arguments
    """

    def __init__(self, message: str, url: Optional[str] = None, **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.details = kwargs


# Construction errors


class ArgumentValueError(GQLFetchError, TypeError):
    """Raised when a value cannot be rendered as a GraphQL literal."""

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidQueryError(GQLFetchError, TypeError):
    """Raised when something other than a query builder is submitted."""

    pass


class QueryBuildError(GQLFetchError, ValueError):
    """Raised when a builder cannot produce a valid document."""

    pass


class EmptySelectionSetError(QueryBuildError):
    """Raised when an object field selects no sub-fields."""

    def __init__(self, field_name: str) -> None:
        super().__init__(
            f"Selection set for '{field_name or 'operation'}' is empty",
            field_name=field_name,
        )
        self.field_name = field_name


class DuplicateFieldError(QueryBuildError):
    """Raised when two selections share a response key at the same level."""

    def __init__(self, response_key: str) -> None:
        super().__init__(
            f"Field '{response_key}' is selected more than once; use an alias",
            response_key=response_key,
        )
        self.response_key = response_key


class InvalidVariableError(QueryBuildError):
    """Raised for malformed operation variable definitions."""

    pass


# Response errors


class ResponseDecodeError(GQLFetchError):
    """Raised when a successful response does not carry a JSON body."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        response_text: Optional[str] = None,
    ) -> None:
        super().__init__(message, url)
        self.status_code = status_code
        self.response_text = response_text


# Transport errors


class NetworkError(GQLFetchError):
    """Raised for network failures while talking to the endpoint."""

    pass


class TimeoutError(NetworkError):
    """
    Raised when a request times out.

    Attributes:
        timeout_value: The timeout value that was exceeded (in seconds)
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout_value: Optional[float] = None,
    ) -> None:
        super().__init__(message, url)
        self.timeout_value = timeout_value


class ConnectionError(NetworkError):
    """Raised when the endpoint cannot be reached."""

    pass


class ErrorHandler:
    """Converts aiohttp exceptions into gql_fetch transport errors."""

    @staticmethod
    def handle_aiohttp_error(
        error: BaseException, url: Optional[str] = None, timeout: Optional[float] = None
    ) -> NetworkError:
        """
        Convert an aiohttp exception to a NetworkError subclass.

        Args:
            error: The original exception
            url: The URL that caused the error
            timeout: Configured timeout, reported on TimeoutError

        Returns:
            Appropriate NetworkError subclass
        """
        if isinstance(error, (asyncio.TimeoutError, aiohttp.ServerTimeoutError)):
            return TimeoutError(
                f"Request timed out: {error}", url=url, timeout_value=timeout
            )

        elif isinstance(error, aiohttp.ClientSSLError):
            return ConnectionError(f"SSL error: {error}", url=url)

        elif isinstance(error, aiohttp.ClientConnectionError):
            return ConnectionError(f"Connection error: {error}", url=url)

        else:
            return NetworkError(f"Unexpected network error: {error}", url=url)
