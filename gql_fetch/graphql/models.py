"""
GraphQL models and data structures.

This module defines the request envelope, the normalized ``Results`` of a
request and the client configuration.
"""

from __future__ import annotations

import copy
import json
import re
from dataclasses import dataclass, field
from enum import Enum
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import InvalidVariableError
from .formatter import NAME_PATTERN, RawObject, format_value

TYPE_PATTERN = re.compile(r"^[\[\]_A-Za-z0-9!]+\Z")

BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})
HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


class GraphQLOperationType(str, Enum):
    """GraphQL operation types."""

    QUERY = "query"
    MUTATION = "mutation"


class ErrorType(str, Enum):
    """Classification of an HTTP error status."""

    CLIENT_ERROR = "ClientError"
    SERVER_ERROR = "ServerError"

    @classmethod
    def from_status(cls, status_code: int) -> Optional[ErrorType]:
        """Classify a status code; ``None`` outside the 4xx/5xx ranges."""
        if 400 <= status_code <= 499:
            return cls.CLIENT_ERROR
        if 500 <= status_code <= 599:
            return cls.SERVER_ERROR
        return None


@dataclass(frozen=True)
class GraphQLVariable:
    """Operation variable definition, e.g. ``$id: ID! = 1``."""

    name: str
    type: str
    required: bool = False
    default_value: Optional[Any] = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not NAME_PATTERN.match(self.name):
            raise InvalidVariableError(f"Invalid variable name: {self.name!r}")
        if not isinstance(self.type, str) or not TYPE_PATTERN.match(self.type):
            raise InvalidVariableError(f"Invalid type for variable ${self.name}: {self.type!r}")
        if self.default_value is not None:
            # Reject unformattable defaults now rather than at build time
            format_value(self.default_value)

    @property
    def ref(self) -> RawObject:
        """Reference to this variable, usable as an argument value."""
        return RawObject(f"${self.name}")

    def to_string(self) -> str:
        """Render the variable definition."""
        type_ = self.type
        if self.required and not type_.endswith("!"):
            type_ += "!"
        result = f"${self.name}: {type_}"
        if self.default_value is not None:
            result += f" = {format_value(self.default_value)}"
        return result


@dataclass
class GraphQLRequest:
    """Request envelope sent to the endpoint."""

    query: str
    variables: Dict[str, Any] = field(default_factory=dict)
    operation_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: Dict[str, Any] = {
            "query": self.query,
            "variables": self.variables if self.variables is not None else {},
        }

        if self.operation_name:
            result["operationName"] = self.operation_name

        return result

    def to_json(self) -> str:
        """Compact JSON body, e.g. ``{"query":"Q","variables":{}}``."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def to_params(self) -> Dict[str, str]:
        """URL query parameters for methods without a body."""
        params = {
            "query": self.query,
            "variables": json.dumps(
                self.variables if self.variables is not None else {},
                separators=(",", ":"),
                ensure_ascii=False,
            ),
        }
        if self.operation_name:
            params["operationName"] = self.operation_name
        return params


class Results:
    """
    Normalized outcome of a single GraphQL request.

    Wraps the decoded body together with the HTTP status code. HTTP error
    statuses and GraphQL ``errors`` payloads are reported here instead of
    being raised, so callers branch on ``has_error()`` and
    ``get_error_type()``.

    Examples:
        ```python
        results = client.run_raw_query("query { viewer { login } }")
        if results.has_error():
            print(results.get_error_type(), results.get_errors())
        else:
            print(results.get_results().viewer.login)
        ```
    """

    def __init__(
        self,
        status_code: int,
        body: Any = None,
        results_as_array: bool = False,
        raw_response: Optional[str] = None,
    ):
        """
        Initialize results.

        Args:
            status_code: HTTP status code of the response
            body: Decoded JSON body, or None if it could not be decoded
            results_as_array: Return plain dicts/lists from get_results()
            raw_response: Undecoded response text
        """
        self._status_code = int(status_code)
        self._body = body
        self._results_as_array = results_as_array
        self._raw_response = raw_response

    def __repr__(self) -> str:
        return (
            f"Results(status_code={self._status_code}, "
            f"error_type={self.get_error_type()!r}, errors={len(self.get_errors())})"
        )

    @property
    def results_as_array(self) -> bool:
        return self._results_as_array

    def get_data(self) -> Any:
        """
        ``data`` member of the decoded body, or None.

        The value is shared with the stored body; use ``get_results()`` for
        an independent copy.
        """
        if isinstance(self._body, dict):
            return self._body.get("data")
        return None

    def get_results(self) -> Any:
        """
        ``data`` converted to the representation chosen at construction.

        JSON objects become ``SimpleNamespace`` instances by default, or
        plain dicts when ``results_as_array`` was requested. The conversion
        is recursive and never shares state with the stored body.
        """
        data = self.get_data()
        if self._results_as_array:
            return copy.deepcopy(data)
        return _to_namespace(data)

    def get_errors(self) -> List[Any]:
        """
        The ``errors`` array exactly as the server sent it.

        The list is shared with the stored body and should not be modified.
        """
        if not isinstance(self._body, dict):
            return []
        errors = self._body.get("errors")
        if errors is None:
            return []
        if not isinstance(errors, list):
            return [errors]
        return errors

    def get_extensions(self) -> Optional[Dict[str, Any]]:
        if isinstance(self._body, dict):
            return self._body.get("extensions")
        return None

    def get_response_status_code(self) -> int:
        return self._status_code

    def get_error_type(self) -> Optional[ErrorType]:
        """ClientError for 4xx, ServerError for 5xx, otherwise None."""
        return ErrorType.from_status(self._status_code)

    def get_raw_response(self) -> Optional[str]:
        return self._raw_response

    def has_errors(self) -> bool:
        """True if the body carries GraphQL errors or the status is an error."""
        return bool(self.get_errors()) or self.get_error_type() is not None

    def has_error(self) -> bool:
        """Alias of ``has_errors()``."""
        return self.has_errors()

    @property
    def error_messages(self) -> List[str]:
        """Get list of error messages."""
        messages = []
        for error in self.get_errors():
            if isinstance(error, dict):
                messages.append(str(error.get("message", "Unknown error")))
            else:
                messages.append(str(error))
        return messages


def _to_namespace(value: Any) -> Any:
    if isinstance(value, dict):
        return SimpleNamespace(**{str(key): _to_namespace(item) for key, item in value.items()})
    if isinstance(value, list):
        return [_to_namespace(item) for item in value]
    return value


class GraphQLConfig(BaseModel):
    """Configuration for GraphQL client."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = Field(default="", description="GraphQL endpoint URL")
    headers: Dict[str, str] = Field(
        default_factory=dict, description="Headers sent with every request"
    )
    request_method: str = Field(default="POST", description="Default HTTP method")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")

    @field_validator("request_method")
    @classmethod
    def validate_request_method(cls, v: str) -> str:
        method = v.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {v}")
        return method
