"""
Shared test fixtures and configuration for the gql_fetch test suite.
"""

import json
from collections import deque
from typing import Any, Deque, List

import pytest

from gql_fetch import GraphQLClient
from gql_fetch.transport import BaseTransport, HTTPRequest, HTTPResponse


class MockTransport(BaseTransport):
    """Transport replaying queued responses and recording requests."""

    def __init__(self) -> None:
        self.responses: Deque[HTTPResponse] = deque()
        self.requests: List[HTTPRequest] = []

    def add_response(self, response: HTTPResponse) -> None:
        self.responses.append(response)

    def send(self, request: HTTPRequest) -> HTTPResponse:
        self.requests.append(request)
        if not self.responses:
            return make_response()
        return self.responses.popleft()


def make_response(body: Any = None, status_code: int = 200, raw: bool = False) -> HTTPResponse:
    """Build a response; ``body`` is JSON-encoded unless ``raw`` is set."""
    if body is None:
        body = {"data": {}}
    payload = body if raw else json.dumps(body)
    return HTTPResponse(
        status_code=status_code,
        body=payload.encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )


@pytest.fixture
def response_factory():
    """Factory for canned HTTP responses."""
    return make_response


@pytest.fixture
def mock_transport() -> MockTransport:
    """Transport with an empty response queue."""
    return MockTransport()


@pytest.fixture
def client(mock_transport: MockTransport) -> GraphQLClient:
    """Client with an empty endpoint and no default headers."""
    return GraphQLClient("", {}, mock_transport)


@pytest.fixture
def syntax_error() -> List[dict]:
    """GraphQL errors payload for a document that failed to parse."""
    return [
        {
            "message": 'Syntax Error: Expected Name, found "}".',
            "locations": [{"line": 1, "column": 9}],
            "extensions": {"code": "GRAPHQL_PARSE_FAILED"},
        }
    ]
