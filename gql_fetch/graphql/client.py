"""
GraphQL client implementation.

This module provides a synchronous GraphQL client that submits raw documents
or built queries through an injected transport and normalizes every HTTP and
GraphQL outcome into a ``Results`` object.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode, urlsplit, urlunsplit

from ..exceptions import InvalidQueryError, ResponseDecodeError
from ..transport import BaseTransport, HTTPRequest, HTTPResponse, create_transport
from .builder import QueryBuilder
from .models import BODYLESS_METHODS, GraphQLConfig, GraphQLRequest, Results

logger = logging.getLogger(__name__)


class GraphQLClient:
    """
    Synchronous GraphQL client.

    Every call issues exactly one request through the transport. HTTP error
    statuses (4xx/5xx) and GraphQL ``errors`` payloads never raise; they are
    reported by the returned ``Results``. Only programmer errors and transport
    failures are raised.

    Examples:
        Raw query:
        ```python
        client = GraphQLClient(
            "https://api.example.com/graphql",
            {"Authorization": "Bearer <token>"},
        )
        results = client.run_raw_query(
            "query ($id: ID!) { user(id: $id) { name } }",
            variables={"id": "123"},
        )
        if not results.has_error():
            print(results.get_results().user.name)
        ```

        Built query:
        ```python
        builder = QueryBuilder("user").set_argument("id", "123").select_field("name")
        results = client.run_query(builder, results_as_array=True)
        print(results.get_results()["user"]["name"])
        ```
    """

    def __init__(
        self,
        endpoint: str = "",
        headers: Optional[Mapping[str, str]] = None,
        transport: Optional[BaseTransport] = None,
        **options: Any,
    ):
        """
        Initialize GraphQL client.

        Args:
            endpoint: GraphQL endpoint URL
            headers: Headers attached to every request
            transport: Object with ``send(HTTPRequest) -> HTTPResponse``;
                defaults to an AiohttpTransport
            **options: Remaining GraphQLConfig fields (request_method,
                timeout, verify_ssl)
        """
        self.config = GraphQLConfig(endpoint=endpoint, headers=dict(headers or {}), **options)
        self.transport = self._resolve_transport(transport)

    @classmethod
    def from_config(
        cls, config: GraphQLConfig, transport: Optional[BaseTransport] = None
    ) -> GraphQLClient:
        """Create a client from an existing configuration."""
        options = config.model_dump(exclude={"endpoint", "headers"})
        return cls(config.endpoint, config.headers, transport, **options)

    def _resolve_transport(self, transport: Optional[Any]) -> Any:
        if transport is None:
            return create_transport(self.config.timeout, self.config.verify_ssl)
        if not callable(getattr(transport, "send", None)):
            raise TypeError(
                f"Transport must provide a send() method, got {type(transport).__name__}"
            )
        return transport

    def run_query(
        self,
        query: QueryBuilder,
        results_as_array: bool = False,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Results:
        """
        Build and execute a query.

        Args:
            query: QueryBuilder (or MutationBuilder) to submit
            results_as_array: Return plain dicts/lists from get_results()
            variables: Values for the operation variables

        Returns:
            Results of the request

        Raises:
            InvalidQueryError: If ``query`` is not a QueryBuilder
            QueryBuildError: If the builder cannot produce a valid document
        """
        if not isinstance(query, QueryBuilder):
            raise InvalidQueryError(
                f"run_query() expects a QueryBuilder, got {type(query).__name__}"
            )

        document = query.build()
        request = GraphQLRequest(
            query=document,
            variables=dict(variables or {}),
            operation_name=query.operation_name,
        )
        return self._execute(request, results_as_array, "POST")

    def run_raw_query(
        self,
        query_string: str,
        results_as_array: bool = False,
        variables: Optional[Dict[str, Any]] = None,
        method: Optional[str] = None,
    ) -> Results:
        """
        Execute a raw GraphQL document.

        Args:
            query_string: GraphQL document
            results_as_array: Return plain dicts/lists from get_results()
            variables: Variable values; sent as ``{}`` when omitted
            method: HTTP method; defaults to the configured request method

        Returns:
            Results of the request

        Raises:
            ResponseDecodeError: If a successful response is not JSON
            NetworkError: Propagated from the transport
        """
        if not isinstance(query_string, str):
            raise InvalidQueryError(
                f"run_raw_query() expects a string, got {type(query_string).__name__}"
            )

        request = GraphQLRequest(query=query_string, variables=dict(variables or {}))
        return self._execute(request, results_as_array, method or self.config.request_method)

    def _execute(
        self, request: GraphQLRequest, results_as_array: bool, method: str
    ) -> Results:
        http_request = self._build_http_request(request, method.upper())
        logger.debug("Sending GraphQL %s request to %s", http_request.method, http_request.url)

        response = self.transport.send(http_request)
        results = self._parse_response(response, results_as_array)

        if results.get_error_type() is not None:
            logger.warning(
                "GraphQL request to %s failed with HTTP %d (%s)",
                http_request.url,
                results.get_response_status_code(),
                results.get_error_type().value,
            )
        elif results.has_errors():
            logger.warning(
                "GraphQL request to %s returned errors: %s",
                http_request.url,
                "; ".join(results.error_messages),
            )
        return results

    def _build_http_request(self, request: GraphQLRequest, method: str) -> HTTPRequest:
        headers = {"Accept": "application/json"}

        if method in BODYLESS_METHODS:
            url = _append_params(self.config.endpoint, request.to_params())
            body = None
        else:
            url = self.config.endpoint
            body = request.to_json().encode("utf-8")
            headers["Content-Type"] = "application/json"

        # Configured headers replace defaults of the same name, in any case
        configured = {key.lower() for key in self.config.headers}
        headers = {key: value for key, value in headers.items() if key.lower() not in configured}
        headers.update(self.config.headers)
        return HTTPRequest(method=method, url=url, headers=headers, body=body)

    def _parse_response(self, response: HTTPResponse, results_as_array: bool) -> Results:
        status_code = int(response.status_code)
        text = response.text()
        error_status = status_code >= 400

        try:
            body = json.loads(text) if text.strip() else None
        except json.JSONDecodeError as e:
            if not error_status:
                raise ResponseDecodeError(
                    f"Invalid JSON response: {e}",
                    url=self.config.endpoint,
                    status_code=status_code,
                    response_text=text,
                ) from e
            body = None

        if body is None and not error_status:
            raise ResponseDecodeError(
                "Response body is JSON null" if text.strip() else "Empty response body",
                url=self.config.endpoint,
                status_code=status_code,
                response_text=text,
            )

        return Results(
            status_code,
            body,
            results_as_array=results_as_array,
            raw_response=text,
        )


def _append_params(url: str, params: Dict[str, str]) -> str:
    parts = urlsplit(url)
    query = urlencode(params)
    if parts.query:
        query = f"{parts.query}&{query}"
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))
