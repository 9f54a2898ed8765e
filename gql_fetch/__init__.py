"""
GraphQL over HTTP client with a fluent query builder.

This package submits raw GraphQL documents or programmatically built queries
and normalizes every outcome into a single ``Results`` object.

Features:
- Fluent QueryBuilder / MutationBuilder with arguments, aliases, variables
  and fragments
- Strict GraphQL literal formatting, including unquoted enum values
- HTTP and GraphQL errors reported as data, never raised
- Pluggable transport, with an aiohttp-based default
- Structured data models with Pydantic
"""

from .exceptions import (
    ArgumentValueError,
    ConnectionError,
    DuplicateFieldError,
    EmptySelectionSetError,
    GQLFetchError,
    InvalidQueryError,
    InvalidVariableError,
    NetworkError,
    QueryBuildError,
    ResponseDecodeError,
    TimeoutError,
)
from .graphql import (
    ErrorType,
    Field,
    FragmentDefinition,
    FragmentSpread,
    GraphQLClient,
    GraphQLConfig,
    GraphQLOperationType,
    GraphQLRequest,
    GraphQLVariable,
    InlineFragment,
    MutationBuilder,
    QueryBuilder,
    RawObject,
    Results,
    format_value,
)
from .transport import AiohttpTransport, BaseTransport, HTTPRequest, HTTPResponse

__version__ = "0.1.0"
__author__ = "gql-fetch Team"

__all__ = [
    # Client
    "GraphQLClient",
    "GraphQLConfig",
    "Results",
    "ErrorType",
    # Builders
    "QueryBuilder",
    "MutationBuilder",
    "Field",
    "InlineFragment",
    "FragmentDefinition",
    "FragmentSpread",
    "GraphQLVariable",
    "GraphQLOperationType",
    "GraphQLRequest",
    "RawObject",
    "format_value",
    # Transport
    "BaseTransport",
    "AiohttpTransport",
    "HTTPRequest",
    "HTTPResponse",
    # Exceptions
    "GQLFetchError",
    "ArgumentValueError",
    "InvalidQueryError",
    "QueryBuildError",
    "EmptySelectionSetError",
    "DuplicateFieldError",
    "InvalidVariableError",
    "ResponseDecodeError",
    "NetworkError",
    "ConnectionError",
    "TimeoutError",
]
