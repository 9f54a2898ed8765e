"""
GraphQL support for gql_fetch.

Query construction, request execution and result normalization.
"""

from .builder import (
    Field,
    FragmentDefinition,
    FragmentSpread,
    InlineFragment,
    MutationBuilder,
    QueryBuilder,
)
from .client import GraphQLClient
from .formatter import RawObject, format_arguments, format_value
from .models import (
    ErrorType,
    GraphQLConfig,
    GraphQLOperationType,
    GraphQLRequest,
    GraphQLVariable,
    Results,
)

__all__ = [
    # Client
    "GraphQLClient",
    "GraphQLConfig",
    # Models
    "GraphQLRequest",
    "GraphQLVariable",
    "GraphQLOperationType",
    "Results",
    "ErrorType",
    # Builders
    "QueryBuilder",
    "MutationBuilder",
    "Field",
    "InlineFragment",
    "FragmentDefinition",
    "FragmentSpread",
    # Formatting
    "RawObject",
    "format_value",
    "format_arguments",
]
