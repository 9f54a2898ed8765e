"""
Configuration for gql_fetch.
"""

from ..graphql.models import GraphQLConfig
from .models import LoggingConfig, LogLevel

__all__ = [
    "GraphQLConfig",
    "LoggingConfig",
    "LogLevel",
]
