#!/usr/bin/env python3
"""
Basic usage examples for the gql_fetch library.

This script runs a few queries against the public Countries GraphQL API,
both as raw documents and through the query builder.
"""

from gql_fetch import GraphQLClient, QueryBuilder, RawObject
from gql_fetch.config import LoggingConfig, LogLevel
from gql_fetch.logging import setup_logging

ENDPOINT = "https://countries.trevorblades.com/"


def example_raw_query(client: GraphQLClient) -> None:
    """Example: Submit a raw document with variables."""
    print("=== Raw Query ===\n")

    results = client.run_raw_query(
        "query ($code: ID!) { country(code: $code) { name capital currency } }",
        variables={"code": "BR"},
    )
    print(f"Status: {results.get_response_status_code()}")
    if results.has_error():
        print(f"Errors: {results.error_messages}\n")
        return

    country = results.get_results().country
    print(f"{country.name}: capital {country.capital}, currency {country.currency}\n")


def example_query_builder(client: GraphQLClient) -> None:
    """Example: Build a query with arguments and nested selections."""
    print("=== Query Builder ===\n")

    builder = (
        QueryBuilder("countries")
        .set_argument("filter", {"continent": {"eq": "SA"}})
        .select_field("code")
        .select_field("name")
        .select_field("languages", ["name"])
    )
    print(builder.build())
    print()

    results = client.run_query(builder, results_as_array=True)
    for country in (results.get_results() or {}).get("countries", [])[:5]:
        languages = ", ".join(language["name"] for language in country["languages"])
        print(f"{country['code']} {country['name']} ({languages})")
    print()


def example_error_handling(client: GraphQLClient) -> None:
    """Example: GraphQL errors are reported, not raised."""
    print("=== Error Handling ===\n")

    builder = QueryBuilder("country").set_argument("code", RawObject("BR"))
    builder.select_field("doesNotExist")

    results = client.run_query(builder)
    print(f"has_error: {results.has_error()}")
    print(f"error_type: {results.get_error_type()}")
    for message in results.error_messages:
        print(f"  - {message}")
    print()


def main() -> None:
    """Run all examples."""
    setup_logging(LoggingConfig(level=LogLevel.WARNING))

    print("gql_fetch - Usage Examples")
    print("=" * 50)
    print()

    client = GraphQLClient(ENDPOINT, {"User-Agent": "gql-fetch-examples/0.1"})
    example_raw_query(client)
    example_query_builder(client)
    example_error_handling(client)


if __name__ == "__main__":
    main()
