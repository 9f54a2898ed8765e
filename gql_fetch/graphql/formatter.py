"""
GraphQL literal formatting.

Renders Python argument values as GraphQL input literals. The accepted value
types form a closed set; anything outside it is rejected when the document is
built so malformed syntax never reaches the network.
"""

from __future__ import annotations

import json
import math
import re
from typing import Any, Mapping, Union

from ..exceptions import ArgumentValueError

NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*\Z")


class RawObject:
    """
    A literal emitted verbatim, without quoting.

    Used for enum values and variable references, where quoting would change
    the meaning of the token.

    Examples:
        ```python
        builder.set_argument("status", RawObject("ACTIVE"))
        builder.set_argument("id", RawObject("$userId"))
        ```
    """

    __slots__ = ("value",)

    def __init__(self, value: str):
        if not isinstance(value, str):
            raise ArgumentValueError(
                f"RawObject expects a string, got {type(value).__name__}", value
            )
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"RawObject({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawObject):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((RawObject, self.value))


ArgumentValue = Union[None, bool, int, float, str, list, tuple, Mapping[str, Any], RawObject]


def format_value(value: Any) -> str:
    """
    Format a value as a GraphQL literal.

    Args:
        value: Argument value

    Returns:
        GraphQL literal text

    Raises:
        ArgumentValueError: If the value (or a nested value) has no GraphQL form
    """
    if value is None:
        return "null"
    elif isinstance(value, RawObject):
        return value.value
    # bool before int: bool is an int subclass
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, int):
        return str(value)
    elif isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ArgumentValueError(f"Cannot format non-finite float {value!r}", value)
        return repr(value)
    elif isinstance(value, str):
        return format_string(value)
    elif isinstance(value, (list, tuple)):
        return "[" + ", ".join(format_value(item) for item in value) + "]"
    elif isinstance(value, Mapping):
        return "{" + _format_pairs(value) + "}"
    else:
        raise ArgumentValueError(
            f"Cannot format value of type {type(value).__name__} as a GraphQL literal",
            value,
        )


def format_string(value: str) -> str:
    """Quote a string, escaping quotes, backslashes and control characters."""
    # JSON string escapes are a subset of GraphQL's
    return json.dumps(value, ensure_ascii=False)


def format_arguments(arguments: Mapping[str, Any]) -> str:
    """
    Format an argument mapping as ``(name: value, ...)``.

    Returns an empty string for an empty mapping, so fields without
    arguments never carry ``()``.
    """
    if not arguments:
        return ""
    return "(" + _format_pairs(arguments) + ")"


def _format_pairs(mapping: Mapping[Any, Any]) -> str:
    pairs = []
    for key, item in mapping.items():
        if not isinstance(key, str):
            raise ArgumentValueError(
                f"Object keys must be strings, got {type(key).__name__}", key
            )
        if not NAME_PATTERN.match(key):
            raise ArgumentValueError(f"Invalid object key: {key!r}", key)
        pairs.append(f"{key}: {format_value(item)}")
    return ", ".join(pairs)
