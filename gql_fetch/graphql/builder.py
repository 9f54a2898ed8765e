"""
GraphQL query builders.

This module provides fluent interfaces for building GraphQL queries and
mutations programmatically.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Union

from ..exceptions import (
    DuplicateFieldError,
    EmptySelectionSetError,
    InvalidQueryError,
    InvalidVariableError,
    QueryBuildError,
)
from .formatter import format_arguments, format_value
from .models import NAME_PATTERN, GraphQLOperationType, GraphQLVariable

INDENT = "  "


def _check_name(name: Any, kind: str) -> str:
    if not isinstance(name, str) or not NAME_PATTERN.match(name):
        raise QueryBuildError(f"Invalid {kind} name: {name!r}")
    return name


class Field:
    """Leaf field, optionally aliased and with arguments."""

    def __init__(
        self,
        name: str,
        alias: Optional[str] = None,
        arguments: Optional[Mapping[str, Any]] = None,
    ):
        self.name = _check_name(name, "field")
        self.alias = _check_name(alias, "alias") if alias is not None else None
        self.arguments: Dict[str, Any] = {}
        for key, value in (arguments or {}).items():
            _check_name(key, "argument")
            format_value(value)
            self.arguments[key] = value

    @property
    def response_key(self) -> str:
        return self.alias or self.name

    def to_string(self, indent: int = 0) -> str:
        result = INDENT * indent
        if self.alias:
            result += f"{self.alias}: "
        return result + self.name + format_arguments(self.arguments)


class FragmentSpread:
    """Spread of a named fragment, rendered ``...Name``."""

    def __init__(self, name: str):
        self.name = _check_name(name, "fragment")

    def to_string(self, indent: int = 0) -> str:
        return f"{INDENT * indent}...{self.name}"


Selection = Union[str, Field, FragmentSpread, "InlineFragment", "QueryBuilder"]


class SelectionSetBuilder:
    """Ordered selection set shared by queries and fragments."""

    def __init__(self) -> None:
        self.selections: List[Union[Field, FragmentSpread, InlineFragment, QueryBuilder]] = []

    def select_field(
        self,
        field: Selection,
        selections: Optional[Union[QueryBuilder, Iterable[Selection]]] = None,
    ) -> SelectionSetBuilder:
        """
        Add a field to the selection set.

        Args:
            field: Field name, Field, nested QueryBuilder, InlineFragment
                or FragmentSpread
            selections: Sub-selections for a field name, either an iterable
                of fields or a QueryBuilder for that field

        Returns:
            Self for chaining
        """
        if selections is not None:
            if not isinstance(field, str):
                raise InvalidQueryError(
                    "Sub-selections can only be given together with a field name"
                )
            if isinstance(selections, QueryBuilder):
                name = _check_name(field, "field")
                if selections.query_object not in ("", name):
                    raise InvalidQueryError(
                        f"Sub-builder for '{selections.query_object}' "
                        f"cannot be selected as '{name}'"
                    )
                self._append(selections)
                selections.query_object = name
                return self
            if isinstance(selections, str):
                raise InvalidQueryError(
                    "Sub-selections must be a QueryBuilder or an iterable of fields"
                )
            nested = QueryBuilder(field)
            for selection in selections:
                nested.select_field(selection)
            return self._append(nested)

        if isinstance(field, str):
            return self._append(Field(field))
        if isinstance(field, (Field, FragmentSpread, InlineFragment, QueryBuilder)):
            return self._append(field)
        raise InvalidQueryError(f"Cannot select object of type {type(field).__name__}")

    def _append(self, selection: Any) -> SelectionSetBuilder:
        if isinstance(selection, SelectionSetBuilder) and selection._reaches(self):
            raise QueryBuildError("A builder cannot select itself or one of its parents")
        self.selections.append(selection)
        return self

    def _reaches(self, target: SelectionSetBuilder) -> bool:
        seen: Set[int] = set()
        stack: List[SelectionSetBuilder] = [self]
        while stack:
            node = stack.pop()
            if node is target:
                return True
            if id(node) in seen:
                continue
            seen.add(id(node))
            stack.extend(s for s in node.selections if isinstance(s, SelectionSetBuilder))
        return False

    def select_fields(self, *fields: Selection) -> SelectionSetBuilder:
        """
        Add multiple fields to the selection set.

        Returns:
            Self for chaining
        """
        for field in fields:
            self.select_field(field)
        return self

    def _selection_lines(self, owner: str, indent: int) -> List[str]:
        if not self.selections:
            raise EmptySelectionSetError(owner)

        seen: Set[str] = set()
        lines = []
        for selection in self.selections:
            if isinstance(selection, (Field, QueryBuilder)):
                key = selection.response_key
                if key in seen:
                    raise DuplicateFieldError(key)
                seen.add(key)
            lines.append(selection.to_string(indent))
        return lines


class InlineFragment(SelectionSetBuilder):
    """
    Inline fragment, rendered ``... on TypeName { ... }``.

    Examples:
        ```python
        builder.select_field(
            InlineFragment("User").select_fields("login", "email")
        )
        ```
    """

    def __init__(self, type_name: str):
        super().__init__()
        self.type_name = _check_name(type_name, "type")

    def to_string(self, indent: int = 0) -> str:
        spaces = INDENT * indent
        lines = [f"{spaces}... on {self.type_name} {{"]
        lines.extend(self._selection_lines(self.type_name, indent + 1))
        lines.append(spaces + "}")
        return "\n".join(lines)


class FragmentDefinition(SelectionSetBuilder):
    """Named fragment, rendered ``fragment Name on Type { ... }``."""

    def __init__(self, name: str, on_type: str):
        super().__init__()
        self.name = _check_name(name, "fragment")
        self.on_type = _check_name(on_type, "type")

    def spread(self) -> FragmentSpread:
        return FragmentSpread(self.name)

    def to_string(self, indent: int = 0) -> str:
        spaces = INDENT * indent
        lines = [f"{spaces}fragment {self.name} on {self.on_type} {{"]
        lines.extend(self._selection_lines(self.name, indent + 1))
        lines.append(spaces + "}")
        return "\n".join(lines)


class QueryBuilder(SelectionSetBuilder):
    """
    Fluent interface for building GraphQL queries.

    A builder describes one object field (``query_object``) with its
    arguments and selection set. Nested builders selected into it describe
    nested object fields with the same grammar. Operation metadata
    (operation name, variables, fragments) belongs to the outermost builder.

    Examples:
        Simple query:
        ```python
        document = (QueryBuilder("pokemon")
            .set_argument("name", "Pikachu")
            .select_field("id")
            .select_field("evolutions", ["id", "name"])
            .build()
        )
        ```

        Query with variables and enum arguments:
        ```python
        builder = QueryBuilder("companies").set_operation_name("ListCompanies")
        builder.set_variable("first", "Int", required=True)
        builder.set_argument("first", builder.variables[0].ref)
        builder.set_argument("orderBy", RawObject("NAME_ASC"))
        builder.select_field("name")
        ```

        Nested builder with alias:
        ```python
        owner = QueryBuilder("owner", alias="maintainer").select_field("login")
        builder = QueryBuilder("repository").select_field(owner)
        ```
    """

    operation_type = GraphQLOperationType.QUERY

    def __init__(self, query_object: str = "", alias: Optional[str] = None):
        """
        Initialize query builder.

        Args:
            query_object: Object field to query; empty to select fields
                directly on the operation
            alias: Optional alias for the object field
        """
        super().__init__()
        self.query_object = _check_name(query_object, "field") if query_object else ""
        self.alias: Optional[str] = None
        self.arguments: Dict[str, Any] = {}
        self.operation_name: Optional[str] = None
        self.variables: List[GraphQLVariable] = []
        self.fragments: List[FragmentDefinition] = []
        if alias is not None:
            self.set_alias(alias)

    def __str__(self) -> str:
        return self.build()

    @property
    def response_key(self) -> str:
        return self.alias or self.query_object

    def set_argument(self, name: str, value: Any) -> QueryBuilder:
        """
        Set an argument on the object field.

        Args:
            name: Argument name
            value: Argument value; validated immediately

        Returns:
            Self for chaining
        """
        _check_name(name, "argument")
        format_value(value)
        self.arguments[name] = value
        return self

    def set_arguments(self, arguments: Mapping[str, Any]) -> QueryBuilder:
        """
        Set multiple arguments, in mapping order.

        Returns:
            Self for chaining
        """
        for name, value in arguments.items():
            self.set_argument(name, value)
        return self

    def set_alias(self, alias: str) -> QueryBuilder:
        self.alias = _check_name(alias, "alias")
        return self

    def set_operation_name(self, name: str) -> QueryBuilder:
        self.operation_name = _check_name(name, "operation")
        return self

    def set_variable(
        self,
        name: str,
        type_: str,
        required: bool = False,
        default_value: Optional[Any] = None,
    ) -> QueryBuilder:
        """
        Declare an operation variable.

        Args:
            name: Variable name (without $)
            type_: GraphQL type (e.g., "String", "[ID!]")
            required: Append ``!`` to the type
            default_value: Default value

        Returns:
            Self for chaining
        """
        if any(variable.name == name for variable in self.variables):
            raise InvalidVariableError(f"Variable ${name} is already declared")
        self.variables.append(GraphQLVariable(name, type_, required, default_value))
        return self

    def add_fragment(self, fragment: FragmentDefinition) -> QueryBuilder:
        """
        Append a named fragment definition to the document.

        Returns:
            Self for chaining
        """
        if not isinstance(fragment, FragmentDefinition):
            raise InvalidQueryError(
                f"Expected FragmentDefinition, got {type(fragment).__name__}"
            )
        if any(existing.name == fragment.name for existing in self.fragments):
            raise QueryBuildError(f"Fragment {fragment.name} is already defined")
        self.fragments.append(fragment)
        return self

    def build(self) -> str:
        """
        Build the GraphQL document.

        Returns:
            GraphQL document string

        Raises:
            QueryBuildError: If any selection set is empty or has duplicates
        """
        operation_line = self.operation_type.value
        if self.operation_name:
            operation_line += f" {self.operation_name}"
        if self.variables:
            var_defs = ", ".join(variable.to_string() for variable in self.variables)
            operation_line += f"({var_defs})"
        operation_line += " {"

        lines = [operation_line]
        if self.query_object:
            lines.append(self._field_string(1))
        else:
            if self.arguments or self.alias:
                raise QueryBuildError(
                    "Arguments and aliases require a query object"
                )
            lines.extend(self._selection_lines("", 1))
        lines.append("}")

        for fragment in self.fragments:
            lines.append("")
            lines.append(fragment.to_string())

        return "\n".join(lines)

    def to_string(self, indent: int = 0) -> str:
        """
        Render this builder as a nested object field.

        Args:
            indent: Indentation level

        Returns:
            GraphQL field string
        """
        if not self.query_object:
            raise QueryBuildError("A nested builder needs a query object")
        if self.operation_name or self.variables or self.fragments:
            raise QueryBuildError(
                f"Operation name, variables and fragments of '{self.query_object}' "
                "must be set on the outermost builder"
            )
        return self._field_string(indent)

    def _field_string(self, indent: int) -> str:
        spaces = INDENT * indent
        result = spaces
        if self.alias:
            result += f"{self.alias}: "
        result += self.query_object + format_arguments(self.arguments) + " {"

        lines = [result]
        lines.extend(self._selection_lines(self.query_object, indent + 1))
        lines.append(spaces + "}")
        return "\n".join(lines)


class MutationBuilder(QueryBuilder):
    """
    Fluent interface for building GraphQL mutations.

    Examples:
        ```python
        document = (MutationBuilder("createUser")
            .set_argument("input", {"name": "John", "role": RawObject("ADMIN")})
            .select_fields("id", "name")
            .build()
        )
        ```
    """

    operation_type = GraphQLOperationType.MUTATION
