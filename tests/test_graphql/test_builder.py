"""
Tests for the GraphQL query builders.
"""

import pytest

from gql_fetch.exceptions import (
    ArgumentValueError,
    DuplicateFieldError,
    EmptySelectionSetError,
    InvalidQueryError,
    InvalidVariableError,
    QueryBuildError,
)
from gql_fetch.graphql import (
    Field,
    FragmentDefinition,
    GraphQLOperationType,
    GraphQLVariable,
    InlineFragment,
    MutationBuilder,
    QueryBuilder,
    RawObject,
)


class TestQueryBuilder:
    """Test document generation."""

    def test_simple_query(self):
        document = QueryBuilder("obj").select_field("field").build()

        assert document == "query {\n  obj {\n    field\n  }\n}"

    def test_arguments(self):
        document = (
            QueryBuilder("pokemon")
            .set_argument("name", "Pikachu")
            .set_argument("limit", 3)
            .select_field("id")
            .build()
        )

        assert document == 'query {\n  pokemon(name: "Pikachu", limit: 3) {\n    id\n  }\n}'

    def test_set_arguments_keeps_order(self):
        builder = QueryBuilder("users").set_arguments({"last": 5, "first": 1, "after": None})
        builder.select_field("id")

        assert "users(last: 5, first: 1, after: null)" in builder.build()

    def test_no_empty_parentheses(self):
        builder = QueryBuilder("repository")
        builder.select_field("name")
        builder.select_field("owner", ["login"])
        builder.select_field(QueryBuilder("issues").select_field("totalCount"))

        assert "()" not in builder.build()

    def test_nested_selection_from_names(self):
        document = (
            QueryBuilder("pokemon")
            .select_field("id")
            .select_field("evolutions", ["id", "name"])
            .build()
        )

        assert document == (
            "query {\n"
            "  pokemon {\n"
            "    id\n"
            "    evolutions {\n"
            "      id\n"
            "      name\n"
            "    }\n"
            "  }\n"
            "}"
        )

    def test_nested_selection_from_sub_builder(self):
        owner = QueryBuilder("owner").set_argument("first", 1).select_field("login")
        document = QueryBuilder("repo").select_field("owner", owner).build()

        assert document == (
            "query {\n"
            "  repo {\n"
            "    owner(first: 1) {\n"
            "      login\n"
            "    }\n"
            "  }\n"
            "}"
        )

    def test_unnamed_sub_builder_takes_field_name(self):
        owner = QueryBuilder().select_field("login")
        document = QueryBuilder("repo").select_field("owner", owner).build()

        assert owner.query_object == "owner"
        assert "    owner {\n      login\n    }" in document

    def test_nested_builder_with_alias_and_arguments(self):
        issues = (
            QueryBuilder("issues", alias="openIssues")
            .set_argument("states", [RawObject("OPEN")])
            .select_field("totalCount")
        )
        document = QueryBuilder("repository").select_field(issues).build()

        assert "openIssues: issues(states: [OPEN]) {" in document
        assert "      totalCount" in document

    def test_field_order_is_insertion_order(self):
        document = QueryBuilder("obj").select_fields("c", "a", "b").build()

        assert document.index("c") < document.index("a") < document.index("b")

    def test_alias(self):
        document = QueryBuilder("user", alias="me").select_field("id").build()

        assert document == "query {\n  me: user {\n    id\n  }\n}"

    def test_set_alias_after_construction(self):
        document = QueryBuilder("user").set_alias("viewer").select_field("id").build()

        assert "viewer: user {" in document

    def test_operation_name_and_variables(self):
        builder = QueryBuilder("user").set_operation_name("GetUser")
        builder.set_variable("id", "ID", required=True)
        builder.set_argument("id", builder.variables[0].ref)
        builder.select_field("name")

        assert builder.build() == (
            "query GetUser($id: ID!) {\n  user(id: $id) {\n    name\n  }\n}"
        )

    def test_variable_default_value(self):
        builder = QueryBuilder("users")
        builder.set_variable("first", "Int", default_value=10)
        builder.set_variable("order", "Order", default_value=RawObject("ASC"))
        builder.select_field("id")

        assert builder.build().startswith("query($first: Int = 10, $order: Order = ASC) {")

    def test_operation_without_object(self):
        document = QueryBuilder().select_fields("viewer", "rateLimit").build()

        assert document == "query {\n  viewer\n  rateLimit\n}"

    def test_leaf_field_with_alias_and_arguments(self):
        document = (
            QueryBuilder("user")
            .select_field(Field("avatarUrl", alias="small", arguments={"size": 32}))
            .select_field(Field("avatarUrl", alias="large", arguments={"size": 256}))
            .build()
        )

        assert "    small: avatarUrl(size: 32)\n" in document
        assert "    large: avatarUrl(size: 256)\n" in document

    def test_inline_fragment(self):
        fragment = InlineFragment("User").select_field("login")
        document = QueryBuilder("node").set_argument("id", "1").select_field(fragment).build()

        assert document == (
            "query {\n"
            '  node(id: "1") {\n'
            "    ... on User {\n"
            "      login\n"
            "    }\n"
            "  }\n"
            "}"
        )

    def test_named_fragment(self):
        fragment = FragmentDefinition("UserInfo", "User").select_fields("id", "name")
        builder = QueryBuilder("viewer")
        builder.select_field(fragment.spread())
        builder.add_fragment(fragment)

        assert builder.build() == (
            "query {\n"
            "  viewer {\n"
            "    ...UserInfo\n"
            "  }\n"
            "}\n"
            "\n"
            "fragment UserInfo on User {\n"
            "  id\n"
            "  name\n"
            "}"
        )

    def test_build_is_repeatable(self):
        builder = QueryBuilder("obj").set_argument("a", [1, 2]).select_field("field")

        assert builder.build() == builder.build()
        assert str(builder) == builder.build()

    def test_mutation(self):
        document = (
            MutationBuilder("createUser")
            .set_argument("input", {"name": "John", "role": RawObject("ADMIN")})
            .select_field("id")
            .build()
        )

        assert MutationBuilder.operation_type is GraphQLOperationType.MUTATION
        assert document == (
            'mutation {\n  createUser(input: {name: "John", role: ADMIN}) {\n    id\n  }\n}'
        )


class TestQueryBuilderErrors:
    """Test that malformed builders fail before anything is sent."""

    def test_empty_selection_set(self):
        with pytest.raises(EmptySelectionSetError):
            QueryBuilder("obj").build()

    def test_empty_nested_selection_set(self):
        builder = QueryBuilder("obj").select_field(QueryBuilder("child"))

        with pytest.raises(EmptySelectionSetError) as exc_info:
            builder.build()
        assert exc_info.value.field_name == "child"

    def test_empty_inline_fragment(self):
        builder = QueryBuilder("node").select_field(InlineFragment("User"))

        with pytest.raises(EmptySelectionSetError):
            builder.build()

    def test_empty_operation(self):
        with pytest.raises(EmptySelectionSetError):
            QueryBuilder().build()

    def test_empty_selection_error_is_value_error(self):
        with pytest.raises(ValueError):
            QueryBuilder("obj").build()

    def test_duplicate_field(self):
        builder = QueryBuilder("obj").select_fields("id", "name", "id")

        with pytest.raises(DuplicateFieldError) as exc_info:
            builder.build()
        assert exc_info.value.response_key == "id"

    def test_duplicate_nested_field(self):
        builder = QueryBuilder("obj")
        builder.select_field(QueryBuilder("owner").select_field("id"))
        builder.select_field(QueryBuilder("owner").select_field("name"))

        with pytest.raises(DuplicateFieldError):
            builder.build()

    def test_aliased_duplicate_is_allowed(self):
        builder = QueryBuilder("obj")
        builder.select_field("id")
        builder.select_field(Field("id", alias="otherId"))

        assert "otherId: id" in builder.build()

    def test_invalid_argument_value_fails_immediately(self):
        with pytest.raises(ArgumentValueError):
            QueryBuilder("obj").set_argument("when", object())

    def test_invalid_field_value_in_leaf_arguments(self):
        with pytest.raises(ArgumentValueError):
            Field("avatar", arguments={"size": object()})

    @pytest.mark.parametrize("name", ["", "1abc", "has space", "a-b", None])
    def test_invalid_field_names(self, name):
        with pytest.raises(QueryBuildError):
            QueryBuilder("obj").select_field(Field(name))

    def test_invalid_argument_name(self):
        with pytest.raises(QueryBuildError):
            QueryBuilder("obj").set_argument("bad name", 1)

    def test_unsupported_selection_type(self):
        with pytest.raises(InvalidQueryError):
            QueryBuilder("obj").select_field(42)

    def test_raw_object_is_not_a_selection(self):
        with pytest.raises(TypeError):
            QueryBuilder("obj").select_field(RawObject("field"))

    def test_sub_selections_need_a_name(self):
        with pytest.raises(InvalidQueryError):
            QueryBuilder("obj").select_field(QueryBuilder("child"), ["id"])

    def test_sub_selections_must_be_iterable_of_fields(self):
        with pytest.raises(InvalidQueryError):
            QueryBuilder("obj").select_field("child", "id")

    def test_sub_builder_name_must_match_field(self):
        with pytest.raises(InvalidQueryError):
            QueryBuilder("repo").select_field("owner", QueryBuilder("issues").select_field("id"))

    def test_builder_cannot_select_itself(self):
        builder = QueryBuilder("obj")

        with pytest.raises(QueryBuildError):
            builder.select_field(builder)

    def test_selection_cycle(self):
        parent = QueryBuilder("parent").select_field("id")
        child = QueryBuilder("child").select_field("id")
        parent.select_field(child)

        with pytest.raises(QueryBuildError):
            child.select_field(parent)
        with pytest.raises(QueryBuildError):
            child.select_field("parent", parent)
        assert parent.build().count("child {") == 1

    def test_selection_cycle_through_inline_fragment(self):
        builder = QueryBuilder("node").select_field("id")
        fragment = InlineFragment("User").select_field(builder)

        with pytest.raises(QueryBuildError):
            builder.select_field(fragment)

    def test_arguments_without_object(self):
        builder = QueryBuilder().set_argument("id", 1).select_field("node")

        with pytest.raises(QueryBuildError):
            builder.build()

    def test_operation_metadata_on_nested_builder(self):
        child = QueryBuilder("child").set_operation_name("Nested").select_field("id")
        builder = QueryBuilder("obj").select_field(child)

        with pytest.raises(QueryBuildError):
            builder.build()

    def test_duplicate_variable(self):
        builder = QueryBuilder("obj").set_variable("id", "ID")

        with pytest.raises(InvalidVariableError):
            builder.set_variable("id", "String")

    def test_duplicate_fragment(self):
        builder = QueryBuilder("obj").add_fragment(FragmentDefinition("F", "User"))

        with pytest.raises(QueryBuildError):
            builder.add_fragment(FragmentDefinition("F", "Org"))


class TestGraphQLVariable:
    """Test operation variable definitions."""

    def test_to_string(self):
        assert GraphQLVariable("id", "ID").to_string() == "$id: ID"
        assert GraphQLVariable("id", "ID", required=True).to_string() == "$id: ID!"

    def test_required_type_is_not_doubled(self):
        assert GraphQLVariable("ids", "[ID!]!", required=True).to_string() == "$ids: [ID!]!"

    def test_default_value(self):
        variable = GraphQLVariable("name", "String", default_value="anon")

        assert variable.to_string() == '$name: String = "anon"'

    def test_ref(self):
        assert GraphQLVariable("userId", "ID").ref == RawObject("$userId")

    @pytest.mark.parametrize("name,type_", [("1id", "ID"), ("id", ""), ("id", "ID; drop")])
    def test_invalid_definitions(self, name, type_):
        with pytest.raises(InvalidVariableError):
            GraphQLVariable(name, type_)

    def test_invalid_default_value(self):
        with pytest.raises(ArgumentValueError):
            GraphQLVariable("when", "String", default_value=object())
