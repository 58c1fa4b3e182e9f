"""Tests for the query builder."""

from enum import IntEnum
from uuid import UUID

import pytest
from graphql import parse

from gql_builder.core.arguments import ArgumentInfo
from gql_builder.core.directives import IncludeDirective, SkipDirective
from gql_builder.core.errors import InvalidIdentifierError, MissingTypeNameError
from gql_builder.core.fields import FieldMetadata
from gql_builder.core.formatting import Formatting
from gql_builder.core.parameters import QueryParameter
from gql_builder.core.query_builder import QueryBuilder

GUID = UUID("12345678-1234-5678-1234-567812345678")
COMPACT = Formatting.COMPACT
INDENTED = Formatting.INDENTED


# =============================================================================
# Builders shaped like generated code
# =============================================================================


class HumanQueryBuilder(QueryBuilder):
    TYPE_NAME = "Human"
    ALL_FIELDS = (FieldMetadata("id"), FieldMetadata("name"), FieldMetadata("homePlanet"))

    def with_id(self) -> "HumanQueryBuilder":
        return self.with_scalar_field("id")


class DroidQueryBuilder(QueryBuilder):
    TYPE_NAME = "Droid"
    ALL_FIELDS = (FieldMetadata("id"), FieldMetadata("primaryFunction"))


class CharacterQueryBuilder(QueryBuilder):
    TYPE_NAME = "Character"

    def with_human_fragment(self, builder: HumanQueryBuilder) -> "CharacterQueryBuilder":
        return self.with_fragment(builder)

    def with_droid_fragment(self, builder: DroidQueryBuilder) -> "CharacterQueryBuilder":
        return self.with_fragment(builder)


CharacterQueryBuilder.ALL_FIELDS = (
    FieldMetadata("id"),
    FieldMetadata("name"),
    FieldMetadata("friends", is_complex=True, builder_type=CharacterQueryBuilder),
)


class HeroQueryBuilder(QueryBuilder):
    TYPE_NAME = "Query"
    ALL_FIELDS = (FieldMetadata("hero", is_complex=True, builder_type=CharacterQueryBuilder),)


class CategoryQueryBuilder(QueryBuilder):
    TYPE_NAME = "Category"


CategoryQueryBuilder.ALL_FIELDS = (
    FieldMetadata("name"),
    FieldMetadata("subcategories", is_complex=True, builder_type=CategoryQueryBuilder),
)


class AuthorQueryBuilder(QueryBuilder):
    TYPE_NAME = "Author"


class BookQueryBuilder(QueryBuilder):
    TYPE_NAME = "Book"


class LibraryQueryBuilder(QueryBuilder):
    TYPE_NAME = "Library"


AuthorQueryBuilder.ALL_FIELDS = (
    FieldMetadata("name"),
    FieldMetadata("books", is_complex=True, builder_type=BookQueryBuilder),
)
BookQueryBuilder.ALL_FIELDS = (
    FieldMetadata("title"),
    FieldMetadata("author", is_complex=True, builder_type=AuthorQueryBuilder),
)
LibraryQueryBuilder.ALL_FIELDS = (
    FieldMetadata("featured", is_complex=True, builder_type=BookQueryBuilder),
    FieldMetadata("latest", is_complex=True, builder_type=BookQueryBuilder),
)


# =============================================================================
# Tests: Rendering
# =============================================================================


class TestRendering:
    """Tests for document rendering."""

    def test_compact_operation(self):
        builder = HumanQueryBuilder("query", "Heroes").with_all_fields()
        assert builder.build(COMPACT) == "query Heroes{id,name,homePlanet}"

    def test_indented_operation(self):
        builder = HumanQueryBuilder("query", "Heroes").with_all_fields()
        assert builder.build() == "query Heroes {\n  id\n  name\n  homePlanet\n}"

    def test_custom_indent_size(self):
        builder = CategoryQueryBuilder("query").with_all_fields()
        assert builder.build(INDENTED, 4) == (
            "query {\n    name\n    subcategories {\n        name\n    }\n}"
        )

    def test_nested_selection_without_operation(self):
        builder = HumanQueryBuilder().with_scalar_field("name")
        assert builder.build(COMPACT) == "{name}"
        assert builder.build(INDENTED) == "{\n  name\n}"

    def test_render_is_repeatable(self):
        builder = HeroQueryBuilder("query").with_all_fields()
        first = builder.build()
        assert builder.build() == first
        assert builder.build(COMPACT) == builder.build(COMPACT)

    def test_mutation_between_renders(self):
        builder = HumanQueryBuilder("query").with_scalar_field("id")
        assert builder.build(COMPACT) == "query{id}"
        builder.with_scalar_field("name")
        assert builder.build(COMPACT) == "query{id,name}"

    def test_arguments(self):
        builder = HumanQueryBuilder().with_scalar_field(
            "friends", [ArgumentInfo.of("first", 2), ArgumentInfo.of("after", "abc")]
        )
        assert builder.build(COMPACT) == '{friends(first:2,after:"abc")}'
        assert builder.build(INDENTED) == '{\n  friends(first: 2, after: "abc")\n}'

    def test_argument_mapping(self):
        builder = HumanQueryBuilder().with_scalar_field("height", {"unit": "METER"})
        assert builder.build(COMPACT) == '{height(unit:"METER")}'

    def test_list_argument_indented(self):
        builder = HumanQueryBuilder().with_scalar_field("x", {"ids": [1, 2]})
        assert builder.build(INDENTED) == "{\n  x(ids: [\n    1,\n    2])\n}"

    def test_argument_format_mask(self):
        builder = HumanQueryBuilder().with_scalar_field(
            "score", [ArgumentInfo.of("min", 0.5, format_mask=".2f")]
        )
        assert builder.build(COMPACT) == '{score(min:"0.50")}'


class TestFieldCriteria:
    """Tests for replace and suppression rules."""

    def test_duplicate_field_replaces(self):
        builder = HumanQueryBuilder().with_scalar_field("x", {"a": 1}).with_scalar_field("x", {"a": 2})
        result = builder.build(COMPACT)
        assert result == "{x(a:2)}"
        assert result.count("x(") == 1

    def test_empty_object_field_suppressed(self):
        builder = HumanQueryBuilder().with_scalar_field("id").with_object_field(
            "friends", CharacterQueryBuilder()
        )
        assert builder.build(COMPACT) == "{id}"
        assert "friends" not in builder.build(INDENTED)

    def test_empty_object_field_leaves_no_separator(self):
        builder = HumanQueryBuilder().with_object_field("friends", CharacterQueryBuilder()).with_scalar_field("id")
        assert builder.build(COMPACT) == "{id}"

    def test_empty_object_field_indented_line(self):
        builder = HumanQueryBuilder().with_scalar_field("id").with_object_field(
            "friends", CharacterQueryBuilder()
        )
        assert builder.build(INDENTED) == "{\n  id\n\n}"

    def test_object_field_with_only_fragments(self):
        search = CharacterQueryBuilder().with_fragment(HumanQueryBuilder().with_id())
        builder = HeroQueryBuilder().with_object_field("search", search)
        assert builder.build(COMPACT) == "{search{...on Human{id}}}"

    def test_empty_fragment_suppressed(self):
        builder = CharacterQueryBuilder().with_scalar_field("id").with_fragment(HumanQueryBuilder())
        assert builder.build(COMPACT) == "{id}"
        assert "Human" not in builder.build(INDENTED)

    def test_fragment_with_only_nested_fragments_suppressed(self):
        nested = CharacterQueryBuilder().with_fragment(HumanQueryBuilder().with_id())
        builder = CharacterQueryBuilder().with_scalar_field("id").with_fragment(nested)
        assert builder.build(COMPACT) == "{id}"

    def test_fragment_indented(self):
        builder = CharacterQueryBuilder().with_scalar_field("id").with_fragment(
            DroidQueryBuilder().with_scalar_field("primaryFunction")
        )
        assert builder.build(INDENTED) == (
            "{\n  id\n  ... on Droid {\n    primaryFunction\n  }\n}"
        )

    def test_fragments_follow_fields(self):
        builder = CharacterQueryBuilder().with_fragment(HumanQueryBuilder().with_id()).with_scalar_field("name")
        assert builder.build(COMPACT) == "{name,...on Human{id}}"

    def test_fragment_on_same_type_replaces(self):
        builder = (
            CharacterQueryBuilder()
            .with_fragment(HumanQueryBuilder().with_id())
            .with_fragment(HumanQueryBuilder().with_scalar_field("name"))
        )
        assert builder.build(COMPACT) == "{...on Human{name}}"

    def test_fragment_requires_type_name(self):
        with pytest.raises(InvalidIdentifierError):
            CharacterQueryBuilder().with_fragment(QueryBuilder().with_scalar_field("id"))


class TestDirectives:
    """Tests for directives on selections."""

    def test_scalar_field(self):
        flag = QueryParameter("withName", True)
        builder = HumanQueryBuilder().with_scalar_field("name", directives=[IncludeDirective(flag)])
        assert builder.build(COMPACT) == "{name@include(if:$withName)}"
        assert builder.build(INDENTED) == "{\n  name @include(if: $withName)\n}"

    def test_object_field_after_arguments(self):
        builder = HeroQueryBuilder().with_object_field(
            "friends",
            CharacterQueryBuilder().with_scalar_field("id"),
            {"first": 2},
            [SkipDirective(False)],
        )
        assert builder.build(COMPACT) == "{friends(first:2)@skip(if:false){id}}"

    def test_fragment(self):
        builder = CharacterQueryBuilder().with_fragment(
            HumanQueryBuilder().with_id(), [IncludeDirective(True)]
        )
        assert builder.build(COMPACT) == "{...on Human@include(if:true){id}}"
        assert builder.build(INDENTED) == (
            "{\n  ... on Human @include(if: true) {\n    id\n  }\n}"
        )


# =============================================================================
# Tests: Variables
# =============================================================================


class TestVariables:
    """Tests for the variable declaration clause."""

    def test_non_null_and_default(self):
        user_id = QueryParameter("id", GUID, nullable=False)
        limit = QueryParameter("limit", 10)
        builder = (
            HumanQueryBuilder("query", "GetHuman")
            .with_parameter(user_id)
            .with_parameter(limit)
            .with_scalar_field("name", {"id": user_id})
        )
        assert builder.build(COMPACT) == "query GetHuman($id:ID!,$limit:Int=10){name(id:$id)}"
        assert builder.build(INDENTED) == (
            "query GetHuman (\n  $id: ID!,\n  $limit: Int = 10) {\n  name(id: $id)\n}"
        )

    def test_nullable_guid_default(self):
        builder = HumanQueryBuilder("query").with_parameter(QueryParameter("id", GUID)).with_id()
        assert f'$id: ID = "{GUID}"' in builder.build(INDENTED)

    def test_non_null_has_no_default(self):
        builder = HumanQueryBuilder("query").with_parameter(QueryParameter("id", GUID, nullable=False)).with_id()
        result = builder.build(INDENTED)
        assert "$id: ID!" in result
        assert "=" not in result

    def test_null_default(self):
        builder = HumanQueryBuilder("query").with_parameter(QueryParameter("after", None, "String")).with_id()
        assert builder.build(COMPACT) == "query($after:String=null){id}"

    def test_unresolved_type_fails_on_render(self):
        builder = HumanQueryBuilder("query").with_parameter(QueryParameter("ids", [])).with_id()
        with pytest.raises(MissingTypeNameError):
            builder.build()

    def test_unregistered_enum_fails_on_render(self):
        class Color(IntEnum):
            RED = 1

        builder = HumanQueryBuilder("query").with_parameter(QueryParameter("c", Color.RED)).with_id()
        with pytest.raises(MissingTypeNameError):
            builder.build()

    def test_unnamed_parameter_rejected(self):
        builder = HumanQueryBuilder("query")
        with pytest.raises(InvalidIdentifierError):
            builder.with_parameter(QueryParameter(None, 5))
        assert builder.parameters == []

    def test_redeclaring_replaces(self):
        builder = (
            HumanQueryBuilder("query")
            .with_parameter(QueryParameter("first", 1))
            .with_parameter(QueryParameter("after", "x"))
            .with_parameter(QueryParameter("first", 5))
            .with_id()
        )
        assert builder.build(COMPACT) == 'query($first:Int=5,$after:String="x"){id}'

    def test_variables_ignored_without_operation(self):
        builder = HumanQueryBuilder().with_parameter(QueryParameter("first", 1)).with_id()
        assert builder.build(COMPACT) == "{id}"

    def test_invalid_operation_name(self):
        with pytest.raises(InvalidIdentifierError):
            HumanQueryBuilder("query", "bad name")


# =============================================================================
# Tests: Fluent API
# =============================================================================


class TestFluentApi:
    """Tests for mutation helpers."""

    def test_returns_concrete_type(self):
        builder = HumanQueryBuilder().with_type_name().with_all_fields()
        assert isinstance(builder, HumanQueryBuilder)

    def test_type_name(self):
        assert HumanQueryBuilder().with_type_name().build(COMPACT) == "{__typename}"

    def test_except_field(self):
        builder = HumanQueryBuilder().with_all_fields().except_field("homePlanet")
        assert builder.build(COMPACT) == "{id,name}"

    def test_except_missing_field_is_noop(self):
        builder = HumanQueryBuilder().with_id().except_field("unknown")
        assert builder.build(COMPACT) == "{id}"

    def test_except_field_requires_name(self):
        with pytest.raises(ValueError):
            HumanQueryBuilder().except_field(None)

    def test_all_scalar_fields(self):
        assert CharacterQueryBuilder().with_all_scalar_fields().build(COMPACT) == "{id,name}"

    def test_clear(self):
        builder = (
            CharacterQueryBuilder("query")
            .with_parameter(QueryParameter("first", 1))
            .with_all_fields()
        )
        builder.clear()
        assert builder.build(COMPACT) == "query{}"
        assert not builder.has_selections
        assert builder.parameters == []


# =============================================================================
# Tests: Auto-population
# =============================================================================


class TestAllFields:
    """Tests for recursive auto-population."""

    def test_self_reference_one_level(self):
        builder = CategoryQueryBuilder("query", "Categories").with_all_fields()
        assert builder.build(COMPACT) == "query Categories{name,subcategories{name}}"
        assert builder.build() == (
            "query Categories {\n  name\n  subcategories {\n    name\n  }\n}"
        )

    def test_mutual_reference(self):
        assert AuthorQueryBuilder().with_all_fields().build(COMPACT) == "{name,books{title}}"
        assert BookQueryBuilder().with_all_fields().build(COMPACT) == "{title,author{name}}"

    def test_sibling_branches_are_independent(self):
        builder = LibraryQueryBuilder().with_all_fields()
        assert builder.build(COMPACT) == "{featured{title,author{name}},latest{title,author{name}}}"

    def test_nested_nodes_are_not_shared(self):
        builder = LibraryQueryBuilder().with_all_fields()
        featured = builder._field_criteria["featured"].builder
        latest = builder._field_criteria["latest"].builder
        assert featured is not latest
        featured.except_field("title")
        assert builder.build(COMPACT) == "{featured{author{name}},latest{title,author{name}}}"

    def test_fragment_methods_invoked(self):
        builder = HeroQueryBuilder("query").with_all_fields()
        fragments = "...on Droid{id,primaryFunction},...on Human{id,name,homePlanet}"
        assert builder.build(COMPACT) == (
            f"query{{hero{{id,name,friends{{id,name,{fragments}}},{fragments}}}}}"
        )

    def test_fragment_methods_cached_per_class(self):
        HeroQueryBuilder("query").with_all_fields()
        cached = vars(CharacterQueryBuilder)["__fragment_methods__"]
        assert [t for _, t in cached] == [DroidQueryBuilder, HumanQueryBuilder]
        assert "__fragment_methods__" not in vars(QueryBuilder)

    @pytest.mark.parametrize("formatting", [COMPACT, INDENTED])
    def test_output_parses(self, formatting):
        builder = HeroQueryBuilder("query", "Hero").with_parameter(QueryParameter("first", 3)).with_all_fields()
        parse(builder.build(formatting))
