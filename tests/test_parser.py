"""Tests for the schema and query document parsers."""

import pytest

from gql_typegen.core.document import FieldSelection, FragmentSpread, InlineFragment, OperationDef
from gql_typegen.core.errors import DocumentParseError, SchemaParseError
from gql_typegen.core.ir import IREnum, IRInterface, IRObject, IRScalar, IRTypeRef, IRUnion
from gql_typegen.core.parser import SchemaParser, parse_document, parse_schema


SCHEMA = '''
"""A person using the app."""
type User implements Node {
  id: ID!
  "Display name"
  name: String
  tags: [String!]!
  aliases: [String]
  oldName: String @deprecated(reason: "Use name")
  role: Role
}

interface Node {
  id: ID!
}

union SearchResult = User | Post

type Post implements Node {
  id: ID!
  title: String!
}

enum Role {
  ADMIN
  "Regular member"
  MEMBER
}

scalar DateTime

type Query {
  user(id: ID!): User
  search(text: String!): [SearchResult!]!
}

extend type Query {
  node(id: ID!): Node
}
'''


@pytest.fixture
def schema():
    return parse_schema(SCHEMA)


class TestSchemaParser:
    """Tests for SchemaParser."""

    def test_type_kinds(self, schema):
        assert isinstance(schema.resolve("User"), IRObject)
        assert isinstance(schema.resolve("Node"), IRInterface)
        assert isinstance(schema.resolve("SearchResult"), IRUnion)
        assert isinstance(schema.resolve("Role"), IREnum)
        assert isinstance(schema.resolve("DateTime"), IRScalar)

    def test_builtin_scalars_present(self, schema):
        for name in ("String", "Int", "Float", "Boolean", "ID"):
            assert isinstance(schema.resolve(name), IRScalar)

    def test_field_order_preserved(self, schema):
        names = [f.name for f in schema.fields_of("User")]
        assert names == ["id", "name", "tags", "aliases", "oldName", "role"]

    def test_type_refs(self, schema):
        fields = {f.name: f for f in schema.fields_of("User")}
        assert fields["id"].type == IRTypeRef("ID", is_optional=False)
        assert fields["name"].type == IRTypeRef("String")
        assert fields["tags"].type == IRTypeRef(
            "String", is_optional=False, is_list=True, is_item_optional=False
        )
        assert fields["aliases"].type == IRTypeRef("String", is_list=True)

    def test_nested_list_type_refs(self):
        schema = parse_schema("type Query { matrix: [[Int!]]  grid: [[[String]!]!]! }")
        assert schema.get_field("Query", "matrix").type == IRTypeRef(
            "Int", is_list=True, is_item_optional=False, inner_lists=(True,)
        )
        assert schema.get_field("Query", "grid").type == IRTypeRef(
            "String", is_optional=False, is_list=True, inner_lists=(False, False)
        )

    def test_descriptions(self, schema):
        assert schema.resolve("User").description == "A person using the app."
        assert schema.get_field("User", "name").description == "Display name"
        assert schema.resolve("Role").values[1].description == "Regular member"

    def test_deprecation_reason(self, schema):
        assert schema.get_field("User", "oldName").deprecation_reason == "Use name"
        assert schema.get_field("User", "name").deprecation_reason is None

    def test_interfaces_and_members(self, schema):
        assert schema.resolve("User").interfaces == ("Node",)
        assert schema.resolve("SearchResult").members == ("User", "Post")

    def test_extension_merged(self, schema):
        names = [f.name for f in schema.fields_of("Query")]
        assert names == ["user", "search", "node"]

    def test_extension_before_definition(self):
        schema = parse_schema("extend type Query { b: Int }\ntype Query { a: Int }")
        assert [f.name for f in schema.fields_of("Query")] == ["a", "b"]

    def test_schema_definition_roots(self):
        schema = parse_schema("schema { query: Root }\ntype Root { a: Int }")
        assert schema.root_type("query") == "Root"
        assert schema.mutation_type is None

    def test_syntax_error(self):
        with pytest.raises(SchemaParseError):
            parse_schema("type User {")

    def test_parse_all_from_directory(self, tmp_path):
        (tmp_path / "a.graphqls").write_text("type Query { user: User }")
        (tmp_path / "b.graphql").write_text("type User { id: ID! }")
        (tmp_path / "notes.txt").write_text("not a schema")
        schema = SchemaParser(str(tmp_path)).parse_all()
        assert isinstance(schema.resolve("User"), IRObject)
        assert schema.get_field("Query", "user").type.name == "User"


class TestDocumentParser:
    """Tests for DocumentParser."""

    def test_operation_and_fragments(self):
        document = parse_document('''
            query GetUser($id: ID!) {
              user(id: $id) { id ...NameFields }
            }
            fragment NameFields on User { name }
        ''')
        assert len(document.operations) == 1
        operation = document.operations[0]
        assert operation.name == "GetUser"
        assert operation.operation == "query"
        assert operation == OperationDef("GetUser", "query", operation.selection_set)

        user = operation.selection_set.selections[0]
        assert isinstance(user, FieldSelection)
        assert user.name == "user"
        assert user.selection_set.selections == (
            FieldSelection(name="id"),
            FragmentSpread(name="NameFields"),
        )
        assert document.get_fragment("NameFields").type_condition == "User"

    def test_alias_and_directives(self):
        document = parse_document("query { me: user { id @include(if: true) } }")
        selection = document.operations[0].selection_set.selections[0]
        assert selection.alias == "me"
        assert selection.response_name == "me"
        assert selection.selection_set.fields[0].is_conditional

    def test_inline_fragment(self):
        document = parse_document("{ node { ... on User { name } ... { id } } }")
        node = document.operations[0].selection_set.fields[0]
        first, second = node.selection_set.fragments
        assert isinstance(first, InlineFragment)
        assert first.type_condition == "User"
        assert second.type_condition is None

    def test_anonymous_operation(self):
        document = parse_document("{ user { id } }")
        assert document.operations[0].name is None
        assert document.operations[0].operation == "query"

    def test_leaf_field_has_no_selection_set(self):
        document = parse_document("{ user { id } }")
        user = document.operations[0].selection_set.fields[0]
        assert user.selection_set.fields[0].selection_set is None

    def test_duplicate_fragment_rejected(self):
        with pytest.raises(DocumentParseError):
            parse_document("fragment A on User { id }\nfragment A on User { name }")

    def test_syntax_error(self):
        with pytest.raises(DocumentParseError):
            parse_document("query { user { id }")
