"""Tests for the pydantic model code generator."""

import ast
import importlib.util

import pytest

from gql_typegen.core.generator import (
    CodeGenerator,
    field_name,
    module_name_for,
    safe_comment,
    safe_docstring,
    snake_case,
)
from gql_typegen.core.hooks import AddHeaderHook, FilterTypesHook, HookRunner
from gql_typegen.core.operations import TypeGenerator
from gql_typegen.core.parser import parse_document, parse_schema


SCHEMA = '''
type Query {
  user(id: ID!): User
  node(id: ID!): Node
}

interface Node {
  id: ID!
}

"""A person."""
type User implements Node {
  id: ID!
  "The user's display name"
  name: String
  tags: [String!]!
  nicknames: [String]
  role: Role!
  createdAt: DateTime
  class: String
}

type Post implements Node {
  id: ID!
  title: String!
}

enum Role {
  ADMIN
  MEMBER
}

scalar DateTime
'''

QUERY = '''
query GetUser {
  user(id: "1") {
    __typename
    id
    name
    tags
    nicknames
    role
    createdAt
    class
  }
}
'''


@pytest.fixture
def generation_result():
    return TypeGenerator(parse_schema(SCHEMA)).generate(parse_document(QUERY))


@pytest.fixture
def code(generation_result, tmp_path):
    return CodeGenerator(str(tmp_path)).render_module(generation_result, "get_user")


class TestHelpers:
    """Tests for naming helpers."""

    def test_snake_case(self):
        assert snake_case("createdAt") == "created_at"
        assert snake_case("GetUser") == "get_user"

    def test_field_name(self):
        assert field_name("__typename") == "typename"
        assert field_name("createdAt") == "created_at"
        assert field_name("class") == "class_"

    def test_module_name_for(self):
        assert module_name_for("queries/GetUser.graphql") == "get_user"
        assert module_name_for("queries/list-users.graphql") == "list_users"

    def test_safe_docstring(self):
        assert safe_docstring('Says "hi"') == 'Says "hi" '
        assert '"""' not in safe_docstring('a """ b').replace('\\"', "")

    def test_safe_comment(self):
        assert safe_comment("line one\nline two") == "line one line two"
        assert len(safe_comment("x" * 200)) == 120


class TestRenderModule:
    """Tests for rendering generated types."""

    def test_valid_python(self, code):
        ast.parse(code)

    def test_enum(self, code):
        assert "class Role(str, Enum):" in code
        assert "ADMIN = 'ADMIN'" in code

    def test_model_properties(self, code):
        assert "class User(BaseModel):" in code
        assert '"""A person."""' in code
        assert "typename: str = Field(alias='__typename')" in code
        assert "id: str = Field(alias='id')" in code
        assert "name: Optional[str] = Field(None, alias='name')" in code
        assert "tags: List[str] = Field(alias='tags')" in code
        assert "nicknames: Optional[List[Optional[str]]] = Field(None, alias='nicknames')" in code
        assert "role: Role = Field(alias='role')" in code
        assert "created_at: Optional[datetime] = Field(None, alias='createdAt')" in code
        assert "class_: Optional[str] = Field(None, alias='class')" in code

    def test_description_comment(self, code):
        assert "# The user's display name" in code

    def test_scalar_import(self, code):
        assert "from datetime import datetime" in code

    def test_nested_types_before_parents(self, code):
        assert code.index("class Role(") < code.index("class User(")
        assert code.index("class User(") < code.index("class GetUserQuery(")

    def test_root_refers_to_nested_model(self, code):
        assert "user: Optional[User] = Field(None, alias='user')" in code

    def test_abstract_union_annotation(self, tmp_path):
        result = TypeGenerator(parse_schema(SCHEMA)).generate(
            parse_document('{ node(id: "1") { id ... on Post { title } } }')
        )
        code = CodeGenerator(str(tmp_path)).render_module(result, "nodes")
        assert "node: Optional[Union[Post, Node]] = Field(None, alias='node')" in code

    def test_generated_models_validate_responses(self, code):
        namespace = {}
        exec(compile(code, "get_user.py", "exec"), namespace)
        response = namespace["GetUserQuery"].model_validate({
            "user": {
                "__typename": "User",
                "id": "1",
                "name": None,
                "tags": ["a"],
                "nicknames": None,
                "role": "ADMIN",
                "createdAt": "2024-01-15T10:30:00",
                "class": "x",
            }
        })
        assert response.user.id == "1"
        assert response.user.typename == "User"
        assert response.user.role == namespace["Role"].ADMIN
        assert response.user.created_at.year == 2024
        assert response.user.class_ == "x"

    def test_dropped_enum_rendered_as_str(self, generation_result, tmp_path):
        hooks = HookRunner()
        hooks.add_pre_hook(FilterTypesHook(exclude_enum_prefix="Role"))
        code = CodeGenerator(str(tmp_path), hooks=hooks).render_module(generation_result, "get_user")
        assert "class Role(" not in code
        assert "role: str = Field(alias='role')" in code

    def test_custom_template_dir(self, generation_result, tmp_path):
        template_dir = tmp_path / "templates"
        template_dir.mkdir()
        (template_dir / "models.py.j2").write_text(
            "{% for model in models %}{{ model.name }} = None\n{% endfor %}"
        )
        code = CodeGenerator(str(tmp_path), template_dir=str(template_dir)).render_module(
            generation_result, "get_user"
        )
        assert code == "User = None\nGetUserQuery = None\n"

    def test_invalid_python_rejected(self, generation_result, tmp_path):
        template_dir = tmp_path / "templates"
        template_dir.mkdir()
        (template_dir / "models.py.j2").write_text("class {")
        generator = CodeGenerator(str(tmp_path), template_dir=str(template_dir))
        with pytest.raises(ValueError, match="Generated invalid Python"):
            generator.render_module(generation_result, "get_user")


class TestGenerate:
    """Tests for writing generated modules."""

    def test_writes_modules_and_init(self, generation_result, tmp_path):
        output_dir = tmp_path / "generated"
        written = CodeGenerator(str(output_dir)).generate({"get_user": generation_result})
        assert sorted(p.rsplit("/", 1)[-1] for p in written) == ["__init__.py", "get_user.py"]
        assert "class GetUserQuery(BaseModel):" in (output_dir / "get_user.py").read_text()
        assert (output_dir / "__init__.py").read_text().startswith('"""Generated')

    def test_header_hook_applied(self, generation_result, tmp_path):
        hooks = HookRunner()
        hooks.add_post_hook(AddHeaderHook("# Auto-generated - do not edit"))
        CodeGenerator(str(tmp_path), hooks=hooks).generate({"get_user": generation_result})
        content = (tmp_path / "get_user.py").read_text()
        assert content.startswith("# Auto-generated - do not edit\n\n")


def load_module(path):
    """Import a generated module from its file."""
    spec = importlib.util.spec_from_file_location(path.stem, path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestShadowedNames:
    """Generated classes never shadow names the module imports."""

    SCHEMA = '''
    type Query {
      field: Field
      me: Optional!
      when: DateTime
    }

    type Field {
      id: ID!
    }

    type Optional {
      id: ID!
      field: Field
    }

    scalar DateTime
    '''

    QUERY = "query Q { field { id } me { id field { id } } when }"

    def test_clashing_classes_renamed(self, tmp_path):
        result = TypeGenerator(parse_schema(self.SCHEMA)).generate(parse_document(self.QUERY))
        code = CodeGenerator(str(tmp_path)).render_module(result, "q")
        assert "class Field_(BaseModel):" in code
        assert "class Optional_(BaseModel):" in code
        assert "field: Optional[Field_] = Field(None, alias='field')" in code
        assert "me: Optional_ = Field(alias='me')" in code

    def test_written_module_imports(self, tmp_path):
        result = TypeGenerator(parse_schema(self.SCHEMA)).generate(parse_document(self.QUERY))
        CodeGenerator(str(tmp_path)).generate({"q": result})
        module = load_module(tmp_path / "q.py")
        response = module.QQuery.model_validate({
            "field": {"id": "1"},
            "me": {"id": "2", "field": None},
            "when": None,
        })
        assert response.field.id == "1"
        assert isinstance(response.me, module.Optional_)
        assert response.me.field is None


class TestNestedLists:
    """Nested list types keep every list level."""

    SCHEMA = '''
    type Query {
      matrix: [[Int!]]
      grid: [[[String]!]!]!
    }
    '''

    def test_annotations(self, tmp_path):
        result = TypeGenerator(parse_schema(self.SCHEMA)).generate(
            parse_document("query Q { matrix grid }")
        )
        code = CodeGenerator(str(tmp_path)).render_module(result, "q")
        assert "matrix: Optional[List[Optional[List[int]]]] = Field(None, alias='matrix')" in code
        assert "grid: List[List[List[Optional[str]]]] = Field(alias='grid')" in code

    def test_validates_nested_response(self, tmp_path):
        result = TypeGenerator(parse_schema(self.SCHEMA)).generate(
            parse_document("query Q { matrix grid }")
        )
        code = CodeGenerator(str(tmp_path)).render_module(result, "q")
        namespace = {}
        exec(compile(code, "q.py", "exec"), namespace)
        response = namespace["QQuery"].model_validate({
            "matrix": [[1, 2], None],
            "grid": [[["a", None]]],
        })
        assert response.matrix == [[1, 2], None]
        assert response.grid == [[["a", None]]]
