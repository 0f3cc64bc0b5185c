"""GraphQL schema and query document parsers using graphql-core.

Parses SDL (.graphql / .graphqls files) into an IRSchema and client query
documents into a QueryDocument.
"""

import logging
import os

from graphql import (
    DirectiveNode,
    EnumTypeDefinitionNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    GraphQLSyntaxError,
    InlineFragmentNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    parse,
)

from .document import (
    Directive,
    FieldSelection,
    FragmentDef,
    FragmentSpread,
    InlineFragment,
    OperationDef,
    QueryDocument,
    SelectionSet,
)
from .errors import DocumentParseError, SchemaParseError
from .ir import (
    IREnum,
    IREnumValue,
    IRField,
    IRInterface,
    IRObject,
    IRScalar,
    IRSchema,
    IRTypeRef,
    IRUnion,
)

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls")
DEFAULT_DEPRECATION_REASON = "No longer supported"


def get_type_ref(type_node: TypeNode) -> IRTypeRef:
    """Flatten a type node into an IRTypeRef.

    Each list level records whether its items may be null; the innermost
    level gives is_item_optional and the levels in between give inner_lists.
    """
    is_optional = True

    # NonNull wrapper means not optional
    if isinstance(type_node, NonNullTypeNode):
        is_optional = False
        type_node = type_node.type

    items_optional = []
    while isinstance(type_node, ListTypeNode):
        type_node = type_node.type
        # Handle non-null inside a list [Type!]
        if isinstance(type_node, NonNullTypeNode):
            items_optional.append(False)
            type_node = type_node.type
        else:
            items_optional.append(True)

    # After unwrapping, we should have a NamedTypeNode
    assert isinstance(type_node, NamedTypeNode), f"Expected NamedTypeNode, got {type(type_node)}"

    return IRTypeRef(
        name=type_node.name.value,
        is_optional=is_optional,
        is_list=bool(items_optional),
        is_item_optional=items_optional[-1] if items_optional else True,
        inner_lists=tuple(items_optional[:-1]),
    )


def _description(node) -> str | None:
    return node.description.value if node.description else None


def _deprecation_reason(directives: tuple[DirectiveNode, ...] | None) -> str | None:
    for directive in directives or ():
        if directive.name.value != "deprecated":
            continue
        for arg in directive.arguments or ():
            if arg.name.value == "reason" and isinstance(arg.value, StringValueNode):
                return arg.value.value
        return DEFAULT_DEPRECATION_REASON
    return None


class SchemaParser:
    """Parses GraphQL schema SDL into IR."""

    def __init__(self, schema_path: str | None = None):
        """Initialize a parser, optionally with a path to a schema file or directory."""
        self.schema_path = schema_path
        self.ir = IRSchema()
        self.current_file = ""
        # Fields from `extend type X` seen before `type X` itself
        self._pending_extensions: dict[str, list[IRField]] = {}

    def parse_all(self) -> IRSchema:
        """Parse all schema files under schema_path and return the complete IR."""
        if self.schema_path is None:
            raise ValueError("SchemaParser was created without a schema path")

        for file_path in self._collect_schema_files():
            self.current_file = os.path.basename(file_path)
            with open(file_path) as f:
                self.parse_text(f.read())
        return self.finish()

    def parse_text(self, content: str) -> "SchemaParser":
        """Parse one SDL text and merge its definitions into the IR."""
        try:
            ast = parse(content)
        except GraphQLSyntaxError as e:
            location = self.current_file or "<schema>"
            raise SchemaParseError(f"Error parsing {location}: {e.message}", source=content) from e
        self._process_ast(ast)
        return self

    def finish(self) -> IRSchema:
        """Fold pending extensions into their types and return the IR."""
        for type_name, fields in self._pending_extensions.items():
            self.ir.add(IRObject(name=type_name, fields=tuple(fields)))
        self._pending_extensions = {}
        logger.debug("Parsed schema with %d types", len(self.ir.types))
        return self.ir

    def _collect_schema_files(self) -> list[str]:
        """Collect all SDL files from path."""
        files = []
        if os.path.isfile(self.schema_path):
            files.append(self.schema_path)
        else:
            for root, _, filenames in os.walk(self.schema_path):
                for filename in filenames:
                    if filename.endswith(SCHEMA_EXTENSIONS):
                        files.append(os.path.join(root, filename))
        return sorted(files)

    def _process_ast(self, ast):
        """Process GraphQL AST and populate IR."""
        for definition in ast.definitions:
            if isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            elif isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_interface(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            elif isinstance(definition, (ObjectTypeExtensionNode, InterfaceTypeExtensionNode)):
                self._process_extension(definition)
            # Input objects, directives and executable definitions play no
            # part in response shapes

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        self.ir.query_type = None
        self.ir.mutation_type = None
        self.ir.subscription_type = None
        for op_type in node.operation_types:
            name = op_type.type.name.value
            setattr(self.ir, f"{op_type.operation.value}_type", name)

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        self.ir.add(IRScalar(name=node.name.value, description=_description(node)))

    def _process_enum(self, node: EnumTypeDefinitionNode):
        values = tuple(
            IREnumValue(name=v.name.value, description=_description(v))
            for v in node.values or ()
        )
        self.ir.add(IREnum(name=node.name.value, values=values, description=_description(node)))

    def _process_interface(self, node: InterfaceTypeDefinitionNode):
        name = node.name.value
        self.ir.add(
            IRInterface(
                name=name,
                fields=self._merge_pending(name, self._process_fields(node.fields)),
                interfaces=tuple(i.name.value for i in node.interfaces or ()),
                description=_description(node),
            )
        )

    def _process_union(self, node: UnionTypeDefinitionNode):
        self.ir.add(
            IRUnion(
                name=node.name.value,
                members=tuple(t.name.value for t in node.types or ()),
                description=_description(node),
            )
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        name = node.name.value
        self.ir.add(
            IRObject(
                name=name,
                fields=self._merge_pending(name, self._process_fields(node.fields)),
                interfaces=tuple(i.name.value for i in node.interfaces or ()),
                description=_description(node),
            )
        )

    def _process_extension(self, node: ObjectTypeExtensionNode | InterfaceTypeExtensionNode):
        """Merge `extend type` / `extend interface` fields into the existing definition.

        Extensions seen before their base definition are held until the base
        definition (or the end of parsing) arrives.
        """
        name = node.name.value
        extension_fields = self._process_fields(node.fields)
        existing = self.ir.types.get(name)
        if isinstance(existing, (IRObject, IRInterface)):
            existing_names = {f.name for f in existing.fields}
            merged = existing.fields + tuple(
                f for f in extension_fields if f.name not in existing_names
            )
            interfaces = existing.interfaces + tuple(
                i.name.value for i in node.interfaces or ()
                if i.name.value not in existing.interfaces
            )
            self.ir.add(type(existing)(
                name=name,
                fields=merged,
                interfaces=interfaces,
                description=existing.description,
            ))
        else:
            self._pending_extensions.setdefault(name, []).extend(extension_fields)

    def _merge_pending(self, type_name: str, fields: tuple[IRField, ...]) -> tuple[IRField, ...]:
        pending = self._pending_extensions.pop(type_name, [])
        existing_names = {f.name for f in fields}
        return fields + tuple(f for f in pending if f.name not in existing_names)

    @staticmethod
    def _process_fields(field_nodes) -> tuple[IRField, ...]:
        """Process field definitions into an IRField tuple."""
        return tuple(
            IRField(
                name=node.name.value,
                type=get_type_ref(node.type),
                description=_description(node),
                deprecation_reason=_deprecation_reason(node.directives),
            )
            for node in field_nodes or ()
        )


def parse_schema(sdl: str) -> IRSchema:
    """Parse a single SDL text into an IRSchema."""
    return SchemaParser().parse_text(sdl).finish()


class DocumentParser:
    """Parses client query documents into IR."""

    def parse(self, content: str, source_name: str = "<document>") -> QueryDocument:
        """Parse query text into a QueryDocument.

        Raises:
            DocumentParseError: On syntax errors or duplicate fragment names
        """
        try:
            ast = parse(content)
        except GraphQLSyntaxError as e:
            raise DocumentParseError(f"Error parsing {source_name}: {e.message}", source=content) from e

        document = QueryDocument()
        for definition in ast.definitions:
            if isinstance(definition, OperationDefinitionNode):
                document.operations.append(self._process_operation(definition))
            elif isinstance(definition, FragmentDefinitionNode):
                fragment = self._process_fragment(definition)
                if fragment.name in document.fragments:
                    raise DocumentParseError(
                        f"Fragment '{fragment.name}' is defined more than once in {source_name}",
                        source=content,
                    )
                document.fragments[fragment.name] = fragment
        return document

    def _process_operation(self, node: OperationDefinitionNode) -> OperationDef:
        return OperationDef(
            name=node.name.value if node.name else None,
            operation=node.operation.value,
            selection_set=self._process_selection_set(node.selection_set),
        )

    def _process_fragment(self, node: FragmentDefinitionNode) -> FragmentDef:
        return FragmentDef(
            name=node.name.value,
            type_condition=node.type_condition.name.value,
            selection_set=self._process_selection_set(node.selection_set),
        )

    def _process_selection_set(self, node: SelectionSetNode | None) -> SelectionSet | None:
        if node is None:
            return None
        selections = []
        for selection in node.selections:
            if isinstance(selection, FieldNode):
                selections.append(
                    FieldSelection(
                        name=selection.name.value,
                        alias=selection.alias.value if selection.alias else None,
                        selection_set=self._process_selection_set(selection.selection_set),
                        directives=tuple(
                            Directive(name=d.name.value) for d in selection.directives or ()
                        ),
                    )
                )
            elif isinstance(selection, FragmentSpreadNode):
                selections.append(FragmentSpread(name=selection.name.value))
            elif isinstance(selection, InlineFragmentNode):
                selections.append(
                    InlineFragment(
                        type_condition=(
                            selection.type_condition.name.value
                            if selection.type_condition
                            else None
                        ),
                        selection_set=self._process_selection_set(selection.selection_set),
                    )
                )
        return SelectionSet(tuple(selections))


def parse_document(content: str) -> QueryDocument:
    """Parse a single query document text."""
    return DocumentParser().parse(content)
