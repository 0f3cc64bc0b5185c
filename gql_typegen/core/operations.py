"""Generation runs over whole query documents."""

import logging
from dataclasses import dataclass, field

from .context import GenerationContext
from .document import OperationDef, QueryDocument
from .errors import InvalidRootTypeError
from .generated import GeneratedType
from .ir import IRObject, IRSchema, type_kind
from .objects import generate_object_type
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)


def to_pascal_case(name: str) -> str:
    """Convert camelCase or snake_case to PascalCase, keeping inner capitals."""
    return "".join(word[:1].upper() + word[1:] for word in name.split("_") if word)


def operation_type_name(operation: OperationDef) -> str:
    """Name of the root response type of an operation, e.g. GetUserQuery."""
    kind = operation.operation.capitalize()
    if not operation.name:
        return kind
    name = to_pascal_case(operation.name)
    return name if name.endswith(kind) else f"{name}{kind}"


def generate_operation(context: GenerationContext, operation: OperationDef) -> GeneratedType:
    """Generate the response types of one operation into the context's registry.

    Raises:
        InvalidRootTypeError: If the schema's root type is not an object type
    """
    root_name = context.schema.root_type(operation.operation)
    root_def = context.schema.resolve(root_name)
    if not isinstance(root_def, IRObject):
        raise InvalidRootTypeError(operation.operation, root_name, type_kind(root_def))
    logger.debug("Generating %s %s", operation.operation, operation.name or "<anonymous>")
    type_name = operation_type_name(operation)
    # Nested types must not take the root's name while it is being built
    context.registry.reserve(type_name)
    return generate_object_type(context, root_def, operation.selection_set, type_name)


@dataclass
class GenerationResult:
    """Output of one generation run."""
    operations: dict[str, str] = field(default_factory=dict)  # operation name -> root type
    types: list[GeneratedType] = field(default_factory=list)
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)

    def get_type(self, name: str) -> GeneratedType | None:
        for generated in self.types:
            if generated.name == name:
                return generated
        return None


class TypeGenerator:
    """Generates response types for the operations of query documents.

    Example:
        generator = TypeGenerator(schema)
        result = generator.generate(parse_document(query_text))
        result.types  # Every generated type, nested ones first
    """

    def __init__(self, schema: IRSchema, scalars: ScalarRegistry | None = None):
        self.schema = schema
        self.scalars = scalars or ScalarRegistry()

    def new_context(self, document: QueryDocument) -> GenerationContext:
        """Create a fresh context; one per run, never shared."""
        return GenerationContext(schema=self.schema, document=document, scalars=self.scalars)

    def generate(self, document: QueryDocument) -> GenerationResult:
        """Generate every operation of a document in a single run."""
        context = self.new_context(document)
        for operation in document.operations:
            context.registry.reserve(operation_type_name(operation))
        result = GenerationResult(scalars=self.scalars)
        for operation in document.operations:
            root = generate_operation(context, operation)
            result.operations[operation.name or root.name] = root.name
        result.types = context.registry.all_types()
        return result
