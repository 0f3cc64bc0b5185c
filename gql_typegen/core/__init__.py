"""Core modules for GraphQL response type generation."""

from .config import GeneratorConfig
from .context import GenerationContext
from .document import (
    FieldSelection,
    FragmentDef,
    FragmentSpread,
    InlineFragment,
    OperationDef,
    QueryDocument,
    SelectionSet,
)
from .errors import (
    DocumentParseError,
    DuplicatePropertyError,
    FragmentCycleError,
    GenerationError,
    IncompatibleFragmentError,
    InvalidRootTypeError,
    InvalidSelectionSetException,
    SchemaParseError,
    TypeNameCollisionError,
    UnknownFieldError,
    UnknownFragmentError,
    UnknownTypeError,
)
from .fields import resolve_field_type
from .fragments import find_fragment
from .generated import GeneratedProperty, GeneratedType, PropertyTypeRef, TypeKind
from .generator import CodeGenerator
from .hooks import (
    AddHeaderHook,
    FilterTypesHook,
    HookRunner,
    PostGenerateHook,
    PreEmitHook,
)
from .introspection import IntrospectionError, TimeoutConfig, introspect_schema
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
from .objects import generate_abstract_type, generate_object_type
from .operations import GenerationResult, TypeGenerator, generate_operation
from .parser import DocumentParser, SchemaParser, parse_document, parse_schema
from .registry import TypeRegistry
from .scalars import ScalarMapping, ScalarRegistry

__all__ = [
    # Config
    "GeneratorConfig",
    # Schema IR
    "IREnum",
    "IREnumValue",
    "IRField",
    "IRInterface",
    "IRObject",
    "IRScalar",
    "IRSchema",
    "IRTypeRef",
    "IRUnion",
    # Document IR
    "FieldSelection",
    "FragmentDef",
    "FragmentSpread",
    "InlineFragment",
    "OperationDef",
    "QueryDocument",
    "SelectionSet",
    # Parsers
    "DocumentParser",
    "SchemaParser",
    "parse_document",
    "parse_schema",
    # Scalars
    "ScalarMapping",
    "ScalarRegistry",
    # Generated types
    "GeneratedProperty",
    "GeneratedType",
    "PropertyTypeRef",
    "TypeKind",
    # Generation
    "GenerationContext",
    "GenerationResult",
    "TypeGenerator",
    "TypeRegistry",
    "find_fragment",
    "generate_abstract_type",
    "generate_object_type",
    "generate_operation",
    "resolve_field_type",
    # Errors
    "DocumentParseError",
    "DuplicatePropertyError",
    "FragmentCycleError",
    "GenerationError",
    "IncompatibleFragmentError",
    "InvalidRootTypeError",
    "InvalidSelectionSetException",
    "SchemaParseError",
    "TypeNameCollisionError",
    "UnknownFieldError",
    "UnknownFragmentError",
    "UnknownTypeError",
    # Emission
    "AddHeaderHook",
    "CodeGenerator",
    "FilterTypesHook",
    "HookRunner",
    "PostGenerateHook",
    "PreEmitHook",
    # Introspection
    "IntrospectionError",
    "TimeoutConfig",
    "introspect_schema",
]
