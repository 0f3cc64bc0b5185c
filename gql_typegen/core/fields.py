"""Resolution of schema field types into generated property types."""

from .context import GenerationContext
from .document import SelectionSet
from .errors import InvalidSelectionSetException
from .generated import GeneratedType, PropertyTypeRef, TypeKind
from .ir import IREnum, IRField, IRInterface, IRObject, IRScalar, IRUnion, type_kind


def generate_enum_type(context: GenerationContext, enum_def: IREnum) -> GeneratedType:
    """Register the generated enum for a schema enum, reusing an existing one."""
    existing = context.registry.lookup(enum_def.name)
    if existing is not None and existing.kind is TypeKind.ENUM:
        return existing
    return context.registry.register(
        GeneratedType(
            name=enum_def.name,
            kind=TypeKind.ENUM,
            schema_type=enum_def.name,
            values=list(enum_def.values),
            description=enum_def.description,
        )
    )


def resolve_field_type(
    context: GenerationContext,
    field_def: IRField,
    selection_set: SelectionSet | None,
    name_override: str | None = None,
) -> PropertyTypeRef:
    """Resolve a schema field into the type reference of a generated property.

    Scalars map through the scalar registry and ignore any selection set.
    Enums map to a generated enum. Objects, interfaces and unions need a
    non-empty selection set and generate a nested type named name_override,
    or a name picked by the registry.

    Raises:
        InvalidSelectionSetException: Composite field without sub-selections
        UnknownTypeError: The field's type is not in the schema
    """
    from .objects import generate_abstract_type, generate_object_type

    type_ref = field_def.type
    base_def = context.schema.resolve(type_ref.name)

    if isinstance(base_def, IRScalar):
        kind = TypeKind.SCALAR
        type_name = base_def.name
        python_type = context.scalars.python_type(base_def.name)
    elif isinstance(base_def, IREnum):
        kind = TypeKind.ENUM
        type_name = generate_enum_type(context, base_def).name
        python_type = type_name
    elif isinstance(base_def, (IRObject, IRInterface, IRUnion)):
        kind = TypeKind(type_kind(base_def))
        if not selection_set:
            raise InvalidSelectionSetException(base_def.name, kind.value)
        name = name_override or context.registry.name_for(base_def.name, selection_set)
        if isinstance(base_def, IRObject):
            generated = generate_object_type(context, base_def, selection_set, name)
        else:
            generated = generate_abstract_type(context, base_def, selection_set, name)
        type_name = generated.name
        python_type = generated.name
    else:
        raise TypeError(f"Unexpected schema type definition: {base_def!r}")

    return PropertyTypeRef(
        type_name=type_name,
        kind=kind,
        python_type=python_type,
        is_optional=type_ref.is_optional,
        is_list=type_ref.is_list,
        is_item_optional=type_ref.is_item_optional,
        inner_lists=type_ref.inner_lists,
    )
