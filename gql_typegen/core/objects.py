"""Generation of object, interface and union response types.

Given a composite schema type and the selection set requested on it, build
one GeneratedType holding a property per selected field, with the fields of
spread fragments merged in after the type's own fields, and register it.
"""

import dataclasses
import logging

from .context import GenerationContext
from .document import FieldSelection, FragmentSpread, InlineFragment, Selection, SelectionSet
from .errors import DuplicatePropertyError, InvalidSelectionSetException
from .fields import resolve_field_type
from .fragments import check_type_condition, find_fragment
from .generated import GeneratedProperty, GeneratedType, PropertyTypeRef, TypeKind
from .ir import IRInterface, IRObject, IRUnion

logger = logging.getLogger(__name__)


class PropertyList:
    """Ordered properties of a type under construction.

    A property whose name is already taken must have the same type as the
    first one, nullability aside. When it does, the first one keeps its
    place and becomes required if either selection is required; otherwise
    DuplicatePropertyError is raised.
    """

    def __init__(self, type_name: str):
        self.type_name = type_name
        self._properties: dict[str, GeneratedProperty] = {}

    def add(self, prop: GeneratedProperty):
        existing = self._properties.get(prop.name)
        if existing is None:
            self._properties[prop.name] = prop
        elif _required(existing.type) != _required(prop.type):
            raise DuplicatePropertyError(self.type_name, prop.name)
        elif existing.type.is_optional and not prop.type.is_optional:
            # An unconditional selection guarantees the key
            self._properties[prop.name] = dataclasses.replace(existing, type=prop.type)

    def build(self) -> list[GeneratedProperty]:
        return list(self._properties.values())


def _required(type_ref: PropertyTypeRef) -> PropertyTypeRef:
    return dataclasses.replace(type_ref, is_optional=False)


def generate_object_type(
    context: GenerationContext,
    object_def: IRObject,
    selection_set: SelectionSet | None,
    name_override: str | None = None,
) -> GeneratedType:
    """Generate and register the response type of an object selection.

    Args:
        context: The generation run
        object_def: Schema object type being selected
        selection_set: Selections on the object, must not be empty
        name_override: Name of the generated type; defaults to the object name

    Returns:
        The registered GeneratedType

    Raises:
        InvalidSelectionSetException: If the selection set is missing or empty
    """
    if not selection_set:
        raise InvalidSelectionSetException(object_def.name, "object")

    type_name = name_override or object_def.name
    properties = PropertyList(type_name)
    _collect_properties(context, object_def.name, selection_set, properties)

    return context.registry.register(
        GeneratedType(
            name=type_name,
            kind=TypeKind.OBJECT,
            schema_type=object_def.name,
            properties=properties.build(),
            description=object_def.description,
        )
    )


def _collect_properties(
    context: GenerationContext,
    type_name: str,
    selection_set: SelectionSet,
    properties: PropertyList,
):
    """Add own fields first, then each fragment's fields in spread order."""
    for selection in selection_set.fields:
        properties.add(_field_property(context, type_name, selection))

    for fragment in selection_set.fragments:
        if isinstance(fragment, FragmentSpread):
            with context.expanding(fragment.name):
                fragment_def = find_fragment(context, fragment.name, type_name)
                logger.debug("Merging fragment %s into %s", fragment.name, properties.type_name)
                _collect_properties(context, type_name, fragment_def.selection_set, properties)
        else:
            check_type_condition(context, "<inline>", fragment.type_condition, type_name)
            _collect_properties(context, type_name, fragment.selection_set, properties)


def _field_property(
    context: GenerationContext,
    type_name: str,
    selection: FieldSelection,
) -> GeneratedProperty:
    field_def = context.schema.get_field(type_name, selection.name)
    type_ref = resolve_field_type(context, field_def, selection.selection_set)
    if selection.is_conditional:
        # @skip / @include may leave the key out of the response
        type_ref = dataclasses.replace(type_ref, is_optional=True)
    return GeneratedProperty(
        name=selection.response_name,
        type=type_ref,
        field_name=selection.name,
        description=field_def.description,
        deprecation_reason=field_def.deprecation_reason,
    )


def generate_abstract_type(
    context: GenerationContext,
    abstract_def: IRInterface | IRUnion,
    selection_set: SelectionSet | None,
    name_override: str | None = None,
) -> GeneratedType:
    """Generate and register the response type of an interface or union selection.

    Fields selected on the abstract type itself (directly or through
    fragments on the abstract type) become the properties of the generated
    type. Fragments on narrower types produce one implementation type per
    possible object type they apply to; each implementation repeats the
    common fields followed by its own.

    Raises:
        InvalidSelectionSetException: If the selection set is missing or empty
        UnknownFieldError: If a union selection names a field other than __typename
    """
    kind = TypeKind.INTERFACE if isinstance(abstract_def, IRInterface) else TypeKind.UNION
    if not selection_set:
        raise InvalidSelectionSetException(abstract_def.name, kind.value)

    type_name = name_override or abstract_def.name
    possible_types = context.schema.possible_types(abstract_def.name)

    common_fields: list[FieldSelection] = []
    member_fragments: dict[str, list[Selection]] = {}
    _distribute(context, abstract_def.name, possible_types, selection_set, common_fields, member_fragments)

    properties = PropertyList(type_name)
    for selection in common_fields:
        properties.add(_field_property(context, abstract_def.name, selection))

    implementations = []
    for member in possible_types:
        if member not in member_fragments:
            continue
        member_def = context.schema.resolve(member)
        member_selection = SelectionSet(tuple(common_fields) + tuple(member_fragments[member]))
        name = context.registry.name_for(member, member_selection)
        implementation = generate_object_type(context, member_def, member_selection, name)
        implementations.append(implementation.name)

    return context.registry.register(
        GeneratedType(
            name=type_name,
            kind=kind,
            schema_type=abstract_def.name,
            properties=properties.build(),
            implementations=implementations,
            description=abstract_def.description,
        )
    )


def _distribute(
    context: GenerationContext,
    abstract_name: str,
    possible_types: list[str],
    selection_set: SelectionSet,
    common_fields: list[FieldSelection],
    member_fragments: dict[str, list[Selection]],
):
    """Split an abstract selection set into common fields and per-member fragments."""
    common_fields.extend(selection_set.fields)

    for fragment in selection_set.fragments:
        if isinstance(fragment, FragmentSpread):
            with context.expanding(fragment.name):
                fragment_def = find_fragment(context, fragment.name, abstract_name)
                if fragment_def.type_condition == abstract_name:
                    _distribute(
                        context, abstract_name, possible_types,
                        fragment_def.selection_set, common_fields, member_fragments,
                    )
                    continue
                condition = fragment_def.type_condition
        else:
            check_type_condition(context, "<inline>", fragment.type_condition, abstract_name)
            condition = fragment.type_condition
            if condition is None or condition == abstract_name:
                _distribute(
                    context, abstract_name, possible_types,
                    fragment.selection_set, common_fields, member_fragments,
                )
                continue

        targets = set(context.schema.possible_types(condition))
        for member in possible_types:
            if member in targets:
                member_fragments.setdefault(member, []).append(fragment)
