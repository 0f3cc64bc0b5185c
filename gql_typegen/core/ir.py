"""Intermediate Representation (IR) for GraphQL schemas.

This module defines dataclasses that represent the type system of a GraphQL
schema (objects, interfaces, unions, enums and scalars) together with the
read-only lookups the type generator performs against it.
"""

from dataclasses import dataclass, field
from typing import Union

from .errors import UnknownFieldError, UnknownTypeError

TYPENAME_FIELD = "__typename"


@dataclass(frozen=True)
class IRTypeRef:
    """A field type reference with its wrappers flattened.

    `[String!]!` becomes IRTypeRef("String", is_optional=False, is_list=True,
    is_item_optional=False). Lists nested inside the outer list record the
    nullability of each inner list, outermost first: `[[Int!]]` has
    inner_lists=(True,) and is_item_optional=False.
    """
    name: str
    is_optional: bool = True  # True if nullable (no ! in GraphQL)
    is_list: bool = False
    is_item_optional: bool = True  # Only meaningful when is_list is set
    inner_lists: tuple[bool, ...] = ()


@dataclass(frozen=True)
class IRField:
    """Represents a field in a GraphQL object or interface."""
    name: str
    type: IRTypeRef
    description: str | None = None
    deprecation_reason: str | None = None


@dataclass(frozen=True)
class IREnumValue:
    """Represents a single value in a GraphQL enum."""
    name: str
    description: str | None = None


@dataclass(frozen=True)
class IRScalar:
    """Represents a GraphQL scalar type."""
    name: str
    description: str | None = None


@dataclass(frozen=True)
class IREnum:
    """Represents a GraphQL enum type."""
    name: str
    values: tuple[IREnumValue, ...]
    description: str | None = None


@dataclass(frozen=True)
class IRObject:
    """Represents a GraphQL object type."""
    name: str
    fields: tuple[IRField, ...]
    interfaces: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class IRInterface:
    """Represents a GraphQL interface type."""
    name: str
    fields: tuple[IRField, ...]
    interfaces: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class IRUnion:
    """Represents a GraphQL union type."""
    name: str
    members: tuple[str, ...]
    description: str | None = None


SchemaTypeDef = Union[IRObject, IRInterface, IRUnion, IREnum, IRScalar]

BUILTIN_SCALARS = ("String", "Int", "Float", "Boolean", "ID")

_TYPENAME = IRField(name=TYPENAME_FIELD, type=IRTypeRef("String", is_optional=False))


def type_kind(type_def: SchemaTypeDef) -> str:
    """Return the lower-case kind tag of a schema type definition."""
    if isinstance(type_def, IRObject):
        return "object"
    if isinstance(type_def, IRInterface):
        return "interface"
    if isinstance(type_def, IRUnion):
        return "union"
    if isinstance(type_def, IREnum):
        return "enum"
    if isinstance(type_def, IRScalar):
        return "scalar"
    raise TypeError(f"Unexpected schema type definition: {type_def!r}")


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL schema."""
    types: dict[str, SchemaTypeDef] = field(default_factory=dict)
    query_type: str | None = "Query"
    mutation_type: str | None = "Mutation"
    subscription_type: str | None = "Subscription"

    def __post_init__(self):
        for name in BUILTIN_SCALARS:
            self.types.setdefault(name, IRScalar(name=name))

    def add(self, type_def: SchemaTypeDef):
        """Add a type definition to the index."""
        self.types[type_def.name] = type_def

    def resolve(self, name: str) -> SchemaTypeDef:
        """Look up a type definition by name.

        Raises:
            UnknownTypeError: If the schema does not define the type
        """
        try:
            return self.types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def fields_of(self, name: str) -> tuple[IRField, ...]:
        """Return the ordered field definitions of an object or interface.

        Unions, enums and scalars have no fields of their own.
        """
        type_def = self.resolve(name)
        if isinstance(type_def, (IRObject, IRInterface)):
            return type_def.fields
        return ()

    def get_field(self, type_name: str, field_name: str) -> IRField:
        """Find a field on a composite type.

        The `__typename` meta field is available on every composite type.
        """
        type_def = self.resolve(type_name)
        if field_name == TYPENAME_FIELD and isinstance(
            type_def, (IRObject, IRInterface, IRUnion)
        ):
            return _TYPENAME
        for ir_field in self.fields_of(type_name):
            if ir_field.name == field_name:
                return ir_field
        raise UnknownFieldError(type_name, field_name)

    def possible_types(self, name: str) -> list[str]:
        """Return the object type names a value of the given type can have.

        An object is its own single possible type; an interface is
        implemented by every object declaring it (directly or through another
        interface); a union spans its members.
        """
        type_def = self.resolve(name)
        if isinstance(type_def, IRObject):
            return [type_def.name]
        if isinstance(type_def, IRUnion):
            return [self.resolve(m).name for m in type_def.members]
        if isinstance(type_def, IRInterface):
            return [
                t.name for t in self.types.values()
                if isinstance(t, IRObject) and self.implements(t.name, name)
            ]
        return []

    def implements(self, type_name: str, interface_name: str) -> bool:
        """Check whether an object or interface implements an interface."""
        seen: set[str] = set()
        pending = list(getattr(self.resolve(type_name), "interfaces", ()))
        while pending:
            current = pending.pop()
            if current == interface_name:
                return True
            if current in seen:
                continue
            seen.add(current)
            pending.extend(getattr(self.resolve(current), "interfaces", ()))
        return False

    def root_type(self, operation: str) -> str:
        """Return the root type name for 'query', 'mutation' or 'subscription'."""
        roots = {
            "query": self.query_type,
            "mutation": self.mutation_type,
            "subscription": self.subscription_type,
        }
        root = roots.get(operation)
        if root is None or root not in self.types:
            raise UnknownTypeError(root or operation.capitalize())
        return root

    @property
    def objects(self) -> dict[str, IRObject]:
        return {k: v for k, v in self.types.items() if isinstance(v, IRObject)}

    @property
    def interfaces(self) -> dict[str, IRInterface]:
        return {k: v for k, v in self.types.items() if isinstance(v, IRInterface)}

    @property
    def unions(self) -> dict[str, IRUnion]:
        return {k: v for k, v in self.types.items() if isinstance(v, IRUnion)}

    @property
    def enums(self) -> dict[str, IREnum]:
        return {k: v for k, v in self.types.items() if isinstance(v, IREnum)}

    @property
    def scalars(self) -> dict[str, IRScalar]:
        return {k: v for k, v in self.types.items() if isinstance(v, IRScalar)}
