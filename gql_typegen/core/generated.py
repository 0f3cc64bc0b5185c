"""Generated response types.

These dataclasses describe the shapes synthesized for an operation's
response tree. They are what the emitter turns into source code.
"""

from dataclasses import dataclass, field
from enum import Enum

from .ir import IREnumValue


class TypeKind(Enum):
    """Kind of a generated type or of a property's base type."""
    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"

    @property
    def is_composite(self) -> bool:
        return self in (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)


@dataclass(frozen=True)
class PropertyTypeRef:
    """Resolved type of a generated property."""
    type_name: str  # Schema scalar name, or the generated type name
    kind: TypeKind
    python_type: str
    is_optional: bool = True
    is_list: bool = False
    is_item_optional: bool = True
    inner_lists: tuple[bool, ...] = ()  # Nullability of nested lists, outermost first

    def __str__(self) -> str:
        if not self.is_list:
            return self.type_name if self.is_optional else f"{self.type_name}!"
        text = f"{self.type_name}{'' if self.is_item_optional else '!'}"
        for optional in reversed(self.inner_lists):
            text = f"[{text}]{'' if optional else '!'}"
        return f"[{text}]{'' if self.is_optional else '!'}"


@dataclass(frozen=True)
class GeneratedProperty:
    """One property of a generated object shape."""
    name: str  # Response key: alias or field name
    type: PropertyTypeRef
    field_name: str = ""
    description: str | None = None
    deprecation_reason: str | None = None

    def __post_init__(self):
        if not self.field_name:
            object.__setattr__(self, "field_name", self.name)


@dataclass
class GeneratedType:
    """A synthesized typed shape for one level of a response tree."""
    name: str
    kind: TypeKind
    schema_type: str
    properties: list[GeneratedProperty] = field(default_factory=list)
    values: list[IREnumValue] = field(default_factory=list)
    implementations: list[str] = field(default_factory=list)
    description: str | None = None

    def get_property(self, name: str) -> GeneratedProperty | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def same_shape(self, other: "GeneratedType") -> bool:
        """Structural equality, ignoring documentation."""
        return (
            self.name == other.name
            and self.kind == other.kind
            and self.schema_type == other.schema_type
            and [(p.name, p.type) for p in self.properties]
            == [(p.name, p.type) for p in other.properties]
            and [v.name for v in self.values] == [v.name for v in other.values]
            and self.implementations == other.implementations
        )

    def __str__(self) -> str:
        if self.kind is TypeKind.ENUM:
            body = ", ".join(v.name for v in self.values)
        else:
            body = ", ".join(f"{p.name}: {p.type}" for p in self.properties)
        return f"{self.kind.value} {self.name} {{ {body} }}"
