"""Errors raised while building response types.

Every condition listed here is a structural problem in the schema or the
query document. None of them is recoverable mid-run: the first one raised
aborts generation for the document being processed.
"""

from typing import Any


class GenerationError(Exception):
    """Base class for all type generation errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SchemaParseError(GenerationError):
    """Raised when the schema SDL cannot be parsed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class DocumentParseError(GenerationError):
    """Raised when a query document cannot be parsed."""

    def __init__(self, message: str, source: str | None = None):
        self.source = source
        super().__init__(message)


class UnknownTypeError(GenerationError):
    """A referenced type name does not exist in the schema."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown type '{type_name}' is not defined in the schema")


class UnknownFieldError(GenerationError):
    """A selected field does not exist on the enclosing type."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"Type '{type_name}' has no field '{field_name}'")


class UnknownFragmentError(GenerationError):
    """A fragment spread names a fragment the document does not define."""

    def __init__(self, fragment_name: str):
        self.fragment_name = fragment_name
        super().__init__(f"Fragment '{fragment_name}' is not defined in the query document")


class InvalidSelectionSetException(GenerationError):
    """A composite field was selected without any sub-fields.

    Attributes:
        type_name: Schema type of the offending field
        kind: Selection context, one of "object", "interface" or "union"
    """

    def __init__(self, type_name: str, kind: str):
        self.type_name = type_name
        self.kind = kind
        super().__init__(
            f"Invalid {kind} selection set for '{type_name}': "
            f"at least one field must be selected"
        )


class IncompatibleFragmentError(GenerationError):
    """A fragment cannot be applied to the type it is spread into."""

    def __init__(self, fragment_name: str, type_condition: str, enclosing_type: str):
        self.fragment_name = fragment_name
        self.type_condition = type_condition
        self.enclosing_type = enclosing_type
        super().__init__(
            f"Fragment '{fragment_name}' on '{type_condition}' "
            f"cannot be spread into '{enclosing_type}'"
        )


class TypeNameCollisionError(GenerationError):
    """Two different shapes were registered under the same generated name."""

    def __init__(self, name: str, existing: Any, incoming: Any):
        self.name = name
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Generated type name '{name}' is already used by a different shape:\n"
            f"  existing: {existing}\n"
            f"  incoming: {incoming}"
        )


class DuplicatePropertyError(GenerationError):
    """Two selections map to the same property with different types."""

    def __init__(self, type_name: str, property_name: str):
        self.type_name = type_name
        self.property_name = property_name
        super().__init__(
            f"Property '{property_name}' of '{type_name}' is selected more than once "
            f"with conflicting types"
        )


class FragmentCycleError(GenerationError):
    """A fragment spreads itself, directly or through other fragments."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(f"Fragment cycle detected: {' -> '.join(cycle)}")


class InvalidRootTypeError(GenerationError):
    """An operation's root type is not an object type."""

    def __init__(self, operation: str, type_name: str, kind: str):
        self.operation = operation
        self.type_name = type_name
        self.kind = kind
        super().__init__(
            f"Root {operation} type '{type_name}' must be an object type, not {kind}"
        )
