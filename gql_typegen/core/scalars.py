"""Scalar type mappings for GraphQL code generation.

Maps GraphQL scalar names to the Python types used in generated models,
along with the import each type needs.

Example usage:
    from gql_typegen.core.scalars import ScalarMapping, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("Money", ScalarMapping("Decimal", "from decimal import Decimal"))

    registry.python_type("Money")    # "Decimal"
    registry.python_type("Unknown")  # "Any"
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ScalarMapping:
    """How a GraphQL scalar is represented in generated code.

    Attributes:
        python_type: The Python type name (e.g., "datetime", "Decimal")
        import_statement: The import needed for this type, if any
    """
    python_type: str
    import_statement: str | None = None

    @classmethod
    def from_dotted(cls, dotted: str) -> "ScalarMapping":
        """Build a mapping from a dotted path such as "decimal.Decimal".

        A bare name ("str") is treated as a builtin and needs no import.
        """
        module, _, name = dotted.rpartition(".")
        if not module:
            return cls(python_type=name)
        return cls(python_type=name, import_statement=f"from {module} import {name}")


STRING = ScalarMapping("str")
INT = ScalarMapping("int")
FLOAT = ScalarMapping("float")
BOOLEAN = ScalarMapping("bool")
DATETIME = ScalarMapping("datetime", "from datetime import datetime")
DATE = ScalarMapping("date", "from datetime import date")
UUID = ScalarMapping("UUID", "from uuid import UUID")
ANY = ScalarMapping("Any", "from typing import Any")

# Used for scalars nobody registered a mapping for
UNKNOWN_SCALAR = ANY


class ScalarRegistry:
    """Registry of scalar mappings.

    Manages the mapping between GraphQL scalar names and Python types.

    Example:
        registry = ScalarRegistry()
        registry.register("DateTime", DATETIME)

        mapping = registry.get("DateTime")
        if mapping:
            python_type = mapping.python_type  # "datetime"
    """

    def __init__(self):
        self._mappings: dict[str, ScalarMapping] = {}
        # Register default mappings
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default mappings."""
        self.register("String", STRING)
        self.register("ID", STRING)
        self.register("Int", INT)
        self.register("Float", FLOAT)
        self.register("Boolean", BOOLEAN)
        self.register("DateTime", DATETIME)
        self.register("Date", DATE)
        self.register("UUID", UUID)
        self.register("JSON", ANY)
        self.register("JSONObject", ANY)

    @classmethod
    def from_config(cls, scalars: dict[str, str]) -> "ScalarRegistry":
        """Create a registry with custom mappings given as dotted type paths."""
        registry = cls()
        for scalar_name, dotted in scalars.items():
            registry.register(scalar_name, ScalarMapping.from_dotted(dotted))
        return registry

    def register(self, scalar_name: str, mapping: ScalarMapping):
        """Register a mapping for a scalar type."""
        self._mappings[scalar_name] = mapping

    def get(self, scalar_name: str) -> ScalarMapping | None:
        """Get the mapping for a scalar type, or None if not registered."""
        return self._mappings.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        """Check if a mapping is registered for a scalar type."""
        return scalar_name in self._mappings

    def resolve(self, scalar_name: str) -> ScalarMapping:
        """Get the mapping for a scalar, falling back to the unknown-scalar mapping."""
        return self._mappings.get(scalar_name, UNKNOWN_SCALAR)

    def python_type(self, scalar_name: str) -> str:
        """Python type name for a scalar."""
        return self.resolve(scalar_name).python_type

    def imports_for(self, scalar_names) -> set[str]:
        """Import statements needed for the given scalars."""
        imports = set()
        for name in scalar_names:
            statement = self.resolve(name).import_statement
            if statement:
                imports.add(statement)
        return imports
