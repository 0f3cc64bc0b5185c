"""Per-run table of generated types."""

import logging

from .document import SelectionSet
from .errors import TypeNameCollisionError
from .generated import GeneratedType

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Maps generated type names to their definitions for one generation run.

    Each name maps to exactly one shape. Registering an identical shape twice
    returns the existing entry; registering a different shape under a taken
    name raises TypeNameCollisionError.
    """

    def __init__(self):
        self._types: dict[str, GeneratedType] = {}
        self._names: dict[tuple[str, SelectionSet], str] = {}
        self._reserved: set[str] = set()

    def __contains__(self, name: str) -> bool:
        return name in self._types

    def __len__(self) -> int:
        return len(self._types)

    def register(self, generated: GeneratedType) -> GeneratedType:
        """Register a fully built type and return the registry's entry for it."""
        existing = self._types.get(generated.name)
        if existing is not None:
            if existing.same_shape(generated):
                return existing
            raise TypeNameCollisionError(generated.name, existing, generated)
        self._types[generated.name] = generated
        self._reserved.add(generated.name)
        logger.debug("Registered %s", generated)
        return generated

    def lookup(self, name: str) -> GeneratedType | None:
        """Return the type registered under name, or None."""
        return self._types.get(name)

    def all_types(self) -> list[GeneratedType]:
        """All registered types; nested types come before the types using them."""
        return list(self._types.values())

    def reserve(self, name: str):
        """Keep name away from name_for, e.g. for an operation's root type."""
        self._reserved.add(name)

    def name_for(self, schema_type: str, selection_set: SelectionSet) -> str:
        """Pick the generated name for a schema type selected with a selection set.

        The same (schema type, selection set) pair always gets the same name.
        The first distinct selection of a type uses the schema type name;
        later ones get a numeric suffix: User, User2, User3.
        """
        key = (schema_type, selection_set)
        name = self._names.get(key)
        if name is not None:
            return name

        name = schema_type
        counter = 1
        while name in self._reserved:
            counter += 1
            name = f"{schema_type}{counter}"
        self._names[key] = name
        self._reserved.add(name)
        return name
