"""Generation context threaded through every recursive call."""

from contextlib import contextmanager
from dataclasses import dataclass, field

from .document import QueryDocument
from .errors import FragmentCycleError
from .ir import IRSchema
from .registry import TypeRegistry
from .scalars import ScalarRegistry


@dataclass
class GenerationContext:
    """State of one generation run.

    A context belongs to exactly one run. The type registry and the stack of
    fragments being expanded are its only mutable parts.
    """
    schema: IRSchema
    document: QueryDocument
    scalars: ScalarRegistry = field(default_factory=ScalarRegistry)
    registry: TypeRegistry = field(default_factory=TypeRegistry)
    fragments_in_progress: list[str] = field(default_factory=list)

    @contextmanager
    def expanding(self, fragment_name: str):
        """Mark a fragment as being expanded for the duration of the block.

        Raises:
            FragmentCycleError: If the fragment is already being expanded
        """
        if fragment_name in self.fragments_in_progress:
            start = self.fragments_in_progress.index(fragment_name)
            raise FragmentCycleError(self.fragments_in_progress[start:] + [fragment_name])
        self.fragments_in_progress.append(fragment_name)
        try:
            yield
        finally:
            self.fragments_in_progress.pop()
