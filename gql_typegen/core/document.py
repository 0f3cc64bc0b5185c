"""Intermediate Representation (IR) for GraphQL query documents.

Selections are frozen dataclasses so a selection set can be compared and
hashed; the type registry relies on that to give the same schema type and
the same selection set the same generated name.
"""

from dataclasses import dataclass, field
from typing import Union

from .errors import UnknownFragmentError


@dataclass(frozen=True)
class Directive:
    """A directive applied to a selection, e.g. @include(if: $flag)."""
    name: str


@dataclass(frozen=True)
class FieldSelection:
    """A field selected from the enclosing type."""
    name: str
    alias: str | None = None
    selection_set: "SelectionSet | None" = None
    directives: tuple[Directive, ...] = ()

    @property
    def response_name(self) -> str:
        """Key under which the server returns the field."""
        return self.alias or self.name

    @property
    def is_conditional(self) -> bool:
        """True when @skip or @include may drop the field from the response."""
        return any(d.name in ("skip", "include") for d in self.directives)


@dataclass(frozen=True)
class FragmentSpread:
    """A named fragment inserted with `...Name`."""
    name: str


@dataclass(frozen=True)
class InlineFragment:
    """An unnamed fragment, `... on Type { ... }`."""
    type_condition: str | None
    selection_set: "SelectionSet"


Selection = Union[FieldSelection, FragmentSpread, InlineFragment]


@dataclass(frozen=True)
class SelectionSet:
    """Ordered selections requested at one point of a query."""
    selections: tuple[Selection, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.selections)

    def __len__(self) -> int:
        return len(self.selections)

    def __iter__(self):
        return iter(self.selections)

    @property
    def fields(self) -> list[FieldSelection]:
        return [s for s in self.selections if isinstance(s, FieldSelection)]

    @property
    def fragments(self) -> list[FragmentSpread | InlineFragment]:
        return [s for s in self.selections if not isinstance(s, FieldSelection)]


@dataclass(frozen=True)
class FragmentDef:
    """A named fragment definition."""
    name: str
    type_condition: str
    selection_set: SelectionSet


@dataclass(frozen=True)
class OperationDef:
    """A query, mutation or subscription in a document."""
    name: str | None
    operation: str  # 'query', 'mutation' or 'subscription'
    selection_set: SelectionSet


@dataclass
class QueryDocument:
    """A parsed client query document."""
    operations: list[OperationDef] = field(default_factory=list)
    fragments: dict[str, FragmentDef] = field(default_factory=dict)

    def get_fragment(self, name: str) -> FragmentDef:
        """Look up a fragment definition by name.

        Raises:
            UnknownFragmentError: If the document does not define the fragment
        """
        try:
            return self.fragments[name]
        except KeyError:
            raise UnknownFragmentError(name) from None
