"""Fragment lookup and type condition checks."""

from .context import GenerationContext
from .document import FragmentDef
from .errors import IncompatibleFragmentError


def is_compatible(context: GenerationContext, type_condition: str, enclosing_type: str) -> bool:
    """Check whether a fragment on type_condition may be spread into enclosing_type.

    Compatible when both name the same type, or when some object type is a
    possible type of both: an object against an interface it implements or a
    union it belongs to, and an abstract type against its members.
    """
    if type_condition == enclosing_type:
        return True
    schema = context.schema
    overlap = set(schema.possible_types(type_condition)) & set(schema.possible_types(enclosing_type))
    return bool(overlap)


def check_type_condition(
    context: GenerationContext,
    fragment_name: str,
    type_condition: str | None,
    enclosing_type: str,
):
    """Raise IncompatibleFragmentError unless the condition fits the enclosing type.

    Inline fragments without a type condition always fit.
    """
    if type_condition is None:
        return
    # Resolve first so an unknown condition surfaces as UnknownTypeError
    context.schema.resolve(type_condition)
    if not is_compatible(context, type_condition, enclosing_type):
        raise IncompatibleFragmentError(fragment_name, type_condition, enclosing_type)


def find_fragment(context: GenerationContext, fragment_name: str, enclosing_type: str) -> FragmentDef:
    """Find a named fragment and check it can be spread into enclosing_type.

    Raises:
        UnknownFragmentError: If the document does not define the fragment
        UnknownTypeError: If the fragment's type condition is not in the schema
        IncompatibleFragmentError: If the type condition does not fit
    """
    fragment = context.document.get_fragment(fragment_name)
    check_type_condition(context, fragment.name, fragment.type_condition, enclosing_type)
    return fragment
