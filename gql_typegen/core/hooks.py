"""Generation hooks for customizing code emission.

Provides protocols for hooks that adjust the generated types before they
are rendered, or transform the rendered code before it is written.

Example usage:
    from gql_typegen.core.hooks import PreEmitHook, PostGenerateHook

    # Pre-emit hook to drop types
    class DropInternalTypes(PreEmitHook):
        def pre_emit(self, types):
            return [t for t in types if not t.name.startswith("_")]

    # Post-generation hook to add headers
    class AddLicenseHeader(PostGenerateHook):
        def post_generate(self, filename, content):
            header = "# Copyright 2024 My Company\\n\\n"
            return header + content
"""

from typing import Protocol, runtime_checkable

from .generated import GeneratedType, TypeKind


@runtime_checkable
class PreEmitHook(Protocol):
    """Protocol for pre-emit hooks.

    Pre-emit hooks receive the generated types of a module before they are
    rendered and return the list to render.
    """

    def pre_emit(self, types: list[GeneratedType]) -> list[GeneratedType]:
        """Called before a module is rendered.

        Args:
            types: The generated types, nested types first

        Returns:
            The (possibly modified) types to render
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Protocol for post-generation hooks.

    Post-generation hooks receive the generated code for each file
    and can transform it before it's written to disk.

    Example:
        class FormatWithBlack(PostGenerateHook):
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Called after code generation for each file.

        Args:
            filename: The name of the generated file (e.g., "get_user.py")
            content: The generated code content

        Returns:
            The (possibly transformed) code to write
        """
        ...


class AddHeaderHook:
    """Built-in hook to add a header to generated files.

    Example:
        hook = AddHeaderHook("# Auto-generated - do not edit")
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        """Add a header to the beginning of the file."""
        if not self.header.endswith("\n"):
            header = self.header + "\n\n"
        else:
            header = self.header + "\n"
        return header + content


class FilterTypesHook:
    """Built-in hook to drop enum types by name prefix.

    Composite types are always kept since other types refer to them;
    dropped enums are rendered as plain strings.

    Example:
        hook = FilterTypesHook(exclude_enum_prefix="_")
    """

    def __init__(self, exclude_enum_prefix: str):
        self.exclude_enum_prefix = exclude_enum_prefix

    def pre_emit(self, types: list[GeneratedType]) -> list[GeneratedType]:
        return [
            t for t in types
            if not (t.kind is TypeKind.ENUM and t.name.startswith(self.exclude_enum_prefix))
        ]


class HookRunner:
    """Runs a collection of hooks in order."""

    def __init__(self):
        self.pre_hooks: list[PreEmitHook] = []
        self.post_hooks: list[PostGenerateHook] = []

    def add_pre_hook(self, hook: PreEmitHook):
        """Add a pre-emit hook."""
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        """Add a post-generation hook."""
        self.post_hooks.append(hook)

    def run_pre_hooks(self, types: list[GeneratedType]) -> list[GeneratedType]:
        """Run all pre-emit hooks in order."""
        for hook in self.pre_hooks:
            types = hook.pre_emit(types)
        return types

    def run_post_hooks(self, filename: str, content: str) -> str:
        """Run all post-generation hooks in order."""
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
