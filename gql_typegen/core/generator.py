"""Code generator for generated response types.

Renders Jinja2 templates to produce pydantic models from a GenerationResult.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(output_dir, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .generated import GeneratedType, PropertyTypeRef, TypeKind
from .hooks import HookRunner
from .operations import GenerationResult

logger = logging.getLogger(__name__)

# Module-level names the default models.py.j2 template imports or refers to
MODULE_NAMES = {
    "Enum", "List", "Optional", "Union", "BaseModel", "ConfigDict", "Field",
    "str", "int", "float", "bool",
}


def snake_case(name: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str) -> str:
    """Make text safe for a single-line Python comment.

    Removes newlines, collapses whitespace and truncates long descriptions.
    """
    if not text:
        return ""
    text = text.replace("\n", " ").replace("\r", "")
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


# Python reserved keywords that cannot be used as identifiers
PYTHON_KEYWORDS = {
    'False', 'None', 'True', 'and', 'as', 'assert', 'async', 'await',
    'break', 'class', 'continue', 'def', 'del', 'elif', 'else', 'except',
    'finally', 'for', 'from', 'global', 'if', 'import', 'in', 'is',
    'lambda', 'nonlocal', 'not', 'or', 'pass', 'raise', 'return', 'try',
    'while', 'with', 'yield'
}


def safe_param_name(name: str) -> str:
    """Make an identifier safe for Python by suffixing keywords with underscore."""
    if name in PYTHON_KEYWORDS:
        return f"{name}_"
    return name


def field_name(response_name: str) -> str:
    """Python attribute name for a response key.

    pydantic treats leading underscores as private, so `__typename`
    becomes `typename`.
    """
    name = snake_case(response_name).lstrip("_") or "field"
    return safe_param_name(name)


def module_name_for(path: str) -> str:
    """Module name for a query file, e.g. queries/GetUser.graphql -> get_user."""
    stem = Path(path).name.split(".")[0]
    name = re.sub(r"\W", "_", snake_case(stem))
    if name[:1].isdigit():
        name = f"_{name}"
    return safe_param_name(name)


class CodeGenerator:
    """Generates pydantic model modules from generated response types.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - models.py.j2 — one module of enums and response models

    Example:
        generator = CodeGenerator(
            output_dir="./generated",
            template_dir="./my_templates"
        )
        generator.generate({"get_user": result})
    """

    def __init__(
        self,
        output_dir: str,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
    ):
        """Initialize the code generator.

        Args:
            output_dir: Directory where generated code will be written
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional hooks applied before rendering and before writing
        """
        self.output_dir = output_dir
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_typegen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = snake_case
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment
        self.env.filters["safe_param"] = safe_param_name
        self.env.filters["field_name"] = field_name

    def render_module(self, result: GenerationResult, module_name: str) -> str:
        """Render one module holding every type of a generation result.

        Generated types whose names would shadow a name the module imports
        (Field, Optional, datetime, ...) are emitted with a trailing underscore.

        Raises:
            ValueError: If the rendered code is not valid Python
        """
        types = self.hooks.run_pre_hooks(list(result.types))
        by_name = {t.name: t for t in types}
        scalar_names = {
            p.type.type_name
            for t in types
            for p in t.properties
            if p.type.kind is TypeKind.SCALAR
        }
        imported = MODULE_NAMES | {
            result.scalars.python_type(name).split(".")[0] for name in scalar_names
        }
        class_names = self._class_names(types, imported)

        def annotation(type_ref: PropertyTypeRef) -> str:
            return self._annotation(type_ref, by_name, class_names)

        self.env.filters["annotation"] = annotation
        self.env.filters["class_name"] = lambda name: class_names.get(name, name)
        context = {
            "module_name": module_name,
            "imports": sorted(result.scalars.imports_for(scalar_names)),
            "enums": [t for t in types if t.kind is TypeKind.ENUM],
            "models": [t for t in types if t.kind.is_composite],
        }
        return self._render("models.py.j2", f"{module_name}.py", context)

    @staticmethod
    def _class_names(types: list[GeneratedType], imported: set[str]) -> Dict[str, str]:
        """Map each generated type name to the class name it is emitted under."""
        taken = imported | {t.name for t in types}
        class_names = {}
        for generated in types:
            name = generated.name
            if name in imported:
                while name in taken:
                    name += "_"
                taken.add(name)
            class_names[generated.name] = name
        return class_names

    @staticmethod
    def _annotation(
        type_ref: PropertyTypeRef,
        by_name: Dict[str, GeneratedType],
        class_names: Dict[str, str],
    ) -> str:
        """Python type annotation of a property."""
        base = type_ref.python_type
        generated = by_name.get(type_ref.type_name)
        if type_ref.kind is TypeKind.ENUM and generated is None:
            base = "str"
        elif generated is not None:
            base = class_names[generated.name]
            if generated.implementations:
                # Concrete shapes first, the abstract shape catches other members
                shapes = [class_names.get(n, n) for n in generated.implementations] + [base]
                base = f"Union[{', '.join(shapes)}]"

        if type_ref.is_list:
            item = f"Optional[{base}]" if type_ref.is_item_optional else base
            for optional in reversed(type_ref.inner_lists):
                item = f"Optional[List[{item}]]" if optional else f"List[{item}]"
            base = f"List[{item}]"
        if type_ref.is_optional:
            base = f"Optional[{base}]"
        return base

    def _render(self, template_name: str, output_path: str, context: Dict[str, Any]) -> str:
        """Render a template, validate the result and run post hooks."""
        template = self.env.get_template(template_name)
        content = template.render(context)

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValueError(
                f"Generated invalid Python for {output_path}: {e}\n"
                f"Template: {template_name}"
            )
        return self.hooks.run_post_hooks(output_path, content)

    def write_file(self, output_path: str, content: str) -> str:
        """Write content below output_dir and return the full path."""
        full_path = os.path.join(self.output_dir, output_path)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "w") as f:
            f.write(content)
        logger.debug("Wrote %s", full_path)
        return full_path

    def generate(self, results: Dict[str, GenerationResult]) -> list[str]:
        """Write one module per generation result plus the package __init__.py.

        Args:
            results: Generation results keyed by module name

        Returns:
            Paths of the written files
        """
        os.makedirs(self.output_dir, exist_ok=True)
        written = []
        for module_name in sorted(results):
            content = self.render_module(results[module_name], module_name)
            written.append(self.write_file(f"{module_name}.py", content))

        init_content = '"""Generated GraphQL response models."""\n'
        init_content = self.hooks.run_post_hooks("__init__.py", init_content)
        written.append(self.write_file("__init__.py", init_content))
        return written
