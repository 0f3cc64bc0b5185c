"""Generator configuration."""

from dataclasses import dataclass, field


@dataclass
class GeneratorConfig:
    """Settings for one `gql-typegen generate` invocation.

    Attributes:
        schema_path: SDL file or directory of SDL files
        query_paths: Query documents; each becomes one generated module
        output_dir: Directory the generated package is written to
        template_dir: Optional directory with Jinja2 templates overriding the packaged ones
        scalars: Custom scalar mappings, GraphQL scalar name -> dotted Python type
        header: Optional banner prepended to every generated file
    """
    schema_path: str
    query_paths: list[str]
    output_dir: str
    template_dir: str | None = None
    scalars: dict[str, str] = field(default_factory=dict)
    header: str | None = None

    @staticmethod
    def parse_scalar_options(options: tuple[str, ...] | list[str]) -> dict[str, str]:
        """Parse NAME=TYPE options, e.g. ("DateTime=datetime.datetime",).

        Raises:
            ValueError: If an option is not of the form NAME=TYPE
        """
        scalars = {}
        for option in options:
            name, sep, python_type = option.partition("=")
            if not sep or not name.strip() or not python_type.strip():
                raise ValueError(f"Invalid scalar mapping '{option}', expected NAME=TYPE")
            scalars[name.strip()] = python_type.strip()
        return scalars
