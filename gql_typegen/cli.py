"""Command-line interface for gql-typegen."""

import logging
from pathlib import Path

import click

from .core.config import GeneratorConfig
from .core.errors import GenerationError
from .core.generator import CodeGenerator, module_name_for
from .core.hooks import AddHeaderHook, HookRunner
from .core.introspection import IntrospectionError, TimeoutConfig, introspect_schema
from .core.operations import TypeGenerator
from .core.parser import DocumentParser, SchemaParser
from .core.scalars import ScalarRegistry


def _configure_logging(verbose: bool):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def run_generate(config: GeneratorConfig, verbose: bool = False) -> list[str]:
    """Parse the schema and queries in config and write the generated modules."""
    click.echo("Parsing schema...")
    schema = SchemaParser(config.schema_path).parse_all()
    if verbose:
        click.echo(f"  Objects: {len(schema.objects)}")
        click.echo(f"  Interfaces: {len(schema.interfaces)}")
        click.echo(f"  Unions: {len(schema.unions)}")
        click.echo(f"  Enums: {len(schema.enums)}")
        click.echo(f"  Scalars: {len(schema.scalars)}")

    generator = TypeGenerator(schema, ScalarRegistry.from_config(config.scalars))
    parser = DocumentParser()
    results = {}
    for query_path in config.query_paths:
        click.echo(f"Generating types for {query_path}...")
        with open(query_path) as f:
            document = parser.parse(f.read(), source_name=query_path)
        module_name = module_name_for(query_path)
        if module_name in results:
            raise click.ClickException(f"Two query files map to the module name '{module_name}'")
        results[module_name] = generator.generate(document)
        if verbose:
            click.echo(f"  Operations: {len(results[module_name].operations)}")
            click.echo(f"  Types: {len(results[module_name].types)}")

    hooks = HookRunner()
    if config.header:
        hooks.add_post_hook(AddHeaderHook(config.header))
    code_generator = CodeGenerator(config.output_dir, template_dir=config.template_dir, hooks=hooks)
    return code_generator.generate(results)


@click.group()
@click.version_option(package_name="gql-typegen")
def main():
    """Typed response models for GraphQL client queries.

    Generate pydantic models mirroring the response of each query.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to GraphQL schema file or directory of .graphql/.graphqls files.",
)
@click.option(
    "--query",
    "-q",
    "queries",
    required=True,
    multiple=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Query document; repeat for several. Each becomes one module.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(file_okay=False),
    help="Output directory for generated code.",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    help="Custom scalar mapping NAME=TYPE, e.g. DateTime=datetime.datetime.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    help="Directory with Jinja2 templates overriding the built-in ones.",
)
@click.option(
    "--header",
    help="Header text added at the top of every generated file.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(schema, queries, output, scalars, template_dir, header, verbose):
    """Generate response models from a schema and query documents.

    Examples:

        gql-typegen generate -s ./schema.graphql -q ./queries/GetUser.graphql -o ./generated

        gql-typegen generate -s ./schema -q a.graphql -q b.graphql -o ./out --scalar DateTime=datetime.datetime
    """
    _configure_logging(verbose)
    try:
        scalar_mappings = GeneratorConfig.parse_scalar_options(scalars)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--scalar")

    config = GeneratorConfig(
        schema_path=str(Path(schema).resolve()),
        query_paths=[str(Path(q).resolve()) for q in queries],
        output_dir=str(Path(output).resolve()),
        template_dir=template_dir,
        scalars=scalar_mappings,
        header=header,
    )
    if verbose:
        click.echo(f"Schema: {config.schema_path}")
        click.echo(f"Output: {config.output_dir}")

    try:
        written = run_generate(config, verbose)
    except GenerationError as e:
        raise click.ClickException(e.message)

    click.echo(f"Done! Generated {len(written)} files in {config.output_dir}")


@main.command()
@click.option(
    "--endpoint",
    "-e",
    required=True,
    help="GraphQL endpoint to introspect.",
)
@click.option(
    "--header-field",
    "-H",
    "header_fields",
    multiple=True,
    help="HTTP header NAME:VALUE sent with the introspection query; repeatable.",
)
@click.option("--connect-timeout", type=float, default=5.0, show_default=True, help="Connect timeout in seconds.")
@click.option("--read-timeout", type=float, default=15.0, show_default=True, help="Read timeout in seconds.")
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(dir_okay=False),
    help="File the schema SDL is written to.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def introspect(endpoint, header_fields, connect_timeout, read_timeout, output, verbose):
    """Download a schema by running the introspection query against an endpoint.

    Examples:

        gql-typegen introspect -e https://api.example.com/graphql -o schema.graphql

        gql-typegen introspect -e https://api.example.com/graphql -H "Authorization:Bearer abc" -o schema.graphql
    """
    _configure_logging(verbose)
    headers = {}
    for header_field in header_fields:
        name, sep, value = header_field.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(
                f"Invalid header '{header_field}', expected NAME:VALUE", param_hint="--header-field"
            )
        headers[name.strip()] = value.strip()

    click.echo(f"Introspecting {endpoint}...")
    try:
        sdl = introspect_schema(
            endpoint,
            headers=headers,
            timeout=TimeoutConfig(connect=connect_timeout, read=read_timeout),
        )
    except IntrospectionError as e:
        raise click.ClickException(e.message)

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(sdl)
    click.echo(f"Done! Schema written to {output_path}")


if __name__ == "__main__":
    main()
