"""Command-line interface for gql-bootstrap."""

import logging
from pathlib import Path

import click
from graphql import print_schema

from .core.bootstrap import Bootstrap
from .core.config import Config
from .core.model import SchemaModel


def load_model(model_path: Path) -> SchemaModel:
    """Read a schema model from a JSON file."""
    return SchemaModel.from_json(model_path.read_bytes())


@click.group()
@click.version_option()
def main():
    """Compile schema models into executable GraphQL schemas.

    Inspect what a schema model compiles to.
    """
    pass


@main.command()
@click.option(
    "--model",
    "-m",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the schema model JSON file.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the SDL to this file instead of stdout.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def sdl(model: str, output: str | None, verbose: bool):
    """Print the compiled schema in SDL.

    Examples:

        gql-bootstrap sdl --model ./model.json

        gql-bootstrap sdl -m ./model.json -o ./schema.graphqls
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    schema_model = load_model(Path(model))
    result = Bootstrap.bootstrap(schema_model, Config())
    if result.is_empty:
        raise click.ClickException("Model declares no operations, nothing to compile")

    text = print_schema(result.schema)
    if output is None:
        click.echo(text)
        return

    output_path = Path(output).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text + "\n")
    click.echo(f"Done! Wrote schema to {output_path}")


@main.command()
@click.option(
    "--model",
    "-m",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="Path to the schema model JSON file.",
)
def stats(model: str):
    """Print counts of what a model declares and compiles to."""
    schema_model = load_model(Path(model))
    click.echo(f"Queries: {len(schema_model.queries)}")
    click.echo(f"Grouped queries: {sum(len(ops) for ops in schema_model.grouped_queries.values())}")
    click.echo(f"Mutations: {len(schema_model.mutations)}")
    click.echo(f"Grouped mutations: {sum(len(ops) for ops in schema_model.grouped_mutations.values())}")
    click.echo(f"Types: {len(schema_model.types)}")
    click.echo(f"Interfaces: {len(schema_model.interfaces)}")
    click.echo(f"Inputs: {len(schema_model.inputs)}")
    click.echo(f"Enums: {len(schema_model.enums)}")

    result = Bootstrap.bootstrap(schema_model, Config())
    if result.is_empty:
        click.echo("Schema: empty")
        return
    click.echo(f"Schema types: {len(result.schema.type_map)}")
    click.echo(f"Batch loaders: {len(result.batch_loaders)}")


if __name__ == "__main__":
    main()
