import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import get_settings
from .errors import MigrationError
from .processing.headers import headers_path_for, render_headers
from .processing.pipeline import MigrationPipeline, inspect_description

console = Console()


def configure_logging(level: str):
    """Route all module loggers through a rich handler"""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True
    )


@click.group()
@click.option('--log-level', type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
              default=None, help='Override the configured log level')
def cli(log_level):
    """Migrate a repository export tree to the successor format"""
    settings = get_settings()
    configure_logging(log_level or settings.log_level)


@cli.command()
@click.argument('input_dir', type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.argument('output_dir', type=click.Path(file_okay=False, path_type=Path))
@click.option('--workers', type=int, default=None, help='Parallel workers (default: configured value)')
@click.option('--extension', default=None, help='Description file extension (default: .ttl)')
@click.option('--format', 'rdf_format', default=None, help='rdflib format of description files')
def migrate(input_dir: Path, output_dir: Path, workers, extension, rdf_format):
    """Copy INPUT_DIR to OUTPUT_DIR, migrating description files"""
    try:
        settings = get_settings().migration.with_overrides(
            input_dir=input_dir,
            output_dir=output_dir,
            max_workers=workers,
            description_extension=extension,
            rdf_format=rdf_format
        )
        summary = MigrationPipeline(settings).run()
    except (MigrationError, ValueError) as e:
        console.print(f"✗ Migration aborted: {e}", style="red", markup=False)
        sys.exit(1)

    table = Table(title="Migration Summary")
    table.add_column("Files", justify="right")
    table.add_column("Copied", justify="right")
    table.add_column("Migrated", justify="right")
    table.add_column("Rewritten", justify="right", style="cyan")
    table.add_column("Failed", justify="right", style="red")
    table.add_row(
        str(summary.total),
        str(summary.copied),
        str(summary.migrated),
        str(summary.rewritten),
        str(summary.failed)
    )
    console.print(table)

    if summary.ok:
        console.print(f"✓ Migrated {summary.input_dir} to {summary.output_dir}", style="green")
        return

    console.print(f"\n✗ {summary.failed} file(s) failed:", style="red")
    for failure in summary.failures:
        console.print(f"  • {failure.source}: {failure.error}", style="red", markup=False)
    sys.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--format', 'rdf_format', default=None, help='rdflib format of the file')
@click.option('--json', 'as_json', is_flag=True, help='Print only the sidecar JSON')
def inspect(file_path: Path, rdf_format, as_json: bool):
    """Classify a description file without writing anything"""
    settings = get_settings().migration
    try:
        result = inspect_description(file_path, rdf_format or settings.rdf_format)
    except MigrationError as e:
        console.print(f"✗ {e}", style="red", markup=False)
        sys.exit(1)

    if as_json:
        click.echo(render_headers(result.headers))
        return

    facts = result.facts
    table = Table(title=f"{file_path.name}")
    table.add_column("Fact", style="cyan")
    table.add_column("Value")
    table.add_row("binary", str(facts.is_binary))
    table.add_row("external", str(facts.is_external))
    table.add_row("container", str(facts.is_container))
    table.add_row("concrete container type", str(facts.has_concrete_container_type))
    table.add_row("would rewrite", str(facts.rewritten))
    table.add_row("sidecar", headers_path_for(file_path, facts, settings.headers_suffix).name)
    console.print(table)

    console.print("\nHeaders:", style="bold")
    for name, values in result.headers.items():
        for value in values:
            console.print(f"  {name}: {value}", markup=False)


@cli.command()
def info():
    """Show effective configuration"""
    settings = get_settings()
    migration = settings.migration

    console.print("\n📦 Migration Configuration\n", style="bold")
    console.print(f"  Input directory: {migration.input_dir or '(not set)'}")
    console.print(f"  Output directory: {migration.output_dir or '(not set)'}")
    console.print(f"  Description extension: {migration.description_extension}")
    console.print(f"  RDF format: {migration.rdf_format}")
    console.print(f"  Headers suffix: {migration.headers_suffix}")
    console.print(f"  Workers: {migration.max_workers}")
    console.print(f"  Log level: {settings.log_level}")
    console.print()


if __name__ == '__main__':
    cli()
