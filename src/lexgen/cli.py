"""lexgen command-line interface.

Commands:
- gen-module: generate the registry and helper modules from schema files
- ids: list identifiers and the symbols they normalize to
"""

import asyncio
import logging
import sys

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .assembler import build_symbol_table
from .exceptions import LexgenError
from .loader import read_documents
from .orchestrator import generate_modules
from .settings import load_settings
from .writer import write_artifacts

console = Console()
err_console = Console(stderr=True)


def _fail(error: LexgenError) -> None:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}")
    sys.exit(1)


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
def cli(verbose: bool):
    """lexgen - generate Python modules from lexicon schema documents"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )


@cli.command('gen-module')
@click.argument('outdir', type=click.Path(file_okay=False))
@click.argument('lexicons', nargs=-1, required=True, type=click.Path(exists=True))
@click.option('--config', '-c', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML settings file')
@click.option('--registry-module', default=None, help='Module to import the registry class from')
def gen_module(outdir: str, lexicons: tuple, config_path: str, registry_module: str):
    """Generate the registry module and helpers into OUTDIR"""
    try:
        settings = load_settings(
            config_path,
            overrides={'output_dir': outdir, 'registry_module': registry_module},
        )
        documents = read_documents(lexicons)
        artifacts = asyncio.run(generate_modules(documents, settings))
        written = write_artifacts(artifacts, settings.output_dir)
    except LexgenError as e:
        _fail(e)
        return

    console.print(f"[green]✓[/green] Generated {len(written)} files from {len(documents)} lexicons")
    for path in written:
        console.print(f"  {path}")


@cli.command('ids')
@click.argument('lexicons', nargs=-1, required=True, type=click.Path(exists=True))
def ids(lexicons: tuple):
    """List identifiers and their generated symbols"""
    try:
        documents = read_documents(lexicons)
        table = build_symbol_table(documents)
    except LexgenError as e:
        _fail(e)
        return

    output = Table(title=f"{len(table)} lexicons")
    output.add_column("Identifier", style="cyan")
    output.add_column("Symbol", style="green")
    for nsid, symbol in table.items():
        output.add_row(nsid, symbol)
    console.print(output)


def main():
    cli()


if __name__ == '__main__':
    main()
