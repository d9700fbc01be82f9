"""CLI entry point for the conversion service."""

import io
import logging
from contextlib import contextmanager
from functools import wraps
from pathlib import Path

import click

from . import __version__
from .config import DEFAULT_LANGUAGES, LocalizationConfig
from .core import LocalizationService
from .errors import LocalizationError


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )


def fatal_errors(func):
    """Report conversion and I/O errors on stderr and exit with status 1."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (LocalizationError, OSError) as e:
            click.secho(f"Error: {e}", fg='red', err=True)
            raise SystemExit(1)
    return wrapper


@contextmanager
def open_csv(file: str, mode: str, encoding: str):
    """Open a CSV file, or stdin/stdout for '-', without newline translation.

    Quoted cells may hold line breaks, which the csv module only reads back
    intact from streams opened with newline="".
    """
    if file != '-':
        with open(file, mode, encoding=encoding, newline='') as stream:
            yield stream
        return

    binary = click.get_binary_stream('stdin' if mode == 'r' else 'stdout')
    stream = io.TextIOWrapper(binary, encoding=encoding, newline='')
    try:
        yield stream
    finally:
        stream.flush()
        # Leave the process stream open
        stream.detach()


@click.group()
@click.version_option(version=__version__)
@click.option('--root', default='.', type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Directory searched for .strings files')
@click.option('--languages', '-l', default=','.join(DEFAULT_LANGUAGES),
              envvar='STRINGSCSV_LANGUAGES', show_default=True,
              help='Comma-separated language codes, in CSV column order')
@click.option('--verbose', '-v', is_flag=True, help='Verbose output')
@click.pass_context
def cli(ctx: click.Context, root: Path, languages: str, verbose: bool):
    """Convert Apple .strings files to a CSV table and back."""
    setup_logging(verbose)
    langs = [lang.strip() for lang in languages.split(',') if lang.strip()]
    ctx.obj = LocalizationConfig(languages=langs, root=root, verbose=verbose)


@cli.command()
@click.pass_obj
@fatal_errors
def find(config: LocalizationConfig):
    """List the .strings files found under the root directory."""
    service = LocalizationService(config)
    for path in service.find_files():
        click.echo(path.as_posix())


@cli.command(name='print')
@click.pass_obj
@fatal_errors
def print_entries(config: LocalizationConfig):
    """Print the entries of every .strings file."""
    service = LocalizationService(config)
    for block in service.describe_files():
        click.echo(block)


@cli.command(name='csv')
@click.argument('file', default='-', type=click.Path(dir_okay=False, allow_dash=True))
@click.pass_obj
@fatal_errors
def export_csv(config: LocalizationConfig, file: str):
    """Convert .strings files to a CSV table.

    FILE is the CSV to write (default: standard output).
    """
    service = LocalizationService(config)

    # Decode everything before the output file is created
    table, report = service.build_table()
    with open_csv(file, 'w', config.encoding) as out:
        service.write_table(table, report, out)

    if config.verbose:
        click.echo(
            f"Exported {report.rows} keys from {len(report.files)} files "
            f"({len(report.conflicts)} comment conflicts)",
            err=True
        )


@cli.command(name='strings')
@click.argument('file', default='-', type=click.Path(dir_okay=False, allow_dash=True))
@click.option('--output-dir', '-o', default='.', type=click.Path(file_okay=False, path_type=Path),
              help='.strings output root directory')
@click.pass_obj
@fatal_errors
def import_csv(config: LocalizationConfig, file: str, output_dir: Path):
    """Convert a CSV table to .strings files, one per language.

    FILE is the CSV to read (default: standard input).
    """
    config.output_dir = output_dir
    service = LocalizationService(config)

    name = '<stdin>' if file == '-' else file
    with open_csv(file, 'r', config.encoding) as stream:
        report = service.import_csv(stream, name=name)

    if config.verbose:
        click.echo(f"Imported {report.rows} rows", err=True)
        for path in report.files_written:
            click.secho(f"  {path}", fg='green', err=True)


if __name__ == '__main__':
    cli()
