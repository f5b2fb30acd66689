"""Command-line interface for the ledger journal parser."""

import os
import sys
import click
from typing import List, Optional, Dict, Any
import logging

from .models.core import Entry
from .parsers.base import ParseError
from .parsers.expression import parse_filter
from .utils.config_manager import ConfigManager
from .utils.csv_writer import CSVWriter
from .utils.error_handler import ErrorHandler, handle_parse_error
from .utils.journal_reader import JournalReader, ReadResult


# Configure logging
logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


class LedgerParserCLI:
    """Main CLI class for the ledger journal parser"""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize CLI with configuration"""
        self.config_manager = ConfigManager(config_path)
        self.config = self.config_manager.load_config()
        self.error_handler = ErrorHandler(log_directory=self.config.log_directory)
        self.reader = JournalReader(self.config, self.error_handler)
        self.csv_writer = CSVWriter(self.config)

    def read_paths(self, paths: List[str], recursive: bool = True) -> List[ReadResult]:
        """Parse every journal file found under the given paths"""
        results = []
        for file_path in self.reader.collect_files(paths, recursive):
            try:
                result = self.reader.read_file(file_path)
            except ParseError as e:
                result = ReadResult(file_path)
                result.errors.append(handle_parse_error(self.error_handler, e, file_path))
            results.append(result)
        return results

    def export_paths(self, paths: List[str], output_path: str, recursive: bool = True) -> Dict[str, Any]:
        """Parse journals and write their postings to one CSV file"""
        results = self.read_paths(paths, recursive)
        entries: List[Entry] = []
        for result in results:
            entries.extend(result.entries)

        written = self.csv_writer.write_postings(entries, output_path)
        return {
            'success': written and all(r.success for r in results),
            'written': written,
            'files': len(results),
            'postings': sum(1 for _ in self.csv_writer.iter_rows(entries)),
            'results': results,
        }


def _echo_errors(result: ReadResult):
    for error in result.errors:
        click.echo(f"  {error.message}")


# CLI Commands using Click
@click.group()
@click.option('--config', '-c', help='Path to configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, config, verbose):
    """Ledger Parser - Parse plain-text ledger journals"""

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config


def _cli_instance(ctx) -> LedgerParserCLI:
    if 'cli' not in ctx.obj:
        ctx.obj['cli'] = LedgerParserCLI(ctx.obj.get('config_path'))
    return ctx.obj['cli']


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.option('--no-recursive', is_flag=True, help='Disable recursive directory scanning')
@click.pass_context
def check(ctx, paths, no_recursive):
    """Parse journal files and report syntax errors"""

    cli_instance = _cli_instance(ctx)

    try:
        results = cli_instance.read_paths(list(paths), recursive=not no_recursive)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ {e}")
        sys.exit(1)

    if not results:
        click.echo("No journal files found")
        return

    failed = 0
    for result in results:
        if result.success:
            click.echo(f"✓ {result.file_path}: {result.transactions_count} transactions, "
                       f"{result.directives_count} directives")
        else:
            failed += 1
            click.echo(f"✗ {result.file_path}: {len(result.errors)} errors")
            _echo_errors(result)

    if failed:
        sys.exit(1)


@cli.command()
@click.argument('paths', nargs=-1, required=True)
@click.option('--output', '-o', default=None, help='CSV file to write (default: <export_directory>/postings.csv)')
@click.option('--no-recursive', is_flag=True, help='Disable recursive directory scanning')
@click.pass_context
def export(ctx, paths, output, no_recursive):
    """Export the postings of journal files to CSV"""

    cli_instance = _cli_instance(ctx)
    if output is None:
        output = os.path.join(cli_instance.config.export_directory, 'postings.csv')

    try:
        summary = cli_instance.export_paths(list(paths), output, recursive=not no_recursive)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ {e}")
        sys.exit(1)

    for result in summary['results']:
        if not result.success:
            click.echo(f"✗ {result.file_path}: {len(result.errors)} errors")
            _echo_errors(result)

    if summary['written']:
        click.echo(f"✓ Exported {summary['postings']} postings from {summary['files']} files to {output}")
    else:
        click.echo("✗ No postings to export")

    if not summary['success']:
        sys.exit(1)


@cli.command()
@click.argument('expression')
def expr(expression):
    """Parse a filter expression and print its syntax tree"""

    try:
        tree = parse_filter(expression, source_name='<expression>')
    except ParseError as e:
        click.echo(f"✗ {e}")
        sys.exit(1)

    click.echo(str(tree))


@cli.command()
@click.argument('output_path', default='ledger_parser.json')
@click.option('--format', type=click.Choice(['json', 'yaml']), default='json', help='Configuration file format')
def init_config(output_path, format):
    """Generate configuration template file"""

    # Adjust extension based on format
    if format == 'yaml' and not output_path.endswith(('.yml', '.yaml')):
        output_path = os.path.splitext(output_path)[0] + '.yml'
    elif format == 'json' and not output_path.endswith('.json'):
        output_path = os.path.splitext(output_path)[0] + '.json'

    try:
        ConfigManager().save_config_template(output_path)
    except OSError as e:
        click.echo(f"✗ Error generating config template: {str(e)}")
        sys.exit(1)

    click.echo(f"✓ Configuration template generated: {output_path}")


if __name__ == '__main__':
    cli()
