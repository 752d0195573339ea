"""Command-line interface for TableGen."""

import click
import json
import logging
import sys
import time
import yaml
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from tablegen.core.config import load_settings
from tablegen.core.database import check_connection, parse_database_target
from tablegen.core.errors import TableGenError
from tablegen.core.exporters import export_data
from tablegen.core.generator import generate_rows
from tablegen.core.inserter import DataInserter
from tablegen.core.models import (
    ColumnConstraints, ColumnSpec, Dialect, ExportFormat, GenerationConfig, GeneratorKind,
    TableSchema,
)
from tablegen.core.presets import all_presets, get_preset, get_preset_names
from tablegen.core.validators import validate_file_path


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

LOCALES = [
    'en', 'en_US', 'en_GB', 'en_AU', 'en_CA', 'en_IN',
    'es', 'es_MX', 'fr', 'de', 'it', 'ja', 'ko', 'zh_CN', 'zh_TW',
    'pt_BR', 'ru', 'nl', 'sv', 'da', 'no', 'fi', 'pl', 'uk', 'vi',
    'th', 'id', 'ms', 'tr', 'ar', 'he', 'el', 'cs', 'ro', 'hu', 'sk',
]


def parse_columns(definitions: str, null_probability: float = 0.0) -> List[ColumnSpec]:
    """Parse ``name:kind,name:kind`` into column specs; kind defaults to ``word``."""
    columns = []
    for definition in definitions.split(','):
        definition = definition.strip()
        if not definition:
            continue
        name, _, kind = definition.partition(':')
        columns.append(ColumnSpec(
            name=name.strip(),
            kind=kind.strip() or GeneratorKind.WORD.value,
            constraints=ColumnConstraints(null_probability=null_probability),
        ))
    if not columns:
        raise click.BadParameter("At least one column definition is required", param_hint='--columns')
    return columns


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
def cli(verbose: bool, quiet: bool):
    """TableGen - Generate realistic dummy tables as files or database rows."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif quiet:
        logging.getLogger().setLevel(logging.ERROR)


@cli.command()
@click.option('--preset', '-p', help='Use a preset template')
@click.option('--table', '-t', help='Table name for custom table')
@click.option('--columns', '-c', help='Column definitions (format: name:type,name:type)')
@click.option('--rows', '-r', type=int, help='Number of rows to generate')
@click.option('--locale', '-l', help='Locale for generated data')
@click.option('--seed', '-s', type=int, help='Random seed for reproducible generation')
@click.option('--format', '-f', 'export_format', type=click.Choice([f.value for f in ExportFormat]),
              help='Export format')
@click.option('--dialect', type=click.Choice([d.value for d in Dialect]),
              help='SQL dialect for the sql export format')
@click.option('--output', '-o', type=click.Path(), help='Output file path')
@click.option('--database', '-d', help='Database connection string (sqlite:<path>, postgresql://, mysql://)')
@click.option('--batch-size', type=int, help='Batch size for database inserts')
@click.option('--drop-table', is_flag=True, help='Drop table before inserting')
@click.option('--truncate-table', is_flag=True, help='Truncate table before inserting')
@click.option('--config', 'config_path', type=click.Path(), help='Settings file (YAML)')
def generate(preset: Optional[str], table: Optional[str], columns: Optional[str],
             rows: Optional[int], locale: Optional[str], seed: Optional[int],
             export_format: Optional[str], dialect: Optional[str], output: Optional[str],
             database: Optional[str], batch_size: Optional[int], drop_table: bool,
             truncate_table: bool, config_path: Optional[str]):
    """Generate data using a preset or a custom table definition."""
    try:
        settings = load_settings(config_path)

        if preset:
            selected = get_preset(preset, settings)
            if selected is None:
                raise click.BadParameter(
                    f'Preset "{preset}" not found. Available: {", ".join(get_preset_names(settings))}',
                    param_hint='--preset',
                )
            schema = selected.table_schema
            row_count = rows if rows is not None else selected.default_row_count
        elif table and columns:
            schema = TableSchema(name=table, columns=parse_columns(columns, settings.null_probability))
            row_count = rows if rows is not None else settings.default_row_count
        else:
            raise click.UsageError('Either --preset or both --table and --columns must be specified')

        config = GenerationConfig(
            row_count=row_count,
            locale=locale or settings.default_locale,
            seed=seed,
            batch_size=batch_size if batch_size is not None else settings.default_batch_size,
        )

        logger.info(f"Generating {config.row_count:,} rows for {schema.name}")
        start_time = time.time()
        data = generate_rows(schema, config.row_count, config.locale, config.seed)
        logger.info(f"Generated {len(data):,} rows in {time.time() - start_time:.2f}s")

        if database:
            target = parse_database_target(database)
            result = DataInserter().insert(
                target, schema, data,
                batch_size=config.batch_size,
                drop_table=drop_table,
                truncate_table=truncate_table,
            )
            if result.error is not None:
                click.echo(f"\n❌ Error: {result.error}", err=True)
                click.echo(f"   Committed {result.committed_count:,}/{result.rows_requested:,} rows "
                           f"before the failure", err=True)
                sys.exit(1)
            click.echo(f"💾 Inserted {result.committed_count:,} rows into {schema.name}", err=True)
        elif output is not None:
            validate_file_path(output)
            fmt = ExportFormat(export_format or settings.default_export_format)
            sql_dialect = Dialect(dialect) if dialect else settings.default_database
            path = export_data(fmt, schema, data, output, dialect=sql_dialect)
            click.echo(f"💾 Data exported to: {path} ({path.stat().st_size:,} bytes)", err=True)
        else:
            click.echo(json.dumps(data, indent=2, default=str, ensure_ascii=False))

    except (click.UsageError, click.BadParameter):
        raise
    except (TableGenError, ValidationError, ValueError) as e:
        click.echo(f"\n❌ Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(), help='Settings file (YAML)')
def presets(config_path: Optional[str]):
    """List available presets."""
    settings = load_settings(config_path)
    click.echo("📦 Available Presets:")
    for preset in all_presets(settings):
        click.echo(f"  • {preset.name}: {preset.description}")
        click.echo(f"    Default rows: {preset.default_row_count}, "
                   f"columns: {len(preset.table_schema.columns)}")


@cli.command()
def locales():
    """List available locales."""
    click.echo("🌍 Available Locales:")
    for locale in LOCALES:
        click.echo(f"  {locale}")


@cli.command('test-connection')
@click.argument('connection')
def check_connection_command(connection: str):
    """Check that a database connection string is reachable."""
    try:
        target = parse_database_target(connection)
    except TableGenError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    if check_connection(target):
        click.echo(f"✅ Connection successful: {target.describe()}")
    else:
        click.echo(f"❌ Connection failed: {target.describe()}", err=True)
        sys.exit(1)


@cli.command('init-config')
@click.option('--output', '-o', type=click.Path(), default='tablegen_config.yaml',
              help='Output configuration file path')
def init_config(output: str):
    """Create a sample configuration file."""
    config_template = {
        'default_locale': 'en',
        'default_row_count': 100,
        'default_batch_size': 1000,
        'default_export_format': 'json',
        'default_database': 'sqlite',
        'null_probability': 0.0,
        'custom_presets': [
            {
                'name': 'customers',
                'description': 'Customers with contact details',
                'default_row_count': 250,
                'schema': {
                    'name': 'customers',
                    'columns': [
                        {'name': 'id', 'kind': 'uuid',
                         'constraints': {'primary_key': True, 'not_null': True}},
                        {'name': 'full_name', 'kind': 'fullName',
                         'constraints': {'not_null': True}},
                        {'name': 'email', 'kind': 'email',
                         'constraints': {'unique': True}},
                        {'name': 'age', 'kind': 'integer',
                         'constraints': {'min': 18, 'max': 90, 'null_probability': 0.1}},
                    ],
                },
            },
        ],
    }

    output_path = Path(output)
    with open(output_path, 'w') as f:
        yaml.dump(config_template, f, default_flow_style=False, indent=2, sort_keys=False)

    click.echo(f"✅ Configuration template created: {output_path}")
    click.echo("Edit this file to customize your generation defaults and presets.")


def main():
    cli()


if __name__ == '__main__':
    main()
