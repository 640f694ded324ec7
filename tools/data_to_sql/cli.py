"""CLI interface for Data to SQL Converter."""

import sys
from pathlib import Path
from typing import List, Optional

import click

from shared.cli import create_table, error, handle_errors, info, print_table, success
from shared.logger import LoggerSink, setup_logger

from .converter import ConversionResult, SQLScriptConverter
from .loader import SourceLoader

DEFAULT_LOG_FILE = "data2sql.log"


def display_results(results: List[ConversionResult]) -> None:
    """Display a summary of converted files."""
    table = create_table(title="Generated SQL scripts")
    table.add_column("Source", style="cyan")
    table.add_column("Table", style="bold")
    table.add_column("Statements", justify="right", style="yellow")
    table.add_column("Output", style="dim")

    for result in results:
        table.add_row(
            str(result.source),
            result.table_name or "",
            str(len(result.statements.inserts)) if result.statements else "0",
            str(result.output_path or ""),
        )

    print_table(table)


@click.command()
@click.option(
    "--file",
    "-f",
    "file_path",
    type=click.Path(path_type=Path),
    help="CSV or XML file to convert (takes precedence over --folder)",
)
@click.option(
    "--folder",
    "-d",
    type=click.Path(path_type=Path),
    help="Directory to search recursively for CSV and XML files",
)
@click.option("--table", "-t", help="Table name (only used with --file)")
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    help="Output directory for --file (defaults to the file's directory)",
)
@click.option("--delimiter", default=",", show_default=True, help="CSV delimiter")
@click.option("--encoding", default="utf-8-sig", show_default=True, help="CSV encoding")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOG_FILE,
    show_default=True,
    envvar="DATA2SQL_LOG_FILE",
    help="Log file, appended to on every run",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@handle_errors
def main(
    file_path: Optional[Path],
    folder: Optional[Path],
    table: Optional[str],
    output_dir: Optional[Path],
    delimiter: str,
    encoding: str,
    log_file: Path,
    verbose: bool,
):
    """
    Data to SQL Converter - Generate SQL scripts from CSV and XML files.

    Writes <table>.sql with a DELETE statement per row (keyed on the first
    column), a blank line, then an INSERT statement per row.

    Examples:

        \b
        # Convert one file
        data2sql --file users.csv --table users

        \b
        # Write the script somewhere else
        data2sql --file export.xml --table orders --output-dir scripts/

        \b
        # Convert every CSV/XML file below a folder, one script per file
        data2sql --folder exports/

        \b
        # Semicolon separated CSV
        data2sql --file data.csv --table products --delimiter ";"
    """
    if file_path is None and folder is None:
        click.echo(click.get_current_context().get_help())
        sys.exit(0)

    log_level = "DEBUG" if verbose else "INFO"
    logger = setup_logger("tools.data_to_sql", level=log_level, log_file=log_file)

    sink = LoggerSink(logger)
    converter = SQLScriptConverter(
        loader=SourceLoader(encoding=encoding, delimiter=delimiter, sink=sink),
        sink=sink,
    )

    info(f"Converting {file_path if file_path is not None else folder} to SQL")

    try:
        if file_path is not None:
            results = [converter.convert_file(file_path, table_name=table, output_dir=output_dir)]
        else:
            if table:
                logger.warning("--table is ignored with --folder, table names come from file names")
            results = converter.convert_directory(folder)

    except KeyboardInterrupt:
        logger.info("Conversion interrupted by user")
        sys.exit(130)

    failed = [r for r in results if not r.ok]
    if failed:
        error(f"Conversion failed: {failed[0].error}")
        sys.exit(1)

    if results:
        display_results(results)
        success(f"Converted {len(results)} file(s)")

    sys.exit(0)


if __name__ == "__main__":
    main()
