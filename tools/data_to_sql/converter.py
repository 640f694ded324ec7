"""Core record to SQL script conversion logic."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from shared.logger import EventSink, LoggerSink, get_logger

from .errors import ConversionError, EmptyDataError, LoadError, WriteError
from .loader import SUPPORTED_EXTENSIONS, Record, SourceFormat, SourceLoader, detect_format

logger = get_logger(__name__)

# Left in the script so the operator can search and replace it later.
PLACEHOLDER_TABLE_NAME = "§§TableName§§"

NUMERIC_PATTERN = re.compile(r"^\d+$", re.ASCII)


def is_numeric(value: str) -> bool:
    """Check if a raw value is emitted without quotes (non-negative integers)."""
    return NUMERIC_PATTERN.fullmatch(value) is not None


def format_value(value: Optional[str]) -> str:
    """
    Render a raw value as a SQL literal.

    Embedded quotes are not escaped.
    """
    if value is None or value == "":
        return "NULL"
    if is_numeric(value):
        return value
    return f"'{value}'"


def resolve_table_name(table_name: Optional[str], sink: EventSink) -> str:
    """Return the table name, or the placeholder when it is empty."""
    if table_name and table_name.strip():
        return table_name

    sink.record(
        logging.WARNING,
        f"No table name given, using placeholder {PLACEHOLDER_TABLE_NAME}",
    )
    return PLACEHOLDER_TABLE_NAME


def build_insert(table_name: str, columns: Sequence[str], record: Record) -> str:
    """
    Build an INSERT statement for one record.

    The column list is fixed by the caller while values follow the record's
    own fields, so heterogeneous records are not reconciled.
    """
    column_list = ", ".join(columns)
    values = ", ".join(format_value(value) for value in record.values())
    return f"INSERT INTO {table_name} ({column_list}) VALUES ({values});"


def build_delete(table_name: str, key_column: str, record: Record) -> str:
    """Build a DELETE statement keyed on the record's primary key value (unquoted)."""
    key_value = record.get(key_column)
    if key_value is None:
        key_value = ""
    return f"DELETE FROM {table_name} WHERE {key_column} = {key_value};"


@dataclass
class SQLStatementSet:
    """INSERT and DELETE statements generated for one table."""

    table_name: str
    columns: List[str]
    inserts: List[str] = field(default_factory=list)
    deletes: List[str] = field(default_factory=list)

    @property
    def key_column(self) -> str:
        return self.columns[0]

    def render(self) -> str:
        """Render DELETE statements, a blank line, then INSERT statements."""
        lines = self.deletes + [""] + self.inserts
        return "\n".join(lines) + "\n"


@dataclass
class SourceFile:
    """A source file queued for conversion."""

    path: Path
    format: SourceFormat
    table_name: Optional[str] = None


@dataclass
class ConversionResult:
    """Outcome of converting one source file."""

    source: Path
    table_name: Optional[str] = None
    output_path: Optional[Path] = None
    statements: Optional[SQLStatementSet] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class StatementGenerator:
    """Generate INSERT and DELETE statements from records."""

    def __init__(self, sink: Optional[EventSink] = None):
        self.sink = sink or LoggerSink(logger)

    def generate(self, records: Sequence[Record], table_name: str) -> SQLStatementSet:
        """
        Generate statements for all records.

        The column list and primary key are taken from the first record.

        Args:
            records: Records in source order
            table_name: Target table name

        Returns:
            SQLStatementSet with one INSERT and one DELETE per record

        Raises:
            EmptyDataError: If there are no records
        """
        if not records:
            raise EmptyDataError(f"No records to convert for table {table_name}")

        columns = list(records[0].keys())
        if not columns:
            raise EmptyDataError(f"First record for table {table_name} has no fields")

        statements = SQLStatementSet(table_name=table_name, columns=columns)
        for record in records:
            statements.inserts.append(build_insert(table_name, columns, record))
        for record in records:
            statements.deletes.append(build_delete(table_name, statements.key_column, record))

        self.sink.record(
            logging.INFO,
            f"Generated {len(statements.inserts)} INSERT and "
            f"{len(statements.deletes)} DELETE statement(s) for {table_name}",
        )
        return statements


def write_script(statements: SQLStatementSet, output_dir: Path) -> Path:
    """
    Write the script to '<output_dir>/<table>.sql', overwriting any existing file.

    Raises:
        WriteError: If the file cannot be written
    """
    output_path = Path(output_dir) / f"{statements.table_name}.sql"
    try:
        with open(output_path, "w", encoding="utf-8", newline="\n") as f:
            f.write(statements.render())
    except OSError as e:
        raise WriteError(f"Failed to write {output_path}: {e}") from e
    return output_path


def find_source_files(root: Path) -> List[Path]:
    """
    Recursively find CSV and XML files below a directory.

    Raises:
        LoadError: If root is not a directory
    """
    root = Path(root)
    if not root.is_dir():
        raise LoadError(f"Directory not found: {root}")

    return sorted(
        path
        for path in root.rglob("*")
        if path.is_file() and path.suffix.lower() in SUPPORTED_EXTENSIONS
    )


class SQLScriptConverter:
    """
    Convert CSV and XML files to SQL scripts.

    Each script deletes the rows by primary key and inserts them again, so it
    can be re-run to refresh a table.
    """

    def __init__(
        self,
        loader: Optional[SourceLoader] = None,
        sink: Optional[EventSink] = None,
    ):
        """
        Initialize converter.

        Args:
            loader: Source loader (default settings if None)
            sink: Event sink shared by all pipeline steps
        """
        self.sink = sink or LoggerSink(logger)
        self.loader = loader or SourceLoader(sink=self.sink)
        self.generator = StatementGenerator(sink=self.sink)
        logger.debug("Initialized SQLScriptConverter")

    def convert_file(
        self,
        path: Path,
        table_name: Optional[str] = None,
        output_dir: Optional[Path] = None,
    ) -> ConversionResult:
        """
        Convert a single file.

        Args:
            path: Source file path
            table_name: Target table (placeholder if empty)
            output_dir: Output directory (source file's directory if None)

        Returns:
            ConversionResult, with error set when the conversion failed
        """
        path = Path(path)
        result = ConversionResult(source=path)

        try:
            source = SourceFile(path=path, format=detect_format(path))
            source.table_name = resolve_table_name(table_name, self.sink)
            result.table_name = source.table_name

            records = self.loader.load(source.path)
            if not records:
                raise EmptyDataError(f"No records found in {path}")

            result.statements = self.generator.generate(records, source.table_name)
            result.output_path = write_script(result.statements, output_dir or path.parent)

        except ConversionError as e:
            result.error = str(e)
            result.error_type = type(e).__name__
            self.sink.record(logging.ERROR, result.error)
            return result

        self.sink.record(logging.INFO, f"Wrote SQL to {result.output_path}")
        return result

    def convert_directory(self, root: Path) -> List[ConversionResult]:
        """
        Convert every CSV and XML file below a directory.

        Table names come from the file names and scripts are written next to
        their source files. Processing stops at the first failure, which is
        then the last result in the list.

        Args:
            root: Directory to search recursively

        Returns:
            List of ConversionResult in processing order
        """
        root = Path(root)
        try:
            files = find_source_files(root)
        except LoadError as e:
            self.sink.record(logging.ERROR, str(e))
            return [ConversionResult(source=root, error=str(e), error_type=type(e).__name__)]

        if not files:
            self.sink.record(logging.WARNING, f"No CSV or XML files found in {root}")
            return []

        self.sink.record(logging.INFO, f"Found {len(files)} file(s) in {root}")

        results = []
        for path in files:
            result = self.convert_file(path, table_name=path.stem, output_dir=path.parent)
            results.append(result)
            if not result.ok:
                break

        return results
