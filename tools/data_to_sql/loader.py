"""Read CSV and XML files into records."""

import csv
import logging
import xml.etree.ElementTree as ET
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from shared.logger import EventSink, LoggerSink, get_logger

from .errors import LoadError

logger = get_logger(__name__)

Record = Dict[str, Optional[str]]

# Declaration rewritten by some exporters; ElementTree only accepts version 1.0.
XML_11_DECLARATION = "<?xml version='1.1' encoding='UTF-8'?>"


class SourceFormat(str, Enum):
    """Supported source file formats."""

    CSV = "csv"
    XML = "xml"


SUPPORTED_EXTENSIONS = {f".{fmt.value}" for fmt in SourceFormat}


def detect_format(path: Path) -> SourceFormat:
    """
    Detect the source format from the file extension.

    Raises:
        LoadError: If the extension is not supported
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        raise LoadError(f"Unsupported file type '{path.suffix}': {path}")
    return SourceFormat(suffix[1:])


def strip_xml_declaration(path: Path) -> bool:
    """
    Remove a leading XML 1.1 declaration from the file in place.

    Only the exact single-quoted form in XML_11_DECLARATION is removed,
    any other first line leaves the file untouched.

    Returns:
        True if the file was rewritten
    """
    with open(path, "rb") as f:
        data = f.read()

    first_line, sep, rest = data.partition(b"\n")
    if first_line.rstrip(b"\r").decode("utf-8", errors="replace") != XML_11_DECLARATION:
        return False

    with open(path, "wb") as f:
        f.write(rest)
    return True


def _local_name(tag: str) -> str:
    """Drop the '{namespace}' prefix ElementTree puts on tags."""
    return tag.rsplit("}", 1)[-1]


class SourceLoader:
    """
    Load tabular source files as a list of records.

    Every record is an ordered mapping of column name to raw value.
    """

    def __init__(
        self,
        encoding: str = "utf-8-sig",
        delimiter: str = ",",
        sink: Optional[EventSink] = None,
    ):
        """
        Initialize source loader.

        Args:
            encoding: Text encoding of CSV files
            delimiter: CSV field delimiter
            sink: Event sink for progress messages
        """
        self.encoding = encoding
        self.delimiter = delimiter
        self.sink = sink or LoggerSink(logger)

    def load(self, path: Path) -> List[Record]:
        """
        Load records from a CSV or XML file.

        Args:
            path: Source file path

        Returns:
            List of records, possibly empty

        Raises:
            LoadError: If the file cannot be read or parsed
        """
        path = Path(path)
        source_format = detect_format(path)

        if not path.is_file():
            raise LoadError(f"File not found: {path}")

        self.sink.record(logging.INFO, f"Loading {source_format.value.upper()} data from {path}")

        if source_format == SourceFormat.CSV:
            records = self.load_csv(path)
        else:
            records = self.load_xml(path)

        self.sink.record(logging.INFO, f"Loaded {len(records)} record(s) from {path.name}")
        return records

    def load_csv(self, path: Path) -> List[Record]:
        """Read a CSV file whose first row holds the column names."""
        try:
            with open(path, "r", encoding=self.encoding, newline="") as f:
                reader = csv.reader(f, delimiter=self.delimiter)
                header = next(reader, None)
                if header is None:
                    return []

                duplicates = sorted({name for name in header if header.count(name) > 1})
                if duplicates:
                    raise LoadError(
                        f"Duplicate column names in CSV header {path}: {', '.join(duplicates)}"
                    )

                records = []
                for row in reader:
                    if not row:
                        continue
                    records.append(
                        {name: row[i] if i < len(row) else None for i, name in enumerate(header)}
                    )
                return records

        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise LoadError(f"Failed to read CSV {path}: {e}") from e

    def load_xml(self, path: Path) -> List[Record]:
        """
        Read an XML file with one record element per child of the root.

        Attributes come first, then child elements keyed by tag name. A child
        element named like an attribute replaces the attribute value in place.
        """
        try:
            if strip_xml_declaration(path):
                self.sink.record(logging.INFO, f"Removed XML 1.1 declaration from {path}")

            root = ET.parse(path).getroot()

        except (OSError, ET.ParseError) as e:
            raise LoadError(f"Failed to parse XML {path}: {e}") from e

        records = []
        for node in root:
            record: Record = dict(node.attrib)
            for child in node:
                record[_local_name(child.tag)] = child.text
            records.append(record)
        return records
