"""Data to SQL Converter - Generate DELETE/INSERT scripts from CSV and XML files."""

from .converter import ConversionResult, SQLScriptConverter, SQLStatementSet, StatementGenerator
from .errors import ConversionError, EmptyDataError, LoadError, WriteError
from .loader import SourceFormat, SourceLoader

__all__ = [
    "ConversionError",
    "ConversionResult",
    "EmptyDataError",
    "LoadError",
    "SQLScriptConverter",
    "SQLStatementSet",
    "SourceFormat",
    "SourceLoader",
    "StatementGenerator",
    "WriteError",
]
