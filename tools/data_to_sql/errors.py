"""Errors raised while converting a source file."""


class ConversionError(Exception):
    """Base class for failures that abort a conversion run."""


class LoadError(ConversionError):
    """Source file is unreadable, malformed or of an unsupported type."""


class EmptyDataError(ConversionError):
    """Source file contains no records."""


class WriteError(ConversionError):
    """Output script could not be written."""
