"""Typed exceptions for engine loading, document access and I/O formats."""


class PdfScraperError(Exception):
    """Base class for fatal extraction errors."""


class EngineLoadError(PdfScraperError):
    """Raised when no engine is registered for a version or it fails to load."""


class DocumentOpenError(PdfScraperError):
    """Raised when the engine cannot open the supplied document bytes."""


class IOFormatError(ValueError):
    """Base class for I/O format related errors."""


class UnsupportedFormatError(IOFormatError):
    """Raised when no reader or writer is registered for a file format."""
