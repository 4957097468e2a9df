"""keyframesvg.errors - exception hierarchy shared by the reader, writer and loaders."""

__all__ = [
    "KeyframeSVGError",
    "MalformedDocumentError",
    "UnsupportedInputError",
    "EmptyInputError",
    "ConfigurationError",
]


class KeyframeSVGError(Exception):
    """Base exception"""


class MalformedDocumentError(KeyframeSVGError):
    """Raised when markup or an animation spec cannot be parsed"""


class UnsupportedInputError(KeyframeSVGError):
    """Raised when an input is neither a frame nor a document, or has an unknown format"""


class EmptyInputError(KeyframeSVGError):
    """Raised when there is nothing to read or write"""


class ConfigurationError(KeyframeSVGError):
    """Raised on invalid config"""
