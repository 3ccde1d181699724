"""
Error Types

Exceptions raised by the label tools. Everything derives from
LabelToolsError so the command line can report any failure the same way.
"""


class LabelToolsError(Exception):
    """Base class for all label tool failures."""
    pass


class MissingFileError(LabelToolsError):
    """Raised when a required input file or folder does not exist."""
    pass


class ParseError(LabelToolsError):
    """Raised when a metadata file or spreadsheet cannot be parsed."""
    pass


class ShapeError(LabelToolsError):
    """Raised when a spreadsheet header does not describe a translation table."""
    pass


class ConfigError(LabelToolsError):
    """Raised when a setting from the environment has an invalid value."""
    pass
