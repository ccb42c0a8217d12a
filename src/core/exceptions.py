"""Custom exceptions for the schema validator."""


class SchemaValidatorError(Exception):
    """Base exception for schema-validator related errors."""
    pass


class SourceReadError(SchemaValidatorError):
    """The input document (file or URL) could not be read."""
    pass
