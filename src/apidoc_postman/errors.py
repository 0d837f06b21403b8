"""Exception hierarchy for apidoc-postman.

Every error raised by the converter derives from :class:`ConversionError`,
which carries the process ``exit_code`` used by :func:`apidoc_postman.cli.main`.

Subclass hierarchy::

    ConversionError
    +-- DescriptorError
    |   +-- MalformedTemplateError
    |   +-- MissingFieldError
    +-- InputFormatError
    +-- ConfigError
"""

EXIT_FAILURE = 1


class ConversionError(Exception):
    """Base exception for all conversion failures.

    Args:
        message: Human-readable error description printed to stderr.
    """

    exit_code: int = EXIT_FAILURE


class DescriptorError(ConversionError):
    """Raised when an endpoint descriptor cannot be converted."""

    def __init__(self, message: str, endpoint: str | None = None):
        if endpoint:
            message = f"endpoint '{endpoint}': {message}"
        super().__init__(message)
        self.endpoint = endpoint


class MalformedTemplateError(DescriptorError):
    """Raised when a ``:`` in a URL template is not followed by a parameter name."""

    def __init__(self, template: str, position: int, endpoint: str | None = None):
        self.template = template
        self.position = position
        super().__init__(
            f"malformed URL template '{template}': "
            f"':' at position {position} is not followed by a parameter name",
            endpoint=endpoint,
        )


class MissingFieldError(DescriptorError):
    """Raised when a descriptor lacks group, title, URL template or method."""

    def __init__(self, fields: list[str], endpoint: str | None = None, index: int | None = None):
        self.fields = fields
        self.index = index
        where = f"record #{index}: " if index is not None else ""
        super().__init__(
            f"{where}missing required field(s): {', '.join(fields)}",
            endpoint=endpoint,
        )


class InputFormatError(ConversionError):
    """Raised when an input document does not have the expected shape."""


class ConfigError(ConversionError):
    """Raised for unreadable project metadata files (package.json, apidoc.json)."""
