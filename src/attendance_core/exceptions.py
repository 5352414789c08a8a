"""Domain-specific exceptions for attendance-core.

This module defines custom exceptions that are part of the public API.
All exceptions inherit from AttendanceAPIError for easy catching.
"""


class AttendanceAPIError(Exception):
    """Base exception for all attendance-core errors.

    Users can catch this exception to handle any error raised by the
    quality checks, the attendance calculators or the report writers.
    """

    pass


class ConfigError(AttendanceAPIError):
    """Raised when call-time configuration is invalid.

    This exception is raised when:
    - A date range starts after it ends
    - A window contains no business days to divide by
    - The set of valid statuses is empty
    """

    pass


class NamingCollisionError(ConfigError):
    """Raised when two table names map to the same sheet name.

    Sheet names are truncated to a fixed length and compared
    case-insensitively, so distinct table names can still collide.
    """

    def __init__(self, collisions: dict[str, list[str]]):
        self.collisions = collisions
        details = "; ".join(
            f"{sheet!r} <- {', '.join(repr(n) for n in names)}"
            for sheet, names in collisions.items()
        )
        super().__init__(f"Sheet names collide after truncation: {details}")


class DataFormatError(AttendanceAPIError):
    """Raised when a timestamp or date value cannot be parsed.

    A single unparseable value aborts the whole computation; there is no
    per-row recovery.
    """

    pass


class DataQualityError(AttendanceAPIError):
    """Raised when the input relation is missing required columns."""

    pass
