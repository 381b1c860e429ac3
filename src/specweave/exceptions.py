"""Exception hierarchy for specweave.

The assembly engine itself has no fatal error path: merge collisions and
malformed version strings are resolved by policy, not raised. Exceptions
only occur at the edges, while reading input files, validating them, or
interpreting command-line values.

All exceptions inherit from :class:`SpecweaveError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specweave.exit_codes`.
The entry point in :func:`specweave.app.main` catches ``SpecweaveError`` and
exits with the matching code.

Subclass hierarchy::

    SpecweaveError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- InputParseError     (exit 7)
    +-- ConfigError         (exit 1)
"""

from specweave.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INPUT_PARSE_ERROR,
    EXIT_INVALID_USAGE,
)


class SpecweaveError(Exception):
    """Base exception for all specweave errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specweave.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecweaveError):
    """Raised for invalid CLI arguments or builder values (e.g. a bad version string)."""

    exit_code = EXIT_INVALID_USAGE


class InputParseError(SpecweaveError):
    """Raised when an input file cannot be read or is not a JSON/YAML object."""

    exit_code = EXIT_INPUT_PARSE_ERROR


class ConfigError(SpecweaveError):
    """Raised when a configuration or inventory fails model validation."""

    exit_code = EXIT_GENERIC_FAILURE
