"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specweave.exceptions.SpecweaveError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a bad
invocation from an unreadable input file without parsing stderr.

Example::

    $ specweave assemble config.yaml missing.json
    $ echo $?
    7   # EXIT_INPUT_PARSE_ERROR -- the inventory could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or option values."""

EXIT_INPUT_PARSE_ERROR = 7
"""A configuration, inventory or document file could not be read or parsed."""
