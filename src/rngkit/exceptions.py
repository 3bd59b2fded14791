"""
==========
Exceptions
==========

Module containing package-wide exception definitions. Exceptions for
particular subsystems are defined in their respective modules.

"""


class RngkitError(Exception):
    """Generic exception raised for errors in ``rngkit``."""

    pass
